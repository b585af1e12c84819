#!/usr/bin/env python3
"""Thin runner for the `prompt_relay` package, delegating to `prompt_relay.cli.main()`.

Lets `python run_prompt.py <model> ...` work from a checkout without installing.
"""
import sys

from prompt_relay.cli import main


if __name__ == "__main__":
    sys.exit(main())
