"""CLI entry point: ``prompt-relay <model> [flags]``."""
import sys
from typing import Optional, Sequence

import requests

from .config import DEFAULT_MODELS, WorkspaceLayout, load_config
from .errors import PromptRelayError
from .options import parse_options
from .providers import OpenAIProvider
from .services import run_prompt
from .utils import log


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run once and return the process exit code.

    Non-2xx API answers are reported by the runner and still exit 0; only
    fatal errors (bad flags, missing key or prompt file, network failure)
    return 1.
    """
    try:
        opts = parse_options(argv, DEFAULT_MODELS)
        settings = load_config(DEFAULT_MODELS)
        log(f"Model: {opts.model}", opts.quiet)
        log(f"BASE_URL: {settings.base_url}", opts.quiet)
        log(f"TIMEOUT: {settings.timeout}", opts.quiet)
        run_prompt(opts, settings, OpenAIProvider(settings), WorkspaceLayout.from_cwd())
    except PromptRelayError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except requests.RequestException as e:
        print(f"ERROR: request failed: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
