import sys
from typing import Iterable


def log(msg: str, quiet: bool) -> None:
    """Prefixed progress line on stderr, silenced by --quiet."""
    if not quiet:
        print(f"[prompt_relay] {msg}", file=sys.stderr)


def warn(msg: str) -> None:
    print(f"WARNING: {msg}", file=sys.stderr)


def flush_warnings(warnings: Iterable[str]) -> None:
    for w in warnings:
        warn(w)
