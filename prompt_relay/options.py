"""Command-line options: model name first, then flags left to right."""
from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .config import DEFAULT_MODELS, REASONING_EFFORTS, VERBOSITY_LEVELS, EndpointKind, ModelRegistry
from .errors import OptionsError


@dataclass(frozen=True)
class Options:
    model: str
    include_images: bool = False
    do_archive: bool = False
    temperature: Optional[float] = None
    verbosity: Optional[str] = None
    reasoning_effort: Optional[str] = None
    # None: no audio; "": speak the model response
    audio_instruction: Optional[str] = None
    quiet: bool = False


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise OptionsError(message)


class _AudioAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest) is not None:
            raise OptionsError("Duplicate --audio.")
        setattr(namespace, self.dest, values)


def _temperature(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid temperature value: {raw!r}")
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"invalid temperature value: {raw!r}")
    return value


def _models_table(registry: ModelRegistry) -> str:
    lines = ["Supported models:"]
    for m in registry:
        if m.endpoint_kind is EndpointKind.RESPONSES:
            efforts = " | ".join(e for e in REASONING_EFFORTS if e in m.allowed_reasoning_efforts)
            lines.append(f"  {m.name}  (responses; -v, -e {efforts})")
        else:
            lines.append(f"  {m.name}  (chat completions; -t)")
    return "\n".join(lines)


def build_parser(registry: ModelRegistry = DEFAULT_MODELS) -> argparse.ArgumentParser:
    parser = _Parser(
        prog="prompt-relay",
        description=(
            "Send prompt.md to an OpenAI model and append the answer to the file. "
            "Optionally attach ./images/*.png, archive the conversation and speak the answer."
        ),
        epilog=_models_table(registry),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("model", help="Model name (see the table below).")
    parser.add_argument(
        "--images",
        dest="include_images",
        action="store_true",
        help="Attach every PNG from ./images; moved to ./image-archive after a successful call.",
    )
    parser.add_argument(
        "--archive",
        dest="do_archive",
        action="store_true",
        help="Copy the whole conversation to ./archive/promptN.md and reset prompt.md to the last answer.",
    )
    parser.add_argument(
        "-t",
        dest="temperature",
        type=_temperature,
        help="Sampling temperature (chat completions models only, default 0.1).",
    )
    parser.add_argument(
        "-v",
        dest="verbosity",
        type=str.lower,
        choices=VERBOSITY_LEVELS,
        help="Verbosity for responses models: low | medium | high.",
    )
    parser.add_argument(
        "-e",
        dest="reasoning_effort",
        type=str.lower,
        choices=REASONING_EFFORTS,
        help="Reasoning effort for responses models; the allowed set depends on the model.",
    )
    parser.add_argument(
        "--audio",
        dest="audio_instruction",
        nargs="?",
        const="",
        default=None,
        action=_AudioAction,
        metavar="TEXT",
        help="Synthesize output.wav. With TEXT, speak TEXT; without it, speak the model answer.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress informational logs (warnings are still printed).",
    )
    return parser


def parse_options(argv: Optional[Sequence[str]] = None, registry: ModelRegistry = DEFAULT_MODELS) -> Options:
    """Parse and validate the command line.

    The reasoning effort can only be checked once the model is known, so the
    model is resolved against ``registry`` before the effort is validated.
    Chat completions models accept any known effort; it is dropped when the
    request is built.
    """
    ns = build_parser(registry).parse_args(argv)
    descriptor = registry.resolve(ns.model)

    effort = ns.reasoning_effort
    if effort is not None and descriptor.endpoint_kind is EndpointKind.RESPONSES:
        if effort not in descriptor.allowed_reasoning_efforts:
            allowed = " | ".join(e for e in REASONING_EFFORTS if e in descriptor.allowed_reasoning_efforts)
            raise OptionsError(f"Invalid -e {effort!r} for {descriptor.name}; allowed: {allowed}.")

    return Options(
        model=descriptor.name,
        include_images=ns.include_images,
        do_archive=ns.do_archive,
        temperature=ns.temperature,
        verbosity=ns.verbosity,
        reasoning_effort=effort,
        audio_instruction=ns.audio_instruction,
        quiet=ns.quiet,
    )
