"""Request payloads for the two OpenAI endpoint shapes."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .config import EndpointKind, ModelDescriptor
from .images import ImageAttachment
from .options import Options

DEFAULT_TEMPERATURE = 0.1


def build_content_parts(prompt: str, images: Sequence[ImageAttachment] = ()) -> List[dict]:
    content: List[dict] = [{"type": "text", "text": prompt}]
    for img in images:
        content.append({"type": "image_url", "image_url": {"url": img.data_url}})
    return content


def _user_messages(prompt: str, images: Sequence[ImageAttachment]) -> List[dict]:
    return [{"role": "user", "content": build_content_parts(prompt, images)}]


def build_chat_request(
    descriptor: ModelDescriptor,
    prompt: str,
    images: Sequence[ImageAttachment],
    opts: Options,
) -> Dict[str, Any]:
    # chat completions never carries verbosity / reasoning_effort
    return {
        "model": descriptor.name,
        "messages": _user_messages(prompt, images),
        "temperature": opts.temperature if opts.temperature is not None else DEFAULT_TEMPERATURE,
    }


def build_responses_request(
    descriptor: ModelDescriptor,
    prompt: str,
    images: Sequence[ImageAttachment],
    opts: Options,
    warnings: Optional[List[str]] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": descriptor.name,
        "messages": _user_messages(prompt, images),
    }
    if opts.verbosity:
        payload["verbosity"] = opts.verbosity
    if opts.reasoning_effort:
        payload["reasoning_effort"] = opts.reasoning_effort
    if opts.temperature is not None and warnings is not None:
        warnings.append(f"-t is ignored for {descriptor.name} (responses endpoint has no temperature).")
    return payload


def build_request(
    descriptor: ModelDescriptor,
    prompt: str,
    images: Sequence[ImageAttachment],
    opts: Options,
    warnings: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Build the payload for whichever endpoint ``descriptor`` talks to.

    Unset optional fields are left out of the dict entirely, never sent as
    null. Notices about ignored options are appended to ``warnings``.
    """
    if descriptor.endpoint_kind is EndpointKind.RESPONSES:
        return build_responses_request(descriptor, prompt, images, opts, warnings=warnings)
    return build_chat_request(descriptor, prompt, images, opts)
