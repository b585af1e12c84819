"""One invocation, start to finish.

Order is fixed: read prompt, load images, build, send, extract, then (only on
a 2xx) append, move images, archive the conversation and synthesize audio.
"""
from __future__ import annotations

from http import HTTPStatus
from typing import List

from ..archive import append_response_block, archive_conversation, archive_images
from ..config import Settings, WorkspaceLayout, read_prompt_file
from ..images import ImageAttachment, load_png_attachments
from ..options import Options
from ..providers.base import ModelProvider
from ..request_builder import build_request
from ..response import ResponseResult, Usage, extract_response
from ..utils import flush_warnings, log
from .audio import run_audio_pipeline


def _status_line(code: int) -> str:
    try:
        return f"Status: {code} ({HTTPStatus(code).phrase})"
    except ValueError:
        return f"Status: {code}"


def log_usage(usage: Usage, quiet: bool) -> None:
    log(
        f"Usage: total_tokens={usage.total}, prompt_tokens={usage.prompt}, "
        f"completion_tokens={usage.completion}",
        quiet,
    )


def run_prompt(
    opts: Options,
    settings: Settings,
    provider: ModelProvider,
    layout: WorkspaceLayout,
) -> ResponseResult:
    quiet = opts.quiet
    descriptor = settings.models.resolve(opts.model)
    prompt = read_prompt_file(layout.prompt_file)
    log(f"Prompt loaded from {layout.prompt_file}, length={len(prompt)}", quiet)

    images: List[ImageAttachment] = []
    if opts.include_images:
        images = load_png_attachments(layout.images_dir, quiet=quiet)

    warnings: List[str] = []
    payload = build_request(descriptor, prompt, images, opts, warnings=warnings)
    flush_warnings(warnings)

    log(
        f"Request: model={descriptor.name}, endpoint={settings.endpoint_url(descriptor.endpoint_kind)}, "
        f"images={len(images)}",
        quiet,
    )
    status_code, raw_body = provider.post_json(descriptor.endpoint_kind, payload)
    result = extract_response(status_code, raw_body)

    print("=== CHAT RESPONSE ===")
    print(_status_line(status_code))
    if not result.ok:
        print("Request failed; not appending or archiving.")
        print(raw_body)
        return result

    print(result.text)
    log_usage(result.usage, quiet)

    last_block = append_response_block(layout.prompt_file, result.text, descriptor.name, result.usage)
    print(f"Response appended to {layout.prompt_name}.")

    if images:
        archive_images(images, layout.image_archive_dir, quiet=quiet)

    if opts.do_archive:
        archive_conversation(
            layout.prompt_file,
            layout.archive_dir,
            layout.archive_prefix,
            last_block,
            quiet=quiet,
        )

    if opts.audio_instruction is not None and result.text.strip():
        run_audio_pipeline(provider, layout, opts.audio_instruction, result.text, quiet=quiet)

    return result
