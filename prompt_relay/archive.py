"""File rotation for prompt.md, images and audio.

All numbered archives use the same scheme: ``<prefix><N>.<ext>`` where N is
one more than the largest N already present (gaps are never refilled).
"""
from __future__ import annotations

import os
import re
import shutil
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from .images import ImageAttachment
from .response import Usage
from .utils import log, warn


def format_response_block(text: str, model: str, usage: Usage) -> str:
    trimmed = (text or "").strip()
    return (
        "\n"
        "---\n"
        f"{trimmed}\n"
        f"`{model}`,`{{tokens: {usage.total}/{usage.prompt}/{usage.completion}}}`\n"
        "---\n"
    )


def append_response_block(prompt_path: str, text: str, model: str, usage: Usage) -> str:
    """Append the delimited answer to ``prompt_path`` and return the block."""
    block = format_response_block(text, model, usage)
    with open(prompt_path, "a", encoding="utf-8") as f:
        f.write(block)
    return block


def next_archive_number(directory: str, prefix: str, ext: str) -> int:
    if not os.path.isdir(directory):
        return 1
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)\.{re.escape(ext)}$", re.IGNORECASE)
    numbers = []
    for name in os.listdir(directory):
        m = pattern.match(name)
        if m and os.path.isfile(os.path.join(directory, name)):
            numbers.append(int(m.group(1)))
    return max(numbers) + 1 if numbers else 1


def next_archive_path(directory: str, prefix: str, ext: str) -> str:
    n = next_archive_number(directory, prefix, ext)
    path = os.path.join(directory, f"{prefix}{n}.{ext}")
    # the scan only sees well-formed names; never overwrite whatever else is there
    while os.path.exists(path):
        n += 1
        path = os.path.join(directory, f"{prefix}{n}.{ext}")
    return path


def move_with_timestamp_if_exists(src: str, dest: str) -> str:
    """Move ``src`` to ``dest``; if ``dest`` is taken, stamp the name with UTC ms."""
    if os.path.exists(dest):
        base, ext = os.path.splitext(dest)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")[:-3]
        dest = f"{base}-{stamp}{ext}"
        n = 1
        while os.path.exists(dest):
            dest = f"{base}-{stamp}-{n}{ext}"
            n += 1
    shutil.move(src, dest)
    return dest


def archive_images(images: Iterable[ImageAttachment], image_archive_dir: str, quiet: bool = False) -> List[str]:
    moved: List[str] = []
    os.makedirs(image_archive_dir, exist_ok=True)
    for img in images:
        dest = os.path.join(image_archive_dir, os.path.basename(img.source_path))
        try:
            moved.append(move_with_timestamp_if_exists(img.source_path, dest))
        except OSError as e:
            warn(f"failed to archive {img.source_path}: {e}")
    if moved:
        log(f"Moved {len(moved)} image(s) to {image_archive_dir}", quiet)
    return moved


def archive_conversation(
    prompt_path: str,
    archive_dir: str,
    prefix: str,
    last_block: str,
    quiet: bool = False,
) -> Optional[str]:
    """Snapshot the whole prompt file, then reset it to ``last_block``.

    On any failure the prompt file keeps its appended content and None is
    returned.
    """
    tmp_path = prompt_path + ".tmp"
    try:
        with open(prompt_path, "r", encoding="utf-8") as f:
            full = f.read()
        os.makedirs(archive_dir, exist_ok=True)
        archive_path = next_archive_path(archive_dir, prefix, "md")
        with open(archive_path, "w", encoding="utf-8") as f:
            f.write(full)
        log(f"Archived to {archive_path}", quiet)

        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(last_block)
        os.replace(tmp_path, prompt_path)
        log(f"{os.path.basename(prompt_path)} reset to last response block.", quiet)
        return archive_path
    except Exception as e:
        if os.path.isfile(tmp_path):
            os.remove(tmp_path)
        warn(f"archiving failed: {e}. Leaving {os.path.basename(prompt_path)} as-is.")
        return None


def archive_current_audio(audio_file: str, audio_archive_dir: str, quiet: bool = False) -> Optional[str]:
    """Move an existing audio output into the archive as ``<stem>N<.ext>``."""
    if not os.path.isfile(audio_file):
        return None
    stem, ext = os.path.splitext(os.path.basename(audio_file))
    os.makedirs(audio_archive_dir, exist_ok=True)
    dest = next_archive_path(audio_archive_dir, stem, ext.lstrip("."))
    shutil.move(audio_file, dest)
    log(f"Archived existing {os.path.basename(audio_file)} to {dest}", quiet)
    return dest
