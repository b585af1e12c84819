from __future__ import annotations

import base64
import os
from dataclasses import dataclass
from typing import List

from .utils import log, warn


@dataclass(frozen=True)
class ImageAttachment:
    source_path: str
    data_url: str


def image_bytes_to_data_url(png_bytes: bytes) -> str:
    b64 = base64.b64encode(png_bytes).decode("ascii")
    return f"data:image/png;base64,{b64}"


def load_png_attachments(images_dir: str, quiet: bool = False) -> List[ImageAttachment]:
    """Read every ``*.png`` (any case) in ``images_dir`` as a data URL.

    Nothing here is fatal: a missing folder, an empty folder or an unreadable
    file just means fewer images. Files stay where they are; moving them is
    the archive step's job once the request has succeeded.
    """
    results: List[ImageAttachment] = []
    if not os.path.isdir(images_dir):
        log(f"--images specified but {images_dir} not found; continuing without images.", quiet)
        return results

    for name in sorted(os.listdir(images_dir)):
        path = os.path.join(images_dir, name)
        if not os.path.isfile(path) or os.path.splitext(name)[1].lower() != ".png":
            continue
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            warn(f"could not read {path}: {e}")
            continue
        results.append(ImageAttachment(source_path=path, data_url=image_bytes_to_data_url(data)))

    if not results:
        log(f"--images specified but no PNG files found in {images_dir}; continuing without images.", quiet)
    else:
        log(f"Loaded {len(results)} image(s) from {images_dir}", quiet)
    return results
