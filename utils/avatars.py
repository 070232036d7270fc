"""Avatar helpers: default gravatar URLs and image resizing."""

from __future__ import annotations

import hashlib
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from errors import ValidationError

GRAVATAR_BASE = "//www.gravatar.com/avatar/"


def gravatar_url(email: str) -> str:
    """Return the gravatar address for ``email`` (same email, same URL)."""

    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"{GRAVATAR_BASE}{digest}"


def resize_image(path: str | Path, size: tuple[int, int]) -> None:
    """Resize the image at ``path`` to exactly ``size``, overwriting it.

    The aspect ratio is not preserved.
    """

    try:
        with Image.open(path) as image:
            image_format = image.format
            resized = image.resize(size)
    except UnidentifiedImageError as exc:
        raise ValidationError("Uploaded file is not a valid image.") from exc

    resized.save(path, format=image_format)
