"""Utility helpers for Firefly Forge."""

from __future__ import annotations

import base64
import binascii
import io
import mimetypes
import random
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

SEED_MIN = 1
SEED_MAX = 999999
DEFAULT_MEDIA_TYPE = "application/octet-stream"


def random_seed_value(rng: Optional[random.Random] = None) -> float:
    """Uniform real seed in [SEED_MIN, SEED_MAX)."""
    draw = (rng or random).random()
    return draw * (SEED_MAX - SEED_MIN) + SEED_MIN


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def detect_media_type(data: bytes, filename: Optional[str] = None) -> str:
    try:
        with Image.open(io.BytesIO(data)) as image:
            mime = Image.MIME.get(image.format or "")
    except (UnidentifiedImageError, OSError):
        mime = None
    if mime:
        return mime
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return DEFAULT_MEDIA_TYPE


def decode_image_size(encoded: Optional[str]) -> Optional[Tuple[int, int]]:
    if not encoded:
        return None
    try:
        raw = base64.b64decode(encoded.strip(), validate=False)
    except (binascii.Error, ValueError):
        return None
    try:
        with Image.open(io.BytesIO(raw)) as image:
            return image.size
    except (UnidentifiedImageError, OSError):
        return None
