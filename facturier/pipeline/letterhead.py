"""Decoding of embedded letterhead images."""

import base64
import binascii
import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class LetterheadError(ValueError):
    """Raised when letterhead data cannot be decoded into an image."""
    pass


def decode_letterhead(data: str) -> bytes:
    """Decode a data URL (``data:image/png;base64,...``) or bare base64 string.

    Returns:
        Raw image bytes, verified to be an image Pillow can read

    Raises:
        LetterheadError: If the payload is not valid base64 image data
    """
    if not data or not data.strip():
        raise LetterheadError("Letterhead data is empty")

    payload = data.strip()
    if payload.startswith("data:"):
        header, _, payload = payload.partition(",")
        if ";base64" not in header:
            raise LetterheadError(f"Unsupported letterhead data URL: {header[:40]!r}")

    payload = "".join(payload.split())
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise LetterheadError(f"Letterhead is not valid base64: {e}") from e

    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise LetterheadError(f"Letterhead is not a readable image: {e}") from e

    return raw


def load_letterhead(data: Optional[str]) -> Optional[bytes]:
    """Decode letterhead data, isolating failures.

    A broken letterhead must not stop the document: the failure is logged
    and None is returned, so the layout continues without a background.
    """
    if not data:
        return None
    try:
        return decode_letterhead(data)
    except LetterheadError as e:
        logger.warning("Letterhead skipped: %s", e)
        return None
