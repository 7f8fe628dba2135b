"""Text measurement and greedy word wrapping with PDF base-14 font metrics.

Widths come from PyMuPDF's Helvetica metrics, the same fonts the PDF export
draws with, so a line that fits here fits on paper.
"""

from functools import lru_cache
from typing import List

import pymupdf as fitz

MM_PER_POINT = 25.4 / 72.0

# Helvetica family in PyMuPDF base-14 naming
FONT_NAMES = {
    "regular": "helv",
    "bold": "hebo",
    "italic": "heit",
    "bold-italic": "hebi",
}


def font_name(font: str) -> str:
    """Map a style name to its base-14 font name; unknown styles use regular."""
    return FONT_NAMES.get(font, FONT_NAMES["regular"])


@lru_cache(maxsize=4096)
def measure_text(text: str, font_size: float, font: str = "regular") -> float:
    """Width of ``text`` in millimetres."""
    if not text:
        return 0.0
    return fitz.get_text_length(text, fontname=font_name(font), fontsize=font_size) * MM_PER_POINT


def _split_long_word(word: str, width: float, font_size: float, font: str) -> List[str]:
    """Break a single word wider than the column into character chunks."""
    chunks = []
    current = ""
    for char in word:
        candidate = current + char
        if current and measure_text(candidate, font_size, font) > width:
            chunks.append(current)
            current = char
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks


def wrap_text(text: str, width: float, font_size: float, font: str = "regular") -> List[str]:
    """Wrap text to a column ``width`` (mm).

    Explicit line breaks are kept. Words are never split unless a single word
    is wider than the column. Empty text yields one empty line, so every
    field occupies at least one line of height.
    """
    if width <= 0:
        raise ValueError(f"width must be > 0, got {width}")

    lines: List[str] = []
    for paragraph in (text or "").replace("\r\n", "\n").split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if measure_text(candidate, font_size, font) <= width:
                current = candidate
                continue

            if current:
                lines.append(current)
            if measure_text(word, font_size, font) <= width:
                current = word
            else:
                *full, current = _split_long_word(word, width, font_size, font)
                lines.extend(full)
        lines.append(current)

    return lines
