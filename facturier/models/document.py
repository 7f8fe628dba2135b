"""Renderable document description: positioned blocks on paginated pages.

Coordinates are millimetres from the top-left corner of the page. Text run
``y`` values are baselines; block ``anchored_at`` is the top-left corner of
the area the block occupies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)


class BlockKind(Enum):
    """Kinds of blocks the layout planner emits."""

    BACKGROUND_IMAGE = "background-image"
    COMPANY_HEADER = "company-header"
    TITLE = "title"
    COUNTERPARTY_HEADER = "counterparty-header"
    ITEMS_TABLE = "items-table"
    TOTALS_PANEL = "totals-panel"
    AMOUNT_IN_WORDS = "amount-in-words"
    NOTES = "notes"


@dataclass(frozen=True)
class TextRun:
    """One line of text placed at a baseline.

    Attributes:
        text: Text to draw (already wrapped, single line)
        x: Anchor x; left edge, or right edge when align == "right"
        y: Baseline y
        font_size: Size in points
        font: "regular", "bold", "italic" or "bold-italic"
        color: RGB 0-255
        align: "left" or "right"
    """

    text: str
    x: float
    y: float
    font_size: float
    font: str = "regular"
    color: Color = BLACK
    align: str = "left"


@dataclass(frozen=True)
class Shape:
    """A rule (kind "line": x1, y1 to x2, y2) or a filled rectangle
    (kind "rect": x1, y1 is the corner, x2, y2 the width and height)."""

    kind: str
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color = BLACK
    line_width: float = 0.1


@dataclass(frozen=True)
class TableColumn:
    header: str
    width: float
    align: str = "left"


@dataclass(frozen=True)
class TableRow:
    """A table row; each cell holds its wrapped lines."""

    cells: Tuple[Tuple[str, ...], ...]
    height: float


@dataclass(frozen=True)
class TableSpec:
    """Items table content for one page.

    Attributes:
        columns: Column headers, widths (mm) and alignment
        header_height: Height of the repeated header row
        rows: Rows placed on this page, in order
        font_size: Body font size in points
        line_height: Height of one wrapped cell line
        cell_padding: Inner padding of every cell
    """

    columns: Tuple[TableColumn, ...]
    header_height: float
    rows: Tuple[TableRow, ...]
    font_size: float
    line_height: float
    cell_padding: float


@dataclass(frozen=True)
class DocumentBlock:
    """A positioned block of the document.

    Attributes:
        kind: What the block shows
        anchored_at: (x, y) of the block's top-left corner
        occupied_height: Vertical extent, measured from the wrapped content
        width: Horizontal extent
        page: Zero-based page index
        texts: Text runs to draw, in order
        shapes: Rules and filled rectangles, drawn before the texts
        table: Table content (items-table blocks only)
        image: Decoded image bytes (background-image blocks only)
    """

    kind: BlockKind
    anchored_at: Tuple[float, float]
    occupied_height: float
    width: float
    page: int = 0
    texts: Tuple[TextRun, ...] = ()
    shapes: Tuple[Shape, ...] = ()
    table: Optional[TableSpec] = None
    image: Optional[bytes] = field(default=None, repr=False)

    @property
    def top(self) -> float:
        return self.anchored_at[1]

    @property
    def bottom(self) -> float:
        """First y below the block."""
        return self.anchored_at[1] + self.occupied_height


@dataclass(frozen=True)
class RenderableDocument:
    """Everything an external renderer needs to draw the document.

    Attributes:
        filename: Suggested export file name
        blocks: Blocks in painting order
        page_width: Page width in mm
        page_height: Page height in mm
        amount_in_words: Spelled-out grand total, for callers that show it elsewhere
    """

    filename: str
    blocks: Tuple[DocumentBlock, ...]
    page_width: float
    page_height: float
    amount_in_words: str = ""

    @property
    def page_count(self) -> int:
        if not self.blocks:
            return 1
        return max(block.page for block in self.blocks) + 1

    def blocks_of_kind(self, kind: BlockKind) -> List[DocumentBlock]:
        return [block for block in self.blocks if block.kind is kind]
