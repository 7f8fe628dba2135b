"""PDF rendering of planned documents with PyMuPDF.

The layout is fully decided by ``pipeline.layout_planner``; this module only
translates millimetre coordinates to PDF points and draws.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import pymupdf as fitz

from ..models.document import BlockKind, Color, DocumentBlock, RenderableDocument, Shape, TableSpec, TextRun
from ..pipeline.text_wrap import font_name, measure_text

logger = logging.getLogger(__name__)

POINTS_PER_MM = 72.0 / 25.4
TABLE_BASELINE_RATIO = 0.75
TABLE_HEADER_FILL: Color = (245, 245, 245)
TABLE_HEADER_BORDER: Color = (200, 200, 200)
TABLE_BORDER: Color = (230, 230, 230)


class PDFExportError(Exception):
    """Raised when a document cannot be written as PDF."""
    pass


def _pt(value: float) -> float:
    return value * POINTS_PER_MM


def _rgb(color: Color) -> Tuple[float, float, float]:
    return tuple(channel / 255.0 for channel in color)


def _draw_text(page: "fitz.Page", run: TextRun) -> None:
    x = run.x
    if run.align in ("right", "center"):
        width = measure_text(run.text, run.font_size, run.font)
        x -= width if run.align == "right" else width / 2
    page.insert_text(
        fitz.Point(_pt(x), _pt(run.y)),
        run.text,
        fontsize=run.font_size,
        fontname=font_name(run.font),
        color=_rgb(run.color),
    )


def _draw_shape(page: "fitz.Page", shape: Shape) -> None:
    if shape.kind == "line":
        page.draw_line(
            fitz.Point(_pt(shape.x1), _pt(shape.y1)),
            fitz.Point(_pt(shape.x2), _pt(shape.y2)),
            color=_rgb(shape.color),
            width=_pt(shape.line_width),
        )
    elif shape.kind == "rect":
        rect = fitz.Rect(_pt(shape.x1), _pt(shape.y1), _pt(shape.x1 + shape.x2), _pt(shape.y1 + shape.y2))
        page.draw_rect(rect, color=None, fill=_rgb(shape.color), width=0)
    else:
        logger.warning("Unknown shape kind %r skipped", shape.kind)


def _cell_x(left: float, width: float, padding: float, align: str) -> Tuple[float, str]:
    if align == "right":
        return left + width - padding, "right"
    if align == "center":
        return left + width / 2, "center"
    return left + padding, "left"


def _draw_table(page: "fitz.Page", x: float, y: float, table: TableSpec) -> None:
    total_width = sum(column.width for column in table.columns)
    header = fitz.Rect(_pt(x), _pt(y), _pt(x + total_width), _pt(y + table.header_height))
    page.draw_rect(header, color=_rgb(TABLE_HEADER_BORDER), fill=_rgb(TABLE_HEADER_FILL), width=_pt(0.1))

    header_baseline = y + table.header_height / 2 + table.font_size * 0.35 / 2
    left = x
    for column in table.columns:
        cx, align = _cell_x(left, column.width, table.cell_padding, "center")
        _draw_text(page, TextRun(column.header, cx, header_baseline, table.font_size, "bold", align=align))
        left += column.width

    row_top = y + table.header_height
    for row in table.rows:
        left = x
        for column, lines in zip(table.columns, row.cells):
            cx, align = _cell_x(left, column.width, table.cell_padding, column.align)
            for index, line in enumerate(lines):
                baseline = row_top + table.cell_padding + table.line_height * (index + TABLE_BASELINE_RATIO)
                _draw_text(page, TextRun(line, cx, baseline, table.font_size, align=align))
            left += column.width
        row_bottom = row_top + row.height
        page.draw_line(
            fitz.Point(_pt(x), _pt(row_bottom)),
            fitz.Point(_pt(x + total_width), _pt(row_bottom)),
            color=_rgb(TABLE_BORDER),
            width=_pt(0.1),
        )
        row_top = row_bottom


def _draw_background(page: "fitz.Page", block: DocumentBlock) -> None:
    """Embed the letterhead; a failure leaves the page without background."""
    rect = fitz.Rect(
        _pt(block.anchored_at[0]),
        _pt(block.anchored_at[1]),
        _pt(block.anchored_at[0] + block.width),
        _pt(block.anchored_at[1] + block.occupied_height),
    )
    try:
        page.insert_image(rect, stream=block.image, keep_proportion=False)
    except Exception as e:
        logger.warning("Letterhead could not be embedded on page %d: %s", block.page + 1, e)


def _draw_block(page: "fitz.Page", block: DocumentBlock) -> None:
    if block.kind is BlockKind.BACKGROUND_IMAGE:
        if block.image:
            _draw_background(page, block)
        return
    for shape in block.shapes:
        _draw_shape(page, shape)
    if block.table is not None:
        _draw_table(page, block.anchored_at[0], block.anchored_at[1], block.table)
    for run in block.texts:
        _draw_text(page, run)


def render_document_to_pdf(
    document: RenderableDocument,
    output_dir: Union[str, Path],
    filename: Optional[str] = None,
) -> str:
    """Draw a planned document and save it as PDF.

    Args:
        document: Document planned by the assembler
        output_dir: Directory to write into (created if needed)
        filename: Override for ``document.filename``

    Returns:
        Path to saved PDF file

    Raises:
        PDFExportError: If drawing or saving fails
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    pdf_path = output_path / (filename or document.filename)

    pdf_doc = fitz.open()
    try:
        pages = [
            pdf_doc.new_page(width=_pt(document.page_width), height=_pt(document.page_height))
            for _ in range(document.page_count)
        ]
        for block in document.blocks:
            _draw_block(pages[block.page], block)
        pdf_doc.save(str(pdf_path))
    except Exception as e:
        raise PDFExportError(f"Failed to render {pdf_path.name}: {e}") from e
    finally:
        pdf_doc.close()

    logger.info("Wrote %s (%d page(s))", pdf_path, document.page_count)
    return str(pdf_path)
