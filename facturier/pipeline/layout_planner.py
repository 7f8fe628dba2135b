"""Layout planning: positions every block of an invoice or quote.

The planner decides what goes where; it never draws. Variable-height blocks
(company header, counterparty header, item rows, amount in words, notes)
are measured from their wrapped text before anything below them is placed,
so a long client address pushes the items table down instead of
overlapping it.

Flow, top to bottom:

    background (letterhead, one per page, painted first)
    company header (left)      title + number + dates (right)
    separator + counterparty header (right column)
    items table (split across pages when needed)
    totals panel, amount in words, notes (long text continues on the next page)
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..config.profile_loader import LayoutProfile
from ..config.profile_manager import get_profile
from ..models.currency import CurrencyPolicy
from ..models.document import (
    BLACK,
    BlockKind,
    Color,
    DocumentBlock,
    Shape,
    TableColumn,
    TableRow,
    TableSpec,
    TextRun,
)
from ..models.invoice import DocumentType
from ..models.invoice_totals import InvoiceTotals
from ..models.line_item import LineItem
from ..models.party import CompanySnapshot, PartySnapshot
from ..models.tax_config import TaxConfig
from .letterhead import load_letterhead
from .rounding import format_amount, format_quantity
from .text_wrap import wrap_text

logger = logging.getLogger(__name__)

GREY_COMPANY: Color = (80, 80, 80)
GREY_LABEL: Color = (100, 100, 100)
GREY_TEXT: Color = (60, 60, 60)
GREY_RULE: Color = (200, 200, 200)
TITLE_FACTURE: Color = (200, 200, 200)
TITLE_DEVIS: Color = (100, 116, 139)
PANEL_FILL: Color = (245, 247, 250)

# (text, (font size, line height), style, color)
_Line = Tuple[str, Tuple[float, float], str, Color]


@dataclass(frozen=True)
class DocumentHeading:
    """Identification printed in the title block."""

    doc_type: DocumentType
    number: str
    date: str
    due_date: str = ""


def _wrapped(text: str, width: float, font: Tuple[float, float], style: str, color: Color) -> List[_Line]:
    return [(line, font, style, color) for line in wrap_text(text, width, font[0], style)]


def _stack(
    lines: Sequence[_Line],
    x: float,
    top: float,
    profile: LayoutProfile,
    align: str = "left",
) -> Tuple[List[TextRun], float]:
    """Place lines one under the other; returns runs and the total height."""
    runs = []
    cursor = top
    for text, (size, line_height), style, color in lines:
        runs.append(TextRun(
            text=text,
            x=x,
            y=cursor + line_height * profile.baseline_ratio,
            font_size=size,
            font=style,
            color=color,
            align=align,
        ))
        cursor += line_height
    return runs, cursor - top


def _fit(page: int, top: float, height: float, profile: LayoutProfile) -> Tuple[int, float]:
    """Move a block to the next page when it would cross the bottom margin."""
    if top + height > profile.content_bottom and top > profile.margin_top:
        return page + 1, profile.margin_top
    return page, top


def _flow(
    kind: BlockKind,
    lines: Sequence[_Line],
    page: int,
    top: float,
    profile: LayoutProfile,
) -> List[DocumentBlock]:
    """Stack full-width lines from ``top``; one block per page they reach.

    Lines that fit on a fresh page move there together. Longer text is cut
    between lines at the bottom margin and continues at the top margin.
    """
    height = sum(font[1] for _, font, _, _ in lines)
    if height <= profile.content_bottom - profile.margin_top:
        page, top = _fit(page, top, height, profile)

    chunks: List[Tuple[int, float, List[_Line]]] = []
    chunk: List[_Line] = []
    cursor = top
    for line in lines:
        line_height = line[1][1]
        if cursor + line_height > profile.content_bottom and cursor > profile.margin_top:
            if chunk:
                chunks.append((page, top, chunk))
            page, top, cursor, chunk = page + 1, profile.margin_top, profile.margin_top, []
        chunk.append(line)
        cursor += line_height
    if chunk or not chunks:
        chunks.append((page, top, chunk))

    if len(chunks) > 1:
        logger.debug("%s block of %d lines spans %d pages", kind.value, len(lines), len(chunks))

    blocks = []
    for chunk_page, chunk_top, chunk_lines in chunks:
        runs, chunk_height = _stack(chunk_lines, profile.content_left, chunk_top, profile)
        blocks.append(DocumentBlock(
            kind=kind,
            anchored_at=(profile.content_left, chunk_top),
            occupied_height=chunk_height,
            width=profile.content_width,
            page=chunk_page,
            texts=tuple(runs),
        ))
    return blocks


def plan_company_header(company: CompanySnapshot, profile: LayoutProfile) -> DocumentBlock:
    """Company name, address, MF, phone and e-mail in the left column."""
    width = profile.company_column_width
    lines = _wrapped(company.name.upper(), width, profile.company_name_font, "bold", profile.accent_color)
    lines += _wrapped(company.address, width, profile.body_font, "regular", GREY_COMPANY)
    lines += _wrapped(f"MF: {company.mf}", width, profile.body_font, "regular", GREY_COMPANY)
    if company.phone:
        lines += _wrapped(f"Tél: {company.phone}", width, profile.body_font, "regular", GREY_COMPANY)
    if company.email:
        lines += _wrapped(company.email, width, profile.body_font, "regular", GREY_COMPANY)

    top = profile.margin_top
    runs, height = _stack(lines, profile.content_left, top, profile)
    return DocumentBlock(
        kind=BlockKind.COMPANY_HEADER,
        anchored_at=(profile.content_left, top),
        occupied_height=height,
        width=width,
        texts=tuple(runs),
    )


def plan_title(heading: DocumentHeading, profile: LayoutProfile) -> DocumentBlock:
    """Document title, number and dates, right-aligned in the right column."""
    width = profile.content_right - profile.client_column_x
    doc_type = heading.doc_type
    title_color = TITLE_DEVIS if doc_type is DocumentType.DEVIS else TITLE_FACTURE

    lines = _wrapped(doc_type.title, width, profile.title_font, "bold", title_color)
    lines += _wrapped(f"N° {heading.number}", width, profile.number_font, "bold", BLACK)
    lines += _wrapped(f"Date : {heading.date}", width, profile.body_font, "regular", BLACK)
    if heading.due_date:
        lines += _wrapped(f"{doc_type.due_date_label} {heading.due_date}", width, profile.body_font, "regular", BLACK)

    top = profile.margin_top
    runs, height = _stack(lines, profile.content_right, top, profile, align="right")
    return DocumentBlock(
        kind=BlockKind.TITLE,
        anchored_at=(profile.client_column_x, top),
        occupied_height=height,
        width=width,
        texts=tuple(runs),
    )


def plan_counterparty_header(
    client: PartySnapshot,
    doc_type: DocumentType,
    above: Sequence[DocumentBlock],
    profile: LayoutProfile,
) -> DocumentBlock:
    """Separator rule and client block, placed below every block in ``above``."""
    separator_y = profile.separator_min_y
    for block in above:
        separator_y = max(separator_y, block.bottom + profile.header_gap)

    width = profile.client_column_width
    lines = _wrapped(doc_type.counterparty_label, width, profile.body_font, "regular", GREY_LABEL)
    lines += _wrapped(client.name, width, profile.client_name_font, "bold", BLACK)
    lines += _wrapped(client.address, width, profile.body_font, "regular", GREY_TEXT)
    lines += _wrapped(f"MF: {client.mf}", width, profile.body_font, "regular", GREY_TEXT)

    runs, text_height = _stack(lines, profile.client_column_x, separator_y + profile.counterparty_padding, profile)
    rule = Shape("line", profile.content_left, separator_y, profile.content_right, separator_y,
                 color=profile.accent_color, line_width=0.5)
    return DocumentBlock(
        kind=BlockKind.COUNTERPARTY_HEADER,
        anchored_at=(profile.content_left, separator_y),
        occupied_height=profile.counterparty_padding + text_height,
        width=profile.content_width,
        texts=tuple(runs),
        shapes=(rule,),
    )


def _table_columns(tax: TaxConfig, profile: LayoutProfile) -> Tuple[TableColumn, ...]:
    fixed = (
        profile.unit_column_width
        + profile.quantity_column_width
        + profile.price_column_width
        + profile.total_column_width
    )
    total_header = "Total HT" if tax.applicable else "Total"
    return (
        TableColumn("Désignation", profile.content_width - fixed, "left"),
        TableColumn("U", profile.unit_column_width, "center"),
        TableColumn("Qté", profile.quantity_column_width, "center"),
        TableColumn("Prix Unit.", profile.price_column_width, "right"),
        TableColumn(total_header, profile.total_column_width, "right"),
    )


def _table_rows(
    items: Sequence[LineItem],
    columns: Sequence[TableColumn],
    currency: CurrencyPolicy,
    profile: LayoutProfile,
) -> List[TableRow]:
    size = profile.table_font_size
    padding = profile.table_cell_padding
    sep = profile.decimal_separator
    # Lines a row can hold below the repeated header on a fresh page
    page_lines = int(
        (profile.content_bottom - profile.margin_top - profile.table_header_height - 2 * padding)
        // profile.table_line_height
    )
    page_lines = max(page_lines, 1)
    rows = []
    for item in items:
        raw_cells = (
            item.description,
            item.unit,
            format_quantity(item.quantity, sep),
            format_amount(item.unit_price, currency, sep),
            format_amount(item.total, currency, sep),
        )
        cells = tuple(
            tuple(wrap_text(text, max(column.width - 2 * padding, 1.0), size))
            for text, column in zip(raw_cells, columns)
        )
        line_count = max(len(cell) for cell in cells)
        if line_count > page_lines:
            logger.warning(
                "Item %r wraps to %d lines, more than a page holds; continued on the next page",
                item.description[:40], line_count,
            )
        for start in range(0, line_count, page_lines):
            part = tuple(cell[start:start + page_lines] for cell in cells)
            part_lines = max(len(cell) for cell in part)
            rows.append(TableRow(cells=part, height=part_lines * profile.table_line_height + 2 * padding))
    return rows


def plan_items_table(
    items: Sequence[LineItem],
    tax: TaxConfig,
    currency: CurrencyPolicy,
    top: float,
    profile: LayoutProfile,
) -> List[DocumentBlock]:
    """Items table starting at ``top``; one block per page it spans.

    The header row is repeated on every page. Rows move to the next page
    whole; only a row taller than a page is cut between its lines.
    """
    columns = _table_columns(tax, profile)
    rows = _table_rows(items, columns, currency, profile)

    def _block(page: int, block_top: float, block_rows: List[TableRow]) -> DocumentBlock:
        height = profile.table_header_height + sum(row.height for row in block_rows)
        return DocumentBlock(
            kind=BlockKind.ITEMS_TABLE,
            anchored_at=(profile.content_left, block_top),
            occupied_height=height,
            width=profile.content_width,
            page=page,
            table=TableSpec(
                columns=columns,
                header_height=profile.table_header_height,
                rows=tuple(block_rows),
                font_size=profile.table_font_size,
                line_height=profile.table_line_height,
                cell_padding=profile.table_cell_padding,
            ),
        )

    blocks = []
    page = 0
    block_top = top
    cursor = top + profile.table_header_height
    current: List[TableRow] = []
    for row in rows:
        if cursor + row.height > profile.content_bottom and (current or block_top > profile.margin_top):
            # Without rows yet, the whole table starts on the next page
            if current:
                blocks.append(_block(page, block_top, current))
            page += 1
            block_top = profile.margin_top
            cursor = block_top + profile.table_header_height
            current = []
        current.append(row)
        cursor += row.height
    blocks.append(_block(page, block_top, current))

    if len(blocks) > 1:
        logger.debug("Items table spans %d pages (%d rows)", len(blocks), len(rows))
    return blocks


def plan_totals_panel(
    totals: InvoiceTotals,
    tax: TaxConfig,
    currency: CurrencyPolicy,
    page: int,
    top: float,
    profile: LayoutProfile,
) -> DocumentBlock:
    """Total HT / TVA / Total TTC, or a single "Net à Payer" row without tax."""
    rh = profile.totals_row_height
    label_x = profile.totals_label_x
    value_x = profile.content_right
    panel_x = profile.totals_panel_x
    panel_width = profile.content_right - panel_x
    body_size = profile.body_font[0]
    total_size = profile.total_font[0]
    sep = profile.decimal_separator

    def money(value) -> str:
        return f"{format_amount(value, currency, sep)} {currency.symbol}"

    if tax.applicable:
        height = 3.5 * rh + 4
        page, top = _fit(page, top, height, profile)
        box_y = top + 2.5 * rh
        total_y = top + 3.5 * rh
        rate = format_quantity(tax.rate_percent, sep)
        texts = (
            TextRun("Total HT :", label_x, top + rh, body_size, align="right"),
            TextRun(money(totals.subtotal), value_x, top + rh, body_size, align="right"),
            TextRun(f"TVA ({rate}%) :", label_x, top + 2 * rh, body_size, align="right"),
            TextRun(money(totals.tax_amount), value_x, top + 2 * rh, body_size, align="right"),
            TextRun("Total TTC :", label_x, total_y, total_size, "bold", profile.accent_color, "right"),
            TextRun(money(totals.grand_total), value_x, total_y, total_size, "bold", profile.accent_color, "right"),
        )
    else:
        height = 2 + rh + 4
        page, top = _fit(page, top, height, profile)
        box_y = top + 2
        total_y = top + 1.5 * rh
        texts = (
            TextRun("Net à Payer :", label_x, total_y, total_size, "bold", profile.accent_color, "right"),
            TextRun(money(totals.grand_total), value_x, total_y, total_size, "bold", profile.accent_color, "right"),
        )

    shapes = (
        Shape("line", panel_x + 10, top, value_x, top, color=GREY_RULE),
        Shape("rect", panel_x, box_y, panel_width, rh + 4, color=PANEL_FILL),
    )
    return DocumentBlock(
        kind=BlockKind.TOTALS_PANEL,
        anchored_at=(panel_x, top),
        occupied_height=height,
        width=panel_width,
        page=page,
        texts=texts,
        shapes=shapes,
    )


def plan_amount_in_words(
    words: str,
    doc_type: DocumentType,
    page: int,
    top: float,
    profile: LayoutProfile,
) -> List[DocumentBlock]:
    """Closing phrase followed by the spelled-out grand total."""
    width = profile.content_width
    lines = _wrapped(doc_type.closing_phrase, width, profile.words_font, "bold", GREY_TEXT)
    lines += _wrapped(words, width, profile.words_font, "bold-italic", BLACK)
    return _flow(BlockKind.AMOUNT_IN_WORDS, lines, page, top, profile)


def plan_notes(notes: str, page: int, top: float, profile: LayoutProfile) -> List[DocumentBlock]:
    """Footer notes, wrapped to the content width and continued on new pages."""
    width = profile.content_width
    lines = _wrapped("Notes:", width, profile.notes_font, "regular", GREY_LABEL)
    lines += _wrapped(notes, width, profile.notes_font, "regular", GREY_LABEL)
    return _flow(BlockKind.NOTES, lines, page, top, profile)


def plan_layout(
    company: CompanySnapshot,
    client: PartySnapshot,
    items: Sequence[LineItem],
    totals: InvoiceTotals,
    tax: TaxConfig,
    currency: CurrencyPolicy,
    notes: str,
    *,
    heading: DocumentHeading,
    amount_in_words: str,
    profile: Optional[LayoutProfile] = None,
) -> List[DocumentBlock]:
    """Plan every block of the document, in painting order.

    Args:
        company: Issuing company snapshot
        client: Counterparty snapshot
        items: Normalized line items
        totals: Full-precision totals (rounded here, for display only)
        tax: TVA configuration; selects the totals panel variant and offsets
        currency: Drives the fractional digits of every numeral
        notes: Footer notes, may be empty
        heading: Document type, number and dates
        amount_in_words: Spelled-out grand total
        profile: Layout profile (active profile if None)

    Returns:
        Blocks ordered for painting; background images come first
    """
    profile = profile or get_profile()

    letterhead = load_letterhead(company.letterhead)
    show_company = not (letterhead is not None and company.hide_company_info)

    header_blocks: List[DocumentBlock] = []
    if show_company:
        header_blocks.append(plan_company_header(company, profile))
    header_blocks.append(plan_title(heading, profile))

    counterparty = plan_counterparty_header(client, heading.doc_type, header_blocks, profile)

    table_top = max(profile.table_min_top, counterparty.bottom + profile.table_margin)
    table_blocks = plan_items_table(items, tax, currency, table_top, profile)
    last_table = table_blocks[-1]

    words_offset = profile.words_offset_with_tax if tax.applicable else profile.words_offset_without_tax
    totals_block = plan_totals_panel(
        totals, tax, currency, last_table.page, last_table.bottom + profile.totals_offset, profile
    )
    # Words keep their offset to the panel, wherever the panel landed
    words_top = totals_block.top + (words_offset - profile.totals_offset)
    words_blocks = plan_amount_in_words(amount_in_words, heading.doc_type, totals_block.page, words_top, profile)
    last_words = words_blocks[-1]

    blocks = header_blocks + [counterparty] + table_blocks + [totals_block] + words_blocks
    if notes and notes.strip():
        blocks += plan_notes(notes.strip(), last_words.page, last_words.bottom + profile.notes_gap, profile)

    if letterhead is not None:
        page_count = max(block.page for block in blocks) + 1
        backgrounds = [
            DocumentBlock(
                kind=BlockKind.BACKGROUND_IMAGE,
                anchored_at=(0.0, 0.0),
                occupied_height=profile.page_height,
                width=profile.page_width,
                page=page,
                image=letterhead,
            )
            for page in range(page_count)
        ]
        blocks = backgrounds + blocks

    return blocks
