"""Striped tables that continue across pages.

Each data row asks the page-break engine for room on its own, so a table of
any length is laid out in full. After a break the header band is drawn again
at the top of the new page.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .layout import LAYOUT, RenderContext
from .pagination import broke_page, ensure_page_space


def _table_width(ctx: RenderContext) -> float:
    return ctx.page_width - LAYOUT.margin * 2


def draw_header_band(ctx: RenderContext, headers: Sequence[str], col_width: float) -> RenderContext:
    s = ctx.surface
    height = LAYOUT.table_header_height
    s.set_fill_color(LAYOUT.colors.light_blue)
    s.rect(LAYOUT.margin, ctx.cursor_y, _table_width(ctx), height)

    s.set_text_color(LAYOUT.colors.primary)
    s.set_font("helvetica", "bold", LAYOUT.font.table_header)
    for i, label in enumerate(headers):
        s.text(label, LAYOUT.margin + LAYOUT.cell_padding + i * col_width, ctx.cursor_y + 5.5)
    return ctx.advance(height)


def draw_data_row(
    ctx: RenderContext,
    cells: Sequence[str],
    index: int,
    col_width: float,
    font_size: float,
) -> RenderContext:
    s = ctx.surface
    height = LAYOUT.table_row_height
    # parity of the logical row, not of its position on the page
    if index % 2 == 0:
        s.set_fill_color(LAYOUT.colors.row_alternate)
        s.rect(LAYOUT.margin, ctx.cursor_y, _table_width(ctx), height)

    s.set_text_color(LAYOUT.colors.text)
    s.set_font("helvetica", "normal", font_size)
    for i, cell in enumerate(cells):
        s.text(cell, LAYOUT.margin + LAYOUT.cell_padding + i * col_width, ctx.cursor_y + 5)
    return ctx.advance(height)


def render_striped_rows(
    ctx: RenderContext,
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    font_size: Optional[float] = None,
) -> RenderContext:
    if not headers:
        return ctx
    size = LAYOUT.font.table_row if font_size is None else font_size
    col_width = _table_width(ctx) / len(headers)

    # keep the header band together with the first row
    first_block = LAYOUT.table_header_height + (LAYOUT.table_row_height if rows else 0)
    current = ensure_page_space(ctx, first_block)
    current = draw_header_band(current, headers, col_width)
    for index, cells in enumerate(rows):
        current = ensure_page_space(current, LAYOUT.table_row_height)
        if broke_page(current):
            current = draw_header_band(current, headers, col_width)
        current = draw_data_row(current, cells, index, col_width, size)
    return current


def render_table(
    ctx: RenderContext,
    columns: Sequence[str],
    rows: Sequence[Sequence[Any]],
) -> RenderContext:
    """Uniform-width table; cells are printed with ``str()`` as given."""
    return render_striped_rows(ctx, list(columns), [[str(cell) for cell in row] for row in rows])
