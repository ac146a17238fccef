"""Page breaks while drawing, and the footer pass once the page count is final."""

from __future__ import annotations

import logging

from .furniture import render_footer, render_page_base
from .layout import LAYOUT, RenderContext

logger = logging.getLogger(__name__)


def ensure_page_space(ctx: RenderContext, required_height: float) -> RenderContext:
    """Open a new page when ``required_height`` won't fit above the content limit.

    The only place pages are added. The new page gets watermark and header but
    no footer, because the final page count isn't known yet.
    """
    if ctx.cursor_y + required_height <= LAYOUT.content_limit:
        return ctx
    page_number = ctx.surface.add_page()
    logger.debug("Page break at y=%.1f (need %.1f), now on page %d", ctx.cursor_y, required_height, page_number)
    next_ctx = ctx.at(LAYOUT.page_top_start)
    render_page_base(next_ctx, page_number)
    return next_ctx


def broke_page(ctx: RenderContext) -> bool:
    return ctx.cursor_y == LAYOUT.page_top_start


def _erase_footer(ctx: RenderContext) -> None:
    s = ctx.surface
    top = ctx.page_height - LAYOUT.footer_height - 1
    s.set_fill_color(LAYOUT.colors.paper)
    s.rect(0, top, ctx.page_width, ctx.page_height - top)


def patch_page_footers(ctx: RenderContext, erase: bool = False, start: int = 1) -> int:
    """Draw divider, branding and "Page i of N" on pages ``start``..N.

    With ``erase`` the footer band is painted over first, for pages whose
    footer was drawn with a wrong total. Leaves the last page active, which is
    where ``ctx`` points.
    """
    surface = ctx.surface
    total = surface.page_count
    for page_number in range(start, total + 1):
        surface.set_page(page_number)
        if erase:
            _erase_footer(ctx)
        render_footer(ctx, page_number, total)
    logger.debug("Patched footers on pages %d..%d", start, total)
    return total
