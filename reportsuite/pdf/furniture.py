from __future__ import annotations

import logging

from .. import config
from .layout import LAYOUT, RenderContext
from .surface import DrawingSurface, ImageLoad

logger = logging.getLogger(__name__)

BADGE_GLYPH = "B"


def _load_logo() -> ImageLoad:
    return DrawingSurface.load_image(config.LOGO_SOURCE)


def render_watermark(ctx: RenderContext) -> None:
    """Faint centred logo behind the page content. Skipped when the logo won't load."""
    logo = _load_logo()
    if not logo.ok:
        logger.debug("Watermark skipped: %s", logo.error)
        return
    s = ctx.surface
    size = LAYOUT.watermark_size
    s.save_state()
    s.set_opacity(LAYOUT.watermark_opacity)
    s.draw_image(logo.image, (ctx.page_width - size) / 2, (ctx.page_height - size) / 2, size, size)
    s.restore_state()


def _draw_badge(ctx: RenderContext) -> None:
    s = ctx.surface
    radius = LAYOUT.logo_size / 2
    cx = LAYOUT.logo_x + radius
    cy = LAYOUT.logo_y + radius
    s.set_fill_color(LAYOUT.colors.primary)
    s.circle(cx, cy, radius)
    s.set_text_color(LAYOUT.colors.badge_glyph)
    s.set_font("helvetica", "bold", LAYOUT.font.badge_glyph)
    s.text(BADGE_GLYPH, cx, cy + LAYOUT.font.badge_glyph * 0.15, align="center")


def render_header(ctx: RenderContext) -> None:
    s = ctx.surface

    logo = _load_logo()
    if logo.ok:
        s.draw_image(
            logo.image,
            LAYOUT.logo_x,
            LAYOUT.logo_y,
            LAYOUT.logo_size,
            LAYOUT.logo_size,
            clip_circle=True,
        )
    else:
        logger.debug("Logo unavailable, drawing badge: %s", logo.error)
        _draw_badge(ctx)

    s.set_font("helvetica", "bold", LAYOUT.font.title)
    s.set_text_color(LAYOUT.colors.primary)
    s.text(config.SUITE_TITLE, 35, 16)

    s.set_font("helvetica", "normal", LAYOUT.font.subtitle)
    s.set_text_color(LAYOUT.colors.muted)
    s.text(config.ASSESSMENT_SUBTITLE, 35, 23)

    s.set_draw_color(LAYOUT.colors.divider)
    s.set_line_width(0.5)
    s.line(LAYOUT.margin, 30, ctx.page_width - LAYOUT.margin, 30)


def render_footer(ctx: RenderContext, page_number: int, total_pages: int) -> None:
    """Divider and branding; the page counter only once ``total_pages`` is known."""
    s = ctx.surface
    divider_y = ctx.page_height - LAYOUT.footer_height
    text_y = ctx.page_height - 8

    s.set_draw_color(LAYOUT.colors.divider)
    s.set_line_width(0.5)
    s.line(LAYOUT.margin, divider_y, ctx.page_width - LAYOUT.margin, divider_y)

    s.set_font("helvetica", "bold", LAYOUT.font.footer_branding)
    s.set_text_color(LAYOUT.colors.primary)
    s.text(config.FOOTER_BRANDING, ctx.page_width / 2, text_y, align="center")

    if total_pages > 0:
        s.set_font("helvetica", "normal", LAYOUT.font.footer_page)
        s.set_text_color(LAYOUT.colors.footer_page)
        s.text(f"Page {page_number} of {total_pages}", ctx.page_width - 15, text_y, align="right")


def render_page_base(ctx: RenderContext, page_number: int, total_pages: int = 0) -> None:
    render_watermark(ctx)
    render_header(ctx)
    if total_pages > 0:
        render_footer(ctx, page_number, total_pages)
