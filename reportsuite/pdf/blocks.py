from __future__ import annotations

from typing import Optional, Sequence

from .layout import LAYOUT, RenderContext


def render_title(
    ctx: RenderContext,
    title: str,
    subtitle: Optional[str] = None,
    title_advance: float = 10,
    subtitle_advance: float = 12,
) -> RenderContext:
    s = ctx.surface
    s.set_font("helvetica", "bold", LAYOUT.font.title)
    s.set_text_color(LAYOUT.colors.primary)
    s.text(title, LAYOUT.margin, ctx.cursor_y)
    ctx = ctx.advance(title_advance)

    if subtitle:
        s.set_font("helvetica", "normal", LAYOUT.font.subtitle)
        s.set_text_color(LAYOUT.colors.muted)
        s.text(subtitle, LAYOUT.margin, ctx.cursor_y)
        ctx = ctx.advance(subtitle_advance)
    return ctx


def render_section(ctx: RenderContext, title: str) -> RenderContext:
    s = ctx.surface
    s.set_font("helvetica", "bold", LAYOUT.font.section)
    s.set_text_color(LAYOUT.colors.primary)
    s.text(title, LAYOUT.margin, ctx.cursor_y)

    s.set_draw_color(LAYOUT.colors.light_blue)
    s.set_line_width(0.5)
    s.line(LAYOUT.margin, ctx.cursor_y + 2, ctx.page_width - LAYOUT.margin, ctx.cursor_y + 2)
    return ctx.advance(LAYOUT.section_advance)


def render_key_value_block(ctx: RenderContext, label: str, value: str) -> RenderContext:
    s = ctx.surface
    left = LAYOUT.margin + LAYOUT.cell_padding
    right = ctx.page_width - LAYOUT.margin - LAYOUT.cell_padding

    s.set_font("helvetica", "normal", LAYOUT.font.body)
    s.set_text_color(LAYOUT.colors.text)
    s.text(label, left, ctx.cursor_y)

    s.set_font("helvetica", "bold", LAYOUT.font.body)
    s.text(value, right, ctx.cursor_y, align="right")

    s.set_draw_color(LAYOUT.colors.faint_rule)
    s.set_line_width(0.1)
    s.line(left, ctx.cursor_y + 2, right, ctx.cursor_y + 2)
    return ctx.advance(LAYOUT.key_value_height)


def render_note_lines(ctx: RenderContext, lines: Sequence[str], line_gap: float = 5) -> RenderContext:
    """Small grey lines, e.g. report metadata at the end of a document."""
    s = ctx.surface
    s.set_font("helvetica", "normal", LAYOUT.font.note)
    s.set_text_color(LAYOUT.colors.footer_page)
    for line in lines:
        ctx = ctx.advance(line_gap)
        s.text(line, LAYOUT.margin + LAYOUT.cell_padding, ctx.cursor_y)
    return ctx
