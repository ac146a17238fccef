"""Layout constants and the render context threaded through every draw call.

All geometry is in millimetres measured from the top-left corner of the page.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Tuple

from .surface import DrawingSurface

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class Palette:
    primary: RGB = (30, 64, 175)
    text: RGB = (0, 0, 0)
    muted: RGB = (100, 100, 100)
    light_blue: RGB = (240, 244, 255)
    divider: RGB = (230, 230, 230)
    row_alternate: RGB = (252, 252, 252)
    faint_rule: RGB = (245, 245, 245)
    footer_page: RGB = (150, 150, 150)
    badge_glyph: RGB = (255, 255, 255)
    paper: RGB = (255, 255, 255)


@dataclass(frozen=True)
class FontSizes:
    title: float = 16
    subtitle: float = 10
    section: float = 11
    body: float = 10
    table_header: float = 9
    table_row: float = 8
    footer_branding: float = 11
    footer_page: float = 9
    badge_glyph: float = 12
    note: float = 8


@dataclass(frozen=True)
class PageLayout:
    margin: float = 12.0
    header_height: float = 35.0
    footer_height: float = 15.0
    watermark_size: float = 120.0
    watermark_opacity: float = 0.05
    page_top_start: float = 35.0
    content_limit: float = 260.0
    logo_x: float = 12.0
    logo_y: float = 8.0
    logo_size: float = 18.0
    table_header_height: float = 8.0
    table_row_height: float = 7.0
    cell_padding: float = 3.0
    key_value_height: float = 8.0
    section_advance: float = 10.0
    colors: Palette = field(default_factory=Palette)
    font: FontSizes = field(default_factory=FontSizes)


LAYOUT = PageLayout()


@dataclass(frozen=True)
class RenderContext:
    surface: DrawingSurface
    cursor_y: float
    page_width: float
    page_height: float

    def advance(self, dy: float) -> "RenderContext":
        return replace(self, cursor_y=self.cursor_y + dy)

    def at(self, y: float) -> "RenderContext":
        return replace(self, cursor_y=y)


def create_render_context(surface: DrawingSurface) -> RenderContext:
    return RenderContext(
        surface=surface,
        cursor_y=LAYOUT.page_top_start,
        page_width=surface.page_width,
        page_height=surface.page_height,
    )
