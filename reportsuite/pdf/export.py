"""Generic key/value reports and loan amortization reports."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Union

from .. import config
from ..finance.amortization import AmortizationRow
from ..finance.money import amount_in_words
from .amortization import render_amortization_table
from .blocks import render_key_value_block, render_section, render_title
from .furniture import render_page_base
from .layout import RenderContext, create_render_context
from .pagination import ensure_page_space, patch_page_footers
from .surface import DrawingSurface

logger = logging.getLogger(__name__)

CustomRenderer = Callable[[RenderContext], RenderContext]
FileName = Optional[Union[str, Path]]

SECTION_PREFIX = "---"


@dataclass
class PDFDetail:
    label: str
    value: str = ""
    type: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PDFDetail":
        return cls(
            label=str(data.get("label", "")),
            value=str(data.get("value", "")),
            type=data.get("type"),
        )


@dataclass
class ReportData:
    title: str
    subtitle: Optional[str] = None
    details: List[PDFDetail] = field(default_factory=list)


@dataclass
class AmortizationReportData(ReportData):
    schedule: List[AmortizationRow] = field(default_factory=list)
    principal: Optional[float] = None


def is_section(detail: PDFDetail) -> bool:
    # TODO: drop the "---" label convention once every producer sets type="section".
    return detail.type == "section" or detail.label.startswith(SECTION_PREFIX)


def section_title(label: str) -> str:
    return label.strip().strip("-").strip()


def new_surface() -> DrawingSurface:
    return DrawingSurface(page_size=config.page_size())


def finish_report(surface: DrawingSurface, file_name: FileName) -> DrawingSurface:
    if file_name:
        surface.save(file_name)
    return surface


def export_to_pdf(
    data: ReportData,
    file_name: FileName = "report.pdf",
    custom_renderer: Optional[CustomRenderer] = None,
    known_page_count: int = 0,
) -> DrawingSurface:
    """Title, subtitle and detail lines, followed by an optional custom block.

    With ``known_page_count`` page 1 gets its counter in the first pass and only
    later pages are patched. A wrong count is logged and every footer is
    renumbered.
    """
    surface = new_surface()
    ctx = create_render_context(surface)
    render_page_base(ctx, 1, known_page_count)

    ctx = render_title(ctx, data.title, data.subtitle)
    for item in data.details:
        ctx = ensure_page_space(ctx, 10)
        if is_section(item):
            ctx = render_section(ctx, section_title(item.label))
        else:
            ctx = render_key_value_block(ctx, item.label, item.value)

    if custom_renderer is not None:
        ctx = custom_renderer(ctx)

    if known_page_count > 0 and surface.page_count == known_page_count:
        patch_page_footers(ctx, start=2)
        return finish_report(surface, file_name)
    if known_page_count > 0:
        logger.warning(
            "Report %r expected %d page(s) but rendered %d; renumbering footers",
            data.title,
            known_page_count,
            surface.page_count,
        )
    patch_page_footers(ctx, erase=known_page_count > 0)
    return finish_report(surface, file_name)


def export_amortization_to_pdf(
    data: AmortizationReportData,
    file_name: FileName = "amortization-schedule.pdf",
) -> DrawingSurface:
    surface = new_surface()
    ctx = create_render_context(surface)
    render_page_base(ctx, 1)

    ctx = render_title(ctx, data.title, data.subtitle or "Amortization Schedule", title_advance=8)

    ctx = render_section(ctx, "Assessment Summary")
    for item in data.details:
        ctx = ensure_page_space(ctx, 8)
        ctx = render_key_value_block(ctx, item.label, item.value)
    words = amount_in_words(data.principal) if data.principal else ""
    if words:
        ctx = ensure_page_space(ctx, 8)
        ctx = render_key_value_block(ctx, "Amount in Words", words)

    ctx = ensure_page_space(ctx.advance(10), 25)
    ctx = render_section(ctx, "Monthly Repayment Schedule")
    ctx = render_amortization_table(ctx, data.schedule)

    patch_page_footers(ctx)
    return finish_report(surface, file_name)
