from __future__ import annotations

import base64

from reportsuite import config
from reportsuite.pdf.furniture import BADGE_GLYPH, render_footer, render_header, render_page_base, render_watermark
from reportsuite.pdf.layout import LAYOUT


def test_missing_logo_falls_back_to_badge(ctx, surface) -> None:
    render_header(ctx)
    assert len(surface.ops_named("circle")) == 1
    assert BADGE_GLYPH in surface.texts()
    assert surface.ops_named("image") == []
    assert config.SUITE_TITLE in surface.texts()
    assert config.ASSESSMENT_SUBTITLE in surface.texts()


def test_corrupt_logo_falls_back_to_badge(ctx, surface, tmp_path, monkeypatch) -> None:
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"\x89PNG\r\n\x1a\n not really")
    monkeypatch.setattr(config, "LOGO_SOURCE", str(broken))
    render_page_base(ctx, 1)
    assert surface.ops_named("image") == []
    assert BADGE_GLYPH in surface.texts()


def test_logo_is_drawn_clipped_in_header(ctx, surface, logo_file) -> None:
    render_header(ctx)
    images = surface.ops_named("image")
    assert len(images) == 1
    x, y, w, h, clipped = images[0].args
    assert (x, y, w, h) == (LAYOUT.logo_x, LAYOUT.logo_y, LAYOUT.logo_size, LAYOUT.logo_size)
    assert clipped is True
    assert surface.ops_named("circle") == []


def test_logo_from_data_url(ctx, surface, monkeypatch, make_png) -> None:
    monkeypatch.setattr(config, "LOGO_SOURCE", "data:image/png;base64," + base64.b64encode(make_png()).decode())
    render_header(ctx)
    assert len(surface.ops_named("image")) == 1


def test_watermark_is_centred(ctx, surface, logo_file) -> None:
    render_watermark(ctx)
    (op,) = surface.ops_named("image")
    x, y, w, h, clipped = op.args
    assert w == h == LAYOUT.watermark_size
    assert x == (ctx.page_width - w) / 2
    assert y == (ctx.page_height - h) / 2
    assert clipped is False


def test_watermark_skipped_without_logo(ctx, surface) -> None:
    render_watermark(ctx)
    assert surface.ops == []


def test_footer_without_total_has_no_counter(ctx, surface) -> None:
    render_footer(ctx, 1, 0)
    assert config.FOOTER_BRANDING in surface.texts()
    assert not any(text.startswith("Page ") for text in surface.texts())


def test_footer_with_total(ctx, surface) -> None:
    render_footer(ctx, 2, 3)
    counter = [op for op in surface.ops_named("text") if op.args[0] == "Page 2 of 3"]
    assert len(counter) == 1
    _, x, y, align = counter[0].args
    assert align == "right"
    assert x == ctx.page_width - 15
    assert y == ctx.page_height - 8


def test_page_base_draws_footer_only_with_known_total(ctx, surface) -> None:
    render_page_base(ctx, 1)
    footer_rule = ctx.page_height - LAYOUT.footer_height
    assert not any(op.args[1] == footer_rule for op in surface.ops_named("line"))

    render_page_base(ctx, 1, 4)
    assert any(op.args[1] == footer_rule for op in surface.ops_named("line"))
    assert "Page 1 of 4" in surface.texts()
