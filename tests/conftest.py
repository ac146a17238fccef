from __future__ import annotations

import io
from pathlib import Path
from typing import Any, List, NamedTuple

import fitz
import pytest
from PIL import Image

from reportsuite import config
from reportsuite.models import reset_engine
from reportsuite.pdf.layout import RenderContext, create_render_context
from reportsuite.pdf.surface import DrawingSurface


class Op(NamedTuple):
    page: int
    name: str
    args: tuple
    fill: tuple
    text_color: tuple


class RecordingSurface(DrawingSurface):
    """DrawingSurface that also keeps a log of every primitive, per page."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.ops: List[Op] = []

    def _record(self, name: str, *args: Any) -> None:
        self.ops.append(Op(self.page_number, name, args, self._fill, self._text))

    def line(self, x1, y1, x2, y2):  # noqa: ANN001 - mirrors DrawingSurface
        self._record("line", x1, y1, x2, y2)
        super().line(x1, y1, x2, y2)

    def rect(self, x, y, w, h):  # noqa: ANN001
        self._record("rect", x, y, w, h)
        super().rect(x, y, w, h)

    def circle(self, cx, cy, r):  # noqa: ANN001
        self._record("circle", cx, cy, r)
        super().circle(cx, cy, r)

    def text(self, value, x, y, align="left"):  # noqa: ANN001
        self._record("text", value, x, y, align)
        super().text(value, x, y, align=align)

    def draw_image(self, image, x, y, w, h, clip_circle=False):  # noqa: ANN001
        self._record("image", x, y, w, h, clip_circle)
        super().draw_image(image, x, y, w, h, clip_circle=clip_circle)

    def texts(self, page: int | None = None) -> List[str]:
        return [op.args[0] for op in self.ops if op.name == "text" and (page is None or op.page == page)]

    def ops_named(self, name: str, page: int | None = None) -> List[Op]:
        return [op for op in self.ops if op.name == name and (page is None or op.page == page)]


def extract_page_texts(pdf: Path | bytes) -> List[str]:
    """Plain text of every page, in order."""
    doc = fitz.open(stream=pdf, filetype="pdf") if isinstance(pdf, bytes) else fitz.open(pdf)
    with doc:
        return [page.get_text() for page in doc]


def png_bytes(size: int = 32, color: tuple = (200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (size, size), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def ctx(surface: RecordingSurface) -> RenderContext:
    return create_render_context(surface)


@pytest.fixture(autouse=True)
def no_logo(monkeypatch, tmp_path: Path) -> None:
    # every test starts without a logo unless it provides one
    monkeypatch.setattr(config, "LOGO_SOURCE", str(tmp_path / "missing-logo.png"))


@pytest.fixture
def logo_file(monkeypatch, tmp_path: Path) -> Path:
    path = tmp_path / "logo.png"
    path.write_bytes(png_bytes())
    monkeypatch.setattr(config, "LOGO_SOURCE", str(path))
    return path


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    config.set_out_dir(path)
    reset_engine()
    return path


@pytest.fixture
def recording_exports(monkeypatch) -> List[RecordingSurface]:
    """Make the report exporters draw onto RecordingSurfaces and collect them."""
    made: List[RecordingSurface] = []

    def factory() -> RecordingSurface:
        s = RecordingSurface(page_size=config.page_size())
        made.append(s)
        return s

    monkeypatch.setattr("reportsuite.pdf.export.new_surface", factory)
    monkeypatch.setattr("reportsuite.pdf.shg.new_surface", factory)
    return made


@pytest.fixture
def make_png():
    return png_bytes


@pytest.fixture
def page_texts():
    return extract_page_texts
