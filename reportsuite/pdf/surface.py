"""Drawing surface over a reportlab canvas.

reportlab writes a page out as soon as ``showPage()`` is called. Reports here
need to go back to finished pages (the page-count footer is only known at the
end), so :class:`PagedCanvas` keeps every page's canvas state alive until
``save()`` and :class:`DrawingSurface` exposes a millimetre, top-down API on
top of it.
"""

from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

RGB = Tuple[int, int, int]
ColorSpec = Union[RGB, int]
ImageSource = Union[str, Path, bytes]

logger = logging.getLogger(__name__)

FONT_NAMES = {
    ("helvetica", "normal"): "Helvetica",
    ("helvetica", "bold"): "Helvetica-Bold",
    ("helvetica", "italic"): "Helvetica-Oblique",
    ("times", "normal"): "Times-Roman",
    ("times", "bold"): "Times-Bold",
    ("courier", "normal"): "Courier",
    ("courier", "bold"): "Courier-Bold",
}


def _rgb(value: ColorSpec) -> RGB:
    if isinstance(value, int):
        return (value, value, value)
    return (int(value[0]), int(value[1]), int(value[2]))


class PagedCanvas(canvas.Canvas):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._page_states: list[dict] = [{}]
        self._active_index = 0

    def _stash_active(self) -> None:
        self._page_states[self._active_index] = dict(self.__dict__)

    def showPage(self):
        self._stash_active()
        self._startPage()
        self._page_states.append({})
        self._active_index = len(self._page_states) - 1

    def setPage(self, index: int) -> None:
        """Make the 0-based page ``index`` the target of further drawing."""
        if not 0 <= index < len(self._page_states):
            raise IndexError(f"page index {index} out of range (pages: {len(self._page_states)})")
        if index == self._active_index:
            return
        self._stash_active()
        self.__dict__.update(self._page_states[index])

    @property
    def page_count(self) -> int:
        return len(self._page_states)

    @property
    def active_index(self) -> int:
        return self._active_index

    def save(self):
        self._stash_active()
        for state in self._page_states:
            self.__dict__.update(state)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)


@dataclass(frozen=True)
class ImageLoad:
    image: Optional[ImageReader] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.image is not None


class DrawingSurface:
    """Stateful 2D surface in millimetres with the origin at the page's top-left."""

    def __init__(self, page_size: Tuple[float, float] = A4) -> None:
        self._buffer = io.BytesIO()
        self._canvas = PagedCanvas(self._buffer, pagesize=page_size)
        self._width_pt, self._height_pt = page_size
        self._fill: RGB = (0, 0, 0)
        self._stroke: RGB = (0, 0, 0)
        self._text: RGB = (0, 0, 0)
        self._font = "Helvetica"
        self._font_size = 10.0
        self._line_width = 0.2
        self._data: Optional[bytes] = None

    # -- pages --------------------------------------------------------------
    @property
    def page_width(self) -> float:
        return self._width_pt / mm

    @property
    def page_height(self) -> float:
        return self._height_pt / mm

    @property
    def page_count(self) -> int:
        return self._canvas.page_count

    @property
    def page_number(self) -> int:
        return self._canvas.active_index + 1

    def add_page(self) -> int:
        """Append a page, make it active and return its 1-based number."""
        self._check_open()
        self._canvas.setPage(self._canvas.page_count - 1)
        self._canvas.showPage()
        return self.page_count

    def set_page(self, page_number: int) -> None:
        self._check_open()
        self._canvas.setPage(page_number - 1)

    # -- pen state ------------------------------------------------------------
    def set_fill_color(self, color: ColorSpec) -> None:
        self._fill = _rgb(color)

    def set_draw_color(self, color: ColorSpec) -> None:
        self._stroke = _rgb(color)

    def set_text_color(self, color: ColorSpec) -> None:
        self._text = _rgb(color)

    def set_font(self, family: str = "helvetica", weight: str = "normal", size: Optional[float] = None) -> None:
        self._font = FONT_NAMES.get((family.lower(), weight.lower()), "Helvetica")
        if size is not None:
            self._font_size = float(size)

    def set_line_width(self, width: float) -> None:
        self._line_width = float(width)

    def set_opacity(self, alpha: float) -> None:
        self._canvas.setFillAlpha(alpha)
        self._canvas.setStrokeAlpha(alpha)

    def save_state(self) -> None:
        self._canvas.saveState()

    def restore_state(self) -> None:
        self._canvas.restoreState()

    # -- primitives -----------------------------------------------------------
    def _y(self, y: float) -> float:
        return self._height_pt - y * mm

    @staticmethod
    def _color(rgb: RGB) -> Tuple[float, float, float]:
        return (rgb[0] / 255.0, rgb[1] / 255.0, rgb[2] / 255.0)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        c = self._canvas
        c.setStrokeColorRGB(*self._color(self._stroke))
        c.setLineWidth(self._line_width * mm)
        c.line(x1 * mm, self._y(y1), x2 * mm, self._y(y2))

    def rect(self, x: float, y: float, w: float, h: float) -> None:
        c = self._canvas
        c.setFillColorRGB(*self._color(self._fill))
        c.rect(x * mm, self._y(y + h), w * mm, h * mm, stroke=0, fill=1)

    def circle(self, cx: float, cy: float, r: float) -> None:
        c = self._canvas
        c.setFillColorRGB(*self._color(self._fill))
        c.circle(cx * mm, self._y(cy), r * mm, stroke=0, fill=1)

    def text(self, value: str, x: float, y: float, align: str = "left") -> None:
        c = self._canvas
        c.setFillColorRGB(*self._color(self._text))
        c.setFont(self._font, self._font_size)
        if align == "right":
            c.drawRightString(x * mm, self._y(y), value)
        elif align == "center":
            c.drawCentredString(x * mm, self._y(y), value)
        else:
            c.drawString(x * mm, self._y(y), value)

    # -- images ---------------------------------------------------------------
    @staticmethod
    def load_image(source: Optional[ImageSource]) -> ImageLoad:
        """Decode an image up front; failures come back as a result, never raised."""
        if not source:
            return ImageLoad(error="no image source")
        try:
            if isinstance(source, bytes):
                handle = io.BytesIO(source)
            elif isinstance(source, str) and source.startswith("data:"):
                handle = io.BytesIO(base64.b64decode(source.split(",", 1)[1]))
            else:
                path = Path(source)
                if not path.exists():
                    return ImageLoad(error=f"image not found: {path}")
                handle = io.BytesIO(path.read_bytes())
            reader = ImageReader(handle)
            reader.getSize()
            reader.getRGBData()
        except Exception as exc:
            return ImageLoad(error=f"{type(exc).__name__}: {exc}")
        return ImageLoad(image=reader)

    def draw_image(
        self,
        image: ImageReader,
        x: float,
        y: float,
        w: float,
        h: float,
        clip_circle: bool = False,
    ) -> None:
        c = self._canvas
        bottom = self._y(y + h)
        if not clip_circle:
            c.drawImage(image, x * mm, bottom, w * mm, h * mm, mask="auto")
            return
        c.saveState()
        path = c.beginPath()
        path.circle((x + w / 2) * mm, self._y(y + h / 2), min(w, h) / 2 * mm)
        c.clipPath(path, stroke=0, fill=0)
        c.drawImage(image, x * mm, bottom, w * mm, h * mm, mask="auto")
        c.restoreState()

    # -- output ---------------------------------------------------------------
    def _check_open(self) -> None:
        if self._data is not None:
            raise RuntimeError("document already finished")

    @property
    def finished(self) -> bool:
        return self._data is not None

    def finish(self) -> bytes:
        if self._data is None:
            self._canvas.save()
            self._data = self._buffer.getvalue()
        return self._data

    def save(self, path: Union[str, Path]) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(self.finish())
        logger.info("Saved %d-page document to %s", self.page_count, out)
        return out
