from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

import fitz  # PyMuPDF


def _pick_preview_pages(page_count: int) -> List[int]:
    # first page, plus the last one when the report runs longer
    if page_count <= 1:
        return [0]
    return [0, page_count - 1]


def _render_page_to_png(doc: fitz.Document, page_index: int, out_path: Path, min_px: int = 1600) -> None:
    page = doc.load_page(page_index)
    short_side = min(page.rect.width, page.rect.height)
    zoom = max(2.0, min_px / float(short_side))
    pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    pix.save(str(out_path))


def render_previews(pdf_path: Path, targets: Sequence[Path]) -> List[Path]:
    """Render the preview pages of ``pdf_path`` into ``targets`` in order.

    Single-page reports fill only the first target. Returns the files written.
    """
    written: List[Path] = []
    with fitz.open(pdf_path) as doc:
        for out, page_index in zip(targets, _pick_preview_pages(doc.page_count)):
            _render_page_to_png(doc, page_index, out)
            written.append(out)
    return written
