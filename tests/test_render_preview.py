from __future__ import annotations

import tempfile
from pathlib import Path

from reportsuite.pdf.preview import _pick_preview_pages, render_previews


class DummyRect:
    width = 595.0
    height = 842.0


class DummyPixmap:
    def save(self, path: str) -> None:
        Path(path).write_text("preview", encoding="utf-8")


class DummyPage:
    rect = DummyRect()

    def get_pixmap(self, matrix=None, alpha=False) -> DummyPixmap:  # noqa: ARG002 - signature matches fitz
        return DummyPixmap()


class DummyDoc:
    def __init__(self, page_count: int = 3) -> None:
        self.page_count = page_count
        self.closed = False
        self.loaded: list[int] = []

    def __enter__(self) -> "DummyDoc":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001 - test helper
        self.closed = True

    def load_page(self, index: int) -> DummyPage:
        self.loaded.append(index)
        return DummyPage()


def test_render_previews_closes_document(monkeypatch) -> None:
    doc = DummyDoc()

    def fake_open(path: str) -> DummyDoc:  # noqa: ARG001 - test helper
        return doc

    with tempfile.TemporaryDirectory() as temp_dir:
        targets = [Path(temp_dir) / "preview_1.png", Path(temp_dir) / "preview_2.png"]
        monkeypatch.setattr("reportsuite.pdf.preview.fitz.open", fake_open)
        previews = render_previews(Path("sample.pdf"), targets)
        assert doc.closed is True
        assert doc.loaded == [0, 2]
        assert [path.name for path in previews] == ["preview_1.png", "preview_2.png"]
        assert all(path.exists() for path in previews)


def test_preview_page_choice() -> None:
    assert _pick_preview_pages(0) == [0]
    assert _pick_preview_pages(1) == [0]
    assert _pick_preview_pages(7) == [0, 6]


def test_single_page_report_fills_first_target(monkeypatch, tmp_path) -> None:
    doc = DummyDoc(page_count=1)
    monkeypatch.setattr("reportsuite.pdf.preview.fitz.open", lambda path: doc)
    previews = render_previews(Path("one.pdf"), [tmp_path / "a.png", tmp_path / "b.png"])
    assert previews == [tmp_path / "a.png"]
    assert not (tmp_path / "b.png").exists()
