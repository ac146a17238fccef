from __future__ import annotations

import pytest

from reportsuite.pipeline.ingest import slug_from_title


def test_slug_sanitization() -> None:
    slug = slug_from_title("SHG / Review: 2024-25!")
    assert slug == "shg-review-2024-25"


def test_slug_traversal_is_neutralised() -> None:
    assert slug_from_title("../../etc/passwd") == "etc-passwd"


@pytest.mark.parametrize("title", ["!!!", "///"])
def test_slug_falls_back_to_hash(title: str) -> None:
    slug = slug_from_title(title)
    assert len(slug) == 12
    assert slug.isalnum()
