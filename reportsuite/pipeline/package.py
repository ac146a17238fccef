from __future__ import annotations

from pathlib import Path
from typing import Sequence
import zipfile

from ..config import README_TEXT


def create_readme(path: Path, title: str, page_count: int) -> Path:
    lines = [
        title,
        "",
        f"report.pdf        {page_count} page(s)",
        "preview_*.png     first page, and the last page for longer reports",
        "request.json      the request this report was built from",
        "",
        f"Note: {README_TEXT}",
    ]
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def create_bundle(bundle_path: Path, members: Sequence[Path]) -> Path:
    """Zip ``members`` flat (basename only), in the order given."""
    missing = [p for p in members if not p.exists()]
    if missing:
        missing_list = ", ".join(str(p) for p in missing)
        raise FileNotFoundError(f"[{bundle_path.parent.name}] bundle inputs missing: {missing_list}")

    with zipfile.ZipFile(bundle_path, "w", compression=zipfile.ZIP_DEFLATED) as bundle:
        for p in members:
            bundle.write(p, arcname=p.name)
    return bundle_path
