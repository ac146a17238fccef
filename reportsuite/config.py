from __future__ import annotations

import os
from pathlib import Path
from typing import Tuple

from reportlab.lib.pagesizes import A4, LETTER


BASE_DIR = Path(__file__).resolve().parents[1]
OUT_DIR = BASE_DIR / "out"
DB_PATH = OUT_DIR / "reports.db"

PAGE_SIZES = {"A4": A4, "LETTER": LETTER}
PAGE_SIZE_NAME = os.environ.get("REPORTSUITE_PAGE_SIZE", "A4").strip().upper()

SUITE_TITLE = os.environ.get("REPORTSUITE_TITLE", "BANKER'S DAILY SUITE")
ASSESSMENT_SUBTITLE = os.environ.get("REPORTSUITE_SUBTITLE", "Professional Banking Assessment Report")
FOOTER_BRANDING = os.environ.get("REPORTSUITE_FOOTER", "Banker's Daily Suite | Professional Banking Tools")

# Path or data: URL. A missing file is fine, the header draws a badge instead.
LOGO_SOURCE = os.environ.get("REPORTSUITE_LOGO") or str(BASE_DIR / "assets" / "brand" / "logo.png")

REPORT_KINDS = {"generic", "amortization", "shg"}

README_TEXT = "This report is generated for assessment purposes only. Verify figures before sanction."


def page_size() -> Tuple[float, float]:
    return PAGE_SIZES.get(PAGE_SIZE_NAME, A4)


def set_out_dir(path: Path) -> None:
    global OUT_DIR, DB_PATH
    OUT_DIR = path
    DB_PATH = OUT_DIR / "reports.db"
