"""Turn a report request (plain dict, as stored in the ledger) into a PDF."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, List, Mapping

from ..finance.amortization import AmortizationRow, RepaymentMethod, generate_amortization_schedule
from ..finance.money import format_currency, format_percent, round_currency
from ..finance.shg import SHGGroup, SHGMember, analyze_group
from ..pdf.export import (
    AmortizationReportData,
    PDFDetail,
    ReportData,
    export_amortization_to_pdf,
    export_to_pdf,
)
from ..pdf.shg import export_shg_report_to_pdf
from ..pdf.surface import DrawingSurface

METHOD_LABELS = {
    RepaymentMethod.REDUCING: "Reducing Balance",
    RepaymentMethod.FLAT: "Flat Rate",
    RepaymentMethod.FIXED: "Annual Rest",
    RepaymentMethod.BULLET: "Bullet Repayment",
}


def loan_details(
    principal: float,
    annual_rate: float,
    tenure_months: int,
    method: RepaymentMethod,
    schedule: List[AmortizationRow],
) -> List[PDFDetail]:
    total_interest = sum(round_currency(row.interest) for row in schedule)
    first_emi = schedule[0].emi if schedule else 0.0
    return [
        PDFDetail("Loan Amount", format_currency(principal)),
        PDFDetail("Interest Rate (p.a.)", format_percent(annual_rate)),
        PDFDetail("Tenure", f"{tenure_months} Months"),
        PDFDetail("Repayment Method", METHOD_LABELS[method]),
        PDFDetail("Monthly EMI", format_currency(first_emi)),
        PDFDetail("Total Interest", format_currency(total_interest)),
        PDFDetail("Total Payable", format_currency(round_currency(principal) + total_interest)),
    ]


def _details(request: Mapping[str, Any]) -> List[PDFDetail]:
    return [PDFDetail.from_mapping(item) for item in request.get("details", []) or []]


def build_generic(request: Mapping[str, Any], output_path: Path | None) -> DrawingSurface:
    data = ReportData(
        title=str(request["title"]),
        subtitle=request.get("subtitle"),
        details=_details(request),
    )
    return export_to_pdf(data, output_path, known_page_count=int(request.get("page_count", 0) or 0))


def build_amortization(request: Mapping[str, Any], output_path: Path | None) -> DrawingSurface:
    details = _details(request)
    principal = None
    if request.get("schedule"):
        schedule = [AmortizationRow.from_mapping(row) for row in request["schedule"]]
    else:
        loan = request.get("loan") or {}
        principal = float(loan.get("principal", 0) or 0)
        rate = float(loan.get("annual_rate", 0) or 0)
        tenure = int(loan.get("tenure_months", 0) or 0)
        method = RepaymentMethod(loan.get("method", RepaymentMethod.REDUCING.value))
        schedule = generate_amortization_schedule(principal, rate, tenure, method)
        if not details:
            details = loan_details(principal, rate, tenure, method, schedule)
    data = AmortizationReportData(
        title=str(request["title"]),
        subtitle=request.get("subtitle"),
        details=details,
        schedule=schedule,
        principal=principal,
    )
    return export_amortization_to_pdf(data, output_path)


def build_shg(request: Mapping[str, Any], output_path: Path | None) -> DrawingSurface:
    group = SHGGroup.from_mapping(request.get("group") or {})
    members = [SHGMember.from_mapping(member) for member in request.get("members", []) or []]
    review_date = str(request.get("review_date") or date.today().isoformat())
    data = analyze_group(
        group,
        members,
        review_date,
        show_amortization=bool(request.get("show_amortization", False)),
        title=str(request["title"]),
    )
    return export_shg_report_to_pdf(data, output_path)


BUILDERS = {
    "generic": build_generic,
    "amortization": build_amortization,
    "shg": build_shg,
}


def build_report(request: Mapping[str, Any], output_path: Path | None) -> DrawingSurface:
    kind = str(request.get("kind", "")).strip().lower()
    builder = BUILDERS.get(kind)
    if builder is None:
        raise ValueError(f"Unsupported report kind: {kind or '<missing>'}")
    return builder(request, output_path)
