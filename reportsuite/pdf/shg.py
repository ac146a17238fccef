"""Lending-group (SHG) assessment report."""

from __future__ import annotations

from datetime import datetime
from typing import List, Sequence

from ..finance.money import format_currency, format_date, format_percent
from ..finance.shg import InterestSlab, SHGReportData, generate_shg_amortization, sorted_slabs
from .amortization import render_amortization_table
from .blocks import render_key_value_block, render_note_lines, render_section
from .export import FileName, finish_report, new_surface
from .furniture import render_page_base
from .layout import LAYOUT, RenderContext, create_render_context
from .pagination import ensure_page_space, patch_page_footers
from .surface import DrawingSurface
from .tables import render_table

OPEN_ENDED_SLAB_LIMIT = 10_000_000
SLAB_COLUMNS = ["Slab Range", "Interest Rate (%)", "Applied"]
LOAN_COLUMNS = ["Loan Amount", "Start Date", "Rate (%)", "Tenure", "Outstanding"]


def slab_rows(slabs: Sequence[InterestSlab], applied_index: int) -> List[List[str]]:
    ordered = sorted_slabs(slabs)
    rows: List[List[str]] = []
    for i, slab in enumerate(ordered):
        if i == 0:
            label = f"Up to {format_currency(slab.limit)}"
        elif i == len(ordered) - 1 and slab.limit >= OPEN_ENDED_SLAB_LIMIT:
            label = f"Above {format_currency(ordered[i - 1].limit)}"
        else:
            label = f"{format_currency(ordered[i - 1].limit + 1)} to {format_currency(slab.limit)}"
        rows.append([label, format_percent(slab.rate), "APPLIED" if i == applied_index else ""])
    return rows


def _member_label(name: str) -> str:
    return name or "Unnamed"


def _group_summary(ctx: RenderContext, data: SHGReportData) -> RenderContext:
    ctx = render_section(ctx, "GROUP LOAN SUMMARY")
    for label, value in (
        ("Group Name", data.group_name),
        ("Sanctioned Amount", format_currency(data.sanctioned_amount)),
        ("Applied Interest Rate", format_percent(data.group_rate)),
        ("Monthly EMI", format_currency(data.group_emi)),
        ("Disbursement Date", format_date(data.group_start_date)),
        ("Loan Tenure", f"{data.group_tenure} Months"),
        ("Review Date", format_date(data.review_date)),
        ("Group Outstanding", format_currency(data.group_outstanding)),
    ):
        ctx = ensure_page_space(ctx, 8)
        ctx = render_key_value_block(ctx, label, value)

    ctx = ensure_page_space(ctx, 45)
    ctx = render_key_value_block(ctx, "Months Elapsed", str(data.months_elapsed))
    ctx = render_key_value_block(ctx, "Months Remaining", str(data.months_remaining))
    ctx = render_key_value_block(ctx, "Total Interest Payable (Full Tenure)", format_currency(data.total_interest))
    ctx = render_key_value_block(ctx, "Total Amount Paid Till Review", format_currency(data.total_paid))
    return ctx


def _members(ctx: RenderContext, data: SHGReportData) -> RenderContext:
    ctx = ensure_page_space(ctx, 35)
    ctx = render_section(ctx, "MEMBER-WISE LOAN TRACKING")
    if not data.members:
        return render_key_value_block(ctx, "Status", "No members added for this group.")

    for member in data.members:
        ctx = ensure_page_space(ctx, 40)
        ctx = render_key_value_block(
            ctx,
            f"Member: {_member_label(member.name)}",
            f"Total Outstanding: {format_currency(member.total_outstanding)}",
        )
        rows = [
            [
                format_currency(loan.amount),
                format_date(loan.start_date),
                format_percent(loan.rate),
                f"{loan.tenure} Mo",
                format_currency(loan.outstanding),
            ]
            for loan in member.loans
        ]
        ctx = render_table(ctx, LOAN_COLUMNS, rows)
        ctx = ctx.advance(8)
    return ctx


def _validation(ctx: RenderContext, data: SHGReportData) -> RenderContext:
    ctx = ensure_page_space(ctx, 35)
    ctx = render_section(ctx, "SYSTEM VALIDATION")
    if not data.members:
        return render_key_value_block(ctx, "Validation Result", "Not applicable (no member data)")

    combined = sum(member.total_outstanding for member in data.members)
    lines = [
        ("Group Outstanding", format_currency(data.group_outstanding)),
        ("Member Combined Total", format_currency(combined)),
        ("Balance Status", "MATCHED / BALANCED" if data.is_balanced else "MISMATCH DETECTED"),
    ]
    if not data.is_balanced:
        lines.append(("Variance (Difference)", format_currency(data.difference)))
    for label, value in lines:
        ctx = ensure_page_space(ctx, LAYOUT.key_value_height)
        ctx = render_key_value_block(ctx, label, value)
    return ctx


def _schedules(ctx: RenderContext, data: SHGReportData) -> RenderContext:
    if data.sanctioned_amount > 0:
        ctx = ensure_page_space(ctx, 35)
        ctx = render_section(ctx, "GROUP AMORTIZATION SCHEDULE")
        schedule = generate_shg_amortization(
            data.sanctioned_amount, data.group_rate, data.group_tenure, data.group_start_date
        )
        ctx = render_amortization_table(ctx, schedule)

    for member in data.members:
        for number, loan in enumerate(member.loans, start=1):
            ctx = ensure_page_space(ctx, 40)
            ctx = render_section(ctx, f"SCHEDULE: {_member_label(member.name)} (Loan {number})")
            schedule = generate_shg_amortization(loan.amount, loan.rate, loan.tenure, loan.start_date)
            ctx = render_amortization_table(ctx, schedule)
    return ctx


def export_shg_report_to_pdf(
    data: SHGReportData,
    file_name: FileName = "shg-assessment.pdf",
    generated_at: datetime | None = None,
) -> DrawingSurface:
    surface = new_surface()
    ctx = create_render_context(surface)
    render_page_base(ctx, 1)

    ctx = _group_summary(ctx, data)

    ctx = ensure_page_space(ctx, 40)
    ctx = render_section(ctx, "INTEREST SLAB CONFIGURATION")
    ctx = render_table(ctx, SLAB_COLUMNS, slab_rows(data.slabs, data.applied_slab_index))

    ctx = _members(ctx, data)
    ctx = _validation(ctx, data)

    if data.show_amortization:
        ctx = _schedules(ctx, data)

    stamp = (generated_at or datetime.now()).strftime("%d-%m-%Y %H:%M")
    ctx = ensure_page_space(ctx, 25)
    ctx = render_note_lines(
        ctx,
        [
            f"Calculation Date: {format_date(data.review_date)}",
            f"Report Generated: {stamp}",
        ],
    )

    patch_page_footers(ctx)
    return finish_report(surface, file_name)
