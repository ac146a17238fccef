"""Self-help-group (lending group) loan engine.

Slab-based rate selection, date-driven schedules and the outstanding-balance
reconciliation that feeds the group assessment report.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Sequence

from .amortization import AmortizationRow
from .money import round_currency, to_decimal

BALANCE_TOLERANCE = 0.01


@dataclass(frozen=True)
class InterestSlab:
    limit: float
    rate: float

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "InterestSlab":
        return cls(limit=float(data.get("limit", 0) or 0), rate=float(data.get("rate", 0) or 0))


@dataclass
class SHGLoan:
    amount: float
    start_date: str
    tenure: int
    rate: float
    missed_emis: int = 0
    partial_payments: float = 0.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SHGLoan":
        return cls(
            amount=float(data.get("amount", 0) or 0),
            start_date=str(data.get("start_date", "") or ""),
            tenure=int(data.get("tenure", 0) or 0),
            rate=float(data.get("rate", 0) or 0),
            missed_emis=int(data.get("missed_emis", 0) or 0),
            partial_payments=float(data.get("partial_payments", 0) or 0),
        )


@dataclass
class SHGMember:
    name: str
    loans: List[SHGLoan] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SHGMember":
        return cls(
            name=str(data.get("name", "") or ""),
            loans=[SHGLoan.from_mapping(loan) for loan in data.get("loans", []) or []],
        )


@dataclass
class SHGGroup:
    name: str
    sanctioned_amount: float
    start_date: str
    tenure: int
    slabs: List[InterestSlab] = field(default_factory=list)
    manual_rate: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SHGGroup":
        manual = data.get("manual_rate")
        return cls(
            name=str(data.get("name", "") or ""),
            sanctioned_amount=float(data.get("sanctioned_amount", 0) or 0),
            start_date=str(data.get("start_date", "") or ""),
            tenure=int(data.get("tenure", 0) or 0),
            slabs=[InterestSlab.from_mapping(slab) for slab in data.get("slabs", []) or []],
            manual_rate=float(manual) if manual not in (None, "") else None,
        )


@dataclass(frozen=True)
class OutstandingSummary:
    outstanding: float
    emi_due: float
    months_paid: int
    months_elapsed: int
    months_remaining: int
    total_interest: float
    total_paid: float


@dataclass
class SHGMemberLoanReport:
    amount: float
    rate: float
    start_date: str
    tenure: int
    outstanding: float


@dataclass
class SHGMemberReport:
    name: str
    total_outstanding: float
    loans: List[SHGMemberLoanReport] = field(default_factory=list)


@dataclass
class SHGReportData:
    title: str
    group_name: str
    sanctioned_amount: float
    group_rate: float
    group_emi: float
    group_start_date: str
    group_tenure: int
    review_date: str
    group_outstanding: float
    months_elapsed: int
    months_remaining: int
    total_interest: float
    total_paid: float
    is_balanced: bool
    difference: float
    slabs: List[InterestSlab] = field(default_factory=list)
    applied_slab_index: int = 0
    members: List[SHGMemberReport] = field(default_factory=list)
    show_amortization: bool = False


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def add_months(start: date, months: int) -> date:
    year, month_index = divmod(start.month - 1 + months, 12)
    year += start.year
    month = month_index + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def sorted_slabs(slabs: Sequence[InterestSlab]) -> List[InterestSlab]:
    return sorted(slabs, key=lambda slab: slab.limit)


def calculate_slab_rate(
    amount: float,
    slabs: Sequence[InterestSlab],
    manual_rate: Optional[float] = None,
) -> float:
    if manual_rate is not None and manual_rate > 0:
        return manual_rate
    ordered = sorted_slabs(slabs)
    for slab in ordered:
        if amount <= slab.limit:
            return slab.rate
    return ordered[-1].rate if ordered else 0.0


def applied_slab_index(amount: float, slabs: Sequence[InterestSlab]) -> int:
    ordered = sorted_slabs(slabs)
    for index, slab in enumerate(ordered):
        if amount <= slab.limit:
            return index
    return len(ordered) - 1


def calculate_months_elapsed(start_date: str, end_date: str, tenure_months: Optional[int] = None) -> int:
    start = parse_iso_date(start_date)
    end = parse_iso_date(end_date)
    if start is None or end is None:
        return 0
    months = max(0, (end.year - start.year) * 12 - start.month + end.month)
    if tenure_months is not None and months > tenure_months:
        return tenure_months
    return months


def generate_shg_amortization(
    principal: float,
    annual_rate: float,
    tenure_months: int,
    start_date: str,
) -> List[AmortizationRow]:
    """Reducing-balance schedule with due dates, rounded to paise each month."""
    p = to_decimal(principal)
    r = to_decimal(annual_rate) / 12 / 100
    months = int(tenure_months or 0)
    start = parse_iso_date(start_date)
    if p <= 0 or months <= 0 or start is None:
        return []

    if r == 0:
        emi = p / months
    else:
        growth = (1 + r) ** months
        emi = p * r * growth / (growth - 1)
    rounded_emi = round_currency(emi)

    rows: List[AmortizationRow] = []
    remaining = p
    for month in range(1, months + 1):
        interest = round_currency(remaining * r)
        if month == months:
            paid = remaining
        else:
            paid = rounded_emi - interest
            if paid > remaining:
                paid = remaining
        rows.append(
            AmortizationRow(
                month=month,
                due_date=add_months(start, month).isoformat(),
                emi=float(paid + interest),
                principal=float(paid),
                interest=float(interest),
                balance=float(remaining - paid),
            )
        )
        remaining -= paid
    return rows


def calculate_outstanding_at_date(
    principal: float,
    annual_rate: float,
    tenure_months: int,
    start_date: str,
    review_date: str,
    missed_emis: int = 0,
    partial_payments: float = 0.0,
) -> OutstandingSummary:
    schedule = generate_shg_amortization(principal, annual_rate, tenure_months, start_date)
    months_elapsed = calculate_months_elapsed(start_date, review_date, tenure_months)
    emi = schedule[0].emi if schedule else 0.0
    total_interest = round(sum(row.interest for row in schedule), 2)
    effective = max(0, months_elapsed - missed_emis)
    months_remaining = max(0, tenure_months - months_elapsed)

    if effective == 0:
        return OutstandingSummary(
            outstanding=max(0.0, round(principal - partial_payments, 2)),
            emi_due=emi,
            months_paid=0,
            months_elapsed=months_elapsed,
            months_remaining=months_remaining,
            total_interest=total_interest,
            total_paid=round(partial_payments, 2),
        )

    index = min(effective, len(schedule)) - 1
    balance = schedule[index].balance if index >= 0 else 0.0
    paid = sum(row.emi for row in schedule[:effective]) + partial_payments
    return OutstandingSummary(
        outstanding=max(0.0, round(balance - partial_payments, 2)),
        emi_due=emi,
        months_paid=effective,
        months_elapsed=months_elapsed,
        months_remaining=months_remaining,
        total_interest=total_interest,
        total_paid=round(paid, 2),
    )


def analyze_group(
    group: SHGGroup,
    members: Sequence[SHGMember],
    review_date: str,
    show_amortization: bool = False,
    title: str = "SHG Loan Assessment Report",
) -> SHGReportData:
    rate = calculate_slab_rate(group.sanctioned_amount, group.slabs, group.manual_rate)
    tenure = group.tenure or 1
    master = calculate_outstanding_at_date(
        group.sanctioned_amount, rate, tenure, group.start_date, review_date
    )

    member_reports: List[SHGMemberReport] = []
    member_total = Decimal(0)
    for member in members:
        loans: List[SHGMemberLoanReport] = []
        member_outstanding = Decimal(0)
        for loan in member.loans:
            summary = calculate_outstanding_at_date(
                loan.amount,
                loan.rate,
                loan.tenure,
                loan.start_date,
                review_date,
                loan.missed_emis,
                loan.partial_payments,
            )
            member_outstanding += to_decimal(summary.outstanding)
            loans.append(
                SHGMemberLoanReport(
                    amount=loan.amount,
                    rate=loan.rate,
                    start_date=loan.start_date,
                    tenure=loan.tenure,
                    outstanding=summary.outstanding,
                )
            )
        member_total += member_outstanding
        member_reports.append(
            SHGMemberReport(name=member.name, total_outstanding=float(member_outstanding), loans=loans)
        )

    difference = abs(float(to_decimal(master.outstanding) - member_total))
    return SHGReportData(
        title=title,
        group_name=group.name,
        sanctioned_amount=group.sanctioned_amount,
        group_rate=rate,
        group_emi=master.emi_due,
        group_start_date=group.start_date,
        group_tenure=tenure,
        review_date=review_date,
        group_outstanding=master.outstanding,
        months_elapsed=master.months_elapsed,
        months_remaining=master.months_remaining,
        total_interest=master.total_interest,
        total_paid=master.total_paid,
        is_balanced=difference < BALANCE_TOLERANCE,
        difference=difference,
        slabs=list(group.slabs),
        applied_slab_index=max(0, applied_slab_index(group.sanctioned_amount, group.slabs)),
        members=member_reports,
        show_amortization=show_amortization,
    )
