from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional


class RepaymentMethod(str, Enum):
    REDUCING = "reducing"
    FLAT = "flat"
    FIXED = "fixed"
    BULLET = "bullet"


@dataclass(frozen=True)
class AmortizationRow:
    month: int
    emi: float
    principal: float
    interest: float
    balance: float
    due_date: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AmortizationRow":
        due = data.get("due_date", data.get("dueDate"))
        return cls(
            month=int(data.get("month", 0)),
            emi=float(data.get("emi", 0) or 0),
            principal=float(data.get("principal", 0) or 0),
            interest=float(data.get("interest", 0) or 0),
            balance=float(data.get("balance", 0) or 0),
            due_date=str(due) if due else None,
        )


def _reducing(principal: float, annual: float, months: int) -> List[AmortizationRow]:
    r = annual / 12
    if r == 0:
        emi = principal / months
    else:
        emi = principal * r * math.pow(1 + r, months) / (math.pow(1 + r, months) - 1)
    rows: List[AmortizationRow] = []
    remaining = principal
    for month in range(1, months + 1):
        interest = remaining * r
        paid = remaining if month == months else emi - interest
        remaining -= paid
        rows.append(AmortizationRow(month, paid + interest, paid, interest, max(0.0, remaining)))
    return rows


def _flat(principal: float, annual: float, months: int) -> List[AmortizationRow]:
    monthly_principal = principal / months
    monthly_interest = principal * annual * (months / 12) / months
    rows: List[AmortizationRow] = []
    remaining = principal
    for month in range(1, months + 1):
        remaining -= monthly_principal
        rows.append(
            AmortizationRow(
                month,
                monthly_principal + monthly_interest,
                monthly_principal,
                monthly_interest,
                max(0.0, remaining),
            )
        )
    return rows


def _fixed(principal: float, annual: float, months: int) -> List[AmortizationRow]:
    # Annual rest: interest accrues on the balance standing at the start of each year.
    years = months / 12
    if annual == 0:
        annual_emi = principal / years
    else:
        annual_emi = principal * annual / (1 - math.pow(1 + annual, -years))
    monthly_emi = annual_emi / 12
    rows: List[AmortizationRow] = []
    remaining = principal
    year_opening = principal
    for month in range(1, months + 1):
        if (month - 1) % 12 == 0 and month > 1:
            year_opening = remaining
        interest = year_opening * annual / 12
        paid = remaining if month == months else monthly_emi - interest
        remaining -= paid
        rows.append(AmortizationRow(month, paid + interest, paid, interest, max(0.0, remaining)))
    return rows


def _bullet(principal: float, annual: float, months: int) -> List[AmortizationRow]:
    interest = principal * annual / 12
    rows: List[AmortizationRow] = []
    for month in range(1, months + 1):
        last = month == months
        paid = principal if last else 0.0
        rows.append(AmortizationRow(month, paid + interest, paid, interest, 0.0 if last else principal))
    return rows


_GENERATORS = {
    RepaymentMethod.REDUCING: _reducing,
    RepaymentMethod.FLAT: _flat,
    RepaymentMethod.FIXED: _fixed,
    RepaymentMethod.BULLET: _bullet,
}


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    tenure_months: float,
    method: RepaymentMethod | str = RepaymentMethod.REDUCING,
) -> List[AmortizationRow]:
    """Full month-by-month schedule. ``annual_rate`` is a percentage."""
    months = int(math.floor(tenure_months))
    if principal <= 0 or months <= 0:
        return []
    generator = _GENERATORS[RepaymentMethod(method)]
    return generator(float(principal), float(annual_rate) / 100, months)
