from __future__ import annotations

from typing import List, Sequence

from ..finance.amortization import AmortizationRow
from ..finance.money import format_currency, format_date
from .layout import LAYOUT, RenderContext
from .tables import render_striped_rows

BASE_COLUMNS = ["Month", "EMI", "Principal", "Interest", "Balance"]
DATED_COLUMNS = ["Month", "Due Date", "EMI", "Principal", "Interest", "Balance"]


def schedule_columns(schedule: Sequence[AmortizationRow]) -> List[str]:
    # Decided once from the first row; schedules are expected to be all dated or all undated.
    if schedule and schedule[0].due_date:
        return list(DATED_COLUMNS)
    return list(BASE_COLUMNS)


def amortization_cells(row: AmortizationRow, with_due_date: bool) -> List[str]:
    cells = [str(row.month)]
    if with_due_date:
        cells.append(format_date(row.due_date))
    cells += [
        format_currency(row.emi),
        format_currency(row.principal),
        format_currency(row.interest),
        format_currency(row.balance),
    ]
    return cells


def render_amortization_table(ctx: RenderContext, schedule: Sequence[AmortizationRow]) -> RenderContext:
    columns = schedule_columns(schedule)
    with_due_date = len(columns) == len(DATED_COLUMNS)
    rows = [amortization_cells(row, with_due_date) for row in schedule]
    return render_striped_rows(ctx, columns, rows, font_size=LAYOUT.font.table_row + 1)
