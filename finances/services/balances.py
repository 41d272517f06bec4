# finances/services/balances.py
"""
Summaries over many reports.

Both entry points run one SQL query: filter the user's reports, SUM each of
the seven stored totals independently. settlement is the sum of every
report's own settlement, not recomputed from the summed parts.
"""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import func
from sqlmodel import Session, select

from finances.models import Report
from finances.money import coerce_money, round_money
from finances.schemas import BalanceSummary

SUMMED_FIELDS = (
    "gross_income",
    "tithe",
    "offering",
    "church_total",
    "net_income",
    "total_expenses",
    "settlement",
)


def summary_from_row(values: Mapping[str, Any]) -> BalanceSummary:
    """NULL (no reports) or junk becomes 0, then every field is rounded."""
    return BalanceSummary(
        **{name: round_money(coerce_money(values.get(name))) for name in SUMMED_FIELDS}
    )


class BalanceService:
    def __init__(self, session: Session):
        self.session = session

    def annual_summary(self, *, user_id: int, year: int) -> BalanceSummary:
        return self._summarize(Report.user_id == user_id, Report.year == year)

    def general_balance(self, *, user_id: int) -> BalanceSummary:
        return self._summarize(Report.user_id == user_id)

    def _summarize(self, *conditions) -> BalanceSummary:
        columns = [func.sum(getattr(Report, name)).label(name) for name in SUMMED_FIELDS]
        row = self.session.exec(select(*columns).where(*conditions)).first()
        return summary_from_row(row._mapping if row is not None else {})
