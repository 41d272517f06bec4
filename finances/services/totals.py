# finances/services/totals.py
"""
Report totals: pure arithmetic, no I/O.

Every stored figure is rounded before it is used in the next formula, so the
numbers a user sees on a report always add up with each other.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Union

from finances.money import round_money
from finances.schemas import LineItem, ReportTotals

TITHE_RATE = 0.10  # fixed 10 %, not configurable

ItemLike = Union[LineItem, Mapping[str, Any]]

__all__ = ["TITHE_RATE", "compute_totals", "sum_amounts"]


def _amount(item: ItemLike) -> float:
    if isinstance(item, Mapping):
        return float(item.get("amount") or 0.0)
    return float(item.amount)


def sum_amounts(items: Iterable[ItemLike]) -> float:
    """Sum in list order (same order -> same float, whatever path built the list)."""
    total = 0.0
    for item in items:
        total += _amount(item)
    return total


def compute_totals(
    incomes: Iterable[ItemLike],
    expenses: Iterable[ItemLike],
    offering_percentage: float,
) -> ReportTotals:
    """
    Derive the seven report figures from the line items.

    Accepts LineItem models or the plain dicts stored on a Report row.
    """
    gross_income = round_money(sum_amounts(incomes))
    tithe = round_money(gross_income * TITHE_RATE)
    offering = round_money(gross_income * float(offering_percentage or 0.0))
    church_total = round_money(tithe + offering)
    net_income = round_money(gross_income - church_total)
    total_expenses = round_money(sum_amounts(expenses))
    settlement = round_money(net_income - total_expenses)

    return ReportTotals(
        gross_income=gross_income,
        tithe=tithe,
        offering=offering,
        church_total=church_total,
        net_income=net_income,
        total_expenses=total_expenses,
        settlement=settlement,
    )
