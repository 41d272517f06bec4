# finances/services/reports.py
"""
Report service: CRUD plus single line-item add/remove.

Rules:
- A report is always looked up by (report_id, user_id). Someone else's report
  is reported exactly like a missing one (NotFoundError).
- Any change to the items or the offering percentage recomputes the seven
  totals through services.totals before the row is written.
- Add/remove is read-modify-write on one row (no version column).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Union
from uuid import uuid4

from sqlmodel import Session, select

from finances.errors import NotFoundError
from finances.models import Report, User, utcnow
from finances.money import round_money
from finances.schemas import LineItemIn, ReportIn
from finances.services.totals import compute_totals

logger = logging.getLogger("finances.reports")


class LineType(str, Enum):
    income = "income"
    expense = "expense"

    @property
    def attr(self) -> str:
        # Report column holding this kind of item
        return "incomes" if self is LineType.income else "expenses"


def new_item_id() -> str:
    return uuid4().hex


def _item_dict(item: LineItemIn, *, keep_id: bool) -> dict:
    item_id = item.id if (keep_id and item.id) else new_item_id()
    return {
        "id": str(item_id),
        "concept": item.concept,
        "amount": round_money(item.amount),
    }


def normalize_items(items: Iterable[LineItemIn], *, keep_ids: bool) -> List[dict]:
    """
    Prepare incoming line items for storage.

    keep_ids=False (create): every item gets a fresh id, even if one was sent.
    keep_ids=True (update): only items without an id get one.
    """
    return [_item_dict(item, keep_id=keep_ids) for item in items]


def apply_totals(report: Report) -> Report:
    """Recompute the derived fields from the report's own items."""
    totals = compute_totals(
        report.incomes, report.expenses, report.offering_percentage
    )
    for name, value in totals.model_dump().items():
        setattr(report, name, value)
    report.updated_at = utcnow()
    return report


class ReportService:
    def __init__(self, session: Session):
        self.session = session

    # ------------ internal ------------

    def _save(self, report: Report) -> Report:
        self.session.add(report)
        self.session.commit()
        self.session.refresh(report)
        return report

    def get_owned(self, report_id: int, user_id: int) -> Report:
        stmt = select(Report).where(Report.id == report_id, Report.user_id == user_id)
        report = self.session.exec(stmt).first()
        if report is None:
            raise NotFoundError("Report not found")
        return report

    # ------------ whole reports ------------

    def create_report(self, *, user_id: int, data: ReportIn) -> Report:
        if self.session.get(User, user_id) is None:
            raise NotFoundError("User not found")

        report = Report(
            user_id=user_id,
            month=data.month.strip(),
            year=data.year,
            incomes=normalize_items(data.incomes, keep_ids=False),
            expenses=normalize_items(data.expenses, keep_ids=False),
            offering_percentage=data.offering_percentage,
        )
        apply_totals(report)
        report.created_at = report.updated_at
        self._save(report)
        logger.info("report %s created for user %s", report.id, user_id)
        return report

    def update_report(self, *, report_id: int, user_id: int, data: ReportIn) -> Report:
        report = self.get_owned(report_id, user_id)

        report.month = data.month.strip()
        report.year = data.year
        report.incomes = normalize_items(data.incomes, keep_ids=True)
        report.expenses = normalize_items(data.expenses, keep_ids=True)
        report.offering_percentage = data.offering_percentage
        apply_totals(report)
        self._save(report)
        logger.info("report %s updated", report_id)
        return report

    def list_reports(self, *, user_id: int) -> List[Report]:
        stmt = (
            select(Report)
            .where(Report.user_id == user_id)
            .order_by(Report.created_at.desc(), Report.id.desc())
        )
        return list(self.session.exec(stmt).all())

    def get_report(self, *, report_id: int, user_id: int) -> Report:
        return self.get_owned(report_id, user_id)

    def reports_by_month(self, *, user_id: int, month: str, year: int) -> List[Report]:
        stmt = (
            select(Report)
            .where(
                Report.user_id == user_id,
                Report.month == month,
                Report.year == year,
            )
            .order_by(Report.id)
        )
        return list(self.session.exec(stmt).all())

    def delete_report(self, *, report_id: int, user_id: int) -> None:
        report = self.get_owned(report_id, user_id)
        self.session.delete(report)
        self.session.commit()
        logger.info("report %s deleted", report_id)

    # ------------ single line items ------------

    def add_item(
        self,
        *,
        report_id: int,
        user_id: int,
        kind: Union[LineType, str],
        item: LineItemIn,
    ) -> Report:
        kind = LineType(kind)
        entry = _item_dict(item, keep_id=True)

        report = self.get_owned(report_id, user_id)
        # New list object so the JSON column is flagged as changed
        setattr(report, kind.attr, [*getattr(report, kind.attr), entry])
        apply_totals(report)
        return self._save(report)

    def remove_item(
        self,
        *,
        report_id: int,
        user_id: int,
        kind: Union[LineType, str],
        item_id: str,
    ) -> Report:
        kind = LineType(kind)
        report = self.get_owned(report_id, user_id)
        items = list(getattr(report, kind.attr))

        index = next(
            (i for i, entry in enumerate(items) if str(entry.get("id")) == item_id),
            None,
        )
        if index is None:
            raise NotFoundError(f"{kind.value.capitalize()} not found")

        setattr(report, kind.attr, items[:index] + items[index + 1 :])
        apply_totals(report)
        return self._save(report)

    def add_income(self, *, report_id: int, user_id: int, item: LineItemIn) -> Report:
        return self.add_item(
            report_id=report_id, user_id=user_id, kind=LineType.income, item=item
        )

    def add_expense(self, *, report_id: int, user_id: int, item: LineItemIn) -> Report:
        return self.add_item(
            report_id=report_id, user_id=user_id, kind=LineType.expense, item=item
        )

    def remove_income(self, *, report_id: int, user_id: int, item_id: str) -> Report:
        return self.remove_item(
            report_id=report_id, user_id=user_id, kind=LineType.income, item_id=item_id
        )

    def remove_expense(self, *, report_id: int, user_id: int, item_id: str) -> Report:
        return self.remove_item(
            report_id=report_id,
            user_id=user_id,
            kind=LineType.expense,
            item_id=item_id,
        )
