# finances/routers/reports.py
# Purpose: report CRUD, single income/expense add/remove, annual & lifetime balances.
# - Every route needs a signed-in user; reports are always scoped to that user.
# - Totals are computed by the services; request bodies can't set them.

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from finances.db import get_session
from finances.params import parse_id, parse_month, parse_year
from finances.schemas import (
    AnnualReportOut,
    GeneralBalanceOut,
    LineItemIn,
    ReportIn,
    ReportOut,
)
from finances.security import require_user_id
from finances.services.balances import BalanceService
from finances.services.reports import ReportService

router = APIRouter(prefix="/api/reports", tags=["reports"])


def get_report_service(session: Session = Depends(get_session)) -> ReportService:
    return ReportService(session)


def get_balance_service(session: Session = Depends(get_session)) -> BalanceService:
    return BalanceService(session)


# ---- collection-level routes (declared before /{report_id}) ----


@router.get("", response_model=List[ReportOut])
def list_reports(
    user_id: int = Depends(require_user_id),
    reports: ReportService = Depends(get_report_service),
):
    return reports.list_reports(user_id=user_id)


@router.post("", response_model=ReportOut, status_code=status.HTTP_201_CREATED)
def create_report(
    data: ReportIn,
    user_id: int = Depends(require_user_id),
    reports: ReportService = Depends(get_report_service),
):
    return reports.create_report(user_id=user_id, data=data)


@router.get("/by-month", response_model=List[ReportOut])
def reports_by_month(
    month: Optional[str] = None,
    year: Optional[str] = None,
    user_id: int = Depends(require_user_id),
    reports: ReportService = Depends(get_report_service),
):
    return reports.reports_by_month(
        user_id=user_id, month=parse_month(month), year=parse_year(year)
    )


@router.get("/annual", response_model=AnnualReportOut)
def annual_report(
    year: Optional[str] = None,
    user_id: int = Depends(require_user_id),
    balances: BalanceService = Depends(get_balance_service),
):
    year_value = parse_year(year)
    summary = balances.annual_summary(user_id=user_id, year=year_value)
    # echo fields come from the request, not from the aggregation
    return AnnualReportOut(user_id=user_id, year=year_value, **summary.model_dump())


@router.get("/balance", response_model=GeneralBalanceOut)
def general_balance(
    user_id: int = Depends(require_user_id),
    balances: BalanceService = Depends(get_balance_service),
):
    summary = balances.general_balance(user_id=user_id)
    return GeneralBalanceOut(user_id=user_id, **summary.model_dump())


# ---- single report ----


@router.get("/{report_id}", response_model=ReportOut)
def get_report(
    report_id: str,
    user_id: int = Depends(require_user_id),
    reports: ReportService = Depends(get_report_service),
):
    return reports.get_report(
        report_id=parse_id(report_id, "report ID"), user_id=user_id
    )


@router.put("/{report_id}", response_model=ReportOut)
def update_report(
    report_id: str,
    data: ReportIn,
    user_id: int = Depends(require_user_id),
    reports: ReportService = Depends(get_report_service),
):
    return reports.update_report(
        report_id=parse_id(report_id, "report ID"), user_id=user_id, data=data
    )


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    report_id: str,
    user_id: int = Depends(require_user_id),
    reports: ReportService = Depends(get_report_service),
):
    reports.delete_report(report_id=parse_id(report_id, "report ID"), user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---- line items ----


@router.post("/{report_id}/income", response_model=ReportOut)
def add_income(
    report_id: str,
    item: LineItemIn,
    user_id: int = Depends(require_user_id),
    reports: ReportService = Depends(get_report_service),
):
    return reports.add_income(
        report_id=parse_id(report_id, "report ID"), user_id=user_id, item=item
    )


@router.delete("/{report_id}/income/{item_id}", response_model=ReportOut)
def remove_income(
    report_id: str,
    item_id: str,
    user_id: int = Depends(require_user_id),
    reports: ReportService = Depends(get_report_service),
):
    return reports.remove_income(
        report_id=parse_id(report_id, "report ID"), user_id=user_id, item_id=item_id
    )


@router.post("/{report_id}/expense", response_model=ReportOut)
def add_expense(
    report_id: str,
    item: LineItemIn,
    user_id: int = Depends(require_user_id),
    reports: ReportService = Depends(get_report_service),
):
    return reports.add_expense(
        report_id=parse_id(report_id, "report ID"), user_id=user_id, item=item
    )


@router.delete("/{report_id}/expense/{item_id}", response_model=ReportOut)
def remove_expense(
    report_id: str,
    item_id: str,
    user_id: int = Depends(require_user_id),
    reports: ReportService = Depends(get_report_service),
):
    return reports.remove_expense(
        report_id=parse_id(report_id, "report ID"), user_id=user_id, item_id=item_id
    )
