# finances/schemas.py
"""
Request/response shapes for the JSON API.

Request models never carry the derived totals: whatever a client sends for
gross_income, settlement, ... is ignored (pydantic drops unknown keys).
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Largest magnitude accepted for one line item
MAX_AMOUNT = 1e12

Amount = Annotated[float, Field(ge=-MAX_AMOUNT, le=MAX_AMOUNT, allow_inf_nan=False)]

# ---------- Line items ----------


class LineItemIn(BaseModel):
    id: Optional[str] = None  # optional; generated when missing/empty
    concept: str = ""
    amount: Amount


class LineItem(BaseModel):
    id: str
    concept: str = ""
    amount: float


# ---------- Reports ----------


class ReportIn(BaseModel):
    """Body for create (POST) and full update (PUT)."""

    month: str = Field(min_length=1)
    year: int
    incomes: List[LineItemIn] = Field(default_factory=list)
    expenses: List[LineItemIn] = Field(default_factory=list)
    offering_percentage: float = Field(
        default=0.0, ge=0.0, le=1.0, allow_inf_nan=False
    )  # fraction, not percent-scaled


class ReportTotals(BaseModel):
    """The seven derived figures of one report."""

    gross_income: float = 0.0
    tithe: float = 0.0
    offering: float = 0.0
    church_total: float = 0.0
    net_income: float = 0.0
    total_expenses: float = 0.0
    settlement: float = 0.0


class BalanceSummary(ReportTotals):
    """Same seven fields, summed over many reports."""


class ReportOut(ReportTotals):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    month: str
    year: int
    incomes: List[LineItem]
    expenses: List[LineItem]
    offering_percentage: float
    created_at: datetime
    updated_at: datetime


class AnnualReportOut(BalanceSummary):
    user_id: int
    year: int


class GeneralBalanceOut(BalanceSummary):
    user_id: int


# ---------- Users ----------


class RegisterIn(BaseModel):
    email: str = Field(min_length=3)
    username: str = Field(min_length=1)
    fullname: str = ""
    password: str = Field(min_length=1)
    confirm_password: str


class LoginIn(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    # no password field on purpose
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str
    fullname: str
    created_at: datetime
    updated_at: datetime


class UserPatch(BaseModel):
    """
    Profile update. A field left out of the payload is left unchanged;
    services read `model_fields_set` instead of treating "" as "absent".
    """

    email: Optional[str] = Field(default=None, min_length=3)
    username: Optional[str] = Field(default=None, min_length=1)
    fullname: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=1)
    confirm_password: Optional[str] = None
