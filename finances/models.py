# finances/models.py
from datetime import datetime, timezone  # für Zeitstempel wie "created_at"
from typing import Any, Optional

from sqlalchemy import JSON, Column  # JSON column keeps line items inside the report row
from sqlmodel import (
    UniqueConstraint,  # um E-Mail/Username eindeutig zu machen (kein Doppel-Account)
)
from sqlmodel import (  # SQLModel base + columns; SQLModel = ORM-Basisklasse, Field = Spalten-Definition
    Field,
    SQLModel,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):  # "table=True" = echte DB-Tabelle erzeugen
    id: Optional[int] = Field(  # Primärschlüssel (int), None beim Erstellen -> DB vergibt Wert
        default=None, primary_key=True
    )
    email: str = Field(index=True)  # indexiert für schnellere Suche
    username: str = Field(index=True)
    fullname: str = Field(default="")
    hashed_password: str  # gespeichertes Passwort-Hash (nie Klartext, nie in Antworten)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    __table_args__ = (  # zusätzliche DB-Regeln:
        UniqueConstraint("email", name="uq_user_email"),
        UniqueConstraint("username", name="uq_user_username"),
    )


class Report(SQLModel, table=True):
    """
    One period (month/year) of a user's finances.

    incomes/expenses are ordered lists of {"id", "concept", "amount"} dicts.
    The seven totals below are always written by services.totals, never by a client.
    """

    __tablename__ = "report"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="user.id")  # owner

    month: str = Field(index=True)  # free text, e.g. "january"
    year: int = Field(index=True)

    incomes: list[dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    expenses: list[dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    offering_percentage: float = 0.0  # fraction, 0.04 == 4 %

    # Derived totals
    gross_income: float = 0.0
    tithe: float = 0.0
    offering: float = 0.0
    church_total: float = 0.0
    net_income: float = 0.0
    total_expenses: float = 0.0
    settlement: float = 0.0

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
