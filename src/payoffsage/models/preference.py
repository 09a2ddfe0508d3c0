"""Stored payoff preferences."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlmodel import Field, SQLModel

from .debt import _utcnow

STRATEGY_KEY = "debts.strategy"
EXTRA_PAYMENT_KEY = "debts.extra_payment"


class PayoffPreference(SQLModel, table=True):
    """One remembered planner choice, keyed like ``debts.strategy``.

    Values are kept as the raw strings the planner wrote; reading code
    decides whether they are still usable.
    """

    __tablename__: ClassVar[str] = "payoff_preference"

    key: str = Field(primary_key=True, max_length=64)
    value: str = Field(nullable=False, max_length=64)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)
