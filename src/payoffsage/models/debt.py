"""Debt entity."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ..constants.debt_types import DebtType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Debt(SQLModel, table=True):
    """Installment or revolving debt fed to the payoff planner."""

    __tablename__: ClassVar[str] = "debt"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=50, index=True)
    debt_type: str = Field(default=DebtType.CREDIT_CARD.value, max_length=32)
    balance: float = Field(nullable=False)
    interest_rate: float = Field(default=0.0, nullable=False)
    minimum_payment: float = Field(nullable=False)
    color: str = Field(default="#ef4444", max_length=16)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)

    @property
    def kind(self) -> DebtType:
        """Typed view of ``debt_type``."""
        return DebtType.resolve(self.debt_type)
