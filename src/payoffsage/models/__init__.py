"""SQLModel table exports."""

from .debt import Debt
from .preference import EXTRA_PAYMENT_KEY, STRATEGY_KEY, PayoffPreference

__all__ = ["EXTRA_PAYMENT_KEY", "STRATEGY_KEY", "Debt", "PayoffPreference"]
