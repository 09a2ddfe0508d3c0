"""SQLModel implementation of the payoff preference repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.debt import _utcnow
from ...models.preference import EXTRA_PAYMENT_KEY, STRATEGY_KEY, PayoffPreference


class SQLModelPreferenceRepository:
    """Keeps strategy and extra payment as rows of ``payoff_preference``."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _value(self, key: str) -> Optional[str]:
        with self.session_factory() as session:
            row = session.get(PayoffPreference, key)
            return row.value if row else None

    def get_strategy(self) -> Optional[str]:
        return self._value(STRATEGY_KEY)

    def get_extra_payment(self) -> Optional[str]:
        return self._value(EXTRA_PAYMENT_KEY)

    def save(self, *, strategy: Optional[str] = None, extra_payment: Optional[str] = None) -> None:
        """Upsert the given values in a single transaction."""
        updates = {STRATEGY_KEY: strategy, EXTRA_PAYMENT_KEY: extra_payment}
        with self.session_factory() as session:
            for key, value in updates.items():
                if value is None:
                    continue
                row = session.get(PayoffPreference, key)
                if row is None:
                    row = PayoffPreference(key=key, value=value)
                else:
                    row.value = value
                    row.updated_at = _utcnow()
                session.add(row)
            session.commit()

    def clear(self) -> None:
        """Forget every stored preference."""
        with self.session_factory() as session:
            for row in session.exec(select(PayoffPreference)).all():
                session.delete(row)
            session.commit()


__all__ = ["SQLModelPreferenceRepository"]
