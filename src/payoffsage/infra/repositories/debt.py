"""SQLModel implementation of the Debt repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from ...models.debt import Debt


class SQLModelDebtRepository:
    """SQLModel-based debt repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, debt_id: int) -> Optional[Debt]:
        """Retrieve a debt by ID."""
        with self.session_factory() as session:
            return session.exec(select(Debt).where(Debt.id == debt_id)).first()

    def list_all(self) -> list[Debt]:
        """List debts in insertion order (ties in payoff ordering keep it)."""
        with self.session_factory() as session:
            statement = select(Debt).order_by(Debt.id)  # type: ignore
            return list(session.exec(statement).all())

    def count(self) -> int:
        """Return how many debts are stored."""
        with self.session_factory() as session:
            return session.exec(select(func.count()).select_from(Debt)).one()

    def save(self, debt: Debt) -> Debt:
        """Insert a new debt or update the stored row with the same ID."""
        with self.session_factory() as session:
            if debt.id is None:
                session.add(debt)
                session.commit()
                session.refresh(debt)
                return debt
            merged = session.merge(debt)
            session.commit()
            session.refresh(merged)
            return merged

    def delete(self, debt_id: int) -> None:
        """Delete a debt by ID."""
        with self.session_factory() as session:
            debt = session.exec(select(Debt).where(Debt.id == debt_id)).first()
            if debt:
                session.delete(debt)
                session.commit()

    def get_total_debt(self) -> float:
        """Calculate total outstanding debt."""
        with self.session_factory() as session:
            debts = session.exec(select(Debt)).all()
            return sum(debt.balance for debt in debts)


__all__ = ["SQLModelDebtRepository"]
