"""Debt repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.debt import Debt


class DebtRepository(Protocol):
    """Storage for the debts the payoff planner reads."""

    def get_by_id(self, debt_id: int) -> Optional[Debt]:
        """Retrieve a debt by ID."""
        ...

    def list_all(self) -> list[Debt]:
        """List debts in the order they were added."""
        ...

    def save(self, debt: Debt) -> Debt:
        """Create a new debt or update an existing one."""
        ...

    def delete(self, debt_id: int) -> None:
        """Delete a debt by ID."""
        ...

    def get_total_debt(self) -> float:
        """Calculate total outstanding debt."""
        ...
