"""Payoff preference repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol


class PreferenceRepository(Protocol):
    """Storage for the planner's strategy and extra monthly payment."""

    def get_strategy(self) -> Optional[str]:
        ...

    def get_extra_payment(self) -> Optional[str]:
        ...

    def save(self, *, strategy: Optional[str] = None, extra_payment: Optional[str] = None) -> None:
        """Write the given values together; ``None`` leaves a value untouched."""
        ...

    def clear(self) -> None:
        ...
