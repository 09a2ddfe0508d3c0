"""Debt list management on top of the repository."""

from __future__ import annotations

import logging
from typing import Any

from ..constants.debt_types import DebtType, color_for_index
from ..domain.repositories import DebtRepository
from ..models.debt import Debt
from .money import to_decimal
from .validation import validate_debt_data

logger = logging.getLogger(__name__)


class DebtValidationError(ValueError):
    """Debt form input was rejected; ``errors`` lists every failed rule."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def build_debt(
    *,
    name: Any,
    balance: Any,
    interest_rate: Any,
    minimum_payment: Any,
    debt_type: DebtType | str | None = None,
    color: str | None = None,
    position: int = 0,
) -> Debt:
    """Validate raw form values and return an unsaved :class:`Debt`.

    ``position`` is the number of debts already tracked; it picks the
    palette color when none is given.
    """

    result = validate_debt_data(name, balance, interest_rate, minimum_payment)
    if not result.is_valid:
        raise DebtValidationError(result.errors)
    try:
        kind = DebtType.resolve(debt_type)
    except ValueError as exc:
        raise DebtValidationError([str(exc)]) from exc

    return Debt(
        name=str(name).strip(),
        debt_type=kind.value,
        balance=float(to_decimal(balance)),
        interest_rate=float(to_decimal(interest_rate)),
        minimum_payment=float(to_decimal(minimum_payment)),
        color=color or color_for_index(position),
    )


def add_debt(repo: DebtRepository, **fields: Any) -> Debt:
    """Validate and persist a new debt."""

    debt = build_debt(position=len(repo.list_all()), **fields)
    saved = repo.save(debt)
    logger.info("Debt added", extra={"debt_id": saved.id, "debt_type": saved.debt_type})
    return saved


def update_debt(repo: DebtRepository, debt_id: int, **changes: Any) -> Debt:
    """Apply field changes to a stored debt after re-validating the whole form."""

    debt = repo.get_by_id(debt_id)
    if debt is None:
        raise LookupError(f"Debt {debt_id} not found")

    merged = {
        "name": debt.name,
        "balance": debt.balance,
        "interest_rate": debt.interest_rate,
        "minimum_payment": debt.minimum_payment,
        "debt_type": debt.debt_type,
        "color": debt.color,
    }
    merged.update({key: value for key, value in changes.items() if value is not None})
    updated = build_debt(**merged)
    updated.id = debt.id
    updated.created_at = debt.created_at
    saved = repo.save(updated)
    logger.info("Debt updated", extra={"debt_id": saved.id})
    return saved


def remove_debt(repo: DebtRepository, debt_id: int) -> None:
    """Delete a debt; unknown IDs raise ``LookupError``."""

    if repo.get_by_id(debt_id) is None:
        raise LookupError(f"Debt {debt_id} not found")
    repo.delete(debt_id)
    logger.info("Debt removed", extra={"debt_id": debt_id})


__all__ = ["DebtValidationError", "add_debt", "build_debt", "remove_debt", "update_debt"]
