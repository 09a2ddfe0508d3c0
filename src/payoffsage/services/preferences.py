"""Stored payoff preferences (strategy and extra monthly payment)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from ..domain.repositories import PreferenceRepository
from ..models.preference import EXTRA_PAYMENT_KEY, STRATEGY_KEY
from .money import ZERO, to_decimal
from .payoff import PayoffStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PayoffPreferences:
    strategy: PayoffStrategy = PayoffStrategy.AVALANCHE
    extra_payment: Decimal = ZERO


def load_preferences(
    repo: PreferenceRepository,
    *,
    default_strategy: PayoffStrategy | str = PayoffStrategy.AVALANCHE,
) -> PayoffPreferences:
    """Read preferences, falling back to defaults for missing or corrupt values."""

    strategy = PayoffStrategy.resolve(default_strategy)
    extra_payment = ZERO

    stored_strategy = repo.get_strategy()
    if stored_strategy is not None:
        try:
            strategy = PayoffStrategy.resolve(stored_strategy)
        except ValueError:
            logger.warning("Ignoring stored payoff strategy", extra={"value": stored_strategy})

    stored_extra = repo.get_extra_payment()
    if stored_extra is not None:
        try:
            candidate = to_decimal(stored_extra)
        except (TypeError, ValueError):
            logger.warning("Ignoring stored extra payment", extra={"value": stored_extra})
            candidate = ZERO
        if candidate.is_finite() and candidate >= 0:
            extra_payment = candidate

    return PayoffPreferences(strategy=strategy, extra_payment=extra_payment)


def save_preferences(
    repo: PreferenceRepository,
    *,
    strategy: PayoffStrategy | str | None = None,
    extra_payment=None,
    default_strategy: PayoffStrategy | str = PayoffStrategy.AVALANCHE,
) -> PayoffPreferences:
    """Persist whichever preferences were given and return what is now stored.

    Both values are checked before anything is written, so a rejected call
    leaves the stored preferences as they were.
    """

    strategy_value = PayoffStrategy.resolve(strategy).value if strategy is not None else None
    extra_value = None
    if extra_payment is not None:
        amount = to_decimal(extra_payment)
        if not amount.is_finite() or amount < 0:
            raise ValueError("Extra payment must be a non-negative number.")
        extra_value = str(amount)

    repo.save(strategy=strategy_value, extra_payment=extra_value)
    logger.info(
        "Payoff preferences saved",
        extra={"strategy": strategy_value, "extra_payment": extra_value},
    )
    return load_preferences(repo, default_strategy=default_strategy)


def reset_preferences(repo: PreferenceRepository) -> None:
    """Drop stored preferences so the configured defaults apply again."""

    repo.clear()
    logger.info("Payoff preferences cleared")


__all__ = [
    "EXTRA_PAYMENT_KEY",
    "STRATEGY_KEY",
    "PayoffPreferences",
    "load_preferences",
    "reset_preferences",
    "save_preferences",
]
