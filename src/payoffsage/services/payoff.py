"""Debt payoff projection engine (avalanche and snowball).

The engine is a pure function of ``(debts, strategy, extra_payment)``. It
orders the debts by strategy, amortizes each one with the closed-form
month count, and lays the results on a sequential timeline where a debt's
clock starts once every debt ahead of it is paid off.

Only the first debt in the order receives the extra payment. Freed minimum
payments are tracked but never re-applied month by month to later debts;
those debts are amortized at their own minimum and offset in time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal
from enum import Enum
from typing import Any, Iterable, Protocol, Sequence

from .money import ZERO, quantize_cents, to_decimal

logger = logging.getLogger(__name__)

_HUNDRED = Decimal(100)
_MONTHS_PER_YEAR = Decimal(12)


class PayoffError(ValueError):
    """Base class for payoff calculation failures."""


class InvalidDebtError(PayoffError):
    """A debt carries a balance, rate or minimum payment the engine cannot use."""

    def __init__(self, debt: Any, reason: str):
        self.debt = debt
        self.reason = reason
        super().__init__(f"Invalid debt {_describe(debt)}: {reason}")


class NonConvergentPayoffError(PayoffError):
    """The monthly payment never outpaces the interest accrual."""

    def __init__(self, debt: Any, monthly_payment: Decimal, monthly_interest: Decimal):
        self.debt = debt
        self.monthly_payment = monthly_payment
        self.monthly_interest = monthly_interest
        super().__init__(
            f"Payment too low to ever pay off {_describe(debt)}: "
            f"{monthly_payment} per month does not exceed "
            f"{quantize_cents(monthly_interest)} of monthly interest"
        )


class PayoffStrategy(str, Enum):
    """Order in which surplus cash is pointed at debts."""

    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"

    @property
    def label(self) -> str:
        return "Debt Avalanche" if self is PayoffStrategy.AVALANCHE else "Debt Snowball"

    @property
    def description(self) -> str:
        if self is PayoffStrategy.AVALANCHE:
            return (
                "Pay minimums on all debts, then put extra money toward the debt with "
                "the highest interest rate. This saves the most money on interest."
            )
        return (
            "Pay minimums on all debts, then put extra money toward the smallest "
            "balance. This provides psychological wins and momentum."
        )

    @classmethod
    def resolve(cls, value: "PayoffStrategy | str") -> "PayoffStrategy":
        """Accept an enum member or its case-insensitive string value."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Invalid debt payoff strategy: {value!r}") from None


class DebtLike(Protocol):
    """Anything carrying the fields the engine reads (ORM row or snapshot)."""

    id: Any
    name: str
    balance: Any
    interest_rate: Any
    minimum_payment: Any


@dataclass(frozen=True, slots=True)
class DebtTerms:
    """Immutable debt snapshot used for one calculation."""

    id: Any
    name: str
    balance: Decimal
    interest_rate: Decimal
    minimum_payment: Decimal

    @classmethod
    def from_debt(cls, debt: DebtLike) -> "DebtTerms":
        """Snapshot and validate a debt, failing fast on unusable values."""

        try:
            balance = to_decimal(debt.balance)
            interest_rate = to_decimal(debt.interest_rate)
            minimum_payment = to_decimal(debt.minimum_payment)
        except (TypeError, ValueError) as exc:
            raise InvalidDebtError(debt, str(exc)) from exc

        if not all(v.is_finite() for v in (balance, interest_rate, minimum_payment)):
            raise InvalidDebtError(debt, "values must be finite numbers")
        if balance <= 0:
            raise InvalidDebtError(debt, "balance must be greater than 0")
        if interest_rate < 0:
            raise InvalidDebtError(debt, "interest rate cannot be negative")
        if minimum_payment <= 0:
            raise InvalidDebtError(debt, "minimum payment must be greater than 0")
        return cls(
            id=debt.id,
            name=debt.name,
            balance=balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
        )


@dataclass(frozen=True, slots=True)
class Amortization:
    """Closed-form payoff of one debt at a fixed monthly payment."""

    months: int
    total_interest: Decimal


@dataclass(frozen=True, slots=True)
class PayoffPlan:
    """Where one debt lands in the payoff sequence."""

    debt: Any
    months_to_payoff: int
    total_interest: Decimal
    order: int
    monthly_payment: Decimal


@dataclass(frozen=True, slots=True)
class BaselineSavings:
    """Strategy result compared against paying minimums only."""

    interest_saved: Decimal
    time_saved: int
    baseline_interest: Decimal
    baseline_months: int


@dataclass(frozen=True, slots=True)
class PayoffSummary:
    """Aggregate figures for a debt list and its plans."""

    total_debt: Decimal
    total_minimum_payments: Decimal
    total_interest: Decimal
    payoff_time_months: int

    @property
    def payoff_years(self) -> int:
        return self.payoff_time_months // 12

    @property
    def remaining_months(self) -> int:
        return self.payoff_time_months % 12

    def progress_percent(self, balance) -> Decimal:
        """Share of the total debt not held by ``balance``, as a percentage."""

        if self.total_debt == 0:
            return ZERO
        share = (self.total_debt - to_decimal(balance)) / self.total_debt * _HUNDRED
        return quantize_cents(share)


@dataclass(frozen=True, slots=True)
class PayoffProjection:
    """Everything a caller needs to render one strategy run."""

    strategy: PayoffStrategy
    extra_payment: Decimal
    plans: list[PayoffPlan]
    summary: PayoffSummary
    savings: BaselineSavings


def _describe(debt: Any) -> str:
    name = getattr(debt, "name", None)
    debt_id = getattr(debt, "id", None)
    if name and debt_id is not None:
        return f"'{name}' (id={debt_id})"
    if name:
        return f"'{name}'"
    return f"id={debt_id}"


def monthly_rate(interest_rate) -> Decimal:
    """Annual percentage rate -> per-month fraction."""

    return to_decimal(interest_rate) / _HUNDRED / _MONTHS_PER_YEAR


def amortize(balance, interest_rate, monthly_payment, *, debt: Any = None) -> Amortization:
    """Return whole months to payoff and the interest paid over that time.

    Months are rounded up and the last month is counted as a full payment,
    so ``total_interest`` is ``months * monthly_payment - balance``. Raises
    :class:`NonConvergentPayoffError` when the payment does not exceed the
    first month's interest.
    """

    balance = to_decimal(balance)
    payment = to_decimal(monthly_payment)
    rate = monthly_rate(interest_rate)

    if payment <= 0:
        raise NonConvergentPayoffError(debt, payment, balance * rate)

    if rate == 0:
        months = int((balance / payment).to_integral_value(rounding=ROUND_CEILING))
        return Amortization(months=months, total_interest=quantize_cents(ZERO))

    monthly_interest = balance * rate
    if payment <= monthly_interest:
        raise NonConvergentPayoffError(debt, payment, monthly_interest)

    periods = -(1 - monthly_interest / payment).ln() / (1 + rate).ln()
    months = int(periods.to_integral_value(rounding=ROUND_CEILING))
    total_interest = quantize_cents(months * payment - balance)
    return Amortization(months=months, total_interest=total_interest)


def order_debts(debts: Iterable[DebtLike], strategy: PayoffStrategy | str) -> list:
    """Sort debts for the strategy; equal keys keep their input order."""

    strategy = PayoffStrategy.resolve(strategy)
    items = list(debts)
    if strategy is PayoffStrategy.AVALANCHE:
        # Highest rate first. sorted(reverse=True) is still stable.
        return sorted(items, key=lambda d: to_decimal(d.interest_rate), reverse=True)
    return sorted(items, key=lambda d: to_decimal(d.balance))


def compute_payoff_plans(
    debts: Iterable[DebtLike], strategy: PayoffStrategy | str, extra_payment=0
) -> list[PayoffPlan]:
    """Build the ordered payoff plan for ``debts``.

    The whole extra payment goes to the first debt in the order. Each later
    debt is paid at its own minimum and finishes ``months`` after the debt
    before it. Any invalid or non-convergent debt fails the whole call.
    """

    strategy = PayoffStrategy.resolve(strategy)
    extra = to_decimal(extra_payment)
    if not extra.is_finite() or extra < 0:
        raise ValueError("Extra payment must be a non-negative number.")

    items = list(debts)
    terms = {id(debt): DebtTerms.from_debt(debt) for debt in items}
    ordered = order_debts(items, strategy)

    plans: list[PayoffPlan] = []
    remaining_extra = extra
    cumulative_months = 0
    for index, debt in enumerate(ordered):
        snapshot = terms[id(debt)]
        extra_for_this_debt = remaining_extra if index == 0 else ZERO
        payment = snapshot.minimum_payment + extra_for_this_debt
        try:
            result = amortize(
                snapshot.balance, snapshot.interest_rate, payment, debt=debt
            )
        except NonConvergentPayoffError:
            logger.warning(
                "Payoff does not converge",
                extra={"debt_id": snapshot.id, "strategy": strategy.value},
            )
            raise

        plans.append(
            PayoffPlan(
                debt=debt,
                months_to_payoff=result.months + cumulative_months,
                total_interest=result.total_interest,
                order=index + 1,
                monthly_payment=payment,
            )
        )
        cumulative_months += result.months
        # Tracked only; later debts are never amortized with it.
        remaining_extra += snapshot.minimum_payment

    logger.debug(
        "Computed payoff plans",
        extra={"strategy": strategy.value, "debts": len(plans), "extra_payment": extra},
    )
    return plans


def compute_baseline_savings(
    debts: Iterable[DebtLike], strategy_plans: Sequence[PayoffPlan]
) -> BaselineSavings:
    """Compare a strategy's plans with paying every debt its minimum in parallel."""

    baseline_interest = ZERO
    baseline_months = 0
    for debt in debts:
        snapshot = DebtTerms.from_debt(debt)
        result = amortize(
            snapshot.balance, snapshot.interest_rate, snapshot.minimum_payment, debt=debt
        )
        baseline_interest += result.total_interest
        baseline_months = max(baseline_months, result.months)

    strategy_interest = sum((plan.total_interest for plan in strategy_plans), ZERO)
    strategy_months = max((plan.months_to_payoff for plan in strategy_plans), default=0)
    return BaselineSavings(
        interest_saved=baseline_interest - strategy_interest,
        time_saved=baseline_months - strategy_months,
        baseline_interest=baseline_interest,
        baseline_months=baseline_months,
    )


def summarize_plans(debts: Iterable[DebtLike], plans: Sequence[PayoffPlan]) -> PayoffSummary:
    """Reduce the debt list and plans to headline totals."""

    items = list(debts)
    return PayoffSummary(
        total_debt=sum((to_decimal(d.balance) for d in items), ZERO),
        total_minimum_payments=sum((to_decimal(d.minimum_payment) for d in items), ZERO),
        total_interest=sum((plan.total_interest for plan in plans), ZERO),
        payoff_time_months=max((plan.months_to_payoff for plan in plans), default=0),
    )


def project_payoff(
    debts: Iterable[DebtLike], strategy: PayoffStrategy | str, extra_payment=0
) -> PayoffProjection:
    """Run the strategy, the summary and the baseline comparison in one call."""

    items = list(debts)
    strategy = PayoffStrategy.resolve(strategy)
    plans = compute_payoff_plans(items, strategy, extra_payment)
    return PayoffProjection(
        strategy=strategy,
        extra_payment=to_decimal(extra_payment),
        plans=plans,
        summary=summarize_plans(items, plans),
        savings=compute_baseline_savings(items, plans),
    )


__all__ = [
    "Amortization",
    "BaselineSavings",
    "DebtLike",
    "DebtTerms",
    "InvalidDebtError",
    "NonConvergentPayoffError",
    "PayoffError",
    "PayoffPlan",
    "PayoffProjection",
    "PayoffStrategy",
    "PayoffSummary",
    "amortize",
    "compute_baseline_savings",
    "compute_payoff_plans",
    "monthly_rate",
    "order_debts",
    "project_payoff",
    "summarize_plans",
]
