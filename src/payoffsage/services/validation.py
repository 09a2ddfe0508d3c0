"""Form-level validation for debt inputs.

Values arrive as raw strings (CLI options, CSV cells) and are checked
against the same limits the debt form enforces before anything reaches the
payoff engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class ValidationResult:
    """Outcome of validating one form."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Rule:
    """Single check applied to a field value."""

    kind: str
    message: str
    value: Any = None


def _as_number(value: Any) -> float:
    if isinstance(value, str):
        value = value.strip().replace(",", "").lstrip("$")
    try:
        number = float(value)
    except (TypeError, ValueError):
        return math.nan
    # Non-finite input fails every numeric rule
    return number if math.isfinite(number) else math.nan


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def validate_field(value: Any, rules: list[Rule]) -> ValidationResult:
    """Apply ``rules`` in order and collect every failing message."""

    errors: list[str] = []
    for rule in rules:
        if rule.kind == "required":
            if _is_blank(value):
                errors.append(rule.message)
        elif rule.kind == "positive":
            number = _as_number(value)
            if math.isnan(number) or number <= 0:
                errors.append(rule.message)
        elif rule.kind == "min":
            number = _as_number(value)
            if math.isnan(number) or number < rule.value:
                errors.append(rule.message)
        elif rule.kind == "max":
            number = _as_number(value)
            if math.isnan(number) or number > rule.value:
                errors.append(rule.message)
        elif rule.kind == "min_length":
            if isinstance(value, str) and len(value.strip()) < rule.value:
                errors.append(rule.message)
        elif rule.kind == "max_length":
            if isinstance(value, str) and len(value.strip()) > rule.value:
                errors.append(rule.message)
        else:
            raise ValueError(f"Unknown validation rule: {rule.kind}")
    return ValidationResult(is_valid=not errors, errors=errors)


def validate_form(fields: list[tuple[Any, list[Rule]]]) -> ValidationResult:
    """Validate several fields and merge their errors."""

    all_errors: list[str] = []
    for value, rules in fields:
        all_errors.extend(validate_field(value, rules).errors)
    return ValidationResult(is_valid=not all_errors, errors=all_errors)


def validate_debt_data(
    name: Any, balance: Any, interest_rate: Any, minimum_payment: Any
) -> ValidationResult:
    """Check a debt form before it is saved."""

    return validate_form(
        [
            (
                name,
                [
                    Rule("required", "Debt name is required"),
                    Rule("min_length", "Debt name must be at least 2 characters", 2),
                    Rule("max_length", "Debt name must be less than 50 characters", 50),
                ],
            ),
            (
                balance,
                [
                    Rule("required", "Balance is required"),
                    Rule("positive", "Balance must be greater than 0"),
                    Rule("max", "Balance cannot exceed $10,000,000", 10_000_000),
                ],
            ),
            (
                interest_rate,
                [
                    Rule("required", "Interest rate is required"),
                    Rule("min", "Interest rate cannot be negative", 0),
                    Rule("max", "Interest rate cannot exceed 100%", 100),
                ],
            ),
            (
                minimum_payment,
                [
                    Rule("required", "Minimum payment is required"),
                    Rule("positive", "Minimum payment must be greater than 0"),
                    Rule("max", "Minimum payment cannot exceed $100,000", 100_000),
                ],
            ),
        ]
    )


def validate_extra_payment(amount: Any) -> ValidationResult:
    """Extra monthly payment must be a number >= 0."""

    return validate_field(
        amount,
        [
            Rule("required", "Extra payment is required"),
            Rule("min", "Extra payment cannot be negative", 0),
        ],
    )


__all__ = [
    "Rule",
    "ValidationResult",
    "validate_debt_data",
    "validate_extra_payment",
    "validate_field",
    "validate_form",
]
