"""Fixed-point money helpers shared by the payoff services."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Convert a stored number into a Decimal without binary float noise.

    Floats go through ``str()`` so ``18.99`` becomes ``Decimal("18.99")``
    instead of ``Decimal("18.98999999999999843680598132777959108352661132812")``.
    """

    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Boolean is not a monetary amount")
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip().replace(",", "").lstrip("$"))
        except InvalidOperation as exc:
            raise ValueError(f"Not a number: {value!r}") from exc
    raise TypeError(f"Unsupported numeric type: {type(value).__name__}")


def quantize_cents(amount: Decimal) -> Decimal:
    """Round to cents using half-up rounding."""

    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(amount) -> str:
    """Render an amount as ``$1,234.56`` (negative values as ``-$1,234.56``)."""

    value = quantize_cents(to_decimal(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


__all__ = ["CENTS", "ZERO", "format_currency", "quantize_cents", "to_decimal"]
