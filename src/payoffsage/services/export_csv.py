"""CSV export helpers for debts and payoff plans."""

from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path
from typing import Iterable

from .money import quantize_cents, to_decimal
from .payoff import PayoffPlan

DEBT_HEADERS = ["id", "name", "debt_type", "balance", "interest_rate", "minimum_payment", "color"]
PLAN_HEADERS = [
    "order",
    "debt_id",
    "name",
    "balance",
    "interest_rate",
    "monthly_payment",
    "months_to_payoff",
    "total_interest",
]


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _write_rows(output_path: Path, headers: list[str], rows: Iterable[dict]) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    # newline='' keeps csv from doubling line endings on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=headers, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL
        )
        writer.writeheader()
        for row in rows:
            writer.writerow({key: _serialize_value(value) for key, value in row.items()})
    return output_path


def export_debts_csv(*, debts: Iterable, output_path: Path) -> Path:
    """Write debts to CSV at ``output_path`` and return the path.

    Columns: id, name, debt_type, balance, interest_rate, minimum_payment, color.
    The file can be read back with :func:`payoffsage.services.import_csv.import_debts_csv`.
    """

    rows = (
        {header: getattr(debt, header, None) for header in DEBT_HEADERS}
        for debt in debts
    )
    return _write_rows(output_path, DEBT_HEADERS, rows)


def export_payoff_plan_csv(*, plans: Iterable[PayoffPlan], output_path: Path) -> Path:
    """Write one row per plan, in payoff order."""

    rows = (
        {
            "order": plan.order,
            "debt_id": getattr(plan.debt, "id", None),
            "name": getattr(plan.debt, "name", None),
            "balance": quantize_cents(to_decimal(plan.debt.balance)),
            "interest_rate": to_decimal(plan.debt.interest_rate),
            "monthly_payment": quantize_cents(plan.monthly_payment),
            "months_to_payoff": plan.months_to_payoff,
            "total_interest": plan.total_interest,
        }
        for plan in sorted(plans, key=lambda p: p.order)
    )
    return _write_rows(output_path, PLAN_HEADERS, rows)


__all__ = ["DEBT_HEADERS", "PLAN_HEADERS", "export_debts_csv", "export_payoff_plan_csv"]
