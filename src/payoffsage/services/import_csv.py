"""CSV ingestion for debt lists."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import pandas as pd

from ..domain.repositories import DebtRepository
from ..models.debt import Debt
from .debts import DebtValidationError, build_debt

logger = logging.getLogger(__name__)

# Accepted header spellings for each debt field (compared lowercased, spaces -> _)
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("name", "debt", "debt_name"),
    "balance": ("balance", "amount", "current_balance"),
    "interest_rate": ("interest_rate", "interestrate", "rate", "apr"),
    "minimum_payment": ("minimum_payment", "minimumpayment", "min_payment", "minimum"),
    "debt_type": ("debt_type", "type"),
    "color": ("color",),
}
REQUIRED_FIELDS = ("name", "balance", "interest_rate", "minimum_payment")


@dataclass
class DebtImportResult:
    """Parsed debts plus one message per rejected row."""

    debts: list[Debt] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def created(self) -> int:
        return len(self.debts)


def normalize_frame(*, file_path: Path, encoding: str = "utf-8-sig") -> pd.DataFrame:
    """Load a CSV file as strings with normalized column names."""

    frame = pd.read_csv(file_path, encoding=encoding, dtype=str, keep_default_na=False)
    frame.columns = [str(c).strip().lower().replace(" ", "_") for c in frame.columns]
    return frame


def resolve_columns(columns) -> dict[str, str]:
    """Map debt fields to the CSV headers that carry them."""

    present = set(columns)
    mapping: dict[str, str] = {}
    for field_name, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in present:
                mapping[field_name] = alias
                break
    missing = [name for name in REQUIRED_FIELDS if name not in mapping]
    if missing:
        raise ValueError(f"CSV is missing required columns: {', '.join(missing)}")
    return mapping


def parse_debt_rows(
    rows: list[Mapping[str, str]], mapping: Mapping[str, str], *, start_position: int = 0
) -> DebtImportResult:
    """Validate each row and build unsaved debts; bad rows are reported, not fatal."""

    result = DebtImportResult()
    for index, row in enumerate(rows):
        line_number = index + 2  # header is line 1
        values = {name: row.get(column, "") for name, column in mapping.items()}
        try:
            debt = build_debt(
                name=values["name"],
                balance=values["balance"],
                interest_rate=values["interest_rate"],
                minimum_payment=values["minimum_payment"],
                debt_type=values.get("debt_type") or None,
                color=(values.get("color") or "").strip() or None,
                position=start_position + len(result.debts),
            )
        except DebtValidationError as exc:
            result.errors.append(f"Row {line_number}: {exc}")
            continue
        result.debts.append(debt)
    return result


def import_debts_csv(*, csv_path: Path, start_position: int = 0) -> DebtImportResult:
    """Parse a debts CSV without touching the database."""

    frame = normalize_frame(file_path=csv_path)
    mapping = resolve_columns(frame.columns)
    rows = frame.to_dict(orient="records")
    return parse_debt_rows(rows, mapping, start_position=start_position)


def import_debts(repo: DebtRepository, *, csv_path: Path) -> DebtImportResult:
    """Parse a debts CSV and save every valid row through ``repo``."""

    logger.info("Starting debt import", extra={"csv_path": str(csv_path)})
    parsed = import_debts_csv(csv_path=csv_path, start_position=len(repo.list_all()))
    saved = [repo.save(debt) for debt in parsed.debts]
    logger.info(
        "Debt import complete",
        extra={"imported": len(saved), "rejected": len(parsed.errors)},
    )
    return DebtImportResult(debts=saved, errors=parsed.errors)


__all__ = [
    "COLUMN_ALIASES",
    "DebtImportResult",
    "import_debts",
    "import_debts_csv",
    "normalize_frame",
    "parse_debt_rows",
    "resolve_columns",
]
