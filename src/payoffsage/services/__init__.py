"""Service module exports."""

from . import debts, export_csv, import_csv, money, payoff, preferences, validation

__all__ = [
    "debts",
    "export_csv",
    "import_csv",
    "money",
    "payoff",
    "preferences",
    "validation",
]
