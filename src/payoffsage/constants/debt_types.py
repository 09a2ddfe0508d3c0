"""
Debt type definitions and display palette.
Types are a closed set; display details live next to each member.
"""

from __future__ import annotations

from enum import Enum


class DebtType(str, Enum):
    """Kinds of debt a user can track."""

    CREDIT_CARD = "Credit Card"
    AUTO_LOAN = "Auto Loan"
    STUDENT_LOAN = "Student Loan"
    PERSONAL_LOAN = "Personal Loan"
    MORTGAGE = "Mortgage"
    OTHER = "Other"

    @property
    def label(self) -> str:
        return self.value

    @property
    def icon(self) -> str:
        """Icon name for presentation layers."""
        return _ICONS[self]

    @classmethod
    def resolve(cls, value: "DebtType | str | None") -> "DebtType":
        """Match a member by value or name, case-insensitively."""

        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            return cls.CREDIT_CARD
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown debt type: {value}")


_ICONS = {
    DebtType.CREDIT_CARD: "credit-card",
    DebtType.AUTO_LOAN: "car",
    DebtType.STUDENT_LOAN: "graduation-cap",
    DebtType.PERSONAL_LOAN: "wallet",
    DebtType.MORTGAGE: "home",
    DebtType.OTHER: "circle",
}

# Debt display colors, assigned round-robin as debts are added
DEBT_COLORS = [
    "#ef4444",
    "#f59e0b",
    "#06b6d4",
    "#8b5cf6",
    "#10b981",
    "#ec4899",
]


def color_for_index(index: int) -> str:
    """Return the palette color for the ``index``-th debt."""
    return DEBT_COLORS[index % len(DEBT_COLORS)]
