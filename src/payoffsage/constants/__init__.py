"""Static option lists shared by models, services and the CLI."""

from .debt_types import DEBT_COLORS, DebtType, color_for_index

__all__ = ["DEBT_COLORS", "DebtType", "color_for_index"]
