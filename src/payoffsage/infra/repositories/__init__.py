"""Concrete repository implementations using SQLModel."""

from .debt import SQLModelDebtRepository
from .preferences import SQLModelPreferenceRepository

__all__ = ["SQLModelDebtRepository", "SQLModelPreferenceRepository"]
