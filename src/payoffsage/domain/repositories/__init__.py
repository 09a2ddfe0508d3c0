"""Repository protocol definitions for domain layer."""

from .debt import DebtRepository
from .preferences import PreferenceRepository

__all__ = ["DebtRepository", "PreferenceRepository"]
