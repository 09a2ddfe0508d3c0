"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelDebtRepository, SQLModelPreferenceRepository
from .services.payoff import PayoffStrategy
from .services.preferences import PayoffPreferences, load_preferences


@dataclass
class AppContext:
    """Configuration plus the repositories callers of the payoff engine need."""

    config: BaseConfig
    session_factory: Callable[[], Session]
    debt_repo: SQLModelDebtRepository
    preference_repo: SQLModelPreferenceRepository

    @property
    def default_strategy(self) -> PayoffStrategy:
        return PayoffStrategy.resolve(self.config.DEFAULT_STRATEGY)

    def preferences(self) -> PayoffPreferences:
        """Stored strategy/extra payment, defaulting to the configured strategy."""
        return load_preferences(self.preference_repo, default_strategy=self.default_strategy)


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    return AppContext(
        config=config,
        session_factory=session_factory,
        debt_repo=SQLModelDebtRepository(session_factory),
        preference_repo=SQLModelPreferenceRepository(session_factory),
    )
