"""SQLite engine, schema creation and the per-call session factory."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig


def create_db_engine(config: BaseConfig) -> Engine:
    """Engine for ``config.DATABASE_URL`` with the config's connect options."""
    return create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())


def init_database(engine: Engine) -> None:
    """Create the debt and preference tables if they are missing."""
    # Tables register on import
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def create_session_factory(engine: Engine):
    """Return a context manager factory; each repository call gets its own session.

    The session commits on clean exit and rolls back on any error before
    re-raising. Objects stay readable after commit so rows can be handed to
    the payoff engine once the session is closed.
    """

    @contextmanager
    def factory() -> Iterator[Session]:
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory
