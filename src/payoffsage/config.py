"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "PayoffSage"
    DB_FILENAME = "payoffsage.db"
    LOG_FILENAME = "payoffsage.log"
    STRATEGIES = ("avalanche", "snowball")

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("PAYOFFSAGE_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("PAYOFFSAGE_DATABASE_URL", self._build_sqlite_url())
        self.LOG_LEVEL = os.getenv("PAYOFFSAGE_LOG_LEVEL", "INFO").strip().upper()
        self.DEFAULT_STRATEGY = (
            os.getenv("PAYOFFSAGE_DEFAULT_STRATEGY", "avalanche").strip().lower()
        )
        if self.DEFAULT_STRATEGY not in self.STRATEGIES:
            raise ValueError(
                f"PAYOFFSAGE_DEFAULT_STRATEGY must be one of {', '.join(self.STRATEGIES)}."
            )

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("PAYOFFSAGE_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to per-user storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def use_data_dir(self, data_dir: Path | str) -> None:
        """Point the data directory (and the default SQLite file) somewhere else."""

        self.DATA_DIR = Path(data_dir).expanduser().resolve()
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)
        self.DATABASE_URL = self._build_sqlite_url()

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration rooted in an explicit data directory."""

    DEBUG = False
    TESTING = True

    def __init__(self, data_dir: Path | str | None = None) -> None:
        super().__init__()
        if data_dir is not None:
            self.use_data_dir(data_dir)
