"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelKeyValueStore
from .logging_config import get_logger, setup_logging
from .services.tracker import HabitTracker

logger = get_logger("context")


@dataclass
class AppContext:
    """Configuration, storage and the hydrated habit tracker for one app session."""

    config: BaseConfig
    engine: Engine
    session_factory: Callable[[], Session]
    store: SQLModelKeyValueStore
    tracker: HabitTracker

    @property
    def dev_mode(self) -> bool:
        return self.config.DEV_MODE

    def close(self) -> None:
        self.engine.dispose()


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Configure logging, open the local store and hydrate the tracker from it."""

    if config is None:
        config = BaseConfig()

    setup_logging(config)
    engine, session_factory = bootstrap_database(config)

    store = SQLModelKeyValueStore(session_factory)
    tracker = HabitTracker(store).load()
    logger.info("App context ready", extra={"database_url": config.DATABASE_URL})

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        store=store,
        tracker=tracker,
    )
