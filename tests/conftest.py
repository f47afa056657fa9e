"""Pytest configuration and shared fixtures for HabitLoop tests.

This module provides storage fixtures, habit factories, and helper utilities
for testing the schedule engine, the tracker, and the local store without
touching the real app database.
"""

from __future__ import annotations

import logging
from itertools import count

import pytest
from sqlmodel import SQLModel

from habitloop.config import TestConfig
from habitloop.infra.database import create_db_engine, create_session_factory, init_database
from habitloop.infra.repositories import SQLModelKeyValueStore
from habitloop.models.habit import Habit, Schedule, TrackingType
from habitloop.services.tracker import HabitTracker


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_habitloop_logger():
    """Drop handlers installed by setup_logging so tests never share log files."""
    yield
    logger = logging.getLogger("habitloop")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture(scope="function")
def test_config(tmp_path):
    """Configuration pointing the data directory at a per-test tmp path."""
    return TestConfig(data_dir=tmp_path)


@pytest.fixture(scope="function")
def db_engine(test_config):
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    engine = create_db_engine(test_config)
    init_database(engine)

    yield engine

    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one repositories receive in the app."""
    return create_session_factory(db_engine)


@pytest.fixture
def store(session_factory) -> SQLModelKeyValueStore:
    return SQLModelKeyValueStore(session_factory)


@pytest.fixture
def tracker(store) -> HabitTracker:
    """Tracker hydrated from an empty store with predictable ids."""
    ids = count(1)
    return HabitTracker(store, id_factory=lambda: f"habit-{next(ids)}").load()


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory():
    """Factory for in-memory Habit records.

    Returns:
        Callable: Function that builds Habit instances with sensible defaults
    """
    ids = count(1)

    def _create_habit(
        name: str = "Test Habit",
        target: float = 1,
        unit: str = "times",
        schedule: Schedule | None = None,
        entries: dict[str, float] | None = None,
        tracking_type: TrackingType = TrackingType.QUANTITY,
        is_target_flexible: bool = False,
        category: str | None = None,
    ) -> Habit:
        """Create a test habit.

        Args:
            name: Habit name
            target: Threshold value for a completed day
            unit: Display unit
            schedule: Recurrence rule (None means daily)
            entries: Mapping of YYYY-MM-DD to logged value

        Returns:
            Habit: Unsaved habit instance
        """
        return Habit(
            id=f"h{next(ids)}",
            name=name,
            target=target,
            unit=unit,
            schedule=schedule,
            entries=dict(entries or {}),
            tracking_type=tracking_type,
            is_target_flexible=is_target_flexible,
            category=category,
        )

    return _create_habit
