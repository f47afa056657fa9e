"""SQLModel implementation of the key-value document store."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Callable, ContextManager, Optional

from sqlmodel import Session, col, select

from ...logging_config import get_logger
from ...models.storage import StorageBucket

logger = get_logger("storage")


class SQLModelKeyValueStore:
    """Stores each bucket as one JSON text row keyed by name."""

    def __init__(self, session_factory: Callable[[], ContextManager[Session]]):
        self.session_factory = session_factory

    def load(self, key: str) -> Optional[Any]:
        """Return the decoded payload; a corrupt payload raises ``json.JSONDecodeError``."""
        with self.session_factory() as session:
            row = session.exec(select(StorageBucket).where(StorageBucket.key == key)).first()
            if row is None:
                return None
            return json.loads(row.payload)

    def save(self, key: str, data: Any) -> None:
        payload = json.dumps(data)
        with self.session_factory() as session:
            row = session.exec(select(StorageBucket).where(StorageBucket.key == key)).first()
            if row:
                row.payload = payload
                row.updated_at = datetime.now(timezone.utc)
            else:
                row = StorageBucket(key=key, payload=payload)
            session.add(row)
            session.commit()
        logger.debug("Saved bucket %s (%d bytes)", key, len(payload))

    def remove(self, *keys: str) -> None:
        if not keys:
            return
        with self.session_factory() as session:
            rows = session.exec(select(StorageBucket).where(col(StorageBucket.key).in_(keys))).all()
            for row in rows:
                session.delete(row)
            session.commit()

    def keys(self) -> list[str]:
        """List stored bucket names in alphabetical order."""
        with self.session_factory() as session:
            return list(session.exec(select(StorageBucket.key).order_by(StorageBucket.key)).all())


__all__ = ["SQLModelKeyValueStore"]
