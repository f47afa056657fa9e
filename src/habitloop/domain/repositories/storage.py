"""Key-value store protocol."""

from __future__ import annotations

from typing import Any, Optional, Protocol


class KeyValueStore(Protocol):
    """Persistence for named JSON-serializable collections."""

    def load(self, key: str) -> Optional[Any]:
        """Return the decoded document stored under ``key``, or None when absent."""
        ...

    def save(self, key: str, data: Any) -> None:
        """Replace the document stored under ``key``."""
        ...

    def remove(self, *keys: str) -> None:
        """Delete the documents stored under ``keys``; missing keys are ignored."""
        ...
