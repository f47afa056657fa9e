"""Concrete repository implementations using SQLModel."""

from .storage import SQLModelKeyValueStore

__all__ = ["SQLModelKeyValueStore"]
