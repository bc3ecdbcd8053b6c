"""Persistence backends."""

from rfp_desk.storage.backends import InMemoryStorage, JSONFileStorage, KeyValueStorage

__all__ = ["InMemoryStorage", "JSONFileStorage", "KeyValueStorage"]
