"""Repository modules for record storage."""

from repositories.entity_store import EntityStore

__all__ = [
    "EntityStore",
]
