"""Abstract repository contract shared by products and orders.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON files, MongoDB, in-memory)
live in the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """One document collection keyed by a string ``id``."""

    @abstractmethod
    def create(self, entity: T) -> T:
        """Persist a new record.

        Keeps a caller-supplied id, otherwise assigns a fresh one.  Returns
        the stored record.
        """

    @abstractmethod
    def find_all(self) -> list[T]:
        """Return every record; an empty collection yields an empty list."""

    @abstractmethod
    def find_by_id(self, entity_id: str) -> T:
        """Return the record with *entity_id*.

        Raises EntityNotFoundError when there is none.
        """

    @abstractmethod
    def update(self, entity_id: str, entity: T) -> bool:
        """Replace every mutable field of the matching record.

        Returns False, without raising, when nothing matched.
        """

    @abstractmethod
    def delete(self, entity_id: str) -> bool:
        """Remove the matching record; returns False if it was already gone."""
