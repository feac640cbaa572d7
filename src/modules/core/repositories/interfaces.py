"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T, K]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

Contract shared by every implementation:

- look-ups by key raise the module's *not found* error instead of
  returning ``None``;
- ``create`` / ``update`` refuse invalid entities before touching storage;
- storage failures surface as ``RepositoryError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, TypeVar

T = TypeVar("T")
K = TypeVar("K")


class IRepository(ABC, Generic[T, K]):
    """Base generic repository contract.

    ``T`` is the domain entity managed by the repository (e.g. ``Product``)
    and ``K`` the type of its primary key.
    """

    @abstractmethod
    def list_all(self) -> List[T]:
        """List every entity, newest first."""

    @abstractmethod
    def get_by_id(self, id: K) -> T:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def create(self, entity: T) -> T:
        """Insert a new entity and return it as stored."""

    @abstractmethod
    def update(self, id: K, entity: T) -> T:
        """Overwrite the row identified by ``id`` with ``entity``'s state."""

    @abstractmethod
    def delete(self, id: K) -> bool:
        """Remove an entity by ID."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored entities."""
