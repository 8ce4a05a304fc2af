"""SEARCHADS — Abstract Store Interfaces.

The engine talks to its two backing stores only through these interfaces.
Each store hands out short-lived connections via `connect()`, a context
manager that releases the connection on every exit path.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import List, Optional

from searchads.models.ad_models import Advertisement


class StoreError(Exception):
    """Raised when a store operation fails."""


class StoreUnavailable(StoreError):
    """Raised when a store connection cannot be obtained."""


class IndexConnection(ABC):
    """A live connection to the inverted index."""

    @abstractmethod
    def put(self, keyword: str, ad_id: int) -> None:
        """Append (keyword, ad_id). Raises StoreError on failure."""
        ...

    @abstractmethod
    def get(self, keyword: str) -> List[str]:
        """String-encoded ad ids under keyword, in insertion order.

        Unknown keywords yield an empty list.
        """
        ...


class AdConnection(ABC):
    """A live connection to the relational ad store."""

    @abstractmethod
    def insert(self, ad: Advertisement) -> None:
        """Persist an ad. Raises StoreError on failure."""
        ...

    @abstractmethod
    def get_by_id(self, ad_id: int) -> Optional[Advertisement]:
        """Return the ad, or None if no ad has this id."""
        ...


class InvertedIndexStore(ABC):
    """keyword → ad ids."""

    @abstractmethod
    def connect(self) -> AbstractContextManager[IndexConnection]:
        """Open a scoped connection. Raises StoreUnavailable."""
        ...


class RelationalStore(ABC):
    """ad id → full Advertisement."""

    @abstractmethod
    def connect(self) -> AbstractContextManager[AdConnection]:
        """Open a scoped connection. Raises StoreUnavailable."""
        ...
