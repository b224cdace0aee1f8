"""Abstract keyed cache API."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class ItemCache(ABC, Generic[K, V]):
    """
    Cache that creates an item on first request and hands out the same item
    afterwards.
    """

    @property
    @abstractmethod
    def total_cached_items(self) -> int:
        """Number of items currently held."""

    @abstractmethod
    def get_item(self, cache_key: K) -> V:
        """
        Get the item for cache_key, creating it if needed.

        Args:
            cache_key: Identity of the item.

        Returns:
            The cached item.
        """

    @abstractmethod
    def unload(self, cache_key: K) -> None:
        """Remove the item for cache_key. Unknown keys are ignored."""
