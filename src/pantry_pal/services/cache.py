"""In-memory TTL cache for product lookups."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from pantry_pal.domain.pantry import ProductInfo


class ProductCache(Protocol):
    """Cache interface for resolved products keyed by canonical code."""

    def get(self, code: str) -> ProductInfo | None:
        """Return a cached product if present and not expired."""

    def set(self, code: str, product: ProductInfo) -> None:
        """Store a resolved product."""


@dataclass
class InMemoryProductCache(ProductCache):
    """Process-local product cache with a fixed time to live."""

    ttl_seconds: float = 86400
    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, tuple[ProductInfo, float]] = field(
        default_factory=dict, init=False, repr=False
    )

    def get(self, code: str) -> ProductInfo | None:
        """Return a cached product, dropping it once expired."""
        entry = self._entries.get(code)
        if entry is None:
            return None
        product, expires_at = entry
        if self.clock() >= expires_at:
            del self._entries[code]
            return None
        return product

    def set(self, code: str, product: ProductInfo) -> None:
        """Store a product until the TTL elapses."""
        self._entries[code] = (product, self.clock() + self.ttl_seconds)
