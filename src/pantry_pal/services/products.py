"""Product lookup service backed by a barcode database."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from pantry_pal.domain.pantry import ProductInfo
from pantry_pal.services.cache import ProductCache

_logger = logging.getLogger(__name__)


class ProductClient(Protocol):
    """Interface for barcode database interactions."""

    async def lookup(self, code: str) -> object:
        """Return the decoded lookup payload for a product code."""


@dataclass
class ProductLookupService:
    """Resolve product codes to display data without ever raising."""

    client: ProductClient
    cache: ProductCache
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def lookup(self, code: str) -> ProductInfo:
        """Look up a product, falling back to placeholder data on failure."""
        cached = self.cache.get(code)
        if cached is not None:
            return cached

        payload = await self._fetch(code)
        if payload is None:
            return ProductInfo.placeholder(code)

        product = _product_from_payload(code, payload)
        if product.found:
            self.cache.set(code, product)
        else:
            _logger.info("Product %s not found in lookup service", code)
        return product

    async def _fetch(self, code: str) -> object | None:
        """Call the lookup client with a short retry; None when it keeps failing."""
        attempt = 0
        while True:
            try:
                return await self.client.lookup(code)
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Product lookup failed (attempt %s/%s, status=%s): %s",
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    return None
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _product_from_payload(code: str, payload: object) -> ProductInfo:
    """Map a UPCItemDB lookup payload to product info."""
    if not isinstance(payload, dict):
        _logger.warning("Unexpected lookup payload for %s: %r", code, payload)
        return ProductInfo.placeholder(code)
    items = payload.get("items")
    total = payload.get("total")
    if (
        payload.get("code") != "OK"
        or not isinstance(total, int)
        or total <= 0
        or not isinstance(items, list)
        or not items
        or not isinstance(items[0], dict)
    ):
        return ProductInfo.placeholder(code)

    item = items[0]
    images = item.get("images")
    return ProductInfo(
        found=True,
        name=_text(item.get("title")) or code,
        description=_text(item.get("description")),
        brand=_text(item.get("brand")),
        images=tuple(str(url) for url in images) if isinstance(images, list) else (),
    )


def _text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""
