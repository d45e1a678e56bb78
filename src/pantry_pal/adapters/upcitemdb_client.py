"""UPCItemDB product lookup client."""

from dataclasses import dataclass

import httpx

from pantry_pal.services.products import ProductClient


@dataclass
class HttpxUpcItemDbClient(ProductClient):
    """HTTPX-backed UPCItemDB client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxUpcItemDbClient":
        """Create a lookup client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient())

    async def lookup(self, code: str) -> object:
        """Look up a product by UPC/EAN code."""
        url = f"{self.base_url.rstrip('/')}/lookup"
        response = await self.http_client.get(url, params={"upc": code}, timeout=10)
        if response.status_code == httpx.codes.NOT_FOUND:
            return {"code": "NOT_FOUND", "total": 0, "items": []}
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
