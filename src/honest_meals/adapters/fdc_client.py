"""USDA FoodData Central API client used for journal food search."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class FdcClient(Protocol):
    """Interface for FoodData Central lookups."""

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        """Search foods by text and return the raw payload."""

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch one food with its nutrients."""


@dataclass
class HttpxFdcClient(FdcClient):
    """FoodData Central client over a shared httpx session."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFdcClient":
        """Create a client that owns its httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        """Search generic and branded foods."""
        response = await self.http_client.get(
            f"{self.base_url}/foods/search",
            params={
                "api_key": self.api_key,
                "query": query,
                "pageSize": page_size,
                "dataType": "Foundation,SR Legacy,Branded",
            },
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch a food by id."""
        response = await self.http_client.get(
            f"{self.base_url}/food/{fdc_id}",
            params={"api_key": self.api_key},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the httpx session."""
        await self.http_client.aclose()
