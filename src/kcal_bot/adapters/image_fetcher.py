"""HTTP image download client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from kcal_bot.domain.errors import ImageFetchError


class ImageFetcher(Protocol):
    """Interface for downloading images by URL."""

    async def fetch(self, url: str) -> bytes:
        """Download an image and return its bytes."""


@dataclass
class HttpxImageFetcher(ImageFetcher):
    """Image fetcher using httpx."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls) -> "HttpxImageFetcher":
        """Create an image fetcher with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(follow_redirects=True))

    async def fetch(self, url: str) -> bytes:
        """Download image bytes, raising ImageFetchError on failure."""
        try:
            response = await self.http_client.get(url, timeout=20)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ImageFetchError(f"Failed to fetch image from {url}: {exc}") from exc
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
