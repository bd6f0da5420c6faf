"""Roster CSV download client."""

from dataclasses import dataclass

import httpx

from birthday_board.services.roster import CsvClient


@dataclass
class HttpxCsvClient(CsvClient):
    """CSV client using httpx."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls) -> "HttpxCsvClient":
        """Create a CSV client with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(follow_redirects=True))

    async def download_text(self, url: str) -> str:
        """Download a CSV document."""
        response = await self.http_client.get(url, timeout=15)
        response.raise_for_status()
        return response.text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
