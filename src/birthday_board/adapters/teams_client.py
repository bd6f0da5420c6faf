"""Chat webhook notifier."""

from dataclasses import dataclass

import httpx

from birthday_board.services.birthdays import ChatNotifier


@dataclass
class HttpxTeamsNotifier(ChatNotifier):
    """Posts board announcements to an incoming chat webhook."""

    webhook_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, webhook_url: str) -> "HttpxTeamsNotifier":
        """Create a notifier with a managed httpx session."""
        return cls(webhook_url=webhook_url, http_client=httpx.AsyncClient())

    async def notify(self, payload: dict[str, object]) -> None:
        """Post the payload as JSON."""
        response = await self.http_client.post(
            self.webhook_url, json=payload, timeout=10
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
