"""Photo loader backed by httpx and the local filesystem."""

from dataclasses import dataclass
from pathlib import Path

import httpx
from PIL import Image

from birthday_board.adapters.pillow_surface import decode_image
from birthday_board.domain.render import (
    PhotoLoaded,
    PhotoOutcome,
    PhotoSkipped,
    PhotoSource,
)
from birthday_board.services.photos import PhotoLoader


@dataclass
class HttpxPhotoLoader(PhotoLoader):
    """Loads remote photos over HTTP and local photos from disk."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls) -> "HttpxPhotoLoader":
        """Create a photo loader with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(follow_redirects=True))

    async def load(self, source: PhotoSource) -> PhotoOutcome:
        """Fetch and decode a photo, turning any failure into PhotoSkipped."""
        try:
            data = await self._fetch(source)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            return PhotoSkipped(reason=f"could not fetch {source.location}: {exc}")
        try:
            image = decode_image(data)
        except (OSError, Image.DecompressionBombError) as exc:
            return PhotoSkipped(reason=f"could not decode {source.location}: {exc}")
        return PhotoLoaded(image=image)

    async def _fetch(self, source: PhotoSource) -> bytes:
        if source.kind == "local":
            return Path(source.location).read_bytes()
        response = await self.http_client.get(source.location, timeout=15)
        response.raise_for_status()
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
