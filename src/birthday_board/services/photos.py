"""Employee photo resolution."""

import re
from pathlib import Path
from typing import Protocol

from birthday_board.domain.render import PhotoConfig, PhotoOutcome, PhotoSource

PLACEHOLDER_PHOTO = "user.png"

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)


class PhotoLoader(Protocol):
    """Interface for turning a photo source into a drawable outcome."""

    async def load(self, source: PhotoSource) -> PhotoOutcome:
        """Fetch and decode the photo, reporting failures as PhotoSkipped."""


def resolve_photo_source(photo_name: str, config: PhotoConfig) -> PhotoSource | None:
    """Resolve a roster photo name to a remote URL or an existing local file.

    Rules apply in order: blank names are unresolved, absolute http(s) URLs are
    used as given, a configured base URL is joined with the name, and finally
    the local photo directory is checked.
    """
    name = (photo_name or "").strip()
    if not name:
        return None
    if _ABSOLUTE_URL.match(name):
        return PhotoSource(kind="remote", location=name)
    if config.base_url:
        base = config.base_url.rstrip("/")
        return PhotoSource(kind="remote", location=f"{base}/{name.lstrip('/')}")
    if config.local_dir is None:
        return None
    candidate = Path(config.local_dir) / name
    if candidate.exists():
        return PhotoSource(kind="local", location=str(candidate))
    return None


def resolve_with_placeholder(
    photo_name: str, config: PhotoConfig
) -> PhotoSource | None:
    """Resolve a photo, retrying with the placeholder name when unresolved."""
    source = resolve_photo_source(photo_name, config)
    if source is not None:
        return source
    return resolve_photo_source(PLACEHOLDER_PHOTO, config)
