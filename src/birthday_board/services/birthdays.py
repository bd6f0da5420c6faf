"""Weekly birthday board generation."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol

from birthday_board.domain.employees import EmployeeRecord
from birthday_board.domain.errors import ImageUploadError
from birthday_board.domain.render import DateWindow, RenderedImage
from birthday_board.services.compositor import ImageCompositor
from birthday_board.services.selection import select_celebrants
from birthday_board.services.window import build_window

logger = logging.getLogger(__name__)


class ImageStore(Protocol):
    """Storage sink for rendered boards."""

    def upload_png(self, name: str, data: bytes) -> str:
        """Store PNG bytes and return an externally accessible URL."""


class ChatNotifier(Protocol):
    """Interface for announcing a published board."""

    async def notify(self, payload: dict[str, object]) -> None:
        """Send a notification payload."""


@dataclass(frozen=True)
class BirthdayBoard:
    """Outcome of a published board."""

    window: DateWindow
    image: RenderedImage
    blob_name: str
    url: str

    @property
    def celebrant_count(self) -> int:
        return self.image.celebrant_count

    def date_range(self) -> dict[str, str]:
        return {
            "start": self.window.start.isoformat(),
            "end": self.window.end.isoformat(),
        }


@dataclass
class BirthdayImageService:
    """Selects celebrants, renders the board, stores it and notifies chat."""

    compositor: ImageCompositor
    image_store: ImageStore
    notifier: ChatNotifier | None = None
    clock: Callable[[], datetime] = field(default=datetime.now)

    def window_for(self, day: int | None, month: int | None) -> DateWindow:
        """Return the window for an optional day/month, defaulting to today."""
        return build_window(day, month, self.today())

    def today(self) -> date:
        return self.clock().date()

    async def render(
        self, roster: Sequence[EmployeeRecord], window: DateWindow
    ) -> RenderedImage:
        """Render the board for a window without publishing it."""
        celebrants = select_celebrants(roster, window)
        logger.info(
            "Rendering board for %s to %s with %d celebrants",
            window.start,
            window.end,
            len(celebrants),
        )
        return await self.compositor.render(window, celebrants)

    async def publish(
        self,
        roster: Sequence[EmployeeRecord],
        day: int | None = None,
        month: int | None = None,
    ) -> BirthdayBoard:
        """Render, upload and announce the board for the requested week."""
        window = self.window_for(day, month)
        image = await self.render(roster, window)
        blob_name = f"birthday-week-{self.clock().strftime('%y%m%d%H%M%S')}.png"
        try:
            url = self.image_store.upload_png(blob_name, image.png)
        except Exception as exc:
            logger.exception("Upload failed", extra={"blob_name": blob_name})
            raise ImageUploadError(blob_name, image, str(exc)) from exc

        board = BirthdayBoard(window=window, image=image, blob_name=blob_name, url=url)
        await self._notify(board)
        return board

    async def _notify(self, board: BirthdayBoard) -> None:
        if self.notifier is None or not board.url:
            return
        payload: dict[str, object] = {
            "uploadedUrl": board.url,
            "celebrants": board.celebrant_count,
            "dateRange": board.date_range(),
        }
        try:
            await self.notifier.notify(payload)
        except Exception:
            logger.exception("Chat notification failed")
