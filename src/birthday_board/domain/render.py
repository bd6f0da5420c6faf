"""Domain models for rendering the weekly birthday board."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from typing import Literal

WINDOW_DAYS = 7


@dataclass(frozen=True)
class DateWindow:
    """Seven consecutive calendar days starting at ``start``."""

    start: date

    @property
    def end(self) -> date:
        return self.start + timedelta(days=WINDOW_DAYS - 1)

    @property
    def dates(self) -> list[date]:
        return list(self)

    def __iter__(self) -> Iterator[date]:
        for offset in range(WINDOW_DAYS):
            yield self.start + timedelta(days=offset)

    def __len__(self) -> int:
        return WINDOW_DAYS

    def label(self) -> str:
        """Human-readable range shown on the date badge."""
        return f"{_month_day(self.start)} to {_month_day(self.end)}"


def _month_day(value: date) -> str:
    return f"{value.strftime('%B')} {value.day:02d}"


@dataclass(frozen=True)
class PhotoConfig:
    """Where employee photos are looked up."""

    base_url: str = ""
    local_dir: Path | None = None


@dataclass(frozen=True)
class PhotoSource:
    """A resolved location of photo bytes."""

    kind: Literal["remote", "local"]
    location: str


@dataclass(frozen=True)
class PhotoLoaded:
    """A photo that was fetched and decoded."""

    image: object


@dataclass(frozen=True)
class PhotoSkipped:
    """A photo that could not be drawn; the slot renders without it."""

    reason: str


PhotoOutcome = PhotoLoaded | PhotoSkipped


@dataclass(frozen=True)
class LayoutSlot:
    """On-canvas center of one celebrant's photo, bubble and name."""

    index: int
    row: int
    column: int
    center_x: float
    center_y: float


@dataclass(frozen=True)
class Degradation:
    """A non-fatal rendering problem."""

    kind: Literal["photo", "font"]
    subject: str
    reason: str


@dataclass(frozen=True)
class RenderAssets:
    """Mandatory images and the font files of the board."""

    background: Path
    day_bubble: Path
    regular_font: Path
    bold_font: Path

    @classmethod
    def from_dir(cls, assets_dir: Path) -> "RenderAssets":
        """Use the standard layout: images/ and fonts/ under one directory."""
        return cls(
            background=assets_dir / "images" / "background.png",
            day_bubble=assets_dir / "images" / "day-bubble.png",
            regular_font=assets_dir / "fonts" / "Inter-Regular.ttf",
            bold_font=assets_dir / "fonts" / "Inter-Bold.ttf",
        )


@dataclass(frozen=True)
class RenderedImage:
    """Final PNG plus what went into it."""

    png: bytes
    celebrant_count: int
    slots: list[LayoutSlot] = field(default_factory=list)
    degradations: list[Degradation] = field(default_factory=list)

    @property
    def degraded_photos(self) -> int:
        return sum(1 for item in self.degradations if item.kind == "photo")
