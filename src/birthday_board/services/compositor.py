"""Weekly birthday board compositing."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from birthday_board.domain.employees import Celebrant
from birthday_board.domain.render import (
    DateWindow,
    Degradation,
    LayoutSlot,
    PhotoConfig,
    PhotoLoaded,
    PhotoOutcome,
    PhotoSkipped,
    RenderAssets,
    RenderedImage,
)
from birthday_board.services.layout import compute_layout
from birthday_board.services.photos import PhotoLoader, resolve_with_placeholder

CANVAS_WIDTH = 1366
CANVAS_HEIGHT = 768
PHOTO_SIZE = 150

BUBBLE_WIDTH = 80
BUBBLE_HEIGHT = 35
BUBBLE_OFFSET_X = 80
BUBBLE_TEXT_OFFSET_X = 84
BUBBLE_TEXT_SIZE = 20
NAME_TEXT_SIZE = 28
NAME_GAP = 40
TEXT_FILL = "white"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BadgeStyle:
    """Look of the rotated date-range badge."""

    center_x: float = 1100
    center_y: float = 130
    angle: float = -0.1
    fill: str = "#FF5C45"
    text_fill: str = TEXT_FILL
    text_size: int = 24
    padding: int = 40
    height: int = 40
    radius: int = 20
    text_baseline_offset: int = 8


class DrawingSurface(Protocol):
    """The only way compositing code touches pixels."""

    degradations: list[Degradation]

    def open_asset(self, path: Path) -> object:
        """Load a mandatory image, raising AssetMissingError when unusable."""

    def measure_text(self, text: str, size: int) -> float:
        """Return the rendered width of text in the bold face."""

    def draw_image(
        self, image: object, left: float, top: float, width: int, height: int
    ) -> None:
        """Draw an image stretched into the given box."""

    def draw_circular_image(
        self, image: object, center_x: float, center_y: float, diameter: int
    ) -> None:
        """Draw an image clipped to a circle."""

    def draw_text(
        self, text: str, left: float, baseline: float, size: int, fill: str
    ) -> None:
        """Draw bold text with its left baseline at the given point."""

    def draw_badge(self, text: str, style: BadgeStyle) -> None:
        """Draw a rotated rounded-rectangle badge with centered text."""

    def encode_png(self) -> bytes:
        """Encode the canvas as PNG."""


SurfaceFactory = Callable[[int, int, RenderAssets], DrawingSurface]


@dataclass
class ImageCompositor:
    """Draws the board for a window and its celebrants."""

    surface_factory: SurfaceFactory
    photo_loader: PhotoLoader
    assets: RenderAssets
    photo_config: PhotoConfig
    badge_style: BadgeStyle = BadgeStyle()
    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT
    photo_size: int = PHOTO_SIZE

    async def render(
        self, window: DateWindow, celebrants: Sequence[Celebrant]
    ) -> RenderedImage:
        """Render the board.

        Mandatory assets are loaded before anything is drawn. Photos are loaded
        and drawn one celebrant at a time, in order; a photo that cannot be
        loaded is recorded as a degradation and the slot is drawn without it.
        """
        surface = self.surface_factory(self.width, self.height, self.assets)
        background = surface.open_asset(self.assets.background)
        bubble = surface.open_asset(self.assets.day_bubble)
        degradations = list(surface.degradations)

        surface.draw_image(background, 0, 0, self.width, self.height)
        surface.draw_badge(window.label(), self.badge_style)

        slots = compute_layout(len(celebrants), self.width, self.photo_size)
        for celebrant, slot in zip(celebrants, slots, strict=True):
            outcome = await self._load_photo(celebrant)
            if isinstance(outcome, PhotoLoaded):
                surface.draw_circular_image(
                    outcome.image, slot.center_x, slot.center_y, self.photo_size
                )
            else:
                name = celebrant.employee.full_name
                logger.warning("Photo skipped for %s: %s", name, outcome.reason)
                degradations.append(
                    Degradation(kind="photo", subject=name, reason=outcome.reason)
                )
            self._draw_day_bubble(surface, bubble, celebrant, slot)
            self._draw_name(surface, celebrant, slot)

        return RenderedImage(
            png=surface.encode_png(),
            celebrant_count=len(celebrants),
            slots=slots,
            degradations=degradations,
        )

    async def _load_photo(self, celebrant: Celebrant) -> PhotoOutcome:
        source = resolve_with_placeholder(
            celebrant.employee.photo_name, self.photo_config
        )
        if source is None:
            return PhotoSkipped(reason="no photo or placeholder found")
        return await self.photo_loader.load(source)

    def _draw_day_bubble(
        self,
        surface: DrawingSurface,
        bubble: object,
        celebrant: Celebrant,
        slot: LayoutSlot,
    ) -> None:
        top = slot.center_y - self.photo_size / 2 - 10
        left = slot.center_x - BUBBLE_WIDTH / 2 + BUBBLE_OFFSET_X
        surface.draw_image(bubble, left, top, BUBBLE_WIDTH, BUBBLE_HEIGHT)

        label = celebrant.day_label
        label_width = surface.measure_text(label, BUBBLE_TEXT_SIZE)
        surface.draw_text(
            label,
            slot.center_x - label_width / 2 + BUBBLE_TEXT_OFFSET_X,
            top + BUBBLE_HEIGHT / 2 + 2,
            BUBBLE_TEXT_SIZE,
            TEXT_FILL,
        )

    def _draw_name(
        self, surface: DrawingSurface, celebrant: Celebrant, slot: LayoutSlot
    ) -> None:
        name = celebrant.employee.full_name
        name_width = surface.measure_text(name, NAME_TEXT_SIZE)
        surface.draw_text(
            name,
            slot.center_x - name_width / 2,
            slot.center_y + self.photo_size / 2 + NAME_GAP,
            NAME_TEXT_SIZE,
            TEXT_FILL,
        )
