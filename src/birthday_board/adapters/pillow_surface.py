"""Pillow implementation of the drawing surface."""

import logging
import math
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageChops, ImageDraw, ImageFont

from birthday_board.domain.errors import AssetMissingError
from birthday_board.domain.render import Degradation, RenderAssets
from birthday_board.services.compositor import BadgeStyle

FontType = ImageFont.FreeTypeFont | ImageFont.ImageFont

logger = logging.getLogger(__name__)


@dataclass
class PillowSurface:
    """RGB canvas drawn with Pillow, using one bold font face."""

    canvas: Image.Image
    font_path: Path | None
    degradations: list[Degradation] = field(default_factory=list)
    _fonts: dict[int, FontType] = field(default_factory=dict)

    @classmethod
    def create(cls, width: int, height: int, assets: RenderAssets) -> "PillowSurface":
        """Create a blank canvas and register the board's fonts.

        A font that cannot be loaded is recorded as a degradation. Text falls
        back to the regular face, then to Pillow's built-in font; with no scalable
        font at all the surface cannot be created.
        """
        degradations: list[Degradation] = []
        usable = [
            path
            for path in (assets.bold_font, assets.regular_font)
            if _register_font(path, degradations)
        ]
        if not usable and not _has_scalable_default_font():
            raise AssetMissingError(
                "No usable font: bundled fonts failed and Pillow lacks FreeType"
            )
        canvas = Image.new("RGB", (width, height), "black")
        return cls(
            canvas=canvas,
            font_path=usable[0] if usable else None,
            degradations=degradations,
        )

    def font(self, size: int) -> FontType:
        """Return the board font at a pixel size."""
        cached = self._fonts.get(size)
        if cached is not None:
            return cached
        if self.font_path is not None:
            loaded: FontType = ImageFont.truetype(str(self.font_path), size)
        else:
            loaded = ImageFont.load_default(size=size)
        self._fonts[size] = loaded
        return loaded

    def open_asset(self, path: Path) -> Image.Image:
        """Load a mandatory image asset."""
        try:
            with Image.open(path) as image:
                return image.convert("RGBA")
        except OSError as exc:
            raise AssetMissingError(f"Required asset unavailable: {path}") from exc

    def measure_text(self, text: str, size: int) -> float:
        return self.font(size).getlength(text)

    def draw_image(
        self, image: Image.Image, left: float, top: float, width: int, height: int
    ) -> None:
        resized = image.convert("RGBA").resize((width, height))
        self.canvas.paste(resized, (round(left), round(top)), resized)

    def draw_circular_image(
        self, image: Image.Image, center_x: float, center_y: float, diameter: int
    ) -> None:
        photo = image.convert("RGBA").resize((diameter, diameter))
        mask = Image.new("L", (diameter, diameter), 0)
        ImageDraw.Draw(mask).ellipse((0, 0, diameter - 1, diameter - 1), fill=255)
        mask = ImageChops.multiply(mask, photo.getchannel("A"))
        offset = (round(center_x - diameter / 2), round(center_y - diameter / 2))
        self.canvas.paste(photo, offset, mask)

    def draw_text(
        self, text: str, left: float, baseline: float, size: int, fill: str
    ) -> None:
        draw = ImageDraw.Draw(self.canvas)
        draw.text((left, baseline), text, font=self.font(size), fill=fill, anchor="ls")

    def draw_badge(self, text: str, style: BadgeStyle) -> None:
        font = self.font(style.text_size)
        text_width = font.getlength(text)
        width = math.ceil(text_width + style.padding)
        height = style.height

        layer = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        draw.rounded_rectangle(
            (0, 0, width - 1, height - 1), radius=style.radius, fill=style.fill
        )
        draw.text(
            ((width - text_width) / 2, height / 2 + style.text_baseline_offset),
            text,
            font=font,
            fill=style.text_fill,
            anchor="ls",
        )

        # Pillow rotates counter-clockwise for positive degrees on a y-down canvas.
        rotated = layer.rotate(
            -math.degrees(style.angle),
            resample=Image.Resampling.BICUBIC,
            expand=True,
        )
        offset = (
            round(style.center_x - rotated.width / 2),
            round(style.center_y - rotated.height / 2),
        )
        self.canvas.paste(rotated, offset, rotated)

    def encode_png(self) -> bytes:
        with BytesIO() as buffer:
            self.canvas.save(buffer, format="PNG")
            return buffer.getvalue()


def decode_image(data: bytes) -> Image.Image:
    """Decode image bytes fully.

    Raises OSError for unreadable data and DecompressionBombError for images
    over Pillow's pixel limit.
    """
    with Image.open(BytesIO(data)) as image:
        image.load()
        return image.convert("RGBA")


def _register_font(path: Path, degradations: list[Degradation]) -> bool:
    try:
        ImageFont.truetype(str(path), 12)
    except OSError as exc:
        logger.warning("Font unavailable, using a substitute: %s", path)
        degradations.append(
            Degradation(kind="font", subject=path.name, reason=str(exc))
        )
        return False
    return True


def _has_scalable_default_font() -> bool:
    # Without FreeType, load_default returns a fixed bitmap font with no anchors.
    return isinstance(ImageFont.load_default(size=12), ImageFont.FreeTypeFont)
