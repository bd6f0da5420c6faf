"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import pytest
from PIL import Image

from birthday_board.adapters.pillow_surface import PillowSurface
from birthday_board.config import Settings
from birthday_board.containers import AppContainer
from birthday_board.domain.employees import EmployeeRecord
from birthday_board.domain.render import (
    PhotoConfig,
    PhotoLoaded,
    PhotoOutcome,
    PhotoSkipped,
    PhotoSource,
    RenderAssets,
)
from birthday_board.services.birthdays import (
    BirthdayImageService,
    ChatNotifier,
    ImageStore,
)
from birthday_board.services.compositor import ImageCompositor
from birthday_board.services.photos import PhotoLoader
from birthday_board.services.roster import CsvClient, RosterService

FIXED_NOW = datetime(2025, 7, 19, 9, 30, 0)


@dataclass
class FakePhotoLoader(PhotoLoader):
    """Photo loader that returns solid images, or skips listed locations."""

    failing: set[str] = field(default_factory=set)
    loaded: list[PhotoSource] = field(default_factory=list)

    async def load(self, source: PhotoSource) -> PhotoOutcome:
        self.loaded.append(source)
        if source.location in self.failing:
            return PhotoSkipped(reason=f"unreachable: {source.location}")
        return PhotoLoaded(image=Image.new("RGBA", (300, 300), (0, 128, 255, 255)))


@dataclass
class InMemoryImageStore(ImageStore):
    """Image store that keeps uploads in memory."""

    uploads: dict[str, bytes] = field(default_factory=dict)

    def upload_png(self, name: str, data: bytes) -> str:
        self.uploads[name] = data
        return f"https://storage.test/birthday-images/{name}?token=signed"


@dataclass
class FailingImageStore(ImageStore):
    """Image store whose uploads always fail."""

    attempts: int = 0

    def upload_png(self, name: str, data: bytes) -> str:
        self.attempts += 1
        raise RuntimeError("storage unavailable")


@dataclass
class FakeChatNotifier(ChatNotifier):
    """Notifier that records payloads and can be told to fail."""

    payloads: list[dict[str, object]] = field(default_factory=list)
    fail: bool = False

    async def notify(self, payload: dict[str, object]) -> None:
        if self.fail:
            raise RuntimeError("webhook down")
        self.payloads.append(payload)


@dataclass
class FakeCsvClient(CsvClient):
    """CSV client serving documents from a dict."""

    documents: dict[str, str] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list)

    async def download_text(self, url: str) -> str:
        self.requested.append(url)
        if url not in self.documents:
            raise RuntimeError(f"HTTP 404 for {url}")
        return self.documents[url]


def employee(
    first: str,
    last: str,
    day: int | None,
    month: int | None,
    photo: str = "",
) -> EmployeeRecord:
    return EmployeeRecord(
        first_name=first,
        last_name=last,
        birth_day=day,
        birth_month=month,
        photo_name=photo,
    )


def write_png(path: Path, size: tuple[int, int], color: tuple[int, ...]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", size, color).save(path, format="PNG")
    return path


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    root = tmp_path / "assets"
    write_png(root / "images" / "background.png", (683, 384), (20, 30, 60, 255))
    write_png(root / "images" / "day-bubble.png", (80, 35), (255, 92, 69, 255))
    return root


@pytest.fixture
def photos_dir(tmp_path: Path) -> Path:
    root = tmp_path / "photos"
    write_png(root / "user.png", (64, 64), (200, 200, 200, 255))
    write_png(root / "ana.png", (64, 64), (120, 40, 40, 255))
    return root


@pytest.fixture
def render_assets(assets_dir: Path) -> RenderAssets:
    return RenderAssets.from_dir(assets_dir)


@pytest.fixture
def photo_config(photos_dir: Path) -> PhotoConfig:
    return PhotoConfig(base_url="", local_dir=photos_dir)


@pytest.fixture
def photo_loader() -> FakePhotoLoader:
    return FakePhotoLoader()


@pytest.fixture
def compositor(
    render_assets: RenderAssets,
    photo_config: PhotoConfig,
    photo_loader: FakePhotoLoader,
) -> ImageCompositor:
    return ImageCompositor(
        surface_factory=PillowSurface.create,
        photo_loader=photo_loader,
        assets=render_assets,
        photo_config=photo_config,
    )


@pytest.fixture
def image_store() -> InMemoryImageStore:
    return InMemoryImageStore()


@pytest.fixture
def notifier() -> FakeChatNotifier:
    return FakeChatNotifier()


@pytest.fixture
def csv_client() -> FakeCsvClient:
    return FakeCsvClient()


@pytest.fixture
def settings(tmp_path: Path, assets_dir: Path, photos_dir: Path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        teams_webhook_url="https://chat.test/webhook",
        assets_dir=assets_dir,
        photos_dir=photos_dir,
        roster_csv_path=tmp_path / "birthdays.csv",
        environment="test",
    )


@pytest.fixture
def birthday_service(
    compositor: ImageCompositor,
    image_store: InMemoryImageStore,
    notifier: FakeChatNotifier,
) -> BirthdayImageService:
    return BirthdayImageService(
        compositor=compositor,
        image_store=image_store,
        notifier=notifier,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def container(
    settings: Settings,
    birthday_service: BirthdayImageService,
    image_store: InMemoryImageStore,
    notifier: FakeChatNotifier,
    csv_client: FakeCsvClient,
) -> AppContainer:
    roster_service = RosterService(
        csv_client=csv_client, local_path=settings.roster_csv_path
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        roster_service=roster_service,
        birthday_service=birthday_service,
        image_store=image_store,
        notifier=notifier,
        surface_factory=PillowSurface.create,
        close_resources=close_resources,
    )
