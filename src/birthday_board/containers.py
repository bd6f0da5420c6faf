"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from birthday_board.adapters.csv_client import HttpxCsvClient
from birthday_board.adapters.photo_loader import HttpxPhotoLoader
from birthday_board.adapters.pillow_surface import PillowSurface
from birthday_board.adapters.supabase_image_store import SupabaseImageStore
from birthday_board.adapters.teams_client import HttpxTeamsNotifier
from birthday_board.config import Settings
from birthday_board.services.birthdays import (
    BirthdayImageService,
    ChatNotifier,
    ImageStore,
)
from birthday_board.services.compositor import ImageCompositor, SurfaceFactory
from birthday_board.services.roster import RosterService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    roster_service: RosterService
    birthday_service: BirthdayImageService
    image_store: ImageStore
    notifier: ChatNotifier | None
    surface_factory: SurfaceFactory
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    image_store = SupabaseImageStore(
        client=supabase_client,
        bucket=resolved_settings.storage_bucket,
        signed_url_ttl_hours=resolved_settings.signed_url_ttl_hours,
    )
    csv_client = HttpxCsvClient.create()
    photo_loader = HttpxPhotoLoader.create()
    notifier = (
        HttpxTeamsNotifier.create(resolved_settings.teams_webhook_url)
        if resolved_settings.teams_webhook_url
        else None
    )
    compositor = ImageCompositor(
        surface_factory=PillowSurface.create,
        photo_loader=photo_loader,
        assets=resolved_settings.render_assets(),
        photo_config=resolved_settings.photo_config(),
    )
    birthday_service = BirthdayImageService(
        compositor=compositor,
        image_store=image_store,
        notifier=notifier,
    )
    roster_service = RosterService(
        csv_client=csv_client,
        local_path=resolved_settings.roster_csv_path,
    )

    async def close_resources() -> None:
        await csv_client.close()
        await photo_loader.close()
        if notifier is not None:
            await notifier.close()

    return AppContainer(
        settings=resolved_settings,
        roster_service=roster_service,
        birthday_service=birthday_service,
        image_store=image_store,
        notifier=notifier,
        surface_factory=PillowSurface.create,
        close_resources=close_resources,
    )
