"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_diary.adapters.health_store_client import HttpxHealthStoreClient
from food_diary.adapters.supabase_entry_repository import SupabaseEntryRepository
from food_diary.adapters.supabase_favorite_repository import (
    SupabaseFavoriteRepository,
)
from food_diary.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from food_diary.app_logging import configure_logging
from food_diary.config import Settings
from food_diary.services.diary import DiaryService
from food_diary.services.favorites import FavoriteService
from food_diary.services.goals import GoalService
from food_diary.services.health_sync import HealthSyncService
from food_diary.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    diary_service: DiaryService
    favorite_service: FavoriteService
    goal_service: GoalService
    stats_service: StatsService
    health_sync_service: HealthSyncService | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    configure_logging()
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_repository = SupabaseEntryRepository(supabase_client)
    favorite_repository = SupabaseFavoriteRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(
        supabase_client, owner_id=resolved_settings.diary_owner_id
    )

    health_store: HttpxHealthStoreClient | None = None
    health_sync_service: HealthSyncService | None = None
    if resolved_settings.health_sync_enabled:
        health_store = HttpxHealthStoreClient.build(
            base_url=resolved_settings.health_store_base_url,
            token=resolved_settings.health_store_token,
            timeout=resolved_settings.health_store_timeout_seconds,
        )
        health_sync_service = HealthSyncService(
            store=health_store,
            repository=entry_repository,
            concurrency=resolved_settings.health_sync_concurrency,
            window_days=resolved_settings.health_sync_window_days,
        )

    favorite_service = FavoriteService(favorite_repository)
    diary_service = DiaryService(
        repository=entry_repository,
        favorites=favorite_service,
        health_sync=health_sync_service,
    )

    async def close_resources() -> None:
        if health_store is not None:
            await health_store.close()

    return AppContainer(
        settings=resolved_settings,
        diary_service=diary_service,
        favorite_service=favorite_service,
        goal_service=GoalService(profile_repository),
        stats_service=StatsService(entry_repository),
        health_sync_service=health_sync_service,
        close_resources=close_resources,
    )
