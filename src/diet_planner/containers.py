"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from diet_planner.adapters.json_file_store import JsonFileKeyValueStore
from diet_planner.adapters.openai_planner_client import OpenAIPlannerClient
from diet_planner.adapters.supabase_state_repository import SupabaseKeyValueStore
from diet_planner.config import Settings
from diet_planner.services.export import PlanExportService
from diet_planner.services.persistence import (
    FavoritesService,
    KeyValueStore,
    WeightHistoryService,
)
from diet_planner.services.planner import PlannerService
from diet_planner.services.sessions import SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    planner_service: PlannerService
    session_service: SessionService
    weight_history_service: WeightHistoryService
    favorites_service: FavoritesService
    export_service: PlanExportService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = _build_store(resolved_settings)
    openai_client = OpenAIPlannerClient.create(resolved_settings.openai_api_key)
    planner_service = PlannerService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        language=resolved_settings.plan_language,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        planner_service=planner_service,
        session_service=SessionService(
            planner_service, debug=resolved_settings.environment == "local"
        ),
        weight_history_service=WeightHistoryService(store),
        favorites_service=FavoritesService(store),
        export_service=PlanExportService(),
        close_resources=close_resources,
    )


def _build_store(settings: Settings) -> KeyValueStore:
    if settings.uses_supabase:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client)
    return JsonFileKeyValueStore.create(settings.storage_path)
