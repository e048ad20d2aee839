"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import AsyncClient

from kcal_bot.adapters.image_fetcher import HttpxImageFetcher
from kcal_bot.adapters.line_client import HttpxLineClient, LineClient
from kcal_bot.adapters.openai_client import OpenAIGenerativeClient
from kcal_bot.adapters.supabase_image_storage import SupabaseImageStorage
from kcal_bot.adapters.supabase_meal_repository import SupabaseMealRepository
from kcal_bot.adapters.supabase_stats_repository import SupabaseStatsRepository
from kcal_bot.adapters.supabase_user_repository import SupabaseUserRepository
from kcal_bot.config import Settings
from kcal_bot.services.commands import TextCommandHandler
from kcal_bot.services.meals import MealPipeline
from kcal_bot.services.nutrition import NutritionEstimator
from kcal_bot.services.photos import PhotoLogService
from kcal_bot.services.stats import SummaryService
from kcal_bot.services.users import UserService
from kcal_bot.services.vision import ImageAnalyzer


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    line_client: LineClient
    user_service: UserService
    summary_service: SummaryService
    text_command_handler: TextCommandHandler
    meal_pipeline: MealPipeline
    photo_log_service: PhotoLogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = AsyncClient(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    stats_repository = SupabaseStatsRepository(supabase_client)
    image_storage = SupabaseImageStorage(
        supabase_client, bucket=resolved_settings.supabase_bucket
    )
    line_client = HttpxLineClient.create(resolved_settings.line_channel_access_token)
    image_fetcher = HttpxImageFetcher.create()
    openai_client = OpenAIGenerativeClient.create(resolved_settings.openai_api_key)

    user_service = UserService(repository=user_repository, line_client=line_client)
    summary_service = SummaryService(
        user_repository=user_repository,
        repository=stats_repository,
        timezone_name=resolved_settings.app_tz,
    )
    analyzer = ImageAnalyzer(
        fetcher=image_fetcher,
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    estimator = NutritionEstimator(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    meal_pipeline = MealPipeline(
        analyzer=analyzer,
        estimator=estimator,
        repository=meal_repository,
    )
    photo_log_service = PhotoLogService(
        line_client=line_client,
        storage=image_storage,
        pipeline=meal_pipeline,
        environment=resolved_settings.environment,
    )

    async def close_resources() -> None:
        await line_client.close()
        await image_fetcher.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        line_client=line_client,
        user_service=user_service,
        summary_service=summary_service,
        text_command_handler=TextCommandHandler(summary_service),
        meal_pipeline=meal_pipeline,
        photo_log_service=photo_log_service,
        close_resources=close_resources,
    )
