"""YouTube module dependencies."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.infrastructure.celery import celery_app
from src.core.infrastructure.database.session import get_db_session
from src.modules.youtube.infrastructure.mappers import (
    ChannelSubscriptionMapper,
    YoutubeAnnouncementMapper,
)
from src.modules.youtube.infrastructure.notification_queue import (
    CeleryNotificationQueue,
)
from src.modules.youtube.infrastructure.premium import StaticPremiumStatusProvider
from src.modules.youtube.infrastructure.repositories import (
    PostgreSQLChannelSubscriptionRepository,
    PostgreSQLYoutubeAnnouncementRepository,
)
from src.modules.youtube.infrastructure.websub import (
    HttpxWebSubClient,
    WebSubConfig,
    create_hub_http_client,
)


def get_channel_subscription_mapper() -> ChannelSubscriptionMapper:
    return ChannelSubscriptionMapper()


def get_youtube_announcement_mapper() -> YoutubeAnnouncementMapper:
    return YoutubeAnnouncementMapper()


async def get_channel_subscription_repository(
    session: AsyncSession = Depends(get_db_session),
    mapper: ChannelSubscriptionMapper = Depends(get_channel_subscription_mapper),
) -> PostgreSQLChannelSubscriptionRepository:
    return PostgreSQLChannelSubscriptionRepository(session, mapper)


async def get_youtube_announcement_repository(
    session: AsyncSession = Depends(get_db_session),
    mapper: YoutubeAnnouncementMapper = Depends(get_youtube_announcement_mapper),
) -> PostgreSQLYoutubeAnnouncementRepository:
    return PostgreSQLYoutubeAnnouncementRepository(session, mapper)


async def get_websub_client() -> AsyncGenerator[HttpxWebSubClient, None]:
    async with create_hub_http_client(settings.WEBSUB_HTTP_TIMEOUT_SEC) as client:
        yield HttpxWebSubClient(client, WebSubConfig.from_settings(settings))


def get_premium_status_provider() -> StaticPremiumStatusProvider:
    return StaticPremiumStatusProvider(settings.PREMIUM_GUILD_IDS)


def get_notification_queue() -> CeleryNotificationQueue:
    return CeleryNotificationQueue(celery_app, settings.NOTIFICATION_DELIVERY_TASK)
