"""YouTube module application dependencies."""

from typing import NoReturn

from fastapi import Depends

from src.modules.youtube.application.handlers import (
    AddChannelSubscriptionHandler,
    RemoveChannelSubscriptionHandler,
    UpdateChannelSubscriptionHandler,
    UpsertAnnouncementHandler,
)
from src.modules.youtube.application.new_upload_service import NewUploadService
from src.modules.youtube.application.services import (
    AnnouncementQueryService,
    FeedQuotaService,
    SubscriptionQueryService,
)
from src.modules.youtube.domain.ports import (
    NotificationQueue,
    PremiumStatusProvider,
    WebSubClient,
)
from src.modules.youtube.domain.repository import (
    ChannelSubscriptionRepository,
    YoutubeAnnouncementRepository,
)


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_channel_subscription_repository() -> ChannelSubscriptionRepository:
    _missing_dependency("ChannelSubscriptionRepository")


async def get_youtube_announcement_repository() -> YoutubeAnnouncementRepository:
    _missing_dependency("YoutubeAnnouncementRepository")


async def get_websub_client() -> WebSubClient:
    _missing_dependency("WebSubClient")


async def get_premium_status_provider() -> PremiumStatusProvider:
    _missing_dependency("PremiumStatusProvider")


async def get_notification_queue() -> NotificationQueue:
    _missing_dependency("NotificationQueue")


async def get_feed_quota_service(
    premium_provider: PremiumStatusProvider = Depends(get_premium_status_provider),
) -> FeedQuotaService:
    return FeedQuotaService(premium_provider)


async def get_subscription_query_service(
    subscription_repository: ChannelSubscriptionRepository = Depends(
        get_channel_subscription_repository
    ),
) -> SubscriptionQueryService:
    return SubscriptionQueryService(subscription_repository)


async def get_announcement_query_service(
    announcement_repository: YoutubeAnnouncementRepository = Depends(
        get_youtube_announcement_repository
    ),
) -> AnnouncementQueryService:
    return AnnouncementQueryService(announcement_repository)


async def get_add_channel_subscription_handler(
    subscription_repository: ChannelSubscriptionRepository = Depends(
        get_channel_subscription_repository
    ),
    quota_service: FeedQuotaService = Depends(get_feed_quota_service),
    websub_client: WebSubClient = Depends(get_websub_client),
) -> AddChannelSubscriptionHandler:
    return AddChannelSubscriptionHandler(
        subscription_repository, quota_service, websub_client
    )


async def get_update_channel_subscription_handler(
    subscription_repository: ChannelSubscriptionRepository = Depends(
        get_channel_subscription_repository
    ),
) -> UpdateChannelSubscriptionHandler:
    return UpdateChannelSubscriptionHandler(subscription_repository)


async def get_remove_channel_subscription_handler(
    subscription_repository: ChannelSubscriptionRepository = Depends(
        get_channel_subscription_repository
    ),
    websub_client: WebSubClient = Depends(get_websub_client),
) -> RemoveChannelSubscriptionHandler:
    return RemoveChannelSubscriptionHandler(subscription_repository, websub_client)


async def get_upsert_announcement_handler(
    announcement_repository: YoutubeAnnouncementRepository = Depends(
        get_youtube_announcement_repository
    ),
) -> UpsertAnnouncementHandler:
    return UpsertAnnouncementHandler(announcement_repository)


async def get_new_upload_service(
    subscription_repository: ChannelSubscriptionRepository = Depends(
        get_channel_subscription_repository
    ),
    announcement_repository: YoutubeAnnouncementRepository = Depends(
        get_youtube_announcement_repository
    ),
    notification_queue: NotificationQueue = Depends(get_notification_queue),
) -> NewUploadService:
    return NewUploadService(
        subscription_repository, announcement_repository, notification_queue
    )
