"""Guild YouTube feed API routes."""

from fastapi import APIRouter, Depends, status

from src.core.interfaces.http.response import ApiResponse
from src.modules.youtube.application.commands import (
    AddChannelSubscriptionCommand,
    RemoveChannelSubscriptionCommand,
    UpdateChannelSubscriptionCommand,
    UpsertAnnouncementCommand,
)
from src.modules.youtube.application.dependencies import (
    get_add_channel_subscription_handler,
    get_announcement_query_service,
    get_feed_quota_service,
    get_remove_channel_subscription_handler,
    get_subscription_query_service,
    get_update_channel_subscription_handler,
    get_upsert_announcement_handler,
)
from src.modules.youtube.application.handlers import (
    AddChannelSubscriptionHandler,
    RemoveChannelSubscriptionHandler,
    UpdateChannelSubscriptionHandler,
    UpsertAnnouncementHandler,
)
from src.modules.youtube.application.services import (
    AnnouncementQueryService,
    FeedQuotaService,
    SubscriptionQueryService,
)
from src.modules.youtube.domain.entities import ChannelSubscription, YoutubeAnnouncement
from src.modules.youtube.domain.ports import GuildContext
from src.modules.youtube.interfaces.schemas import (
    AnnouncementRequest,
    AnnouncementResponse,
    CreateSubscriptionRequest,
    FeedLimitResponse,
    SubscriptionListResponse,
    SubscriptionResponse,
    UpdateSubscriptionRequest,
)

router = APIRouter(prefix="/guilds/{guild_id}/youtube", tags=["youtube"])


def _to_subscription_response(sub: ChannelSubscription) -> SubscriptionResponse:
    return SubscriptionResponse(
        id=sub.id,
        guild_id=sub.guild_id,
        channel_id=sub.channel_id,
        youtube_channel_id=sub.youtube_channel_id,
        youtube_channel_name=sub.youtube_channel_name,
        mention_everyone=sub.mention_everyone,
        mention_roles=sub.mention_roles,
        publish_livestream=sub.publishes_livestream,
        publish_shorts=sub.publishes_shorts,
        enabled=sub.is_enabled,
        created_at=sub.created_at,
        updated_at=sub.updated_at,
    )


def _to_announcement_response(announcement: YoutubeAnnouncement) -> AnnouncementResponse:
    return AnnouncementResponse(
        guild_id=announcement.guild_id,
        message=announcement.message,
        enabled=announcement.is_enabled,
    )


@router.get(
    "/subscriptions",
    response_model=ApiResponse[SubscriptionListResponse],
    summary="获取 guild 的 YouTube 订阅列表",
)
async def list_subscriptions(
    guild_id: int,
    service: SubscriptionQueryService = Depends(get_subscription_query_service),
    quota_service: FeedQuotaService = Depends(get_feed_quota_service),
) -> ApiResponse[SubscriptionListResponse]:
    subscriptions = await service.list_for_guild(str(guild_id))
    max_feeds = await quota_service.max_feeds_for_context(GuildContext(str(guild_id)))
    return ApiResponse.success(
        data=SubscriptionListResponse(
            subscriptions=[_to_subscription_response(s) for s in subscriptions],
            total=len(subscriptions),
            max_feeds=max_feeds,
        )
    )


@router.post(
    "/subscriptions",
    response_model=ApiResponse[SubscriptionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="添加 YouTube 订阅",
    description="检查配额与重复后创建订阅，并向 Hub 发起订阅",
)
async def create_subscription(
    guild_id: int,
    request: CreateSubscriptionRequest,
    handler: AddChannelSubscriptionHandler = Depends(
        get_add_channel_subscription_handler
    ),
) -> ApiResponse[SubscriptionResponse]:
    command = AddChannelSubscriptionCommand(
        guild_id=str(guild_id),
        channel_id=request.channel_id,
        youtube_channel_id=request.youtube_channel_id,
        youtube_channel_name=request.youtube_channel_name,
        mention_everyone=request.mention_everyone,
        mention_roles=request.mention_roles,
        publish_livestream=request.publish_livestream,
        publish_shorts=request.publish_shorts,
    )
    subscription = await handler.handle(command)
    return ApiResponse.created(
        data=_to_subscription_response(subscription),
        message="Subscription created successfully",
    )


@router.get(
    "/subscriptions/{subscription_id}",
    response_model=ApiResponse[SubscriptionResponse],
    summary="获取订阅详情",
)
async def get_subscription(
    guild_id: int,
    subscription_id: str,
    service: SubscriptionQueryService = Depends(get_subscription_query_service),
) -> ApiResponse[SubscriptionResponse]:
    subscription = await service.get_for_guild(str(guild_id), subscription_id)
    return ApiResponse.success(data=_to_subscription_response(subscription))


@router.put(
    "/subscriptions/{subscription_id}",
    response_model=ApiResponse[SubscriptionResponse],
    summary="更新订阅",
)
async def update_subscription(
    guild_id: int,
    subscription_id: str,
    request: UpdateSubscriptionRequest,
    handler: UpdateChannelSubscriptionHandler = Depends(
        get_update_channel_subscription_handler
    ),
) -> ApiResponse[SubscriptionResponse]:
    command = UpdateChannelSubscriptionCommand(
        subscription_id=subscription_id,
        guild_id=str(guild_id),
        **request.model_dump(),
    )
    subscription = await handler.handle(command)
    return ApiResponse.success(
        data=_to_subscription_response(subscription),
        message="Subscription updated successfully",
    )


@router.delete(
    "/subscriptions/{subscription_id}",
    response_model=ApiResponse[dict[str, bool]],
    summary="删除订阅",
    description="删除订阅；若该 YouTube 频道已无其他订阅则向 Hub 退订",
)
async def delete_subscription(
    guild_id: int,
    subscription_id: str,
    handler: RemoveChannelSubscriptionHandler = Depends(
        get_remove_channel_subscription_handler
    ),
) -> ApiResponse[dict[str, bool]]:
    command = RemoveChannelSubscriptionCommand(
        subscription_id=subscription_id, guild_id=str(guild_id)
    )
    deleted = await handler.handle(command)
    return ApiResponse.success(
        data={"deleted": deleted},
        message="Subscription removed successfully",
    )


@router.get(
    "/announcement",
    response_model=ApiResponse[AnnouncementResponse],
    summary="获取新视频公告",
)
async def get_announcement(
    guild_id: int,
    service: AnnouncementQueryService = Depends(get_announcement_query_service),
) -> ApiResponse[AnnouncementResponse]:
    announcement = await service.get_for_guild(guild_id)
    return ApiResponse.success(data=_to_announcement_response(announcement))


@router.put(
    "/announcement",
    response_model=ApiResponse[AnnouncementResponse],
    summary="保存新视频公告",
)
async def put_announcement(
    guild_id: int,
    request: AnnouncementRequest,
    handler: UpsertAnnouncementHandler = Depends(get_upsert_announcement_handler),
) -> ApiResponse[AnnouncementResponse]:
    command = UpsertAnnouncementCommand(
        guild_id=guild_id,
        message=request.message,
        enabled=request.enabled,
    )
    announcement = await handler.handle(command)
    return ApiResponse.success(
        data=_to_announcement_response(announcement),
        message="Announcement saved",
    )


@router.get(
    "/limit",
    response_model=ApiResponse[FeedLimitResponse],
    summary="获取订阅配额",
)
async def get_feed_limit(
    guild_id: int,
    service: SubscriptionQueryService = Depends(get_subscription_query_service),
    quota_service: FeedQuotaService = Depends(get_feed_quota_service),
) -> ApiResponse[FeedLimitResponse]:
    used = await service.count_for_guild(str(guild_id))
    max_feeds = await quota_service.max_feeds_for_context(GuildContext(str(guild_id)))
    return ApiResponse.success(
        data=FeedLimitResponse(guild_id=guild_id, used=used, max_feeds=max_feeds)
    )
