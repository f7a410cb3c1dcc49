"""YouTube Celery 任务。

包含：
- Hub 订阅续期（Beat 定时调用）
- 投递失败回调：目标频道失效时禁用对应订阅
"""

import asyncio

from celery import shared_task
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from src.core.config import settings
from src.core.infrastructure.celery.queues import Queues
from src.core.infrastructure.logging import get_business_logger


@shared_task(
    name="src.modules.youtube.tasks.resubscribe_all_channels",
    bind=True,
    max_retries=0,  # 下一次 Beat 调度即是重试
    queue=Queues.WEBSUB,
)
def resubscribe_all_channels(_self: object) -> dict[str, int]:
    """对所有已订阅的 YouTube 频道重新发起 Hub 订阅。"""
    return asyncio.run(_resubscribe_all_channels_async())


async def _resubscribe_all_channels_async() -> dict[str, int]:
    from src.core.infrastructure.database.session import get_async_session
    from src.modules.youtube.application.resubscribe_service import (
        ResubscribeService,
    )
    from src.modules.youtube.infrastructure.mappers import ChannelSubscriptionMapper
    from src.modules.youtube.infrastructure.repositories import (
        PostgreSQLChannelSubscriptionRepository,
    )
    from src.modules.youtube.infrastructure.websub import (
        HttpxWebSubClient,
        WebSubConfig,
        create_hub_http_client,
    )

    async with (
        get_async_session() as session,
        create_hub_http_client(settings.WEBSUB_HTTP_TIMEOUT_SEC) as http_client,
    ):
        repo = PostgreSQLChannelSubscriptionRepository(
            session, ChannelSubscriptionMapper()
        )
        service = ResubscribeService(
            subscription_repository=repo,
            websub_client=HttpxWebSubClient(
                http_client, WebSubConfig.from_settings(settings)
            ),
            batch_size=settings.YOUTUBE_RESUB_BATCH_SIZE,
        )
        result = await service.resubscribe_all()

    return {
        "total": result.total,
        "succeeded": result.succeeded,
        "failed": len(result.failed),
    }


@shared_task(
    name="src.modules.youtube.tasks.disable_feed",
    bind=True,
    max_retries=0,
    queue=Queues.FEEDS,
)
def disable_feed(_self: object, channel_id: str, error: str = "") -> None:
    """由外部投递系统在目标频道不存在时调用。

    Args:
        channel_id: 投递失败的目标频道 ID
        error: 投递失败原因
    """
    asyncio.run(_disable_feed_async(channel_id, error))


async def _disable_feed_async(channel_id: str, error: str) -> None:
    from src.core.infrastructure.database.session import get_async_session
    from src.modules.youtube.application.feed_disabler import YoutubeFeedDisabler
    from src.modules.youtube.domain.ports import DeliveryTarget
    from src.modules.youtube.infrastructure.mappers import ChannelSubscriptionMapper
    from src.modules.youtube.infrastructure.repositories import (
        PostgreSQLChannelSubscriptionRepository,
    )

    get_business_logger().info(
        "disable_feed_received", channel_id=channel_id, error=error or None
    )

    async with get_async_session() as session:
        repo = PostgreSQLChannelSubscriptionRepository(
            session, ChannelSubscriptionMapper()
        )
        disabler = YoutubeFeedDisabler(repo)
        await disabler.disable_feed(DeliveryTarget(channel_id=channel_id), error)
        try:
            await session.commit()
        except SQLAlchemyError as e:
            # 提交失败只记录日志，任务照常结束
            logger.error(
                f"failed committing feed disable for channel {channel_id}: {e}"
            )
            return

    logger.debug(f"disable_feed task finished for channel {channel_id}")
