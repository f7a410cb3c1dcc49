"""Disable feeds whose destination channel no longer accepts messages."""

from loguru import logger

from src.core.infrastructure.logging import BusinessEvents
from src.modules.youtube.domain.exceptions import StoreError
from src.modules.youtube.domain.ports import DeliveryTarget
from src.modules.youtube.domain.repository import ChannelSubscriptionRepository


class YoutubeFeedDisabler:
    """投递系统在目标频道失效时回调此处。

    同一目标频道的所有订阅一次性置为 enabled=false，重复调用结果不变。
    存储失败只记录日志，不向投递系统抛出。
    """

    def __init__(self, subscription_repository: ChannelSubscriptionRepository):
        self.subscription_repository = subscription_repository

    async def disable_feed(self, target: DeliveryTarget, error: Exception | str) -> None:
        try:
            affected = await self.subscription_repository.disable_by_channel(
                target.channel_id
            )
        except StoreError as e:
            logger.error(
                f"failed removing non-existent channel {target.channel_id}: {e.message}"
            )
            return

        logger.info(f"Disabled youtube feed to non-existent channel {target.channel_id}")
        BusinessEvents.feed_disabled(
            channel_id=target.channel_id,
            affected=affected,
            reason=str(error),
        )
