"""Periodic hub resubscription.

Hub 订阅有租约期限，到期后不再推送。定时任务对所有仍被订阅的 YouTube
频道重新发起 subscribe，按批并发，单个失败不影响其他频道。
"""

import asyncio
from dataclasses import dataclass, field

from loguru import logger

from src.core.infrastructure.logging import BusinessEvents
from src.modules.youtube.domain.exceptions import WebSubError
from src.modules.youtube.domain.ports import WebSubClient
from src.modules.youtube.domain.repository import ChannelSubscriptionRepository


@dataclass
class ResubscribeResult:
    total: int = 0
    succeeded: int = 0
    failed: list[str] = field(default_factory=list)


class ResubscribeService:
    def __init__(
        self,
        subscription_repository: ChannelSubscriptionRepository,
        websub_client: WebSubClient,
        batch_size: int = 1,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self.subscription_repository = subscription_repository
        self.websub_client = websub_client
        self.batch_size = batch_size

    async def resubscribe_all(self) -> ResubscribeResult:
        channel_ids = await self.subscription_repository.list_distinct_youtube_channel_ids()
        result = ResubscribeResult(total=len(channel_ids))
        if not channel_ids:
            logger.debug("No youtube channels to resubscribe")
            return result

        logger.info(
            f"Resubscribing {len(channel_ids)} youtube channels "
            f"(batch size {self.batch_size})"
        )

        for start in range(0, len(channel_ids), self.batch_size):
            batch = channel_ids[start : start + self.batch_size]
            outcomes = await asyncio.gather(
                *(self.websub_client.subscribe(channel_id) for channel_id in batch),
                return_exceptions=True,
            )
            for channel_id, outcome in zip(batch, outcomes, strict=True):
                if isinstance(outcome, WebSubError):
                    result.failed.append(channel_id)
                elif isinstance(outcome, BaseException):
                    raise outcome
                else:
                    result.succeeded += 1

        if result.failed:
            logger.warning(
                f"Resubscribe finished with {len(result.failed)} failures: "
                f"{', '.join(result.failed)}"
            )
        BusinessEvents.resubscribe_completed(
            total=result.total,
            succeeded=result.succeeded,
            failed=len(result.failed),
        )
        return result
