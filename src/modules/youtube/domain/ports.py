"""YouTube module ports.

宿主平台提供的能力（premium 查询、通知投递队列）以及 Hub 订阅客户端
都以接口形式注入，应用层不直接依赖具体实现。
"""

from dataclasses import dataclass
from typing import Protocol

from src.modules.youtube.domain.feed import QueuedNotification


@dataclass(frozen=True)
class GuildContext:
    """Request context of a guild configuration action."""

    guild_id: str


@dataclass(frozen=True)
class DeliveryTarget:
    """The element a failed delivery refers to."""

    channel_id: str
    guild_id: str | None = None
    source_item_id: str | None = None


class PremiumStatusProvider(Protocol):
    """Port for resolving a guild's premium tier."""

    async def is_premium(self, guild_id: str) -> bool:
        """Return whether the guild has premium."""
        ...


class NotificationQueue(Protocol):
    """Port for handing notifications to the delivery system."""

    async def enqueue(self, notification: QueuedNotification) -> None:
        """Enqueue a notification for delivery."""
        ...


class SourceDisabler(Protocol):
    """Callback the delivery system invokes when a destination is gone."""

    async def disable_feed(self, target: DeliveryTarget, error: Exception | str) -> None:
        """Disable feeds pointing at the failed destination."""
        ...


class WebSubClient(Protocol):
    """Port for the WebSub hub subscription lifecycle."""

    async def subscribe(self, youtube_channel_id: str) -> None:
        """Ask the hub to push new uploads of the channel."""
        ...

    async def unsubscribe(self, youtube_channel_id: str) -> None:
        """Cancel the hub subscription of the channel."""
        ...
