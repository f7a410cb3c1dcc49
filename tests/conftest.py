"""
pytest 配置和共享 fixtures。

测试分层：
- unit/: 单元测试（不依赖外部服务，仓储使用内存实现）

使用方法：
    # 运行所有测试
    uv run pytest

    # 只运行单元测试
    uv run pytest tests/unit/
"""

from collections import OrderedDict
from collections.abc import AsyncGenerator, Callable
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.core.config import Settings
from src.modules.youtube.domain.entities import ChannelSubscription, YoutubeAnnouncement
from src.modules.youtube.domain.feed import QueuedNotification

TEST_VERIFY_TOKEN = "test-verify-token"

PUSH_BODY = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns:yt="http://www.youtube.com/xml/schemas/2015"
      xmlns="http://www.w3.org/2005/Atom">
  <link rel="hub" href="https://pubsubhubbub.appspot.com"/>
  <link rel="self" href="https://www.youtube.com/xml/feeds/videos.xml?channel_id=UCabc"/>
  <title>YouTube video feed</title>
  <updated>2015-04-01T19:05:24+00:00</updated>
  <entry>
    <id>yt:video:VIDEO123</id>
    <yt:videoId>VIDEO123</yt:videoId>
    <yt:channelId>UCabc</yt:channelId>
    <title>My new video</title>
    <link rel="alternate" href="https://www.youtube.com/watch?v=VIDEO123"/>
    <author>
      <name>Channel Title</name>
      <uri>https://www.youtube.com/channel/UCabc</uri>
    </author>
    <published>2015-03-06T21:40:57+00:00</published>
    <updated>2015-03-09T19:05:24+00:00</updated>
  </entry>
</feed>
"""


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ============================================
# 配置 Fixtures
# ============================================


@pytest.fixture
def test_settings() -> Settings:
    """测试环境配置。"""
    return Settings(
        ENVIRONMENT="local",
        PUBLIC_HOST="feeds.example.com",
        POSTGRES_DB="tubesentry_test",
        REDIS_URL="redis://localhost:6379/1",
        YOUTUBE_VERIFY_TOKEN=TEST_VERIFY_TOKEN,
        PREMIUM_GUILD_IDS="42,43",
    )


# ============================================
# 内存仓储 / 端口实现
# ============================================


class InMemoryChannelSubscriptionRepository:
    """In-memory channel subscription repository."""

    def __init__(self, subscriptions: list[ChannelSubscription] | None = None) -> None:
        self.subscriptions: OrderedDict[str, ChannelSubscription] = OrderedDict()
        for subscription in subscriptions or []:
            self.subscriptions[subscription.id] = subscription

    async def get_by_id(self, entity_id: str) -> ChannelSubscription | None:
        return self.subscriptions.get(entity_id)

    async def create(self, entity: ChannelSubscription) -> ChannelSubscription:
        self.subscriptions[entity.id] = entity
        return entity

    async def update(self, entity: ChannelSubscription) -> ChannelSubscription:
        self.subscriptions[entity.id] = entity
        return entity

    async def delete(self, entity: ChannelSubscription | str) -> bool:
        entity_id = entity.id if isinstance(entity, ChannelSubscription) else entity
        return self.subscriptions.pop(entity_id, None) is not None

    async def list_by_guild(self, guild_id: str) -> list[ChannelSubscription]:
        return [s for s in self.subscriptions.values() if s.guild_id == guild_id]

    async def count_by_guild(self, guild_id: str) -> int:
        return len(await self.list_by_guild(guild_id))

    async def exists_for_destination(
        self, guild_id: str, channel_id: str, youtube_channel_id: str
    ) -> bool:
        return any(
            s.guild_id == guild_id
            and s.channel_id == channel_id
            and s.youtube_channel_id == youtube_channel_id
            for s in self.subscriptions.values()
        )

    async def list_enabled_by_youtube_channel(
        self, youtube_channel_id: str
    ) -> list[ChannelSubscription]:
        return [
            s
            for s in self.subscriptions.values()
            if s.youtube_channel_id == youtube_channel_id and s.is_enabled
        ]

    async def count_by_youtube_channel(self, youtube_channel_id: str) -> int:
        return sum(
            1
            for s in self.subscriptions.values()
            if s.youtube_channel_id == youtube_channel_id
        )

    async def list_distinct_youtube_channel_ids(self) -> list[str]:
        return sorted({s.youtube_channel_id for s in self.subscriptions.values()})

    async def disable_by_channel(self, channel_id: str) -> int:
        affected = 0
        for subscription in self.subscriptions.values():
            if subscription.channel_id == channel_id:
                subscription.enabled = False
                affected += 1
        return affected

    async def update_youtube_channel_name(
        self, youtube_channel_id: str, name: str
    ) -> int:
        renamed = 0
        for subscription in self.subscriptions.values():
            if subscription.youtube_channel_id == youtube_channel_id:
                renamed += int(subscription.rename_youtube_channel(name))
        return renamed


class InMemoryYoutubeAnnouncementRepository:
    def __init__(self) -> None:
        self.announcements: dict[int, YoutubeAnnouncement] = {}

    async def get_by_guild(self, guild_id: int) -> YoutubeAnnouncement | None:
        return self.announcements.get(guild_id)

    async def upsert(self, announcement: YoutubeAnnouncement) -> YoutubeAnnouncement:
        self.announcements[announcement.guild_id] = announcement
        return announcement


class RecordingNotificationQueue:
    def __init__(self) -> None:
        self.notifications: list[QueuedNotification] = []

    async def enqueue(self, notification: QueuedNotification) -> None:
        self.notifications.append(notification)


class StubPremiumStatusProvider:
    def __init__(self, premium: bool = False) -> None:
        self.premium = premium

    async def is_premium(self, guild_id: str) -> bool:
        return self.premium


@pytest.fixture
def subscription_repository() -> InMemoryChannelSubscriptionRepository:
    return InMemoryChannelSubscriptionRepository()


@pytest.fixture
def announcement_repository() -> InMemoryYoutubeAnnouncementRepository:
    return InMemoryYoutubeAnnouncementRepository()


@pytest.fixture
def notification_queue() -> RecordingNotificationQueue:
    return RecordingNotificationQueue()


@pytest.fixture
def premium_provider() -> StubPremiumStatusProvider:
    return StubPremiumStatusProvider()


@pytest.fixture
def websub_client() -> AsyncMock:
    """Mock WebSub 客户端。"""
    client = AsyncMock()
    client.subscribe = AsyncMock(return_value=None)
    client.unsubscribe = AsyncMock(return_value=None)
    return client


# ============================================
# 领域对象 Fixtures
# ============================================


@pytest.fixture
def make_subscription() -> Callable[..., ChannelSubscription]:
    """构造订阅实体的工厂。"""

    def _make(**overrides) -> ChannelSubscription:
        data = {
            "guild_id": "100",
            "channel_id": "C1",
            "youtube_channel_id": "UCt-ERbX-2yA6cAqfdKOlUwQ",
            "youtube_channel_name": "Test Channel",
        }
        data.update(overrides)
        return ChannelSubscription(**data)

    return _make


@pytest.fixture
def push_body() -> bytes:
    """Hub 推送的新视频 Atom 内容。"""
    return PUSH_BODY


@pytest.fixture
def callback_path() -> str:
    return f"/yt_new_upload/{TEST_VERIFY_TOKEN}"


# ============================================
# HTTP Client Fixtures
# ============================================


@pytest.fixture
async def async_client(
    subscription_repository,
    announcement_repository,
    notification_queue,
    premium_provider,
    websub_client,
) -> AsyncGenerator[AsyncClient, None]:
    """异步 HTTP 客户端（用于 API 测试），应用端口全部替换为内存实现。"""
    from main import app
    from src.modules.youtube.application import dependencies as youtube_app_deps
    from src.modules.youtube.interfaces.websub_router import get_verify_token

    saved_overrides = dict(app.dependency_overrides)

    app.dependency_overrides[youtube_app_deps.get_channel_subscription_repository] = (
        lambda: subscription_repository
    )
    app.dependency_overrides[youtube_app_deps.get_youtube_announcement_repository] = (
        lambda: announcement_repository
    )
    app.dependency_overrides[youtube_app_deps.get_notification_queue] = (
        lambda: notification_queue
    )
    app.dependency_overrides[youtube_app_deps.get_premium_status_provider] = (
        lambda: premium_provider
    )
    app.dependency_overrides[youtube_app_deps.get_websub_client] = (
        lambda: websub_client
    )
    app.dependency_overrides[get_verify_token] = lambda: TEST_VERIFY_TOKEN

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    # 恢复依赖覆盖
    app.dependency_overrides.clear()
    app.dependency_overrides.update(saved_overrides)
