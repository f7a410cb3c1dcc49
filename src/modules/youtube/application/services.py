"""YouTube feed application services (quota and queries)."""

from src.modules.youtube.domain.entities import ChannelSubscription, YoutubeAnnouncement
from src.modules.youtube.domain.exceptions import (
    FeedLimitReachedError,
    SubscriptionNotFoundError,
)
from src.modules.youtube.domain.limits import max_feeds
from src.modules.youtube.domain.ports import GuildContext, PremiumStatusProvider
from src.modules.youtube.domain.repository import (
    ChannelSubscriptionRepository,
    YoutubeAnnouncementRepository,
)


class FeedQuotaService:
    """Resolves the per-guild feed cap from the guild's premium tier."""

    def __init__(self, premium_provider: PremiumStatusProvider):
        self.premium_provider = premium_provider

    async def max_feeds_for_context(self, ctx: GuildContext) -> int:
        is_premium = await self.premium_provider.is_premium(ctx.guild_id)
        return max_feeds(is_premium)

    async def ensure_can_add(self, ctx: GuildContext, current_count: int) -> None:
        """Raise FeedLimitReachedError once the guild's count meets the cap."""
        limit = await self.max_feeds_for_context(ctx)
        if current_count >= limit:
            raise FeedLimitReachedError(limit)


class SubscriptionQueryService:
    """Read side of guild subscriptions."""

    def __init__(self, subscription_repository: ChannelSubscriptionRepository):
        self.subscription_repository = subscription_repository

    async def list_for_guild(self, guild_id: str) -> list[ChannelSubscription]:
        return await self.subscription_repository.list_by_guild(guild_id)

    async def count_for_guild(self, guild_id: str) -> int:
        return await self.subscription_repository.count_by_guild(guild_id)

    async def get_for_guild(
        self, guild_id: str, subscription_id: str
    ) -> ChannelSubscription:
        subscription = await self.subscription_repository.get_by_id(subscription_id)
        if not subscription or subscription.guild_id != guild_id:
            raise SubscriptionNotFoundError(subscription_id)
        return subscription


class AnnouncementQueryService:
    """Read side of guild announcements."""

    def __init__(self, announcement_repository: YoutubeAnnouncementRepository):
        self.announcement_repository = announcement_repository

    async def get_for_guild(self, guild_id: int) -> YoutubeAnnouncement:
        """Stored announcement, or an unset one when the guild has none."""
        announcement = await self.announcement_repository.get_by_guild(guild_id)
        return announcement or YoutubeAnnouncement(guild_id=guild_id)
