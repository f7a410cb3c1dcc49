"""YouTube feed repository implementations."""

from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import distinct, func, or_, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from src.modules.youtube.domain.entities import ChannelSubscription, YoutubeAnnouncement
from src.modules.youtube.domain.exceptions import (
    StoreError,
    SubscriptionNotFoundError,
)
from src.modules.youtube.domain.repository import (
    ChannelSubscriptionRepository,
    YoutubeAnnouncementRepository,
)
from src.modules.youtube.infrastructure.mappers import (
    ChannelSubscriptionMapper,
    YoutubeAnnouncementMapper,
)
from src.modules.youtube.infrastructure.models import (
    ChannelSubscriptionModel,
    YoutubeAnnouncementModel,
)


def _enabled_clause():
    # enabled 为 NULL 时按默认值 true 处理
    return or_(
        col(ChannelSubscriptionModel.enabled).is_(None),
        col(ChannelSubscriptionModel.enabled).is_(True),
    )


class PostgreSQLChannelSubscriptionRepository(ChannelSubscriptionRepository):
    """PostgreSQL channel subscription repository implementation."""

    def __init__(self, session: AsyncSession, mapper: ChannelSubscriptionMapper):
        self.session = session
        self.mapper = mapper
        self.logger = logger

    async def get_by_id(self, subscription_id: str) -> ChannelSubscription | None:
        statement = select(ChannelSubscriptionModel).where(
            ChannelSubscriptionModel.id == subscription_id
        )
        result = await self.session.execute(statement)
        model = result.scalar_one_or_none()
        return self.mapper.to_domain(model) if model else None

    async def list_by_guild(self, guild_id: str) -> list[ChannelSubscription]:
        statement = (
            select(ChannelSubscriptionModel)
            .where(ChannelSubscriptionModel.guild_id == guild_id)
            .order_by(ChannelSubscriptionModel.created_at)
        )
        result = await self.session.execute(statement)
        return self.mapper.to_domain_list(list(result.scalars().all()))

    async def count_by_guild(self, guild_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(ChannelSubscriptionModel)
            .where(ChannelSubscriptionModel.guild_id == guild_id)
        )
        result = await self.session.execute(statement)
        return int(result.scalar_one())

    async def exists_for_destination(
        self,
        guild_id: str,
        channel_id: str,
        youtube_channel_id: str,
    ) -> bool:
        statement = (
            select(ChannelSubscriptionModel.id)
            .where(
                ChannelSubscriptionModel.guild_id == guild_id,
                ChannelSubscriptionModel.channel_id == channel_id,
                ChannelSubscriptionModel.youtube_channel_id == youtube_channel_id,
            )
            .limit(1)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None

    async def list_enabled_by_youtube_channel(
        self, youtube_channel_id: str
    ) -> list[ChannelSubscription]:
        statement = select(ChannelSubscriptionModel).where(
            ChannelSubscriptionModel.youtube_channel_id == youtube_channel_id,
            _enabled_clause(),
        )
        result = await self.session.execute(statement)
        return self.mapper.to_domain_list(list(result.scalars().all()))

    async def count_by_youtube_channel(self, youtube_channel_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(ChannelSubscriptionModel)
            .where(ChannelSubscriptionModel.youtube_channel_id == youtube_channel_id)
        )
        result = await self.session.execute(statement)
        return int(result.scalar_one())

    async def list_distinct_youtube_channel_ids(self) -> list[str]:
        statement = select(
            distinct(ChannelSubscriptionModel.youtube_channel_id)
        ).order_by(ChannelSubscriptionModel.youtube_channel_id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def disable_by_channel(self, channel_id: str) -> int:
        statement = (
            update(ChannelSubscriptionModel)
            .where(col(ChannelSubscriptionModel.channel_id) == channel_id)
            .values(enabled=False, updated_at=datetime.now(UTC))
        )
        try:
            result = await self.session.execute(statement)
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StoreError(
                f"Failed disabling youtube feeds for channel {channel_id}: {e}"
            ) from e
        return result.rowcount or 0

    async def update_youtube_channel_name(
        self, youtube_channel_id: str, name: str
    ) -> int:
        statement = (
            update(ChannelSubscriptionModel)
            .where(
                ChannelSubscriptionModel.youtube_channel_id == youtube_channel_id,
                ChannelSubscriptionModel.youtube_channel_name != name,
            )
            .values(youtube_channel_name=name, updated_at=datetime.now(UTC))
        )
        result = await self.session.execute(statement)
        await self.session.flush()
        return result.rowcount or 0

    async def create(self, subscription: ChannelSubscription) -> ChannelSubscription:
        model = self.mapper.to_model(subscription)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self.mapper.to_domain(model)

    async def update(self, subscription: ChannelSubscription) -> ChannelSubscription:
        statement = select(ChannelSubscriptionModel).where(
            ChannelSubscriptionModel.id == subscription.id
        )
        result = await self.session.execute(statement)
        existing = result.scalar_one_or_none()
        if not existing:
            raise SubscriptionNotFoundError(subscription.id)

        existing.channel_id = subscription.channel_id
        existing.youtube_channel_name = subscription.youtube_channel_name
        existing.mention_everyone = subscription.mention_everyone
        existing.mention_roles = list(subscription.mention_roles)
        existing.publish_livestream = subscription.publish_livestream
        existing.publish_shorts = subscription.publish_shorts
        existing.enabled = subscription.enabled
        existing.updated_at = subscription.updated_at

        self.session.add(existing)
        await self.session.flush()
        await self.session.refresh(existing)
        return self.mapper.to_domain(existing)

    async def delete(self, subscription: ChannelSubscription | str) -> bool:
        subscription_id = (
            subscription.id
            if isinstance(subscription, ChannelSubscription)
            else subscription
        )
        statement = select(ChannelSubscriptionModel).where(
            ChannelSubscriptionModel.id == subscription_id
        )
        result = await self.session.execute(statement)
        model = result.scalar_one_or_none()
        if not model:
            return False

        await self.session.delete(model)
        await self.session.flush()
        return True


class PostgreSQLYoutubeAnnouncementRepository(YoutubeAnnouncementRepository):
    """PostgreSQL announcement repository implementation."""

    def __init__(self, session: AsyncSession, mapper: YoutubeAnnouncementMapper):
        self.session = session
        self.mapper = mapper

    async def get_by_guild(self, guild_id: int) -> YoutubeAnnouncement | None:
        model = await self.session.get(YoutubeAnnouncementModel, guild_id)
        return self.mapper.to_domain(model) if model else None

    async def upsert(self, announcement: YoutubeAnnouncement) -> YoutubeAnnouncement:
        statement = insert(YoutubeAnnouncementModel).values(
            guild_id=announcement.guild_id,
            message=announcement.message,
            enabled=announcement.enabled,
        )
        statement = statement.on_conflict_do_update(
            index_elements=["guild_id"],
            set_={
                "message": statement.excluded.message,
                "enabled": statement.excluded.enabled,
            },
        )
        await self.session.execute(statement)
        await self.session.flush()
        return announcement
