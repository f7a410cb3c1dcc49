"""YouTube feed command handlers."""

from loguru import logger

from src.core.infrastructure.logging import BusinessEvents
from src.modules.youtube.application.commands import (
    AddChannelSubscriptionCommand,
    RemoveChannelSubscriptionCommand,
    UpdateChannelSubscriptionCommand,
    UpsertAnnouncementCommand,
)
from src.modules.youtube.application.services import FeedQuotaService
from src.modules.youtube.domain.entities import ChannelSubscription, YoutubeAnnouncement
from src.modules.youtube.domain.exceptions import (
    SubscriptionAlreadyExistsError,
    SubscriptionNotFoundError,
    WebSubError,
)
from src.modules.youtube.domain.ports import GuildContext, WebSubClient
from src.modules.youtube.domain.repository import (
    ChannelSubscriptionRepository,
    YoutubeAnnouncementRepository,
)


class AddChannelSubscriptionHandler:
    """Handle subscription creation."""

    def __init__(
        self,
        subscription_repository: ChannelSubscriptionRepository,
        quota_service: FeedQuotaService,
        websub_client: WebSubClient,
    ):
        self.subscription_repository = subscription_repository
        self.quota_service = quota_service
        self.websub_client = websub_client
        self.logger = logger

    async def handle(self, command: AddChannelSubscriptionCommand) -> ChannelSubscription:
        """Create a subscription and register it with the hub."""
        count = await self.subscription_repository.count_by_guild(command.guild_id)
        await self.quota_service.ensure_can_add(GuildContext(command.guild_id), count)

        if await self.subscription_repository.exists_for_destination(
            guild_id=command.guild_id,
            channel_id=command.channel_id,
            youtube_channel_id=command.youtube_channel_id,
        ):
            raise SubscriptionAlreadyExistsError(command.youtube_channel_id)

        subscription = ChannelSubscription(
            guild_id=command.guild_id,
            channel_id=command.channel_id,
            youtube_channel_id=command.youtube_channel_id,
            # 名称在收到第一条推送时刷新
            youtube_channel_name=command.youtube_channel_name
            or command.youtube_channel_id,
            mention_everyone=command.mention_everyone,
            mention_roles=command.mention_roles,
            publish_livestream=command.publish_livestream,
            publish_shorts=command.publish_shorts,
        )
        created = await self.subscription_repository.create(subscription)
        BusinessEvents.subscription_created(
            subscription_id=created.id,
            guild_id=created.guild_id,
            youtube_channel_id=created.youtube_channel_id,
        )

        # Hub 失败不回滚订阅，定时重订阅任务会再次尝试
        try:
            await self.websub_client.subscribe(created.youtube_channel_id)
        except WebSubError as e:
            self.logger.warning(
                f"Saved subscription {created.id} but hub subscribe failed, "
                f"will retry on next resubscribe sweep: {e.message}"
            )

        return created


class UpdateChannelSubscriptionHandler:
    """Handle subscription update."""

    def __init__(self, subscription_repository: ChannelSubscriptionRepository):
        self.subscription_repository = subscription_repository
        self.logger = logger

    async def handle(
        self, command: UpdateChannelSubscriptionCommand
    ) -> ChannelSubscription:
        subscription = await self.subscription_repository.get_by_id(
            command.subscription_id
        )
        if not subscription or subscription.guild_id != command.guild_id:
            raise SubscriptionNotFoundError(command.subscription_id)

        if command.channel_id is not None:
            subscription.move_to_channel(command.channel_id)
        subscription.update_mentions(command.mention_everyone, command.mention_roles)
        subscription.update_publish_flags(
            command.publish_livestream, command.publish_shorts
        )
        if command.enabled is True:
            subscription.enable()
        elif command.enabled is False:
            subscription.disable()

        updated = await self.subscription_repository.update(subscription)
        self.logger.info(f"Updated youtube subscription: {updated.id}")
        return updated


class RemoveChannelSubscriptionHandler:
    """Handle subscription removal."""

    def __init__(
        self,
        subscription_repository: ChannelSubscriptionRepository,
        websub_client: WebSubClient,
    ):
        self.subscription_repository = subscription_repository
        self.websub_client = websub_client
        self.logger = logger

    async def handle(self, command: RemoveChannelSubscriptionCommand) -> bool:
        """Delete the subscription, unsubscribing when nobody else follows."""
        subscription = await self.subscription_repository.get_by_id(
            command.subscription_id
        )
        if not subscription or subscription.guild_id != command.guild_id:
            raise SubscriptionNotFoundError(command.subscription_id)

        deleted = await self.subscription_repository.delete(subscription)
        if not deleted:
            return False

        BusinessEvents.subscription_removed(
            subscription_id=subscription.id,
            guild_id=subscription.guild_id,
            youtube_channel_id=subscription.youtube_channel_id,
        )

        remaining = await self.subscription_repository.count_by_youtube_channel(
            subscription.youtube_channel_id
        )
        if remaining > 0:
            return True

        try:
            await self.websub_client.unsubscribe(subscription.youtube_channel_id)
        except WebSubError as e:
            # 租约到期后 Hub 会自动停止推送
            self.logger.warning(
                f"Hub unsubscribe failed for {subscription.youtube_channel_id}: "
                f"{e.message}"
            )
        return True


class UpsertAnnouncementHandler:
    """Handle announcement create-or-replace."""

    def __init__(self, announcement_repository: YoutubeAnnouncementRepository):
        self.announcement_repository = announcement_repository
        self.logger = logger

    async def handle(self, command: UpsertAnnouncementCommand) -> YoutubeAnnouncement:
        announcement = YoutubeAnnouncement(
            guild_id=command.guild_id,
            message=command.message,
            enabled=command.enabled,
        )
        saved = await self.announcement_repository.upsert(announcement)
        self.logger.info(f"Saved youtube announcement for guild {command.guild_id}")
        return saved
