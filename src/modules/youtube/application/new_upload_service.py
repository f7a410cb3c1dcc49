"""New upload handling: turn a hub push into queued notifications."""

from loguru import logger

from src.core.infrastructure.logging import BusinessEvents
from src.modules.youtube.domain.entities import ChannelSubscription, YoutubeAnnouncement
from src.modules.youtube.domain.feed import FeedEntry, QueuedNotification
from src.modules.youtube.domain.ports import NotificationQueue
from src.modules.youtube.domain.repository import (
    ChannelSubscriptionRepository,
    YoutubeAnnouncementRepository,
)

DEFAULT_MESSAGE_TEMPLATE = "**{name}** uploaded a new youtube video!\n{url}"


def default_content(channel_name: str, video_url: str) -> str:
    """Plain message used when the guild has no enabled announcement."""
    return DEFAULT_MESSAGE_TEMPLATE.format(name=channel_name, url=video_url)


class NewUploadService:
    """Fan out one pushed video to every enabled subscription of its channel."""

    def __init__(
        self,
        subscription_repository: ChannelSubscriptionRepository,
        announcement_repository: YoutubeAnnouncementRepository,
        notification_queue: NotificationQueue,
    ):
        self.subscription_repository = subscription_repository
        self.announcement_repository = announcement_repository
        self.notification_queue = notification_queue

    async def handle(self, entry: FeedEntry) -> int:
        """Enqueue notifications for the entry, returns how many were queued."""
        if entry.author_name:
            renamed = await self.subscription_repository.update_youtube_channel_name(
                entry.channel_id, entry.author_name
            )
            if renamed:
                logger.info(
                    f"Refreshed youtube channel name of {entry.channel_id} "
                    f"on {renamed} subscriptions"
                )

        subscriptions = await self.subscription_repository.list_enabled_by_youtube_channel(
            entry.channel_id
        )
        if not subscriptions:
            logger.debug(f"No enabled subscriptions for youtube channel {entry.channel_id}")
            return 0

        # 同一 guild 的多个订阅共用一条公告
        announcements: dict[str, YoutubeAnnouncement | None] = {}
        queued = 0
        for subscription in subscriptions:
            if subscription.guild_id not in announcements:
                announcements[subscription.guild_id] = await self._load_announcement(
                    subscription.guild_id
                )
            notification = self._build_notification(
                entry, subscription, announcements[subscription.guild_id]
            )
            await self.notification_queue.enqueue(notification)
            BusinessEvents.notification_enqueued(
                video_id=entry.video_id,
                guild_id=subscription.guild_id,
                channel_id=subscription.channel_id,
            )
            queued += 1

        logger.info(f"Queued {queued} notifications for youtube video {entry.video_id}")
        return queued

    async def _load_announcement(self, guild_id: str) -> YoutubeAnnouncement | None:
        try:
            return await self.announcement_repository.get_by_guild(int(guild_id))
        except ValueError:
            logger.warning(f"Guild id {guild_id} is not numeric, skip announcement")
            return None

    @staticmethod
    def _build_notification(
        entry: FeedEntry,
        subscription: ChannelSubscription,
        announcement: YoutubeAnnouncement | None,
    ) -> QueuedNotification:
        channel_name = entry.author_name or subscription.youtube_channel_name
        template = None
        if announcement and announcement.is_enabled and announcement.message:
            template = announcement.message

        return QueuedNotification(
            source_item_id=entry.video_id,
            subscription_id=subscription.id,
            guild_id=subscription.guild_id,
            channel_id=subscription.channel_id,
            content=default_content(channel_name, entry.video_url),
            announcement_template=template,
            video_url=entry.video_url,
            video_title=entry.title,
            youtube_channel_id=entry.channel_id,
            youtube_channel_name=channel_name,
            mention_everyone=subscription.mention_everyone,
            mention_roles=subscription.mention_roles,
            publish_livestream=subscription.publishes_livestream,
            publish_shorts=subscription.publishes_shorts,
        )
