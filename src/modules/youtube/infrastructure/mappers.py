"""YouTube feed entity-model mappers."""

from src.core.infrastructure.database.mapper import BaseMapper
from src.modules.youtube.domain.entities import ChannelSubscription, YoutubeAnnouncement
from src.modules.youtube.infrastructure.models import (
    ChannelSubscriptionModel,
    YoutubeAnnouncementModel,
)


class ChannelSubscriptionMapper(
    BaseMapper[ChannelSubscription, ChannelSubscriptionModel]
):
    """Channel subscription entity-model mapper."""

    def to_domain(self, model: ChannelSubscriptionModel) -> ChannelSubscription:
        return ChannelSubscription(
            id=model.id,
            guild_id=model.guild_id,
            channel_id=model.channel_id,
            youtube_channel_id=model.youtube_channel_id,
            youtube_channel_name=model.youtube_channel_name,
            mention_everyone=model.mention_everyone,
            mention_roles=list(model.mention_roles or []),
            publish_livestream=model.publish_livestream,
            publish_shorts=model.publish_shorts,
            enabled=model.enabled,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def to_model(self, entity: ChannelSubscription) -> ChannelSubscriptionModel:
        return ChannelSubscriptionModel(
            id=entity.id,
            guild_id=entity.guild_id,
            channel_id=entity.channel_id,
            youtube_channel_id=entity.youtube_channel_id,
            youtube_channel_name=entity.youtube_channel_name,
            mention_everyone=entity.mention_everyone,
            mention_roles=list(entity.mention_roles),
            publish_livestream=entity.publish_livestream,
            publish_shorts=entity.publish_shorts,
            enabled=entity.enabled,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class YoutubeAnnouncementMapper(
    BaseMapper[YoutubeAnnouncement, YoutubeAnnouncementModel]
):
    """Announcement entity-model mapper."""

    def to_domain(self, model: YoutubeAnnouncementModel) -> YoutubeAnnouncement:
        return YoutubeAnnouncement(
            guild_id=model.guild_id,
            message=model.message,
            enabled=model.enabled,
        )

    def to_model(self, entity: YoutubeAnnouncement) -> YoutubeAnnouncementModel:
        return YoutubeAnnouncementModel(
            guild_id=entity.guild_id,
            message=entity.message,
            enabled=entity.enabled,
        )
