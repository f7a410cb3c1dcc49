"""YouTube feed application commands."""

from pydantic import BaseModel, Field


class AddChannelSubscriptionCommand(BaseModel):
    """Subscribe a guild channel to a YouTube channel."""

    guild_id: str
    channel_id: str
    youtube_channel_id: str
    youtube_channel_name: str | None = None
    mention_everyone: bool = False
    mention_roles: list[int] = Field(default_factory=list)
    publish_livestream: bool | None = None
    publish_shorts: bool | None = None


class UpdateChannelSubscriptionCommand(BaseModel):
    """Update an existing subscription, None leaves a field untouched."""

    subscription_id: str
    guild_id: str
    channel_id: str | None = None
    mention_everyone: bool | None = None
    mention_roles: list[int] | None = None
    publish_livestream: bool | None = None
    publish_shorts: bool | None = None
    enabled: bool | None = None


class RemoveChannelSubscriptionCommand(BaseModel):
    """Remove a subscription."""

    subscription_id: str
    guild_id: str


class UpsertAnnouncementCommand(BaseModel):
    """Create or replace the guild announcement."""

    guild_id: int
    message: str
    enabled: bool | None = None
