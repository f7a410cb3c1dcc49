"""YouTube feed API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateSubscriptionRequest(BaseModel):
    """Create channel subscription request."""

    channel_id: str = Field(..., min_length=1, description="通知投递的目标频道 ID")
    youtube_channel_id: str = Field(
        ..., min_length=1, max_length=64, description="YouTube 频道 ID"
    )
    youtube_channel_name: str | None = Field(None, description="YouTube 频道名")
    mention_everyone: bool = Field(False, description="是否 @everyone")
    mention_roles: list[int] = Field(default_factory=list, description="提及的角色")
    publish_livestream: bool | None = Field(None, description="是否推送直播")
    publish_shorts: bool | None = Field(None, description="是否推送 Shorts")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "channel_id": "123456789012345678",
                "youtube_channel_id": "UCt-ERbX-2yA6cAqfdKOlUwQ",
                "mention_roles": [234567890123456789],
            }
        }
    )


class UpdateSubscriptionRequest(BaseModel):
    """Update channel subscription request."""

    channel_id: str | None = Field(None, min_length=1, description="目标频道 ID")
    mention_everyone: bool | None = None
    mention_roles: list[int] | None = None
    publish_livestream: bool | None = None
    publish_shorts: bool | None = None
    enabled: bool | None = None


class SubscriptionResponse(BaseModel):
    """Channel subscription response (flags resolved)."""

    id: str
    guild_id: str
    channel_id: str
    youtube_channel_id: str
    youtube_channel_name: str
    mention_everyone: bool
    mention_roles: list[int]
    publish_livestream: bool
    publish_shorts: bool
    enabled: bool
    created_at: datetime
    updated_at: datetime


class SubscriptionListResponse(BaseModel):
    subscriptions: list[SubscriptionResponse]
    total: int
    max_feeds: int = Field(..., description="该 guild 的订阅上限")


class AnnouncementRequest(BaseModel):
    """Guild announcement request."""

    message: str = Field(..., max_length=2000, description="公告模板")
    enabled: bool | None = Field(None, description="是否启用")


class AnnouncementResponse(BaseModel):
    guild_id: int
    message: str
    enabled: bool


class FeedLimitResponse(BaseModel):
    guild_id: int
    used: int
    max_feeds: int
