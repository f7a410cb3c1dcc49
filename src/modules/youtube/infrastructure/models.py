"""YouTube feed database models."""

from sqlalchemy import BigInteger, Boolean, Column, Text, text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlmodel import Field, SQLModel

from src.core.infrastructure.database.base_model import BaseModel


class ChannelSubscriptionModel(BaseModel, table=True):
    """Channel subscription database model.

    三个可选布尔列保留 NULL（未设置），数据库默认值为 true；
    读取时由领域实体解析默认值。
    """

    __tablename__ = "youtube_channel_subscriptions"

    guild_id: str = Field(nullable=False, index=True)
    channel_id: str = Field(nullable=False, index=True)
    youtube_channel_id: str = Field(nullable=False, index=True)
    youtube_channel_name: str = Field(default="", nullable=False)
    mention_everyone: bool = Field(default=False, nullable=False)
    mention_roles: list[int] = Field(
        default_factory=list,
        sa_column=Column(
            ARRAY(BigInteger),
            nullable=False,
            server_default=text("'{}'"),
        ),
    )
    publish_livestream: bool | None = Field(
        default=None,
        sa_column=Column(Boolean, nullable=True, server_default=text("true")),
    )
    publish_shorts: bool | None = Field(
        default=None,
        sa_column=Column(Boolean, nullable=True, server_default=text("true")),
    )
    enabled: bool | None = Field(
        default=None,
        sa_column=Column(Boolean, nullable=True, server_default=text("true")),
    )


class YoutubeAnnouncementModel(SQLModel, table=True):
    """Per-guild announcement template, guild_id is the primary key."""

    __tablename__ = "youtube_announcements"

    guild_id: int = Field(
        sa_column=Column(BigInteger, primary_key=True, autoincrement=False),
    )
    message: str = Field(default="", sa_type=Text, nullable=False)
    enabled: bool | None = Field(
        default=None,
        sa_column=Column(Boolean, nullable=True, server_default=text("false")),
    )
