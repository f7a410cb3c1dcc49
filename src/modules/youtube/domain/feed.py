"""Feed entry pushed by the WebSub hub and the notification built from it."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

YOUTUBE_SOURCE = "youtube"


class FeedLink(BaseModel):
    """Atom link element."""

    model_config = ConfigDict(frozen=True)

    href: str = ""
    rel: str = ""


class FeedEntry(BaseModel):
    """Hub 推送的单条视频条目，只在一次推送处理期间存在。"""

    model_config = ConfigDict(frozen=True)

    video_id: str = Field(..., description="YouTube 视频 ID")
    channel_id: str = Field(..., description="YouTube 频道 ID")
    title: str = Field(default="", description="视频标题")
    feed_title: str = Field(default="", description="feed 级标题")
    entry_id: str = Field(default="", description="Atom entry id，如 yt:video:<id>")
    link: FeedLink = Field(default_factory=FeedLink)
    author_name: str = Field(default="")
    author_uri: str = Field(default="")
    published: datetime | None = None
    updated: datetime | None = None
    feed_updated: datetime | None = None
    namespaces: dict[str, str] = Field(default_factory=dict)

    @property
    def video_url(self) -> str:
        if self.link.href and self.link.rel in ("", "alternate"):
            return self.link.href
        return f"https://www.youtube.com/watch?v={self.video_id}"


class QueuedNotification(BaseModel):
    """交给外部投递系统的一条通知。"""

    model_config = ConfigDict(frozen=True)

    source: str = YOUTUBE_SOURCE
    source_item_id: str = Field(..., description="视频 ID")
    subscription_id: str
    guild_id: str
    channel_id: str = Field(..., description="目标频道 ID")
    content: str
    # guild 启用公告时附带原始模板，由外部格式化程序渲染
    announcement_template: str | None = None
    video_url: str
    video_title: str = ""
    youtube_channel_id: str
    youtube_channel_name: str = ""
    mention_everyone: bool = False
    mention_roles: list[int] = Field(default_factory=list)
    publish_livestream: bool = True
    publish_shorts: bool = True
