"""YouTube feed domain entities."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.domain.base_entity import BaseEntity


class ChannelSubscription(BaseEntity):
    """一个 guild 频道对某个 YouTube 频道的订阅。

    publish_livestream / publish_shorts / enabled 为三态：None 表示未设置，
    读取时按默认值 True 解析，不能把 None 当作 False。
    """

    guild_id: str = Field(..., description="所属 guild ID")
    channel_id: str = Field(..., description="通知投递的目标频道 ID")
    youtube_channel_id: str = Field(..., description="YouTube 频道 ID")
    youtube_channel_name: str = Field(default="", description="YouTube 频道名缓存")
    mention_everyone: bool = Field(default=False, description="是否 @everyone")
    mention_roles: list[int] = Field(default_factory=list, description="提及的角色")
    publish_livestream: bool | None = Field(default=None, description="是否推送直播")
    publish_shorts: bool | None = Field(default=None, description="是否推送 Shorts")
    enabled: bool | None = Field(default=None, description="是否启用")

    @field_validator("mention_roles")
    @classmethod
    def _normalize_roles(cls, roles: list[int]) -> list[int]:
        return sorted(set(roles))

    @property
    def publishes_livestream(self) -> bool:
        return self.publish_livestream is not False

    @property
    def publishes_shorts(self) -> bool:
        return self.publish_shorts is not False

    @property
    def is_enabled(self) -> bool:
        return self.enabled is not False

    def enable(self) -> None:
        """Enable the subscription."""
        if self.enabled is True:
            return
        self.enabled = True
        self._update_timestamp()

    def disable(self) -> None:
        """Disable the subscription."""
        if self.enabled is False:
            return
        self.enabled = False
        self._update_timestamp()

    def rename_youtube_channel(self, name: str) -> bool:
        """Refresh the cached channel name, returns whether it changed."""
        name = name.strip()
        if not name or name == self.youtube_channel_name:
            return False
        self.youtube_channel_name = name
        self._update_timestamp()
        return True

    def update_mentions(
        self,
        mention_everyone: bool | None = None,
        mention_roles: list[int] | None = None,
    ) -> None:
        if mention_everyone is not None:
            self.mention_everyone = mention_everyone
        if mention_roles is not None:
            self.mention_roles = mention_roles
        self._update_timestamp()

    def update_publish_flags(
        self,
        publish_livestream: bool | None = None,
        publish_shorts: bool | None = None,
    ) -> None:
        if publish_livestream is not None:
            self.publish_livestream = publish_livestream
        if publish_shorts is not None:
            self.publish_shorts = publish_shorts
        self._update_timestamp()

    def move_to_channel(self, channel_id: str) -> None:
        """Point the subscription at another destination channel."""
        if channel_id == self.channel_id:
            return
        self.channel_id = channel_id
        self._update_timestamp()


class YoutubeAnnouncement(BaseModel):
    """Guild 级别的新视频公告模板，以 guild_id 为主键。"""

    model_config = ConfigDict(from_attributes=True, validate_assignment=True)

    guild_id: int = Field(..., description="guild ID")
    message: str = Field(default="", description="公告模板")
    enabled: bool | None = Field(default=None, description="是否启用（默认关闭）")

    @property
    def is_enabled(self) -> bool:
        return self.enabled is True
