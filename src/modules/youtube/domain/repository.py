"""YouTube feed repository interfaces."""

from abc import ABC, abstractmethod

from src.core.domain.repository import BaseRepository
from src.modules.youtube.domain.entities import ChannelSubscription, YoutubeAnnouncement


class ChannelSubscriptionRepository(BaseRepository[ChannelSubscription]):
    """Channel subscription repository interface."""

    @abstractmethod
    async def list_by_guild(self, guild_id: str) -> list[ChannelSubscription]:
        """List all subscriptions of a guild."""
        pass

    @abstractmethod
    async def count_by_guild(self, guild_id: str) -> int:
        """Count subscriptions of a guild (quota check)."""
        pass

    @abstractmethod
    async def exists_for_destination(
        self,
        guild_id: str,
        channel_id: str,
        youtube_channel_id: str,
    ) -> bool:
        """Check whether the destination already follows the YouTube channel."""
        pass

    @abstractmethod
    async def list_enabled_by_youtube_channel(
        self, youtube_channel_id: str
    ) -> list[ChannelSubscription]:
        """List enabled subscriptions of a YouTube channel (enabled unset counts)."""
        pass

    @abstractmethod
    async def count_by_youtube_channel(self, youtube_channel_id: str) -> int:
        """Count subscriptions referencing a YouTube channel."""
        pass

    @abstractmethod
    async def list_distinct_youtube_channel_ids(self) -> list[str]:
        """List every YouTube channel with at least one subscription."""
        pass

    @abstractmethod
    async def disable_by_channel(self, channel_id: str) -> int:
        """Set enabled=false on every row targeting the destination channel.

        Returns the number of matched rows. Raises StoreError on failure.
        """
        pass

    @abstractmethod
    async def update_youtube_channel_name(
        self, youtube_channel_id: str, name: str
    ) -> int:
        """Refresh the cached display name on every row of the channel."""
        pass


class YoutubeAnnouncementRepository(ABC):
    """Guild announcement repository interface (keyed by guild id)."""

    @abstractmethod
    async def get_by_guild(self, guild_id: int) -> YoutubeAnnouncement | None:
        pass

    @abstractmethod
    async def upsert(self, announcement: YoutubeAnnouncement) -> YoutubeAnnouncement:
        pass
