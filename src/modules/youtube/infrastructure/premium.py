"""Settings-backed premium status provider."""

from collections.abc import Iterable


class StaticPremiumStatusProvider:
    """Treats a fixed set of guild ids as premium.

    宿主平台接入真实的 premium 服务前使用，guild 列表来自 PREMIUM_GUILD_IDS。
    """

    def __init__(self, premium_guild_ids: Iterable[int]):
        self._premium_guild_ids = frozenset(premium_guild_ids)

    async def is_premium(self, guild_id: str) -> bool:
        try:
            return int(guild_id) in self._premium_guild_ids
        except ValueError:
            return False
