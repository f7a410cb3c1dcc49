"""Per-guild feed quotas."""

GUILD_MAX_FEEDS = 50
GUILD_MAX_FEEDS_PREMIUM = 250


def max_feeds(is_premium: bool) -> int:
    """Return the feed cap for a guild of the given tier."""
    if is_premium:
        return GUILD_MAX_FEEDS_PREMIUM
    return GUILD_MAX_FEEDS
