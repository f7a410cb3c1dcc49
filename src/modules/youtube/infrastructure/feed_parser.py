"""Hub 推送内容（Atom）解析。

YouTube 推送体示例::

    <feed xmlns:yt="http://www.youtube.com/xml/schemas/2015"
          xmlns="http://www.w3.org/2005/Atom">
      <link rel="hub" href="https://pubsubhubbub.appspot.com"/>
      <title>YouTube video feed</title>
      <updated>2015-04-01T19:05:24.552394234+00:00</updated>
      <entry>
        <id>yt:video:VIDEO_ID</id>
        <yt:videoId>VIDEO_ID</yt:videoId>
        <yt:channelId>CHANNEL_ID</yt:channelId>
        <title>Video title</title>
        <link rel="alternate" href="http://www.youtube.com/watch?v=VIDEO_ID"/>
        <author>
          <name>Channel title</name>
          <uri>http://www.youtube.com/channel/CHANNEL_ID</uri>
        </author>
        <published>2015-03-06T21:40:57+00:00</published>
        <updated>2015-03-09T19:05:24.552394234+00:00</updated>
      </entry>
    </feed>

视频被删除时 Hub 推送 at:deleted-entry，不含 entry，解析结果为 None。
"""

import io
from datetime import UTC, datetime
from typing import Any

import feedparser
from loguru import logger

from src.modules.youtube.domain.exceptions import FeedParseError
from src.modules.youtube.domain.feed import FeedEntry, FeedLink

VIDEO_ID_PREFIX = "yt:video:"
CHANNEL_URI_MARKER = "/channel/"


def parse_feed_entry(body: bytes | str) -> FeedEntry | None:
    """Parse a hub push body into a FeedEntry.

    Returns None when the push carries no video entry.
    Raises FeedParseError when the body is not a usable feed.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
    # 传入流而不是字符串，避免 feedparser 把推送内容当作文件路径或 URL 打开
    parsed = feedparser.parse(io.BytesIO(body))

    if not parsed.entries:
        if parsed.bozo:
            raise FeedParseError(str(parsed.get("bozo_exception", "malformed xml")))
        logger.debug("Websub push without entries (deleted video or empty feed)")
        return None

    entry = parsed.entries[0]
    feed = parsed.feed

    video_id = entry.get("yt_videoid") or _video_id_from_entry_id(entry.get("id", ""))
    if not video_id:
        logger.debug(f"Websub push entry without video id: {entry.get('id')}")
        return None

    author = entry.get("author_detail") or {}
    author_uri = author.get("href", "")
    channel_id = entry.get("yt_channelid") or _channel_id_from_uri(author_uri)
    if not channel_id:
        raise FeedParseError(f"entry {video_id} has no channel id")

    return FeedEntry(
        video_id=video_id,
        channel_id=channel_id,
        title=entry.get("title", ""),
        feed_title=feed.get("title", ""),
        entry_id=entry.get("id", ""),
        link=_alternate_link(entry),
        author_name=author.get("name", "") or entry.get("author", ""),
        author_uri=author_uri,
        published=_to_datetime(entry.get("published_parsed")),
        updated=_to_datetime(entry.get("updated_parsed")),
        feed_updated=_to_datetime(feed.get("updated_parsed")),
        namespaces=dict(parsed.get("namespaces", {})),
    )


def _alternate_link(entry: Any) -> FeedLink:
    links = entry.get("links", [])
    for link in links:
        if link.get("rel", "alternate") == "alternate":
            return FeedLink(href=link.get("href", ""), rel=link.get("rel", ""))
    if links:
        return FeedLink(href=links[0].get("href", ""), rel=links[0].get("rel", ""))
    return FeedLink()


def _video_id_from_entry_id(entry_id: str) -> str:
    if entry_id.startswith(VIDEO_ID_PREFIX):
        return entry_id[len(VIDEO_ID_PREFIX) :]
    return ""


def _channel_id_from_uri(uri: str) -> str:
    if CHANNEL_URI_MARKER not in uri:
        return ""
    return uri.rsplit(CHANNEL_URI_MARKER, 1)[1].strip("/")


def _to_datetime(parsed: Any) -> datetime | None:
    # feedparser 将日期统一解析为 UTC 的 struct_time
    if not parsed:
        return None
    try:
        return datetime(*parsed[:6], tzinfo=UTC)
    except (TypeError, ValueError) as e:
        logger.debug(f"Failed to convert feed date {parsed!r}: {e}")
        return None
