"""Tests for hub push body parsing."""

from datetime import UTC, datetime

import pytest

from src.modules.youtube.domain.exceptions import FeedParseError
from src.modules.youtube.infrastructure.feed_parser import parse_feed_entry

DELETED_BODY = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns:at="http://purl.org/atompub/tombstones/1.0"
      xmlns="http://www.w3.org/2005/Atom">
  <at:deleted-entry ref="yt:video:VIDEO123" when="2015-03-10T10:00:00+00:00">
    <link href="https://www.youtube.com/watch?v=VIDEO123"/>
  </at:deleted-entry>
</feed>
"""


def test_parses_video_entry(push_body):
    entry = parse_feed_entry(push_body)

    assert entry is not None
    assert entry.video_id == "VIDEO123"
    assert entry.channel_id == "UCabc"
    assert entry.title == "My new video"
    assert entry.feed_title == "YouTube video feed"
    assert entry.entry_id == "yt:video:VIDEO123"
    assert entry.author_name == "Channel Title"
    assert entry.video_url == "https://www.youtube.com/watch?v=VIDEO123"
    assert entry.published == datetime(2015, 3, 6, 21, 40, 57, tzinfo=UTC)


def test_accepts_text_body(push_body):
    entry = parse_feed_entry(push_body.decode())

    assert entry is not None
    assert entry.video_id == "VIDEO123"


def test_deleted_entry_is_ignored():
    assert parse_feed_entry(DELETED_BODY) is None


def test_malformed_body_raises():
    with pytest.raises(FeedParseError):
        parse_feed_entry(b"this is not a feed")


def test_body_is_never_read_as_a_path():
    with pytest.raises(FeedParseError):
        parse_feed_entry(b"/etc/hostname")
