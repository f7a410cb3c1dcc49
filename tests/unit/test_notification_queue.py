"""Tests for the Celery notification queue adapter and settings guards."""

from unittest.mock import MagicMock

import pytest
from kombu.exceptions import OperationalError

from src.core.config import Settings
from src.modules.youtube.domain.feed import QueuedNotification
from src.modules.youtube.infrastructure.notification_queue import (
    CeleryNotificationQueue,
)

pytestmark = pytest.mark.anyio


def _notification() -> QueuedNotification:
    return QueuedNotification(
        source_item_id="VIDEO123",
        subscription_id="sub-1",
        guild_id="100",
        channel_id="C1",
        content="**Channel** uploaded a new youtube video!",
        video_url="https://www.youtube.com/watch?v=VIDEO123",
        youtube_channel_id="UCabc",
        mention_roles=[1, 2],
    )


async def test_enqueue_sends_task_by_name():
    app = MagicMock()
    queue = CeleryNotificationQueue(app, "mqueue.tasks.deliver", queue="q_notify")

    await queue.enqueue(_notification())

    app.send_task.assert_called_once()
    args, kwargs = app.send_task.call_args
    assert args == ("mqueue.tasks.deliver",)
    assert kwargs["queue"] == "q_notify"
    payload = kwargs["kwargs"]["notification"]
    assert payload["source"] == "youtube"
    assert payload["source_item_id"] == "VIDEO123"
    assert payload["mention_roles"] == [1, 2]


async def test_enqueue_broker_failure_propagates():
    app = MagicMock()
    app.send_task.side_effect = OperationalError("broker down")
    queue = CeleryNotificationQueue(app, "mqueue.tasks.deliver")

    with pytest.raises(OperationalError):
        await queue.enqueue(_notification())


def test_default_verify_token_rejected_outside_local():
    with pytest.raises(ValueError, match="YOUTUBE_VERIFY_TOKEN"):
        Settings(ENVIRONMENT="production", YOUTUBE_VERIFY_TOKEN="changethis")


def test_default_verify_token_warns_locally():
    with pytest.warns(UserWarning, match="YOUTUBE_VERIFY_TOKEN"):
        Settings(ENVIRONMENT="local", YOUTUBE_VERIFY_TOKEN="changethis")
