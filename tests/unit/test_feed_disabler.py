"""Tests for disabling feeds of vanished destination channels."""

import pytest

from src.modules.youtube.application.feed_disabler import YoutubeFeedDisabler
from src.modules.youtube.domain.exceptions import StoreError
from src.modules.youtube.domain.ports import DeliveryTarget

pytestmark = pytest.mark.anyio


class FailingRepository:
    async def disable_by_channel(self, channel_id: str) -> int:
        raise StoreError(f"connection lost while disabling {channel_id}")


@pytest.fixture
def seeded(subscription_repository, make_subscription):
    rows = [
        make_subscription(channel_id="C1", youtube_channel_id="UC_a"),
        make_subscription(channel_id="C1", youtube_channel_id="UC_b"),
        make_subscription(channel_id="C2", youtube_channel_id="UC_a"),
    ]
    for row in rows:
        subscription_repository.subscriptions[row.id] = row
    return rows


async def test_disables_only_rows_of_failed_channel(subscription_repository, seeded):
    disabler = YoutubeFeedDisabler(subscription_repository)

    await disabler.disable_feed(DeliveryTarget(channel_id="C1"), "Unknown Channel")

    c1_a, c1_b, c2 = seeded
    assert c1_a.enabled is False
    assert c1_b.enabled is False
    assert c2.enabled is None
    assert c2.is_enabled is True


async def test_disable_is_idempotent(subscription_repository, seeded):
    disabler = YoutubeFeedDisabler(subscription_repository)
    target = DeliveryTarget(channel_id="C1")

    await disabler.disable_feed(target, "Unknown Channel")
    once = [s.enabled for s in seeded]
    await disabler.disable_feed(target, "Unknown Channel")

    assert [s.enabled for s in seeded] == once


async def test_unknown_channel_is_noop(subscription_repository, seeded):
    disabler = YoutubeFeedDisabler(subscription_repository)

    await disabler.disable_feed(DeliveryTarget(channel_id="C9"), Exception("gone"))

    assert all(s.is_enabled for s in seeded)


async def test_store_failure_is_not_raised():
    disabler = YoutubeFeedDisabler(FailingRepository())

    await disabler.disable_feed(DeliveryTarget(channel_id="C1"), "Unknown Channel")
