"""Tests for the periodic hub resubscription sweep."""

import asyncio

import httpx
import pytest

from src.modules.youtube.application.resubscribe_service import ResubscribeService
from src.modules.youtube.domain.exceptions import HubRejectedError
from src.modules.youtube.infrastructure.websub import HttpxWebSubClient, WebSubConfig

pytestmark = pytest.mark.anyio


class ConcurrencyTrackingClient:
    """Records the peak number of in-flight subscribe calls."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.in_flight = 0
        self.peak = 0
        self.calls: list[str] = []

    async def subscribe(self, youtube_channel_id: str) -> None:
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        self.calls.append(youtube_channel_id)
        await asyncio.sleep(0)
        self.in_flight -= 1
        if youtube_channel_id in self.failing:
            raise HubRejectedError(404, "Not Found", "not found")

    async def unsubscribe(self, youtube_channel_id: str) -> None:
        raise AssertionError("sweep never unsubscribes")


@pytest.fixture
def seeded(subscription_repository, make_subscription):
    for yt_id, channel in [("UC_a", "C1"), ("UC_a", "C2"), ("UC_b", "C1"), ("UC_c", "C3")]:
        sub = make_subscription(youtube_channel_id=yt_id, channel_id=channel)
        subscription_repository.subscriptions[sub.id] = sub
    return subscription_repository


async def test_each_channel_resubscribed_once(seeded):
    client = ConcurrencyTrackingClient()
    service = ResubscribeService(seeded, client, batch_size=2)

    result = await service.resubscribe_all()

    assert sorted(client.calls) == ["UC_a", "UC_b", "UC_c"]
    assert result.total == 3
    assert result.succeeded == 3
    assert result.failed == []


async def test_batch_size_bounds_concurrency(seeded):
    client = ConcurrencyTrackingClient()

    await ResubscribeService(seeded, client, batch_size=1).resubscribe_all()

    assert client.peak == 1


async def test_failures_are_collected_not_raised(seeded):
    client = ConcurrencyTrackingClient(failing={"UC_b"})
    service = ResubscribeService(seeded, client, batch_size=3)

    result = await service.resubscribe_all()

    assert result.succeeded == 2
    assert result.failed == ["UC_b"]


async def test_empty_store(subscription_repository):
    client = ConcurrencyTrackingClient()

    result = await ResubscribeService(subscription_repository, client).resubscribe_all()

    assert result.total == 0
    assert client.calls == []


def test_batch_size_must_be_positive(subscription_repository):
    with pytest.raises(ValueError):
        ResubscribeService(subscription_repository, ConcurrencyTrackingClient(), 0)


async def test_sweep_continues_after_undecodable_hub_response(seeded):
    calls: list[str] = []

    def hub(request: httpx.Request) -> httpx.Response:
        calls.append(request.content.decode())
        if len(calls) == 1:
            raise httpx.DecodingError("bad gzip", request=request)
        return httpx.Response(202)

    config = WebSubConfig(host="feeds.example.com", verify_token="s3cret")
    async with httpx.AsyncClient(transport=httpx.MockTransport(hub)) as http_client:
        service = ResubscribeService(
            seeded, HttpxWebSubClient(http_client, config), batch_size=1
        )
        result = await service.resubscribe_all()

    assert len(calls) == 3
    assert result.total == 3
    assert result.succeeded == 2
    assert result.failed == ["UC_a"]
