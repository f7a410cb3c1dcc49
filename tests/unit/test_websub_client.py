"""Tests for the WebSub hub client."""

from urllib.parse import parse_qs

import httpx
import pytest

from src.modules.youtube.domain.exceptions import (
    HubRejectedError,
    WebSubError,
    WebSubTransportError,
)
from src.modules.youtube.infrastructure.websub import (
    GOOGLE_WEBSUB_HUB,
    HttpxWebSubClient,
    WebSubConfig,
    WebSubMode,
    topic_url,
)

pytestmark = pytest.mark.anyio

CHANNEL_ID = "UCt-ERbX-2yA6cAqfdKOlUwQ"
CONFIG = WebSubConfig(host="feeds.example.com", verify_token="s3cret")


class RecordingHub:
    """Mock hub that records form bodies and answers with a fixed response."""

    def __init__(self, status_code: int = 204, text: str = "") -> None:
        self.status_code = status_code
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.text)

    def form(self, index: int = 0) -> dict[str, list[str]]:
        return parse_qs(self.requests[index].content.decode())


def _client(handler) -> tuple[HttpxWebSubClient, httpx.AsyncClient]:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpxWebSubClient(http_client, CONFIG), http_client


def test_build_form_has_exactly_five_fields():
    client = HttpxWebSubClient(httpx.AsyncClient(), CONFIG)

    form = client.build_form(CHANNEL_ID, WebSubMode.SUBSCRIBE)

    assert form == {
        "hub.callback": "https://feeds.example.com/yt_new_upload/s3cret",
        "hub.topic": (
            "https://www.youtube.com/xml/feeds/videos.xml?channel_id="
            "UCt-ERbX-2yA6cAqfdKOlUwQ"
        ),
        "hub.verify": "sync",
        "hub.mode": "subscribe",
        "hub.verify_token": "s3cret",
    }


def test_topic_url_is_literal_feed_url():
    assert topic_url("abc") == "https://www.youtube.com/xml/feeds/videos.xml?channel_id=abc"


async def test_subscribe_posts_form_to_hub():
    hub = RecordingHub(status_code=204)
    client, http_client = _client(hub)

    async with http_client:
        await client.subscribe(CHANNEL_ID)

    assert len(hub.requests) == 1
    request = hub.requests[0]
    assert request.method == "POST"
    assert str(request.url) == GOOGLE_WEBSUB_HUB
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    form = hub.form()
    assert set(form) == {
        "hub.callback",
        "hub.topic",
        "hub.verify",
        "hub.mode",
        "hub.verify_token",
    }
    assert form["hub.mode"] == ["subscribe"]
    assert form["hub.topic"] == [topic_url(CHANNEL_ID)]


async def test_unsubscribe_uses_unsubscribe_mode():
    hub = RecordingHub(status_code=202)
    client, http_client = _client(hub)

    async with http_client:
        await client.unsubscribe(CHANNEL_ID)

    form = hub.form()
    assert form["hub.mode"] == ["unsubscribe"]
    assert len(form) == 5


async def test_non_2xx_status_raises_with_code_and_body():
    hub = RecordingHub(status_code=404, text="not found")
    client, http_client = _client(hub)

    async with http_client:
        with pytest.raises(HubRejectedError) as exc_info:
            await client.subscribe(CHANNEL_ID)

    error = exc_info.value
    assert error.status_code == 404
    assert "404" in error.message
    assert "not found" in error.message
    assert "Not Found" in error.message


async def test_unsubscribe_rejection_raises_too():
    hub = RecordingHub(status_code=500, text="boom")
    client, http_client = _client(hub)

    async with http_client:
        with pytest.raises(WebSubError, match="500"):
            await client.unsubscribe(CHANNEL_ID)


async def test_transport_failure_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, http_client = _client(handler)

    async with http_client:
        with pytest.raises(WebSubTransportError) as exc_info:
            await client.subscribe(CHANNEL_ID)

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.youtube_channel_id == CHANNEL_ID


async def test_timeout_is_a_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client, http_client = _client(handler)

    async with http_client:
        with pytest.raises(WebSubTransportError):
            await client.subscribe(CHANNEL_ID)


async def test_custom_hub_url_is_used():
    hub = RecordingHub()
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(hub))
    config = WebSubConfig(
        host="feeds.example.com",
        verify_token="s3cret",
        hub_url="https://hub.example.org/",
    )

    async with http_client:
        await HttpxWebSubClient(http_client, config).subscribe(CHANNEL_ID)

    assert str(hub.requests[0].url) == "https://hub.example.org/"


def test_config_from_settings(test_settings):
    config = WebSubConfig.from_settings(test_settings)

    assert config.host == "feeds.example.com"
    assert config.callback_url == (
        "https://feeds.example.com/yt_new_upload/test-verify-token"
    )
    assert config.hub_url == GOOGLE_WEBSUB_HUB


async def test_redirect_loop_is_a_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"location": str(request.url)})

    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), follow_redirects=True
    )
    client = HttpxWebSubClient(http_client, CONFIG)

    async with http_client:
        with pytest.raises(WebSubTransportError) as exc_info:
            await client.subscribe(CHANNEL_ID)

    assert isinstance(exc_info.value.__cause__, httpx.TooManyRedirects)


async def test_undecodable_response_is_a_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.DecodingError("bad gzip", request=request)

    client, http_client = _client(handler)

    async with http_client:
        with pytest.raises(WebSubTransportError):
            await client.unsubscribe(CHANNEL_ID)
