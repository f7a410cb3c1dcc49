"""WebSub (PubSubHubbub) 订阅客户端。

向 Google 的 Hub 发起 subscribe / unsubscribe 请求，使新视频通知以 HTTP 推送
的方式到达回调地址。客户端本身不做重试，也不保存订阅状态；Hub 在租约到期
前会一直记住订阅，续期由定时重订阅任务负责。
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import httpx
from loguru import logger

from src.core.config import Settings
from src.core.infrastructure.logging import BusinessEvents
from src.modules.youtube.domain.exceptions import (
    HubRejectedError,
    WebSubError,
    WebSubTransportError,
)

GOOGLE_WEBSUB_HUB = "https://pubsubhubbub.appspot.com/subscribe"
CALLBACK_PATH = "/yt_new_upload"
TOPIC_URL_TEMPLATE = "https://www.youtube.com/xml/feeds/videos.xml?channel_id={}"


class WebSubMode(StrEnum):
    """hub.mode values."""

    SUBSCRIBE = "subscribe"
    UNSUBSCRIBE = "unsubscribe"


def topic_url(youtube_channel_id: str) -> str:
    """Feed URL identifying a channel's uploads."""
    return TOPIC_URL_TEMPLATE.format(youtube_channel_id)


@dataclass(frozen=True)
class WebSubConfig:
    """Immutable snapshot of the settings a hub request is built from."""

    host: str
    verify_token: str
    hub_url: str = GOOGLE_WEBSUB_HUB

    @classmethod
    def from_settings(cls, settings: Settings) -> "WebSubConfig":
        return cls(
            host=settings.PUBLIC_HOST,
            verify_token=settings.YOUTUBE_VERIFY_TOKEN,
            hub_url=settings.WEBSUB_HUB_URL,
        )

    @property
    def callback_url(self) -> str:
        # Hub 推送时无法附带自定义请求头，令牌只能放在路径里
        return f"https://{self.host}{CALLBACK_PATH}/{self.verify_token}"


def create_hub_http_client(timeout: float = 30.0) -> httpx.AsyncClient:
    """HTTP client used for hub requests."""
    return httpx.AsyncClient(timeout=timeout, follow_redirects=True)


class HttpxWebSubClient:
    """WebSub client backed by an injected httpx.AsyncClient.

    每次调用都从不可变配置构造独立的表单，可以对不同频道并发调用。
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        config: WebSubConfig,
        log: Any = logger,
    ):
        self.http_client = http_client
        self.config = config
        self.logger = log

    def build_form(self, youtube_channel_id: str, mode: WebSubMode) -> dict[str, str]:
        """Form body of a hub request."""
        return {
            "hub.callback": self.config.callback_url,
            "hub.topic": topic_url(youtube_channel_id),
            "hub.verify": "sync",
            "hub.mode": mode.value,
            "hub.verify_token": self.config.verify_token,
        }

    async def subscribe(self, youtube_channel_id: str) -> None:
        await self._send(youtube_channel_id, WebSubMode.SUBSCRIBE)
        self.logger.info(f"Websub: Subscribed to channel {youtube_channel_id}")

    async def unsubscribe(self, youtube_channel_id: str) -> None:
        await self._send(youtube_channel_id, WebSubMode.UNSUBSCRIBE)
        self.logger.info(f"Websub: Unsubscribed from channel {youtube_channel_id}")

    async def _send(self, youtube_channel_id: str, mode: WebSubMode) -> None:
        form = self.build_form(youtube_channel_id, mode)

        try:
            response = await self.http_client.post(self.config.hub_url, data=form)
        except httpx.RequestError as e:
            self.logger.error(
                f"Failed to {mode.value} youtube channel with id {youtube_channel_id}: {e}"
            )
            self._record_failure(youtube_channel_id, mode, e)
            raise WebSubTransportError(youtube_channel_id, e) from e

        if not response.is_success:
            error = HubRejectedError(
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=response.text,
            )
            self.logger.warning(
                f"Websub {mode.value} rejected for channel {youtube_channel_id}: "
                f"{error.message}"
            )
            self._record_failure(youtube_channel_id, mode, error)
            raise error

        BusinessEvents.websub_subscribed(
            youtube_channel_id=youtube_channel_id,
            mode=mode.value,
            status_code=response.status_code,
        )

    @staticmethod
    def _record_failure(
        youtube_channel_id: str, mode: WebSubMode, error: Exception
    ) -> None:
        message = error.message if isinstance(error, WebSubError) else str(error)
        BusinessEvents.websub_failed(
            youtube_channel_id=youtube_channel_id,
            mode=mode.value,
            error=message,
        )
