"""WebSub callback routes.

Hub 在订阅时以 GET 校验回调（回显 hub.challenge），之后以 POST 推送 Atom
条目。回调路径中的令牌必须与配置的 YOUTUBE_VERIFY_TOKEN 一致。
"""

import secrets

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import PlainTextResponse
from loguru import logger

from src.core.config import settings
from src.modules.youtube.application.dependencies import get_new_upload_service
from src.modules.youtube.application.new_upload_service import NewUploadService
from src.modules.youtube.domain.exceptions import InvalidVerifyTokenError
from src.modules.youtube.infrastructure.feed_parser import parse_feed_entry
from src.modules.youtube.infrastructure.websub import CALLBACK_PATH

router = APIRouter(prefix=CALLBACK_PATH, tags=["websub"])


def get_verify_token() -> str:
    return settings.YOUTUBE_VERIFY_TOKEN


def _check_token(given: str, expected: str) -> None:
    if not secrets.compare_digest(given.encode(), expected.encode()):
        raise InvalidVerifyTokenError()


@router.get("/{verify_token}", response_class=PlainTextResponse)
async def verify_subscription(
    verify_token: str,
    mode: str = Query("", alias="hub.mode"),
    topic: str = Query("", alias="hub.topic"),
    challenge: str = Query("", alias="hub.challenge"),
    lease_seconds: int | None = Query(None, alias="hub.lease_seconds"),
    expected_token: str = Depends(get_verify_token),
) -> PlainTextResponse:
    """Answer the hub's verification of intent."""
    _check_token(verify_token, expected_token)
    logger.info(f"Websub verification: mode={mode} topic={topic} lease={lease_seconds}")
    return PlainTextResponse(challenge)


@router.post("/{verify_token}", status_code=status.HTTP_204_NO_CONTENT)
async def receive_push(
    verify_token: str,
    request: Request,
    expected_token: str = Depends(get_verify_token),
    service: NewUploadService = Depends(get_new_upload_service),
) -> Response:
    """Receive a pushed feed entry."""
    _check_token(verify_token, expected_token)

    body = await request.body()
    entry = parse_feed_entry(body)
    if entry is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    await service.handle(entry)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
