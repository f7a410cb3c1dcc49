"""Tests for the WebSub callback endpoints."""

import pytest

pytestmark = pytest.mark.anyio


async def test_verification_echoes_challenge(async_client, callback_path):
    response = await async_client.get(
        callback_path,
        params={
            "hub.mode": "subscribe",
            "hub.topic": "https://www.youtube.com/xml/feeds/videos.xml?channel_id=UCabc",
            "hub.challenge": "challenge-123",
            "hub.lease_seconds": "432000",
        },
    )

    assert response.status_code == 200
    assert response.text == "challenge-123"


async def test_verification_with_wrong_token_is_forbidden(async_client):
    response = await async_client.get(
        "/yt_new_upload/wrong", params={"hub.challenge": "challenge-123"}
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INVALID_VERIFY_TOKEN"


async def test_push_with_wrong_token_is_forbidden(
    async_client, notification_queue, push_body
):
    response = await async_client.post("/yt_new_upload/wrong", content=push_body)

    assert response.status_code == 403
    assert notification_queue.notifications == []


async def test_push_enqueues_per_enabled_subscription(
    async_client,
    subscription_repository,
    make_subscription,
    notification_queue,
    push_body,
    callback_path,
):
    for channel, enabled in [("C1", None), ("C2", True), ("C3", False)]:
        sub = make_subscription(
            youtube_channel_id="UCabc", channel_id=channel, enabled=enabled
        )
        subscription_repository.subscriptions[sub.id] = sub

    response = await async_client.post(
        callback_path,
        content=push_body,
        headers={"Content-Type": "application/atom+xml"},
    )

    assert response.status_code == 204
    assert sorted(n.channel_id for n in notification_queue.notifications) == [
        "C1",
        "C2",
    ]


async def test_push_with_garbage_is_bad_request(async_client, callback_path):
    response = await async_client.post(callback_path, content=b"this is not a feed")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "FEED_PARSE_ERROR"
