"""YouTube feed domain exceptions."""

from fastapi import status

from src.core.domain.exceptions import (
    AuthorizationError,
    DomainException,
    DuplicateEntityError,
    EntityNotFoundError,
    ExternalServiceError,
    QuotaExceededError,
)


class WebSubError(ExternalServiceError):
    """Base error for hub (un)subscribe requests."""

    error_code = "WEBSUB_ERROR"


class WebSubTransportError(WebSubError):
    """Raised when the hub could not be reached or the request was not sent."""

    error_code = "WEBSUB_TRANSPORT_ERROR"

    def __init__(self, youtube_channel_id: str, cause: Exception):
        self.youtube_channel_id = youtube_channel_id
        self.cause = cause
        super().__init__(
            f"Failed to reach websub hub for channel {youtube_channel_id}: {cause}"
        )


class HubRejectedError(WebSubError):
    """Raised when the hub answers with a non-2xx status."""

    error_code = "WEBSUB_REJECTED"

    def __init__(self, status_code: int, reason: str, body: str):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"bad status code: {status_code} ({reason}) {body}")


class StoreError(DomainException):
    """Raised when a bulk update of subscriptions fails."""

    http_status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "STORE_ERROR"


class SubscriptionNotFoundError(EntityNotFoundError):
    """Raised when a channel subscription is not found."""

    def __init__(self, subscription_id: str | None = None):
        super().__init__("ChannelSubscription", subscription_id)


class SubscriptionAlreadyExistsError(DuplicateEntityError):
    """Raised when the guild channel already follows this YouTube channel."""

    def __init__(self, youtube_channel_id: str):
        super().__init__("ChannelSubscription", "youtube_channel_id", youtube_channel_id)


class FeedLimitReachedError(QuotaExceededError):
    """Raised when a guild already has the maximum number of feeds."""

    error_code = "FEED_LIMIT_REACHED"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Max {limit} youtube feeds allowed")


class InvalidVerifyTokenError(AuthorizationError):
    """Raised when a hub callback carries the wrong verify token."""

    error_code = "INVALID_VERIFY_TOKEN"

    def __init__(self):
        super().__init__("Invalid websub verify token")


class FeedParseError(DomainException):
    """Raised when a pushed feed body cannot be parsed."""

    error_code = "FEED_PARSE_ERROR"

    def __init__(self, message: str):
        super().__init__(f"Invalid feed payload: {message}")
