"""Logging configuration with structlog integration.

提供两种日志记录方式：
1. loguru: 用于一般调试日志
2. structlog: 用于关键业务事件的结构化日志
"""

import sys
from typing import Any

import structlog
from loguru import logger

from src.core.config import settings


def setup_logging() -> None:
    """Configure application logging with structlog and loguru."""
    _configure_structlog()
    _configure_loguru()

    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")


def _configure_structlog() -> None:
    """配置 structlog 处理器链。"""
    # 本地开发使用人类可读格式，其余环境输出 JSON
    if settings.ENVIRONMENT == "local":
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _get_log_level_number(settings.LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _configure_loguru() -> None:
    """配置 loguru。"""
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if settings.ENVIRONMENT != "local":
        logger.add(
            "logs/tubesentry_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="30 days",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )


def _get_log_level_number(level: str) -> int:
    """将日志级别字符串转换为数字。"""
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


# ============================================================================
# 业务事件日志记录器
# ============================================================================


def get_business_logger() -> structlog.BoundLogger:
    """获取业务事件日志记录器。

    Usage:
        from src.core.infrastructure.logging import get_business_logger

        log = get_business_logger()
        log.info("resubscribe_scheduled", channel_count=12)
    """
    return structlog.get_logger("business")


class BusinessEvents:
    """业务事件日志助手类。

    提供统一的业务事件日志记录接口，确保事件格式一致。

    Usage:
        from src.core.infrastructure.logging import BusinessEvents

        BusinessEvents.websub_subscribed(youtube_channel_id="UC...", mode="subscribe")
    """

    _log = structlog.get_logger("business.events")

    @classmethod
    def websub_subscribed(
        cls,
        youtube_channel_id: str,
        mode: str,
        **extra: Any,
    ) -> None:
        """记录 WebSub 订阅/退订成功事件。"""
        cls._log.info(
            "websub_subscribed",
            event_type="websub",
            youtube_channel_id=youtube_channel_id,
            mode=mode,
            **extra,
        )

    @classmethod
    def websub_failed(
        cls,
        youtube_channel_id: str,
        mode: str,
        error: str,
        **extra: Any,
    ) -> None:
        """记录 WebSub 请求失败事件。"""
        cls._log.warning(
            "websub_failed",
            event_type="websub_error",
            youtube_channel_id=youtube_channel_id,
            mode=mode,
            error=error,
            **extra,
        )

    @classmethod
    def subscription_created(
        cls,
        subscription_id: str,
        guild_id: str,
        youtube_channel_id: str,
        **extra: Any,
    ) -> None:
        """记录频道订阅创建事件。"""
        cls._log.info(
            "subscription_created",
            event_type="subscription",
            subscription_id=subscription_id,
            guild_id=guild_id,
            youtube_channel_id=youtube_channel_id,
            **extra,
        )

    @classmethod
    def subscription_removed(
        cls,
        subscription_id: str,
        guild_id: str,
        youtube_channel_id: str,
        **extra: Any,
    ) -> None:
        """记录频道订阅删除事件。"""
        cls._log.info(
            "subscription_removed",
            event_type="subscription",
            subscription_id=subscription_id,
            guild_id=guild_id,
            youtube_channel_id=youtube_channel_id,
            **extra,
        )

    @classmethod
    def notification_enqueued(
        cls,
        video_id: str,
        guild_id: str,
        channel_id: str,
        **extra: Any,
    ) -> None:
        """记录新视频通知入队事件。"""
        cls._log.info(
            "notification_enqueued",
            event_type="notify",
            video_id=video_id,
            guild_id=guild_id,
            channel_id=channel_id,
            **extra,
        )

    @classmethod
    def feed_disabled(
        cls,
        channel_id: str,
        affected: int,
        reason: str,
        **extra: Any,
    ) -> None:
        """记录因目标频道失效而禁用订阅的事件。"""
        cls._log.warning(
            "feed_disabled",
            event_type="degradation",
            channel_id=channel_id,
            affected=affected,
            reason=reason,
            **extra,
        )

    @classmethod
    def resubscribe_completed(
        cls,
        total: int,
        succeeded: int,
        failed: int,
        **extra: Any,
    ) -> None:
        """记录一次重订阅扫描的汇总。"""
        level = "info" if failed == 0 else "warning"
        getattr(cls._log, level)(
            "resubscribe_completed",
            event_type="websub",
            total=total,
            succeeded=succeeded,
            failed=failed,
            **extra,
        )
