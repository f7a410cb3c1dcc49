"""Celery-backed notification queue adapter."""

from celery import Celery
from kombu.exceptions import OperationalError
from loguru import logger

from src.modules.youtube.domain.feed import QueuedNotification


class CeleryNotificationQueue:
    """Hands notifications to the delivery worker by task name.

    投递任务由宿主平台的投递系统注册和消费，这里只负责按名称投递消息。
    """

    def __init__(self, app: Celery, task_name: str, queue: str | None = None):
        self.app = app
        self.task_name = task_name
        self.queue = queue

    async def enqueue(self, notification: QueuedNotification) -> None:
        try:
            self.app.send_task(
                self.task_name,
                kwargs={"notification": notification.model_dump(mode="json")},
                queue=self.queue,
            )
        except OperationalError as e:
            logger.exception(
                f"Failed to enqueue youtube notification "
                f"{notification.source_item_id} for channel {notification.channel_id}: {e}"
            )
            raise
