"""Celery 应用配置。

- 使用 JSON 序列化
- 按功能拆分队列
- 配置定时任务（Beat）
"""

from celery import Celery
from kombu import Exchange, Queue

from src.core.config import settings
from src.core.infrastructure.celery.queues import TASK_ROUTES, Queues

celery_app = Celery("tubesentry")

celery_app.conf.update(
    broker_url=settings.celery_broker_url,
    result_backend=settings.celery_result_backend,
    task_serializer=settings.CELERY_TASK_SERIALIZER,
    result_serializer=settings.CELERY_RESULT_SERIALIZER,
    accept_content=settings.CELERY_ACCEPT_CONTENT,
    timezone=settings.TIMEZONE,
    enable_utc=True,
    task_track_started=True,
    task_time_limit=900,  # 大批量重订阅可能较慢
    task_soft_time_limit=840,
    task_default_retry_delay=settings.CELERY_TASK_DEFAULT_RETRY_DELAY,
    task_max_retries=settings.CELERY_TASK_MAX_RETRIES,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    result_expires=3600,
    worker_prefetch_multiplier=1,
    worker_concurrency=1,
)

default_exchange = Exchange("default", type="direct")
celery_app.conf.task_queues = (
    Queue(Queues.WEBSUB, default_exchange, routing_key=Queues.WEBSUB),
    Queue(Queues.FEEDS, default_exchange, routing_key=Queues.FEEDS),
)

celery_app.conf.task_routes = TASK_ROUTES
celery_app.conf.task_default_queue = Queues.WEBSUB

celery_app.conf.beat_schedule = {
    # Hub 租约续期：定期对所有已订阅频道重新发起 subscribe
    "resubscribe-youtube-channels": {
        "task": "src.modules.youtube.tasks.resubscribe_all_channels",
        "schedule": float(settings.YOUTUBE_RESUB_INTERVAL_SEC),
        "options": {"queue": Queues.WEBSUB},
    },
}

celery_app.autodiscover_tasks(["src.modules.youtube"], related_name="tasks")
