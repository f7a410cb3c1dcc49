"""Celery 队列定义。

- q_websub: Hub 订阅续期任务
- q_feeds: 推送投递失败回调（由外部投递系统调用）
"""

from enum import StrEnum


class Queues(StrEnum):
    """Celery 队列枚举。"""

    WEBSUB = "q_websub"
    FEEDS = "q_feeds"

# 任务名称模式 -> 队列
TASK_ROUTES = {
    "src.modules.youtube.tasks.resubscribe_*": {"queue": Queues.WEBSUB},
    "src.modules.youtube.tasks.disable_*": {"queue": Queues.FEEDS},
}
