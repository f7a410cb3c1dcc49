#!/usr/bin/env python
"""手动向 Hub 订阅 / 退订 YouTube 频道，或立即执行一次全量重订阅。

用法:
    uv run python scripts/websub.py subscribe UCxxxxxxxx [UCyyyyyyyy ...]
    uv run python scripts/websub.py unsubscribe UCxxxxxxxx
    uv run python scripts/websub.py resubscribe-all
"""

import argparse
import asyncio
import sys
from pathlib import Path


def _ensure_project_root_on_path() -> None:
    """确保项目根目录在 Python 路径中，便于直接运行脚本。"""
    project_root = Path(__file__).parent.parent
    project_root_str = str(project_root)
    if project_root_str not in sys.path:
        sys.path.insert(0, project_root_str)


_ensure_project_root_on_path()


async def send(mode: str, channel_ids: list[str]) -> int:
    """对给定频道逐个发起请求，返回失败数。"""
    from loguru import logger

    from src.core.config import settings
    from src.modules.youtube.domain.exceptions import WebSubError
    from src.modules.youtube.infrastructure.websub import (
        HttpxWebSubClient,
        WebSubConfig,
        create_hub_http_client,
    )

    failures = 0
    async with create_hub_http_client(settings.WEBSUB_HTTP_TIMEOUT_SEC) as http_client:
        client = HttpxWebSubClient(http_client, WebSubConfig.from_settings(settings))
        action = client.subscribe if mode == "subscribe" else client.unsubscribe
        for channel_id in channel_ids:
            try:
                await action(channel_id)
            except WebSubError as e:
                logger.error(f"{mode} {channel_id} failed: {e.message}")
                failures += 1
    return failures


def main():
    parser = argparse.ArgumentParser(description="YouTube WebSub 订阅工具")
    sub = parser.add_subparsers(dest="command", required=True)

    for mode in ("subscribe", "unsubscribe"):
        p = sub.add_parser(mode, help=f"{mode} 指定频道")
        p.add_argument("channel_ids", nargs="+", help="YouTube 频道 ID")

    sub.add_parser("resubscribe-all", help="对所有已订阅频道执行一次重订阅")

    args = parser.parse_args()

    if args.command == "resubscribe-all":
        from src.modules.youtube.tasks import _resubscribe_all_channels_async

        result = asyncio.run(_resubscribe_all_channels_async())
        print(result)
        sys.exit(1 if result["failed"] else 0)

    failures = asyncio.run(send(args.command, args.channel_ids))
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
