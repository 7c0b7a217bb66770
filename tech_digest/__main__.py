"""命令行入口：抓取 Hacker News / Dev.to 热门文章，生成中文日报并入库"""

import argparse
import asyncio
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import httpx
from dotenv import load_dotenv
from loguru import logger

from .config_loader import Config, load_config
from .digest.sources import SOURCES
from .infrastructure import SchedulerManager, setup_logging
from .infrastructure.db import create_engine, create_session_factory, init_db
from .services import build_pipeline

METADATA_TIMEOUT = 10.0
LLM_TIMEOUT = 30.0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tech-digest", description="生成 Hacker News / Dev.to 中文日报")
    parser.add_argument("--config", type=Path, help="配置文件路径，默认 config/config.json")
    parser.add_argument(
        "--source",
        action="append",
        choices=sorted(SOURCES),
        help="只处理指定来源，可重复；默认使用配置中的 sources",
    )
    parser.add_argument("--init-db", action="store_true", help="运行前创建缺失的数据表")
    parser.add_argument("--schedule", action="store_true", help="常驻运行，按 fetch_interval 分钟间隔执行")
    parser.add_argument("--verbose", action="store_true", help="输出 DEBUG 日志")
    return parser.parse_args(argv)


async def run_once(config: Config, sources: Optional[List[str]] = None, init_schema: bool = False) -> Dict[str, Optional[int]]:
    """执行一次完整流水线，客户端与数据库引擎在本次运行内创建并关闭"""
    started = datetime.now()
    logger.info(f"[流水线] 日报助手启动于: {started:%Y-%m-%d %H:%M:%S}")

    engine = create_engine(config)
    try:
        if init_schema:
            await init_db(engine)
            logger.info("[入库] 数据表初始化完成")
        session_factory = create_session_factory(engine)

        async with httpx.AsyncClient(timeout=METADATA_TIMEOUT, follow_redirects=True) as http_client, \
                httpx.AsyncClient(timeout=LLM_TIMEOUT) as llm_client:
            pipeline = build_pipeline(config, http_client, llm_client, session_factory)
            results = await pipeline.run(sources)
    finally:
        await engine.dispose()

    logger.info(f"[流水线] 日报助手运行完成于: {datetime.now():%Y-%m-%d %H:%M:%S}, 结果: {results}")
    return results


async def run_scheduled(config: Config, sources: Optional[List[str]] = None, init_schema: bool = False) -> None:
    if init_schema:
        engine = create_engine(config)
        try:
            await init_db(engine)
        finally:
            await engine.dispose()

    manager = SchedulerManager()
    manager.create_scheduler()
    manager.add_interval_job(
        run_once,
        minutes=config.fetch_interval,
        job_id="tech_digest",
        kwargs={"config": config, "sources": sources},
        next_run_time=datetime.now(),
    )
    manager.start()
    try:
        await asyncio.Event().wait()
    finally:
        manager.shutdown(wait=False)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    # 在读取配置前加载 .env
    load_dotenv()

    config = load_config(args.config)
    setup_logging(Path(config.log_dir), verbose=args.verbose)

    if not config.gemini_api_key:
        logger.error("未配置 GEMINI_API_KEY，无法生成 AI 总结")
        return 1

    try:
        if args.schedule:
            asyncio.run(run_scheduled(config, args.source, init_schema=args.init_db))
        else:
            asyncio.run(run_once(config, args.source, init_schema=args.init_db))
    except KeyboardInterrupt:
        logger.info("[流水线] 收到中断信号，退出")
    return 0


if __name__ == "__main__":
    sys.exit(main())
