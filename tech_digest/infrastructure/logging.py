"""日志配置模块"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"

# 流水线各阶段日志前缀，单独写入 pipeline 日志
PIPELINE_PREFIXES = ("[流水线]", "[HN]", "[Dev.to]", "[摘要]", "[入库]")


def pipeline_filter(record) -> bool:
    """过滤流水线相关的日志"""
    message = record["message"]
    return any(prefix in message for prefix in PIPELINE_PREFIXES)


def setup_logging(log_dir: Optional[Path] = None, verbose: bool = False) -> Path:
    """
    配置日志系统：控制台输出 + 按天轮转的日志文件

    Args:
        log_dir: 日志目录，默认项目根目录下的 logs/
        verbose: 控制台是否输出 DEBUG 日志

    Returns:
        实际使用的日志目录
    """
    if log_dir is None:
        log_dir = Path(__file__).resolve().parent.parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")

    # 主日志：每天午夜轮转，保留30天，压缩旧日志
    logger.add(
        log_dir / "app_{time:YYYY-MM-DD}.log",
        rotation="00:00",
        retention="30 days",
        compression="zip",
        encoding="utf-8",
        level="INFO",
        format=LOG_FORMAT,
        enqueue=True,
    )

    # 错误日志保留更久
    logger.add(
        log_dir / "error_{time:YYYY-MM-DD}.log",
        rotation="00:00",
        retention="90 days",
        compression="zip",
        encoding="utf-8",
        level="ERROR",
        format=LOG_FORMAT,
        enqueue=True,
    )

    logger.add(
        log_dir / "pipeline_{time:YYYY-MM-DD}.log",
        rotation="00:00",
        retention="90 days",
        compression="zip",
        encoding="utf-8",
        level="INFO",
        filter=pipeline_filter,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}",
        enqueue=True,
    )

    logger.info(f"日志系统已配置，日志文件保存在 {log_dir}")
    return log_dir
