"""调度器管理模块"""

from typing import Any, Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger


class SchedulerManager:
    """调度器管理器（--schedule 模式使用，默认单次运行由外部 cron 触发）"""

    def __init__(self, timezone: str = "Asia/Shanghai"):
        self.scheduler: Optional[AsyncIOScheduler] = None
        self.timezone = timezone

    def create_scheduler(self) -> AsyncIOScheduler:
        """创建调度器实例"""
        if self.scheduler is not None and self.scheduler.running:
            logger.warning("[调度器] 检测到已有调度器在运行，正在关闭...")
            self.scheduler.shutdown(wait=False)

        self.scheduler = AsyncIOScheduler(timezone=self.timezone)
        logger.info("[调度器] 调度器实例已创建")
        return self.scheduler

    def add_interval_job(self, func: Callable, minutes: int, job_id: str, **kwargs: Any) -> None:
        """
        添加固定间隔任务

        Args:
            func: 要执行的协程函数
            minutes: 间隔分钟数
            job_id: 任务ID
            **kwargs: 传给 add_job 的其他参数
        """
        if self.scheduler is None:
            raise RuntimeError("调度器未初始化，请先调用 create_scheduler()")

        self.scheduler.add_job(
            func,
            "interval",
            minutes=minutes,
            id=job_id,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            **kwargs,
        )
        logger.info(f"[调度器] 已添加任务: {job_id}, 间隔 {minutes} 分钟")

    def start(self) -> None:
        if self.scheduler is None:
            raise RuntimeError("调度器未初始化，请先调用 create_scheduler()")

        self.scheduler.start()
        logger.info("[调度器] 调度器已启动，等待触发定时任务...")
        for job in self.scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)
            logger.info(f"[调度器]   - {job.id}: 下次执行时间 = {next_run}")

    def shutdown(self, wait: bool = True) -> None:
        if self.scheduler is None:
            return
        try:
            if self.scheduler.running:
                self.scheduler.shutdown(wait=wait)
                logger.info("[调度器] 调度器已关闭")
        finally:
            self.scheduler = None

    @property
    def running(self) -> bool:
        return self.scheduler is not None and self.scheduler.running
