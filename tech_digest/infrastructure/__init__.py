"""基础设施层：日志、调度器、抓取器、数据库等底层组件"""

from .logging import setup_logging
from .scheduler import SchedulerManager

__all__ = ["setup_logging", "SchedulerManager"]
