"""数据库连接和会话管理"""
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ...config_loader import Config
from .models import Base


def create_engine(config: Config, echo: bool = False) -> AsyncEngine:
    """按配置创建异步引擎，进程启动时创建一次并向下传递"""
    return create_async_engine(
        config.database_url_resolved,
        echo=echo,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """创建会话工厂"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """初始化数据库表（仅创建缺失的表）"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
