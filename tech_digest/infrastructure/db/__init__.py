"""数据库模块"""
from .database import create_engine, create_session_factory, init_db
from .models import Base, TbPost, TbPostTag, TbUser

__all__ = [
    "create_engine",
    "create_session_factory",
    "init_db",
    "Base",
    "TbPost",
    "TbPostTag",
    "TbUser",
]
