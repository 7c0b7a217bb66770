import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.engine import URL


def _project_root() -> Path:
    # tech_digest/config_loader.py -> project_root
    return Path(__file__).resolve().parents[1]


def _default_sources() -> List[str]:
    return ["hackernews", "devto"]


@dataclass
class Config:
    """
    运行配置。

    配置文件 config/config.json 示例：
    {
      "top_stories_limit": 30,
      "fetch_interval": 60,
      "db_host": "127.0.0.1",
      "db_name": "blog"
    }

    密钥与数据库连接信息可以通过环境变量（或 .env）覆盖：
    GEMINI_API_KEY / DATABASE_URL / DB_HOST / DB_PORT / DB_USER / DB_PASSWORD / DB_NAME
    """

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    hn_api_base_url: str = "https://hacker-news.firebaseio.com/v0"
    dev_api_base_url: str = "https://dev.to/api"
    reader_base_url: str = "https://r.jina.ai"

    top_stories_limit: int = 30
    fetch_interval: int = 60  # 分钟，仅 --schedule 模式使用
    story_delay_seconds: float = 3.0
    max_comments: int = 10
    content_limit: int = 8000
    author_id: int = 1
    sources: List[str] = field(default_factory=_default_sources)
    cover_images: Dict[str, str] = field(default_factory=dict)

    db_host: str = "127.0.0.1"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = ""
    db_name: str = "postgres"
    database_url: Optional[str] = None

    log_dir: str = "logs"

    @property
    def database_url_resolved(self) -> str:
        """优先使用显式的 database_url，否则按 db_* 拼出 PostgreSQL 连接串"""
        if self.database_url:
            return self.database_url
        url = URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)


def _config_path() -> Path:
    env_path = os.getenv("TECH_DIGEST_CONFIG")
    if env_path:
        return Path(env_path)
    return _project_root() / "config" / "config.json"


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load runtime config from config/config.json.

    文件不存在或无法解析时使用默认配置；单个字段非法时回退为该字段的默认值。
    """
    path = path or _config_path()
    default = Config()
    data: Dict[str, Any] = {}

    if not path.exists():
        logger.warning(f"Config file not found at {path}, using defaults.")
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                raise ValueError("config file must be a JSON object")
            data = loaded
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Failed to load config file {path}: {exc}, using defaults.")

    def _get_str(name: str, fallback: Optional[str]) -> Optional[str]:
        raw = data.get(name)
        if raw is None:
            return fallback
        return str(raw).strip()

    def _get_int(name: str, fallback: int) -> int:
        raw = data.get(name)
        if raw is None:
            return fallback
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning(f"Invalid value for config {name}={raw!r}, fallback to {fallback}.")
            return fallback

    def _get_float(name: str, fallback: float) -> float:
        raw = data.get(name)
        if raw is None:
            return fallback
        try:
            return float(raw)
        except (TypeError, ValueError):
            logger.warning(f"Invalid value for config {name}={raw!r}, fallback to {fallback}.")
            return fallback

    sources = data.get("sources", default.sources)
    if not isinstance(sources, list) or not sources:
        logger.warning(f"Invalid value for config sources={sources!r}, fallback to {default.sources}.")
        sources = default.sources

    cover_images = data.get("cover_images", {})
    if not isinstance(cover_images, dict):
        logger.warning(f"Invalid value for config cover_images={cover_images!r}, ignored.")
        cover_images = {}

    top_stories_limit = _get_int("top_stories_limit", default.top_stories_limit)
    if top_stories_limit <= 0:
        logger.warning(
            f"Invalid value for config top_stories_limit={top_stories_limit}, "
            f"fallback to {default.top_stories_limit}."
        )
        top_stories_limit = default.top_stories_limit

    config = Config(
        gemini_api_key=_get_str("gemini_api_key", default.gemini_api_key),
        gemini_model=_get_str("gemini_model", default.gemini_model),
        gemini_base_url=_get_str("gemini_base_url", default.gemini_base_url),
        hn_api_base_url=_get_str("hn_api_base_url", default.hn_api_base_url),
        dev_api_base_url=_get_str("dev_api_base_url", default.dev_api_base_url),
        reader_base_url=_get_str("reader_base_url", default.reader_base_url),
        top_stories_limit=top_stories_limit,
        fetch_interval=_get_int("fetch_interval", default.fetch_interval),
        story_delay_seconds=_get_float("story_delay_seconds", default.story_delay_seconds),
        max_comments=_get_int("max_comments", default.max_comments),
        content_limit=_get_int("content_limit", default.content_limit),
        author_id=_get_int("author_id", default.author_id),
        sources=[str(item).strip() for item in sources if str(item).strip()],
        cover_images={str(k): str(v) for k, v in cover_images.items()},
        db_host=_get_str("db_host", default.db_host),
        db_port=_get_int("db_port", default.db_port),
        db_user=_get_str("db_user", default.db_user),
        db_password=_get_str("db_password", default.db_password),
        db_name=_get_str("db_name", default.db_name),
        database_url=_get_str("database_url", default.database_url),
        log_dir=_get_str("log_dir", default.log_dir),
    )
    return _apply_env_overrides(config)


def _apply_env_overrides(config: Config) -> Config:
    """环境变量优先于配置文件"""
    env_map = {
        "GEMINI_API_KEY": "gemini_api_key",
        "DATABASE_URL": "database_url",
        "DB_HOST": "db_host",
        "DB_USER": "db_user",
        "DB_PASSWORD": "db_password",
        "DB_NAME": "db_name",
    }
    for env_key, attr in env_map.items():
        value = os.getenv(env_key)
        if value:
            setattr(config, attr, value.strip())

    port = os.getenv("DB_PORT")
    if port:
        try:
            config.db_port = int(port)
        except ValueError:
            logger.warning(f"Invalid DB_PORT={port!r}, keep {config.db_port}.")
    return config
