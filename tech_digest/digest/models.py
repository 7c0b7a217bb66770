from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .sources import DigestSource


class Platform(str, Enum):
    HACKER_NEWS = "hackernews"
    DEVTO = "devto"


@dataclass
class Comment:
    text: str
    by: str
    score: int = 0


@dataclass
class Story:
    id: int
    title: str
    url: str
    score: int
    published_at: Optional[datetime]
    by: str
    descendants: int
    platform: Platform
    content: str = ""  # 正文 + 热门评论，已截断
    summary: str = ""  # AI 生成的中文解读


@dataclass
class DigestResult:
    content: str
    title: str
    pid: str
    source: "DigestSource"
    story_count: int = 0
    created_at: datetime = field(default_factory=datetime.now)
