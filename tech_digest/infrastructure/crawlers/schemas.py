"""外部 API 响应结构（Hacker News / Dev.to）"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class HNItem(BaseModel):
    """Hacker News item：story 与 comment 共用同一结构"""

    id: int
    type: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    text: Optional[str] = None
    score: int = 0
    time: int = 0  # Unix 秒
    by: Optional[str] = None
    descendants: int = 0
    kids: List[int] = Field(default_factory=list)
    deleted: bool = False
    dead: bool = False


class DevUser(BaseModel):
    username: str = ""


class DevArticleSummary(BaseModel):
    """/articles 列表中的单项"""

    id: int
    title: str = ""
    url: str = ""
    published_at: Optional[datetime] = None
    user: DevUser = Field(default_factory=DevUser)
    positive_reactions_count: int = 0
    comments_count: int = 0


class DevArticle(DevArticleSummary):
    """/articles/{id} 详情，比列表多出 Markdown 正文"""

    body_markdown: str = ""


class DevComment(BaseModel):
    """/comments?a_id= 返回的单条评论（只取顶层）"""

    body_markdown: Optional[str] = None
    body_html: Optional[str] = None
    user: DevUser = Field(default_factory=DevUser)
    positive_reactions_count: int = 0
