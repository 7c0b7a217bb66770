"""日报领域模型与渲染"""

from .models import Comment, DigestResult, Platform, Story
from .sources import DEVTO, HACKER_NEWS, SOURCES, DigestSource, get_source

__all__ = [
    "Comment",
    "DigestResult",
    "Platform",
    "Story",
    "DigestSource",
    "DEVTO",
    "HACKER_NEWS",
    "SOURCES",
    "get_source",
]
