"""数据源抓取器：Hacker News / Dev.to，以及正文与评论抓取"""

from .base import SourceAdapter
from .content import ContentFetcher, aggregate_content, format_comments, rank_comments
from .devto import DevToAdapter
from .hackernews import HackerNewsAdapter, get_story_url

__all__ = [
    "SourceAdapter",
    "ContentFetcher",
    "DevToAdapter",
    "HackerNewsAdapter",
    "aggregate_content",
    "format_comments",
    "get_story_url",
    "rank_comments",
]
