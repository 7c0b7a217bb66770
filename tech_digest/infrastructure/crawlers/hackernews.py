"""Hacker News 抓取器"""
from datetime import datetime
from typing import List

from ...digest.models import Platform, Story
from .base import SourceAdapter
from .http import decode, get_json
from .schemas import HNItem

HN_ITEM_URL = "https://news.ycombinator.com/item?id={id}"


def get_story_url(original_url: str, story_id: int) -> str:
    """获取文章 URL，原始 URL 为空（Ask HN 等）时使用 HN 讨论页"""
    if original_url:
        return original_url
    return HN_ITEM_URL.format(id=story_id)


class HackerNewsAdapter(SourceAdapter):
    name = "hackernews"
    log_prefix = "[HN]"

    async def list_top_story_ids(self) -> List[int]:
        """获取热门文章 ID 列表，截断到 top_stories_limit"""
        data = await get_json(self.client, f"{self.config.hn_api_base_url}/topstories.json")
        story_ids = decode(List[int], data, "HN 热门列表")
        return story_ids[: self.config.top_stories_limit]

    async def fetch_story(self, story_id: int) -> Story:
        """
        获取单篇文章详情，并抓取正文与评论

        Raises:
            FetchError: 详情或正文请求失败
            DecodeError: 详情响应结构错误
        """
        data = await get_json(self.client, f"{self.config.hn_api_base_url}/item/{story_id}.json")
        item = decode(HNItem, data, "HN 文章")

        url = get_story_url(item.url or "", item.id)
        article_text = await self.content_fetcher.fetch_article_text(url)
        content = await self.content_fetcher.build_content(article_text, item.id, Platform.HACKER_NEWS)

        return Story(
            id=item.id,
            title=item.title or "无标题",
            url=url,
            score=item.score,
            published_at=datetime.fromtimestamp(item.time) if item.time else None,
            by=item.by or "",
            descendants=item.descendants,
            platform=Platform.HACKER_NEWS,
            content=content,
        )
