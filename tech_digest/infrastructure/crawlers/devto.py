"""Dev.to 抓取器"""
from typing import List

from ...digest.models import Platform, Story
from .base import SourceAdapter
from .http import decode, get_json
from .schemas import DevArticle, DevArticleSummary


class DevToAdapter(SourceAdapter):
    name = "devto"
    log_prefix = "[Dev.to]"

    async def list_top_articles(self) -> List[DevArticleSummary]:
        """获取过去一天的热门文章，每页 top_stories_limit 篇"""
        data = await get_json(
            self.client,
            f"{self.config.dev_api_base_url}/articles",
            params={"top": "1d", "per_page": self.config.top_stories_limit},
        )
        return decode(List[DevArticleSummary], data, "Dev.to 文章列表")

    async def list_top_story_ids(self) -> List[int]:
        articles = await self.list_top_articles()
        return [article.id for article in articles]

    async def fetch_story(self, story_id: int) -> Story:
        """正文直接使用 body_markdown，不经过 r.jina.ai"""
        data = await get_json(self.client, f"{self.config.dev_api_base_url}/articles/{story_id}")
        article = decode(DevArticle, data, "Dev.to 文章")

        content = await self.content_fetcher.build_content(article.body_markdown, article.id, Platform.DEVTO)

        return Story(
            id=article.id,
            title=article.title or "无标题",
            url=article.url,
            score=article.positive_reactions_count,
            published_at=article.published_at,
            by=article.user.username,
            descendants=article.comments_count,
            platform=Platform.DEVTO,
            content=content,
        )
