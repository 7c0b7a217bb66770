"""数据源适配器基类"""

from typing import List

import httpx
from loguru import logger

from ...config_loader import Config
from ...digest.models import Story
from ...errors import DecodeError, FetchError
from .content import ContentFetcher


class SourceAdapter:
    """
    数据源适配器基类

    子类实现 list_top_story_ids() 和 fetch_story()；
    fetch_top_stories() 依次抓取每篇文章，单篇失败只跳过不重试。
    """

    name: str = "base"
    log_prefix: str = "[base]"

    def __init__(self, config: Config, client: httpx.AsyncClient, content_fetcher: ContentFetcher):
        self.config = config
        self.client = client
        self.content_fetcher = content_fetcher

    async def list_top_story_ids(self) -> List[int]:
        raise NotImplementedError

    async def fetch_story(self, story_id: int) -> Story:
        raise NotImplementedError

    async def fetch_top_stories(self) -> List[Story]:
        """获取热门文章列表；列表请求本身失败时异常向上抛出"""
        story_ids = await self.list_top_story_ids()
        logger.info(f"{self.log_prefix} 获取到 {len(story_ids)} 个热门文章 ID")

        stories: List[Story] = []
        for story_id in story_ids:
            try:
                story = await self.fetch_story(story_id)
            except (FetchError, DecodeError) as e:
                # 单篇失败不中断整个任务
                logger.warning(f"{self.log_prefix} 跳过文章 {story_id}: {e}")
                continue
            stories.append(story)
            logger.debug(f"{self.log_prefix} 已获取文章 {story_id}: {story.title[:50]}")

        logger.info(f"{self.log_prefix} 成功获取 {len(stories)}/{len(story_ids)} 篇文章")
        return stories
