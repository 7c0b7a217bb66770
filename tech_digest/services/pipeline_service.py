"""流水线编排：抓取 -> 生成日报 -> 入库"""

from dataclasses import replace
from typing import Dict, Iterable, Optional

import httpx
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..config_loader import Config
from ..digest.sources import SOURCES, DigestSource, get_source
from ..errors import DecodeError, DuplicatePostError, FetchError, PersistenceError
from ..infrastructure.crawlers import ContentFetcher, DevToAdapter, HackerNewsAdapter, SourceAdapter
from ..infrastructure.llm import GeminiSummarizer
from .digest_service import DigestService
from .post_repository import PostRepository


class PipelineService:
    """每次调用对每个来源各执行一遍，不做内部循环"""

    def __init__(
        self,
        config: Config,
        adapters: Dict[str, SourceAdapter],
        digest_service: DigestService,
        repository: PostRepository,
    ):
        self.config = config
        self.adapters = adapters
        self.digest_service = digest_service
        self.repository = repository

    def resolve_source(self, key: str) -> DigestSource:
        source = get_source(key)
        cover = self.config.cover_images.get(key)
        if cover:
            source = replace(source, cover_image=cover)
        return source

    async def run_source(self, key: str) -> Optional[int]:
        """
        处理单个来源

        Returns:
            入库的文章 id；本次没有产出或入库失败时返回 None
        """
        source = self.resolve_source(key)
        adapter = self.adapters.get(key)
        if adapter is None:
            logger.error(f"[流水线] 来源 {key} 没有对应的抓取器，跳过")
            return None

        logger.info(f"[流水线] 开始处理 {source.label}")
        try:
            stories = await adapter.fetch_top_stories()
        except (FetchError, DecodeError) as e:
            logger.error(f"[流水线] 获取 {source.label} 热门文章失败: {e}")
            return None

        if not stories:
            logger.error(f"[流水线] {source.label} 没有获取到任何文章，跳过")
            return None

        result = await self.digest_service.build_digest(stories, source)
        if result is None:
            return None

        try:
            post_id = await self.repository.save_post(result)
        except DuplicatePostError as e:
            logger.warning(f"[流水线] {source.label} 今日日报已存在，跳过入库: {e}")
            return None
        except PersistenceError as e:
            logger.error(f"[流水线] 保存 {source.label} 日报到数据库失败: {e}")
            return None

        logger.info(f"[流水线] {source.label} 处理完成，文章 id={post_id}")
        return post_id

    async def run(self, keys: Optional[Iterable[str]] = None) -> Dict[str, Optional[int]]:
        """依次处理各来源，单个来源失败不影响其他来源"""
        results: Dict[str, Optional[int]] = {}
        for key in keys or self.config.sources:
            if key not in SOURCES:
                logger.error(f"[流水线] 未知的日报来源: {key!r}，跳过")
                results[key] = None
                continue
            try:
                results[key] = await self.run_source(key)
            except Exception as e:
                logger.exception(f"[流水线] 处理 {key} 时发生未预期的错误: {e}")
                results[key] = None
        return results


def build_pipeline(
    config: Config,
    http_client: httpx.AsyncClient,
    llm_client: httpx.AsyncClient,
    session_factory: async_sessionmaker[AsyncSession],
) -> PipelineService:
    """按配置组装各组件"""
    content_fetcher = ContentFetcher(config, http_client)
    adapters: Dict[str, SourceAdapter] = {
        HackerNewsAdapter.name: HackerNewsAdapter(config, http_client, content_fetcher),
        DevToAdapter.name: DevToAdapter(config, http_client, content_fetcher),
    }
    digest_service = DigestService(
        GeminiSummarizer(config, llm_client),
        delay_seconds=config.story_delay_seconds,
    )
    repository = PostRepository(session_factory, author_id=config.author_id)
    return PipelineService(config, adapters, digest_service, repository)
