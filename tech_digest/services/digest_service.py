"""日报组装服务"""

import asyncio
from datetime import datetime
from typing import Callable, List, Optional, Protocol

from loguru import logger

from ..digest.models import DigestResult, Story
from ..digest.render import make_pid, render_digest, render_story_block, render_title
from ..digest.sources import DigestSource
from ..errors import SummarizationError


class Summarizer(Protocol):
    async def summarize(self, title: str, content: str) -> str: ...


class DigestService:
    """逐篇生成 AI 解读并拼接成日报"""

    def __init__(
        self,
        summarizer: Summarizer,
        delay_seconds: float = 3.0,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Args:
            summarizer: 摘要生成器
            delay_seconds: 每篇文章之间的固定等待（秒），用于控制 API 调用频率
            clock: 当前时间，决定日报标题与 pid 的日期
        """
        self.summarizer = summarizer
        self.delay_seconds = delay_seconds
        self._clock = clock

    async def build_digest(
        self,
        stories: List[Story],
        source: DigestSource,
        day: Optional[datetime] = None,
    ) -> Optional[DigestResult]:
        """
        生成日报

        Returns:
            DigestResult；没有任何文章生成成功时返回 None
        """
        day = day or self._clock()
        blocks: List[str] = []
        total = len(stories)

        for idx, story in enumerate(stories, start=1):
            if idx > 1 and self.delay_seconds > 0:
                # 固定间隔，不论上一篇成功与否
                await asyncio.sleep(self.delay_seconds)

            logger.info(f"[摘要] ({idx}/{total}) {story.title}")
            try:
                story.summary = await self.summarizer.summarize(story.title, story.content)
            except SummarizationError as e:
                logger.error(f"[摘要] 生成文章总结失败 [{story.title}]: {e}")
                continue

            if not story.summary.strip():
                logger.warning(f"[摘要] 文章总结为空，跳过 [{story.title}]")
                continue
            blocks.append(render_story_block(story, source))

        if not blocks:
            logger.error(f"[摘要] {source.label} 没有任何文章生成总结，跳过本次日报")
            return None

        logger.info(f"[摘要] {source.label} 日报完成，共 {len(blocks)}/{total} 篇")
        return DigestResult(
            content=render_digest(source, day, blocks),
            title=render_title(source, day),
            pid=make_pid(source, day),
            source=source,
            story_count=len(blocks),
            created_at=day,
        )
