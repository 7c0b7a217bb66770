"""日报组装测试"""
from dataclasses import replace
from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest

from tech_digest.digest.models import Platform, Story
from tech_digest.digest.render import make_pid, render_header, render_story_block, render_title
from tech_digest.digest.sources import DEVTO, HACKER_NEWS
from tech_digest.errors import SummarizationError
from tech_digest.infrastructure.crawlers import ContentFetcher, HackerNewsAdapter
from tech_digest.services import DigestService

from conftest import HN_BASE, READER_BASE

DAY = datetime(2024, 6, 15, 8, 0, 0)


def _story(story_id, title="Title", platform=Platform.HACKER_NEWS):
    return Story(
        id=story_id,
        title=title,
        url=f"https://example.com/{story_id}",
        score=10,
        published_at=datetime(2024, 6, 14, 12, 30, 0),
        by="alice",
        descendants=5,
        platform=platform,
        content="content",
    )


class TestRender:
    """渲染与 pid 测试"""

    def test_pid_deterministic_per_day(self):
        assert make_pid(HACKER_NEWS, DAY) == "HN20240615"
        assert make_pid(HACKER_NEWS, DAY.replace(hour=23)) == make_pid(HACKER_NEWS, DAY)
        assert make_pid(HACKER_NEWS, datetime(2024, 6, 16)) != make_pid(HACKER_NEWS, DAY)
        assert make_pid(DEVTO, DAY) == "DEV20240615"

    def test_title(self):
        assert render_title(HACKER_NEWS, DAY).startswith("每日科技新知 NO.20240615")

    def test_hn_block_has_discussion_link(self):
        story = _story(42)
        story.summary = "## 小标题\n\n正文"
        block = render_story_block(story, HACKER_NEWS)
        assert block.startswith("## 小标题\n\n正文\n\n- 原文: [Title](https://example.com/42)\n")
        assert "- 讨论: [Hacker News](https://news.ycombinator.com/item?id=42)" in block
        assert "- 作者: alice\n- 评分: 10\n- 评论数: 5\n- 发布时间: 2024-06-14 12:30:00" in block
        assert block.endswith("\n---\n\n")

    def test_devto_block_has_no_discussion_link(self):
        story = _story(7, platform=Platform.DEVTO)
        story.summary = "正文"
        assert "讨论" not in render_story_block(story, DEVTO)

    def test_header(self):
        header = render_header(HACKER_NEWS, DAY)
        assert header.startswith("## Hacker News 中文精选 NO.20240615\n\n")
        assert "![Hacker News 中文精选](https://cdn.wangtwothree.com/imgur/f6uVgbS.jpeg)" in header

    def test_devto_header_has_default_cover(self):
        header = render_header(DEVTO, DAY)
        assert header.startswith("## Dev.to 中文精选 NO.20240615\n\n")
        assert f"![Dev.to 中文精选]({DEVTO.cover_image})" in header
        assert DEVTO.cover_image

    def test_header_without_cover(self):
        assert "![" not in render_header(replace(DEVTO, cover_image=""), DAY)


class TestDigestService:
    """DigestService 测试"""

    @pytest.mark.asyncio
    async def test_blocks_in_input_order(self):
        summarizer = AsyncMock()
        summarizer.summarize.side_effect = ["S1", "S2"]
        service = DigestService(summarizer, delay_seconds=0)

        result = await service.build_digest([_story(1, "A"), _story(2, "B")], HACKER_NEWS, day=DAY)

        assert result.pid == "HN20240615"
        assert result.story_count == 2
        assert result.content.index("S1") < result.content.index("S2")
        assert result.content.startswith(render_header(HACKER_NEWS, DAY))

    @pytest.mark.asyncio
    async def test_failed_story_dropped(self):
        summarizer = AsyncMock()
        summarizer.summarize.side_effect = [SummarizationError("boom"), "S2", ""]
        service = DigestService(summarizer, delay_seconds=0)

        result = await service.build_digest([_story(1), _story(2), _story(3)], HACKER_NEWS, day=DAY)

        assert result.story_count == 1
        assert "S2" in result.content
        assert "example.com/1)" not in result.content

    @pytest.mark.asyncio
    async def test_all_failed_returns_none(self):
        summarizer = AsyncMock()
        summarizer.summarize.side_effect = SummarizationError("quota")
        service = DigestService(summarizer, delay_seconds=0)

        assert await service.build_digest([_story(1), _story(2)], HACKER_NEWS, day=DAY) is None

    @pytest.mark.asyncio
    async def test_empty_batch_returns_none(self):
        service = DigestService(AsyncMock(), delay_seconds=0)
        assert await service.build_digest([], DEVTO, day=DAY) is None

    @pytest.mark.asyncio
    async def test_fixed_delay_between_stories(self):
        summarizer = AsyncMock()
        summarizer.summarize.side_effect = [SummarizationError("x"), "S2", "S3"]
        service = DigestService(summarizer, delay_seconds=3)

        with patch("tech_digest.services.digest_service.asyncio.sleep", new=AsyncMock()) as sleep:
            await service.build_digest([_story(1), _story(2), _story(3)], HACKER_NEWS, day=DAY)

        assert sleep.await_count == 2
        sleep.assert_awaited_with(3)

    @pytest.mark.asyncio
    async def test_uses_clock_when_day_missing(self):
        summarizer = AsyncMock()
        summarizer.summarize.return_value = "S"
        service = DigestService(summarizer, delay_seconds=0, clock=lambda: DAY)

        result = await service.build_digest([_story(1)], DEVTO)
        assert result.pid == "DEV20240615"
        assert result.created_at == DAY


@pytest.mark.asyncio
async def test_end_to_end_hacker_news(config, fake_api):
    """两篇 HN 文章 -> 固定摘要 -> 日报内容按原顺序，带 HN 日期标题与 pid"""
    fake_api.add(f"{HN_BASE}/topstories.json", json=[101, 102])
    for story_id, title in ((101, "Alpha"), (102, "Beta")):
        fake_api.add(
            f"{HN_BASE}/item/{story_id}.json",
            json={
                "id": story_id,
                "title": title,
                "url": f"https://news.test/{story_id}",
                "score": 50,
                "time": 1718409600,
                "by": "hn_user",
                "descendants": 0,
            },
        )
        fake_api.add(f"{READER_BASE}/https://news.test/{story_id}", text=f"{title} body")

    summaries = {"Alpha": "SUMMARY-A", "Beta": "SUMMARY-B"}

    async def fake_summarize(title, content):
        return summaries[title]

    summarizer = AsyncMock()
    summarizer.summarize.side_effect = fake_summarize
    today = datetime.now()

    async with fake_api.client() as client:
        adapter = HackerNewsAdapter(config, client, ContentFetcher(config, client))
        stories = await adapter.fetch_top_stories()
        result = await DigestService(summarizer, delay_seconds=0).build_digest(stories, HACKER_NEWS)

    assert result.content.index("SUMMARY-A") < result.content.index("SUMMARY-B")
    assert result.content.startswith(f"## Hacker News 中文精选 NO.{today:%Y%m%d}")
    assert result.pid == f"HN{today:%Y%m%d}"
    assert "- 原文: [Alpha](https://news.test/101)" in result.content
