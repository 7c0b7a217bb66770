"""文章正文与评论抓取"""

from typing import Iterable, List

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from ...config_loader import Config
from ...digest.models import Comment, Platform
from ...errors import DecodeError, FetchError
from .http import decode, get_json
from .schemas import DevComment, HNItem

MAX_COMMENTS = 10
CONTENT_LIMIT = 8000
SECTION_SEPARATOR = "\n---\n"

_LOG_PREFIX = {
    Platform.HACKER_NEWS: "[HN]",
    Platform.DEVTO: "[Dev.to]",
}


def html_to_text(html: str) -> str:
    """HN 评论和 Dev.to body_html 都是 HTML，转成纯文本"""
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    return soup.get_text("\n", strip=True)


def rank_comments(comments: Iterable[Comment], limit: int = MAX_COMMENTS) -> List[Comment]:
    """按得分降序取前 limit 条；sorted 是稳定排序，同分保持抓取顺序"""
    ranked = sorted(comments, key=lambda c: c.score, reverse=True)
    return ranked[:limit]


def format_comments(comments: Iterable[Comment]) -> str:
    return "\n".join(f"@{c.by} (score:{c.score}): {c.text}" for c in comments)


def aggregate_content(article_text: str, comment_text: str, limit: int = CONTENT_LIMIT) -> str:
    """
    合并正文与评论，并截断到 limit 个字符

    按字符截断，不会切断多字节字符。
    """
    parts = [f"\n<article>\n{article_text}\n</article>\n"]
    if comment_text:
        parts.append(f"\n<comments>\n{comment_text}\n</comments>\n")
    content = SECTION_SEPARATOR.join(parts)

    # 限制内容长度，避免 token 过多
    if len(content) > limit:
        content = content[:limit]
    return content


class ContentFetcher:
    """通过 r.jina.ai 获取正文，通过各平台 API 获取热门评论"""

    def __init__(self, config: Config, client: httpx.AsyncClient):
        self.config = config
        self.client = client

    def reader_url(self, url: str) -> str:
        return f"{self.config.reader_base_url.rstrip('/')}/{url}"

    async def fetch_article_text(self, url: str) -> str:
        """
        获取渲染后的文章正文

        Raises:
            FetchError: 网络错误、URL 非法或状态码非 2xx
        """
        try:
            resp = await self.client.get(self.reader_url(url), headers={"X-Retain-Images": "none"})
            resp.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(f"获取文章内容失败: {url}: {exc}") from exc
        return resp.text

    async def fetch_comments(self, story_id: int, platform: Platform) -> str:
        """获取并格式化热门评论；失败只记录日志并返回空字符串"""
        prefix = _LOG_PREFIX.get(platform, "[评论]")
        try:
            if platform == Platform.HACKER_NEWS:
                comments = await self._fetch_hn_comments(story_id)
            else:
                comments = await self._fetch_devto_comments(story_id)
        except (FetchError, DecodeError) as e:
            logger.warning(f"{prefix} 获取文章 {story_id} 的评论失败: {e}")
            return ""

        logger.debug(f"{prefix} 文章 {story_id} 取得 {len(comments)} 条热门评论")
        return format_comments(comments)

    async def build_content(self, article_text: str, story_id: int, platform: Platform) -> str:
        comment_text = await self.fetch_comments(story_id, platform)
        return aggregate_content(article_text, comment_text, limit=self.config.content_limit)

    async def _fetch_hn_comments(self, story_id: int) -> List[Comment]:
        base = self.config.hn_api_base_url
        data = await get_json(self.client, f"{base}/item/{story_id}.json")
        item = decode(HNItem, data, "HN 文章")

        comments: List[Comment] = []
        # HN 每条评论都需要单独请求
        for kid in item.kids:
            try:
                kid_data = await get_json(self.client, f"{base}/item/{kid}.json")
                kid_item = decode(HNItem, kid_data, "HN 评论")
            except (FetchError, DecodeError) as e:
                logger.debug(f"[HN] 跳过评论 {kid}: {e}")
                continue
            if kid_item.deleted or kid_item.dead:
                continue
            comments.append(
                Comment(
                    text=html_to_text(kid_item.text or ""),
                    by=kid_item.by or "",
                    score=kid_item.score,
                )
            )

        return rank_comments(comments, self.config.max_comments)

    async def _fetch_devto_comments(self, article_id: int) -> List[Comment]:
        data = await get_json(
            self.client,
            f"{self.config.dev_api_base_url}/comments",
            params={"a_id": article_id, "order": "popular"},
        )
        raw_comments = decode(List[DevComment], data, "Dev.to 评论")

        # 服务端已按 popular 排序，这里不再重新排序；先取前 N 条再跳过空评论
        comments: List[Comment] = []
        for raw in raw_comments[: self.config.max_comments]:
            text = raw.body_markdown or html_to_text(raw.body_html or "")
            if not text.strip():
                continue
            comments.append(
                Comment(text=text.strip(), by=raw.user.username, score=raw.positive_reactions_count)
            )
        return comments
