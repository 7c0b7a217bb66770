"""日报来源定义：每个来源的标题模板、封面、标签等静态信息"""

from dataclasses import dataclass
from typing import Dict

from .models import Platform


@dataclass(frozen=True)
class DigestSource:
    """
    单个来源的日报配置

    title_template 支持占位符 {date}，header 由 render_header 按 label、description、cover_image 生成
    """

    key: str
    label: str
    platform: Platform
    pid_prefix: str
    tag_id: int
    title_template: str
    description: str
    cover_image: str = ""
    show_discussion_link: bool = False

    @property
    def header_name(self) -> str:
        return f"{self.label} 中文精选"


DEFAULT_COVER_IMAGE = "https://cdn.wangtwothree.com/imgur/f6uVgbS.jpeg"


HACKER_NEWS = DigestSource(
    key="hackernews",
    label="Hacker News",
    platform=Platform.HACKER_NEWS,
    pid_prefix="HN",
    tag_id=6,
    title_template="每日科技新知 NO.{date}：Hacker News 中文解读，科技前沿热点速递",
    description=(
        "一个基于 Hacker News 的中文日报项目，每天自动抓取 Hacker News 热门文章及评论，"
        "通过 AI 生成中文解读与总结，传递科技前沿信息。"
    ),
    cover_image=DEFAULT_COVER_IMAGE,
    show_discussion_link=True,
)

DEVTO = DigestSource(
    key="devto",
    label="Dev.to",
    platform=Platform.DEVTO,
    pid_prefix="DEV",
    tag_id=15,
    title_template="开发者日报 NO.{date}：Dev.to 热门文章中文解读，开发实践一览",
    description=(
        "一个基于 Dev.to 的中文日报项目，每天自动抓取 Dev.to 过去一天的热门文章及评论，"
        "通过 AI 生成中文解读与总结，分享一线开发者的实践经验。"
    ),
    cover_image=DEFAULT_COVER_IMAGE,
)

SOURCES: Dict[str, DigestSource] = {
    HACKER_NEWS.key: HACKER_NEWS,
    DEVTO.key: DEVTO,
}


def get_source(key: str) -> DigestSource:
    try:
        return SOURCES[key]
    except KeyError:
        raise ValueError(f"未知的日报来源: {key!r}，可选: {', '.join(SOURCES)}") from None
