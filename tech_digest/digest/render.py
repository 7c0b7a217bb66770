from datetime import datetime
from typing import List

from .models import Platform, Story
from .sources import DigestSource

HN_DISCUSSION_URL = "https://news.ycombinator.com/item?id={id}"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def pid_date(day: datetime) -> str:
    return day.strftime("%Y%m%d")


def make_pid(source: DigestSource, day: datetime) -> str:
    """同一来源同一天的 pid 固定，例如 HN20240615 / DEV20240615"""
    return f"{source.pid_prefix}{pid_date(day)}"


def render_title(source: DigestSource, day: datetime) -> str:
    return source.title_template.format(date=pid_date(day))


def render_story_block(story: Story, source: DigestSource) -> str:
    """
    将单篇文章渲染为 Markdown 段落：

    AI 解读正文，随后是原文链接、（HN）讨论链接、作者、评分、评论数、发布时间，
    最后以分隔线结束。
    """
    lines: List[str] = [story.summary.strip(), ""]
    lines.append(f"- 原文: [{story.title}]({story.url})")
    if source.show_discussion_link and story.platform == Platform.HACKER_NEWS:
        lines.append(f"- 讨论: [Hacker News]({HN_DISCUSSION_URL.format(id=story.id)})")
    lines.append(f"- 作者: {story.by}")
    lines.append(f"- 评分: {story.score}")
    lines.append(f"- 评论数: {story.descendants}")
    published = story.published_at.strftime(TIME_FORMAT) if story.published_at else "未知"
    lines.append(f"- 发布时间: {published}")
    lines.append("")
    lines.append("---")
    lines.append("")
    return "\n".join(lines) + "\n"


def render_header(source: DigestSource, day: datetime) -> str:
    lines: List[str] = [f"## {source.header_name} NO.{pid_date(day)}", ""]
    lines.append(source.description)
    lines.append("")
    if source.cover_image:
        lines.append(f"![{source.header_name}]({source.cover_image})")
    lines.append("---")
    lines.append("")
    return "\n".join(lines) + "\n"


def render_digest(source: DigestSource, day: datetime, blocks: List[str]) -> str:
    return render_header(source, day) + "".join(blocks)
