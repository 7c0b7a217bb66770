"""Hacker News / Dev.to 中文日报：抓取热门文章与评论，AI 生成中文解读并发布到博客"""

__version__ = "1.0.0"
