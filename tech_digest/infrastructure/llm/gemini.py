"""Gemini 摘要生成"""

from typing import Any, Dict

import httpx
from loguru import logger

from ...config_loader import Config
from ...digest.models import Story
from ...errors import SummarizationError

TEMPERATURE = 0.3

PROMPT_TEMPLATE = """你是 Hacker News 中文博客的编辑助理，擅长将 Hacker News 上的文章和评论整理成引人入胜的博客内容。内容受众主要为软件开发者和科技爱好者。

【工作目标】
- 接收并阅读来自 Hacker News 的文章与评论。
- 先简明介绍文章的主要话题，再对其要点进行精炼说明。
- 分析并总结评论区的不同观点，展现多样化视角。
- 以清晰直接的口吻进行讨论，像与朋友交谈般简洁易懂。
- 按照逻辑顺序，使用二级标题 (如"## 标题") 与分段正文形式呈现播客的核心精简内容。
- 所有违反中国大陆法律和政治立场的内容，都跳过。

【输出要求】
- 直接输出正文，不要返回前言。
- 直接进入主要内容的总结与讨论：
  * 第 1-2 句：概括适合搜索引擎收录的文章主题，主题需要使用二级标题。
  * 第 3-15 句：详细阐述文章的重点内容。
  * 第 16-25 句：总结和对评论观点的分析，体现多角度探讨。
- 直接返回 Markdown 格式的正文内容。
- 换行不要使用\\n,使用两个回车。

【文章标题】
{title}

【文章内容与评论】
{content}"""


def build_prompt(title: str, content: str) -> str:
    return PROMPT_TEMPLATE.format(title=title, content=content)


class GeminiSummarizer:
    """
    调用 Gemini generateContent 接口生成中文解读

    只取第一个候选结果的第一段文本。
    """

    def __init__(self, config: Config, client: httpx.AsyncClient):
        self.config = config
        self.client = client

    @property
    def endpoint(self) -> str:
        base = self.config.gemini_base_url.rstrip("/")
        return f"{base}/models/{self.config.gemini_model}:generateContent"

    def _payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": TEMPERATURE},
        }

    async def summarize(self, title: str, content: str) -> str:
        """
        生成文章的中文总结

        Args:
            title: 文章标题
            content: 正文 + 评论（已截断）

        Returns:
            Markdown 格式的总结

        Raises:
            SummarizationError: 请求失败、没有候选结果或候选结果为空
        """
        prompt = build_prompt(title, content)
        try:
            resp = await self.client.post(
                self.endpoint,
                json=self._payload(prompt),
                headers={"x-goog-api-key": self.config.gemini_api_key},
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as exc:
            raise SummarizationError(f"生成总结失败: {exc}") from exc
        except ValueError as exc:
            raise SummarizationError(f"解析 Gemini 响应失败: {exc}") from exc

        if not isinstance(data, dict):
            raise SummarizationError(f"Gemini 响应格式错误: {type(data).__name__}")

        candidates = data.get("candidates") or []
        if not candidates:
            feedback = data.get("promptFeedback")
            raise SummarizationError(f"未能生成有效的总结: {feedback or '没有候选结果'}")

        candidate = candidates[0] if isinstance(candidates[0], dict) else {}
        content = candidate.get("content")
        parts = (content.get("parts") if isinstance(content, dict) else None) or []
        if not parts or not isinstance(parts[0], dict) or not parts[0].get("text"):
            reason = candidate.get("finishReason", "UNKNOWN")
            raise SummarizationError(f"未能获取到有效的总结内容 (finishReason={reason})")

        summary = parts[0]["text"]
        logger.debug(f"[摘要] 《{title[:40]}》生成 {len(summary)} 字")
        return summary

    async def summarize_story(self, story: Story) -> str:
        story.summary = await self.summarize(story.title, story.content)
        return story.summary
