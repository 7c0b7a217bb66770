"""大模型调用"""

from .gemini import GeminiSummarizer, build_prompt

__all__ = ["GeminiSummarizer", "build_prompt"]
