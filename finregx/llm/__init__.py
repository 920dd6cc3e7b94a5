"""
LLMモジュール。
準備度評価に使用するLLMプロセッサーを提供する。
"""

from .gemini import GeminiProcessor
from .openai import OpenAIProcessor

# 利用可能なプロセッサーをエクスポート
__all__ = ["GeminiProcessor", "OpenAIProcessor"]
