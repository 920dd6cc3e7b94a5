"""
基本LLMインターフェースモジュール。
様々なLLMの共通インターフェースを定義する。
"""

import abc
from typing import Any, Dict, List, Optional

from ..core.models import AnalysisResult, DocumentSet, Rule
from ..core.processor import LLMProcessor
from ..core.prompt_generator import RESPONSE_SCHEMA, PromptGenerator
from ..core.response_parser import ResponseParser


class BaseLLMProcessor(LLMProcessor):
    """基本LLMプロセッサークラス"""

    def __init__(
        self,
        model_config: Optional[Dict[str, Any]] = None,
        rules: Optional[List[Rule]] = None,
    ):
        """
        初期化

        Args:
            model_config: モデル設定。指定されない場合は設定ファイルから取得。
            rules: プロンプトに埋め込む条文。指定されない場合はQCB_RULES全件。
        """
        super().__init__()
        self.model_config = model_config or {}
        self.response_schema = RESPONSE_SCHEMA
        self.prompt_generator = PromptGenerator(self.logger, rules)
        self.response_parser = ResponseParser(self.logger)

    def generate_system_prompt(self) -> str:
        return self.prompt_generator.get_system_prompt()

    def generate_user_prompt(self, documents: DocumentSet) -> str:
        return self.prompt_generator.get_user_prompt(documents)

    @abc.abstractmethod
    def call_llm(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        """
        LLMを呼び出す。
        サブクラスで実装する必要がある。

        Args:
            system_prompt: システムプロンプト
            user_prompt: ユーザープロンプト

        Returns:
            LLMからの応答。"text"キーに本文、"raw_response"キーにSDKの応答を持つ。
        """
        pass

    def parse_response(self, response: Dict[str, Any]) -> AnalysisResult:
        """
        LLMの応答（JSON）を解析する。

        Args:
            response: LLMからの応答

        Returns:
            分析結果
        """
        return self.response_parser.parse(response)
