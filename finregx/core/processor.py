"""
抽象LLMプロセッサーモジュール。
書類セットからLLM回答の解析までの基本フローを定義する。
"""

import abc
from typing import Any, Dict

from ..utils.logging import logger
from .models import AnalysisResult, DocumentSet


class LLMProcessor(abc.ABC):
    """抽象LLMプロセッサークラス"""

    def __init__(self):
        """初期化"""
        self.logger = logger

    def process(self, documents: DocumentSet) -> AnalysisResult:
        """
        書類セットを分析し、分析結果を返す。

        Args:
            documents: 分析対象の書類セット

        Returns:
            分析結果
        """
        self.logger.info("処理開始")

        system_prompt = self.generate_system_prompt()
        user_prompt = self.generate_user_prompt(documents)
        self.logger.debug("プロンプト生成完了")

        raw_response = self.call_llm(system_prompt, user_prompt)
        self.logger.debug("LLM呼び出し完了")

        result = self.parse_response(raw_response)
        self.logger.info(
            f"処理完了: 総合スコア {result.overall_score}, ギャップ {len(result.gaps)}件"
        )

        return result

    @abc.abstractmethod
    def generate_system_prompt(self) -> str:
        """
        システムプロンプトを生成する。

        Returns:
            生成されたシステムプロンプト
        """
        pass

    @abc.abstractmethod
    def generate_user_prompt(self, documents: DocumentSet) -> str:
        """
        ユーザープロンプトを生成する。

        Args:
            documents: 書類セット

        Returns:
            生成されたユーザープロンプト
        """
        pass

    @abc.abstractmethod
    def call_llm(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        """
        LLMを呼び出す。

        Args:
            system_prompt: システムプロンプト
            user_prompt: ユーザープロンプト

        Returns:
            LLMからの応答
        """
        pass

    @abc.abstractmethod
    def parse_response(self, response: Dict[str, Any]) -> AnalysisResult:
        """
        LLMの応答を解析する。

        Args:
            response: LLMからの応答

        Returns:
            分析結果
        """
        pass
