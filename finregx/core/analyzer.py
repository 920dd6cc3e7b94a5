"""
準備度分析モジュール。
書類セットをLLMに送り、スコアとギャップを取得するメインクラスを提供する。
"""

from pathlib import Path
from typing import Dict, Optional, Type, Union

from ..llm.gemini import GeminiProcessor
from ..llm.openai import OpenAIProcessor
from ..utils.config import config
from ..utils.logging import logger
from .exceptions import AnalysisError, EmptyDocumentsError
from .models import AnalysisResult, DocumentSet
from .processor import LLMProcessor
from .report import ReportGenerator


class ReadinessAnalyzer:
    """準備度分析クラス"""

    # 利用可能なLLMプロセッサーの辞書
    PROCESSORS: Dict[str, Type[LLMProcessor]] = {
        "gemini": GeminiProcessor,
        "openai": OpenAIProcessor,
    }

    def __init__(self, llm_name: Optional[str] = None):
        """
        初期化。
        APIキーの確認は最初の分析時まで遅らせる（空の書類の検証を先に行うため）。

        Args:
            llm_name: 使用するLLM名。指定されない場合は設定ファイルから取得。

        Raises:
            ValueError: サポートされていないLLM名の場合
        """
        self.logger = logger

        self.llm_name = llm_name or config.get("llm.default", "gemini")
        if self.llm_name not in self.PROCESSORS:
            raise ValueError(f"Unsupported LLM: {self.llm_name}")

        self._processor: Optional[LLMProcessor] = None
        self.report_generator = ReportGenerator()
        self.logger.info(f"準備度分析器を初期化しました: {self.llm_name}")

    @property
    def processor(self) -> LLMProcessor:
        """LLMプロセッサー（初回アクセス時に生成）"""
        if self._processor is None:
            self._processor = self.PROCESSORS[self.llm_name]()
        return self._processor

    def analyze(
        self,
        documents: DocumentSet,
        output_path: Optional[Union[str, Path]] = None,
    ) -> AnalysisResult:
        """
        書類セットを分析する。失敗しても自動的な再試行は行わない。

        Args:
            documents: 分析対象の書類セット
            output_path: レポート出力先パス。指定されない場合はレポートを生成しない。

        Returns:
            分析結果

        Raises:
            EmptyDocumentsError: 3つの書類がすべて空の場合
            AnalysisError: LLMの呼び出しまたは応答の解析に失敗した場合
        """
        if documents.is_empty():
            self.logger.warning("書類が入力されていないため分析を中止しました")
            raise EmptyDocumentsError()

        self.logger.info("分析開始")

        processor = self.processor
        try:
            result = processor.process(documents)
        except AnalysisError:
            raise
        except Exception as e:
            self.logger.error(f"LLMによる分析中にエラーが発生しました: {str(e)}")
            raise AnalysisError(
                f"Failed to get a valid analysis from the AI model: {str(e)}"
            ) from e

        if output_path:
            report = self.report_generator.generate_report(result)
            self.report_generator.save_report(report, output_path)

        self.logger.info(f"分析完了: 総合スコア {result.overall_score}")
        return result

    @classmethod
    def register_processor(cls, name: str, processor_class: Type[LLMProcessor]) -> None:
        """
        新しいLLMプロセッサーを登録する。

        Args:
            name: LLM名
            processor_class: LLMプロセッサークラス
        """
        cls.PROCESSORS[name] = processor_class
        logger.info(f"LLMプロセッサーを登録しました: {name}")

    @classmethod
    def get_available_processors(cls) -> list:
        """
        利用可能なLLMプロセッサーのリストを取得する。

        Returns:
            利用可能なLLMプロセッサー名のリスト
        """
        return list(cls.PROCESSORS.keys())
