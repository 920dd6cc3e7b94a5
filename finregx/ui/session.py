"""
画面状態モジュール。
書類入力、分析実行、結果表示の状態遷移を Streamlit から切り離して保持する。
"""

from enum import Enum
from typing import Callable, Dict, Optional

from ..core.analyzer import ReadinessAnalyzer
from ..core.exceptions import EmptyDocumentsError, FinRegXError
from ..core.models import AnalysisResult, DocumentSet, DocumentType
from ..core.report import needs_expert_review
from ..core.samples import sample_documents
from ..file_processors import extract_text
from ..utils.logging import logger

LOADING_MESSAGES = [
    "Analyzing regulatory compliance...",
    "Mapping documents to QCB framework...",
    "Detecting potential compliance gaps...",
    "Calculating readiness score...",
    "Generating expert recommendations...",
]
LOADING_MESSAGE_INTERVAL = 3  # 秒


def loading_message(elapsed_seconds: float) -> str:
    """経過時間に応じて3秒ごとに切り替わる読み込み中メッセージを返す。"""
    index = int(elapsed_seconds // LOADING_MESSAGE_INTERVAL) % len(LOADING_MESSAGES)
    return LOADING_MESSAGES[index]


class SessionView(str, Enum):
    """表示中の画面"""

    INPUT = "input"
    LOADING = "loading"
    ERROR = "error"
    RESULT = "result"


class AssessmentSession:
    """
    1回の準備度評価の画面状態。

    分析の失敗やアップロードの失敗は例外として送出せず、
    error / alert に画面表示用のメッセージとして保持する。
    """

    def __init__(
        self,
        analyzer_factory: Callable[..., ReadinessAnalyzer] = ReadinessAnalyzer,
        llm_name: Optional[str] = None,
    ):
        """
        初期化

        Args:
            analyzer_factory: llm_name を受け取り分析器を返す呼び出し可能オブジェクト
            llm_name: 使用するLLM名。指定されない場合は設定ファイルから取得。
        """
        self.analyzer_factory = analyzer_factory
        self.llm_name = llm_name
        self.documents = DocumentSet()
        self.parsing: Dict[DocumentType, bool] = {t: False for t in DocumentType}
        self.alert: Optional[str] = None
        self.result: Optional[AnalysisResult] = None
        self.error: Optional[str] = None
        self.is_loading = False
        self.review_flagged = False

    @property
    def view(self) -> SessionView:
        if self.is_loading:
            return SessionView.LOADING
        if self.error:
            return SessionView.ERROR
        if self.result is not None:
            return SessionView.RESULT
        return SessionView.INPUT

    @property
    def expert_review_recommended(self) -> bool:
        """結果があり、総合スコアが閾値未満ならTrue"""
        return self.result is not None and needs_expert_review(self.result)

    @property
    def has_no_gaps(self) -> bool:
        return self.result is not None and not self.result.gaps

    def set_text(self, doc_type: DocumentType, text: str) -> None:
        """書類のテキストを置き換える（貼り付け入力）。"""
        self.documents = self.documents.with_text(doc_type, text)

    def load_sample_data(self) -> None:
        """デモ用のサンプル書類を読み込む。"""
        self.documents = sample_documents()
        logger.info("サンプル書類を読み込みました")

    def upload(
        self,
        doc_type: DocumentType,
        filename: str,
        data: bytes,
        content_type: Optional[str] = None,
    ) -> bool:
        """
        アップロードされたファイルからテキストを抽出し、書類を置き換える。
        失敗した場合は alert にメッセージを設定し、既存のテキストは変更しない。

        Args:
            doc_type: 書類の種類
            filename: ファイル名
            data: ファイルの内容
            content_type: ブラウザが報告したMIMEタイプ

        Returns:
            抽出に成功した場合はTrue
        """
        self.parsing[doc_type] = True
        self.alert = None
        try:
            text = extract_text(filename, data, content_type)
        except FinRegXError as e:
            logger.warning(f"ファイルの解析に失敗しました: {filename}: {str(e)}")
            self.alert = f"Failed to parse file: {str(e)}"
            return False
        finally:
            self.parsing[doc_type] = False

        self.set_text(doc_type, text.strip())
        logger.info(f"{doc_type.label} にファイルの内容を読み込みました: {filename}")
        return True

    def dismiss_alert(self) -> None:
        self.alert = None

    def analyze(self) -> Optional[AnalysisResult]:
        """
        現在の書類で分析を実行する。
        失敗した場合は error に "Analysis Failed: ..." を設定する。再試行はしない。

        Returns:
            分析結果。失敗した場合はNone。
        """
        self.is_loading = True
        self.error = None
        self.result = None
        self.review_flagged = False

        try:
            if self.documents.is_empty():
                raise EmptyDocumentsError()
            analyzer = self.analyzer_factory(llm_name=self.llm_name)
            self.result = analyzer.analyze(self.documents)
        except Exception as e:
            # 画面には1つのメッセージとして表示し、詳細はログに残す
            logger.error(
                f"分析に失敗しました: {str(e)}",
                exc_info=not isinstance(e, FinRegXError),
            )
            self.error = f"Analysis Failed: {str(e) or 'An unknown error occurred.'}"
        finally:
            self.is_loading = False

        return self.result

    def flag_for_review(self) -> None:
        """専門家による手動レビューの対象としてマークする。"""
        if self.expert_review_recommended:
            self.review_flagged = True
            logger.info("評価結果を専門家レビューの対象としてマークしました")

    def reset(self) -> None:
        """エラー、読み込み中、結果の状態をクリアする。入力済みの書類は残す。"""
        self.result = None
        self.error = None
        self.is_loading = False
        self.review_flagged = False
