"""
例外モジュール。
例外メッセージはそのまま画面やAPIの応答に表示される。
"""


class FinRegXError(Exception):
    """アプリケーション例外の基底クラス"""


class UnsupportedFileTypeError(FinRegXError):
    """PDF/DOCX以外のファイルがアップロードされた"""

    def __init__(
        self, message: str = "Unsupported file type. Please upload a PDF or DOCX file."
    ):
        super().__init__(message)


class DocumentParseError(FinRegXError):
    """外部ライブラリによるテキスト抽出に失敗した"""


class EmptyDocumentsError(FinRegXError):
    """3つの書類がすべて空"""

    def __init__(
        self,
        message: str = "Please provide content for at least one document to analyze.",
    ):
        super().__init__(message)


class AnalysisError(FinRegXError):
    """LLMによる分析に失敗した"""


class MissingCredentialError(AnalysisError):
    """APIキーが設定されていない"""


class EmptyResponseError(AnalysisError):
    """LLMが空の応答を返した"""

    def __init__(
        self,
        message: str = (
            "The API returned an empty response. "
            "The model may have been unable to process the request."
        ),
    ):
        super().__init__(message)


class InvalidResponseError(AnalysisError):
    """LLMの応答がJSONとして解析できない、またはスキーマに合わない"""
