"""
PDFファイルプロセッサーモジュール。
PyMuPDFを使用してPDFファイルからテキストを抽出する。
"""

from pathlib import Path
from typing import Optional, Union

import fitz  # PyMuPDF

from ..core.exceptions import DocumentParseError
from ..utils.logging import logger

PDF_MIME_TYPE = "application/pdf"


class PdfProcessor:
    """
    PDFファイルプロセッサークラス。
    全ページのテキストを空行区切りで連結して返す。
    """

    mime_types = (PDF_MIME_TYPE,)
    suffixes = (".pdf",)

    def process(self, file_path: Union[str, Path]) -> str:
        """
        PDFファイルからテキストを抽出します。

        Args:
            file_path: 処理するPDFファイルのパス。

        Returns:
            抽出されたテキスト。

        Raises:
            FileNotFoundError: 指定されたファイルが見つからない場合。
            DocumentParseError: PDFの解析に失敗した場合。
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"ファイルが見つかりません: {file_path}")
        return self.process_bytes(file_path.read_bytes(), file_path.name)

    def process_bytes(self, data: bytes, filename: str = "") -> str:
        """
        PDFのバイト列からテキストを抽出します（ブラウザからのアップロード用）。

        Args:
            data: PDFファイルの内容
            filename: ログ出力用のファイル名

        Returns:
            抽出されたテキスト。
        """
        logger.debug(f"PDFファイルを処理中: {filename}")
        try:
            with fitz.open(stream=data, filetype="pdf") as pdf:
                pages = [page.get_text("text") for page in pdf]
        except Exception as e:
            logger.error(f"PDFの解析に失敗しました: {filename}: {str(e)}")
            raise DocumentParseError(str(e)) from e

        text = "\n\n".join(page.strip() for page in pages)
        logger.info(f"PDFからテキストを抽出しました: {filename} ({len(pages)}ページ)")
        return text.strip()

    def supports(
        self, file_path: Union[str, Path], content_type: Optional[str] = None
    ) -> bool:
        """
        指定されたファイルがこのプロセッサーでサポートされる形式（PDF）であるか判定します。
        """
        if content_type in self.mime_types:
            return True
        return Path(str(file_path)).suffix.lower() in self.suffixes
