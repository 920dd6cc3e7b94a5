"""
Office文書ファイルプロセッサーモジュール。
python-docxを使用してWord (.docx) ファイルからテキストを抽出する。
"""

import io
from pathlib import Path
from typing import List, Optional, Union

from docx import Document

from ..core.exceptions import DocumentParseError
from ..utils.logging import logger

DOCX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


class OfficeProcessor:
    """
    Office文書ファイルプロセッサークラス。
    段落と表のセルのテキストを改行区切りで返す。旧形式の .doc は対象外。
    """

    mime_types = (DOCX_MIME_TYPE,)
    suffixes = (".docx",)

    def process(self, file_path: Union[str, Path]) -> str:
        """
        Word文書ファイルからテキストを抽出します。

        Args:
            file_path: 処理するWord文書ファイルのパス。

        Returns:
            抽出されたテキスト。

        Raises:
            FileNotFoundError: 指定されたファイルが見つからない場合。
            DocumentParseError: 文書の解析に失敗した場合。
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"ファイルが見つかりません: {file_path}")
        return self.process_bytes(file_path.read_bytes(), file_path.name)

    def process_bytes(self, data: bytes, filename: str = "") -> str:
        """
        Word文書のバイト列からテキストを抽出します（ブラウザからのアップロード用）。

        Args:
            data: .docxファイルの内容
            filename: ログ出力用のファイル名

        Returns:
            抽出されたテキスト。
        """
        logger.debug(f"Officeファイルを処理中: {filename}")
        try:
            document = Document(io.BytesIO(data))
        except Exception as e:
            logger.error(f"Word文書の解析に失敗しました: {filename}: {str(e)}")
            raise DocumentParseError(str(e)) from e

        lines: List[str] = [paragraph.text for paragraph in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    lines.append(" | ".join(cells))

        logger.info(f"Word文書からテキストを抽出しました: {filename}")
        return "\n".join(lines).strip()

    def supports(
        self, file_path: Union[str, Path], content_type: Optional[str] = None
    ) -> bool:
        """
        指定されたファイルがこのプロセッサーでサポートされる形式（.docx）であるか判定します。
        """
        if content_type in self.mime_types:
            return True
        return Path(str(file_path)).suffix.lower() in self.suffixes
