"""
ファイルプロセッサーパッケージ。

アップロードされたファイルからテキストコンテンツを抽出するためのプロセッサーを含みます。
- pdf_processor.py: PDF (PyMuPDF)
- office_processor.py: Word .docx (python-docx)

上記以外の形式は UnsupportedFileTypeError となります。
"""

from pathlib import Path
from typing import List, Optional, Union

from ..core.exceptions import UnsupportedFileTypeError
from .office_processor import OfficeProcessor
from .pdf_processor import PdfProcessor

AVAILABLE_PROCESSORS: List = [PdfProcessor(), OfficeProcessor()]

# ブラウザのファイル選択ダイアログに渡す拡張子
ACCEPTED_EXTENSIONS = ["pdf", "docx"]


def get_processor(filename: str, content_type: Optional[str] = None):
    """
    ファイル名またはMIMEタイプに対応するプロセッサーを返す。

    Raises:
        UnsupportedFileTypeError: 対応するプロセッサーが無い場合
    """
    for processor in AVAILABLE_PROCESSORS:
        if processor.supports(filename, content_type):
            return processor
    raise UnsupportedFileTypeError()


def extract_text(
    filename: str, data: bytes, content_type: Optional[str] = None
) -> str:
    """
    アップロードされたファイルの内容からテキストを抽出する。

    Args:
        filename: 元のファイル名
        data: ファイルの内容
        content_type: ブラウザが報告したMIMEタイプ

    Returns:
        抽出されたテキスト（前後の空白は除去済み）
    """
    return get_processor(filename, content_type).process_bytes(data, filename)


def extract_text_from_path(file_path: Union[str, Path]) -> str:
    """ファイルパスからテキストを抽出する。"""
    path = Path(file_path)
    return get_processor(path.name).process(path)


__all__ = [
    "ACCEPTED_EXTENSIONS",
    "AVAILABLE_PROCESSORS",
    "OfficeProcessor",
    "PdfProcessor",
    "extract_text",
    "extract_text_from_path",
    "get_processor",
]
