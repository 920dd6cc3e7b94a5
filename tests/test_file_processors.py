"""
ファイルプロセッサーのテスト
"""

import io
import tempfile
from pathlib import Path

import docx
import fitz
import pytest

from finregx.core.exceptions import DocumentParseError, UnsupportedFileTypeError
from finregx.file_processors import (
    OfficeProcessor,
    PdfProcessor,
    extract_text,
    extract_text_from_path,
    get_processor,
)
from finregx.file_processors.office_processor import DOCX_MIME_TYPE


def make_pdf(*pages: str) -> bytes:
    """指定したテキストを1ページずつ書き込んだPDFを作る"""
    document = fitz.open()
    for text in pages:
        page = document.new_page()
        page.insert_text((72, 72), text)
    data = document.tobytes()
    document.close()
    return data


def make_docx() -> bytes:
    document = docx.Document()
    document.add_paragraph("AML Policy")
    document.add_paragraph("Transactions above QAR 50,000 are reported.")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Compliance Officer"
    table.rows[0].cells[1].text = "To be appointed"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def test_get_processor_by_extension():
    assert isinstance(get_processor("plan.PDF"), PdfProcessor)
    assert isinstance(get_processor("policy.docx"), OfficeProcessor)


def test_get_processor_by_content_type():
    """拡張子が無くてもMIMEタイプで判定できることをテスト"""
    assert isinstance(get_processor("upload", "application/pdf"), PdfProcessor)
    assert isinstance(get_processor("upload", DOCX_MIME_TYPE), OfficeProcessor)


@pytest.mark.parametrize("filename", ["notes.txt", "legacy.doc", "image.png", "noext"])
def test_unsupported_file_type(filename):
    with pytest.raises(UnsupportedFileTypeError) as exc_info:
        get_processor(filename)
    assert str(exc_info.value) == "Unsupported file type. Please upload a PDF or DOCX file."


def test_extract_pdf():
    """全ページのテキストが連結されることをテスト"""
    text = extract_text("plan.pdf", make_pdf("Business Plan", "Initial funding"))

    assert "Business Plan" in text
    assert "Initial funding" in text
    assert text.index("Business Plan") < text.index("Initial funding")
    assert text == text.strip()


def test_extract_docx():
    """段落と表のセルのテキストが抽出されることをテスト"""
    text = extract_text("policy.docx", make_docx(), DOCX_MIME_TYPE)

    assert text.splitlines() == [
        "AML Policy",
        "Transactions above QAR 50,000 are reported.",
        "Compliance Officer | To be appointed",
    ]


def test_corrupt_pdf():
    with pytest.raises(DocumentParseError):
        extract_text("broken.pdf", b"this is not a pdf")


def test_corrupt_docx():
    with pytest.raises(DocumentParseError):
        extract_text("broken.docx", b"this is not a zip archive")


def test_extract_text_from_path():
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "legal.docx"
        path.write_bytes(make_docx())

        assert "AML Policy" in extract_text_from_path(path)


def test_process_missing_file():
    with pytest.raises(FileNotFoundError):
        PdfProcessor().process("does_not_exist.pdf")
