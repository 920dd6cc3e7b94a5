"""
CLIモジュールのテスト
"""

import json
from pathlib import Path
from unittest import mock

from click.testing import CliRunner
from conftest import make_result
from test_file_processors import make_docx

from finregx.cli import cli
from finregx.core.models import DocumentType
from finregx.core.samples import SAMPLE_LEGAL_DOCS


def test_check_command_with_sample():
    """サンプル書類で分析し、JSONを出力できることをテスト"""
    runner = CliRunner()

    with mock.patch("finregx.cli.commands.check.ReadinessAnalyzer") as analyzer_class:
        analyzer_class.return_value.analyze.return_value = make_result(72)
        result = runner.invoke(cli, ["check", "--sample", "--json", "--llm", "openai"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output[result.output.index("{"):])
    assert data["overallScore"] == 72
    analyzer_class.assert_called_once_with(llm_name="openai")
    documents = analyzer_class.return_value.analyze.call_args[0][0]
    assert documents.get(DocumentType.LEGAL_DOCS) == SAMPLE_LEGAL_DOCS


def test_check_command_expert_review_exit_code():
    """総合スコアが閾値未満の場合は終了コード1になることをテスト"""
    runner = CliRunner()

    with mock.patch("finregx.cli.commands.check.ReadinessAnalyzer") as analyzer_class:
        analyzer_class.return_value.analyze.return_value = make_result(45)
        result = runner.invoke(cli, ["check", "--sample"])

    assert result.exit_code == 1
    assert "Expert Review Recommended" in result.output
    assert "Compliance Gap Analysis" in result.output


def test_check_command_reads_files():
    """テキストファイルとDOCXファイルから書類を読み込めることをテスト"""
    runner = CliRunner()

    with runner.isolated_filesystem():
        Path("plan.txt").write_text("PayQatar business plan", encoding="utf-8")
        Path("policy.docx").write_bytes(make_docx())

        with mock.patch(
            "finregx.cli.commands.check.ReadinessAnalyzer"
        ) as analyzer_class:
            analyzer_class.return_value.analyze.return_value = make_result(90, [])
            result = runner.invoke(
                cli,
                ["check", "-b", "plan.txt", "-p", "policy.docx", "-o", "report.md"],
            )

    assert result.exit_code == 0, result.output
    assert "No Compliance Gaps Found!" in result.output
    documents, output = analyzer_class.return_value.analyze.call_args[0]
    assert documents.get(DocumentType.BUSINESS_PLAN) == "PayQatar business plan"
    assert "AML Policy" in documents.get(DocumentType.POLICY_DOCS)
    assert documents.get(DocumentType.LEGAL_DOCS) == ""
    assert output == "report.md"


def test_check_command_without_documents():
    """書類が無い場合はエラーになることをテスト"""
    runner = CliRunner()

    result = runner.invoke(cli, ["check"])

    assert result.exit_code != 0
    assert "Please provide content for at least one document" in result.output


def test_check_command_unsupported_file():
    runner = CliRunner()

    with runner.isolated_filesystem():
        Path("plan.csv").write_text("a,b", encoding="utf-8")
        result = runner.invoke(cli, ["check", "-b", "plan.csv"])

    assert result.exit_code != 0
    assert "Unsupported file type" in result.output


def test_check_command_config_not_found():
    runner = CliRunner()

    result = runner.invoke(cli, ["check", "--sample", "-c", "missing.yaml"])

    assert result.exit_code != 0
    assert "設定ファイルが見つかりません" in result.output


def test_extract_command():
    runner = CliRunner()

    with runner.isolated_filesystem():
        Path("policy.docx").write_bytes(make_docx())

        result = runner.invoke(cli, ["extract", "policy.docx"])
        assert result.exit_code == 0
        assert "Compliance Officer | To be appointed" in result.output

        result = runner.invoke(cli, ["extract", "policy.docx", "-o", "policy.txt"])
        assert result.exit_code == 0
        assert "AML Policy" in Path("policy.txt").read_text(encoding="utf-8")


def test_extract_command_unsupported():
    runner = CliRunner()

    with runner.isolated_filesystem():
        Path("notes.txt").write_text("plain", encoding="utf-8")
        result = runner.invoke(cli, ["extract", "notes.txt"])

    assert result.exit_code != 0
    assert "Failed to parse file" in result.output


@mock.patch("finregx.cli.commands.serve.uvicorn.run")
def test_serve_command(mock_run):
    runner = CliRunner()

    result = runner.invoke(cli, ["serve", "--port", "9000"])

    assert result.exit_code == 0
    mock_run.assert_called_once_with(
        "finregx.api:app", host="127.0.0.1", port=9000, reload=False
    )


@mock.patch("finregx.cli.commands.ui.subprocess.call", return_value=0)
def test_ui_command(mock_call):
    runner = CliRunner()

    result = runner.invoke(cli, ["ui", "--headless"])

    assert result.exit_code == 0
    command = mock_call.call_args[0][0]
    assert command[1:4] == ["-m", "streamlit", "run"]
    assert command[4].endswith("app.py")
    assert command[-2:] == ["--server.headless", "true"]
