"""
checkコマンドの実装
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from ...core.analyzer import ReadinessAnalyzer
from ...core.exceptions import FinRegXError
from ...core.models import AnalysisResult, DocumentSet, DocumentType
from ...core.report import (
    CATEGORY_DISPLAY,
    SEVERITY_ICONS,
    format_score,
    needs_expert_review,
    score_color,
)
from ...core.rules import get_expert
from ...core.samples import sample_documents
from ...file_processors import extract_text_from_path
from ...utils.encoding import read_text_auto
from ...utils.logging import logger, set_level
from ..handlers.config import load_config

# そのままテキストとして読み込む拡張子
PLAIN_TEXT_SUFFIXES = {".txt", ".md"}


def read_document(path: str) -> str:
    """
    書類ファイルを読み込む。テキストファイル以外はPDF/DOCXとして抽出する。

    Raises:
        UnsupportedFileTypeError: 対応していない形式の場合
        DocumentParseError: 抽出に失敗した場合
    """
    if Path(path).suffix.lower() in PLAIN_TEXT_SUFFIXES:
        return read_text_auto(path)
    return extract_text_from_path(path)


class CheckCommand:
    """
    checkコマンドの処理をカプセル化するクラス
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        business_plan: Optional[str] = None,
        legal_docs: Optional[str] = None,
        policy_docs: Optional[str] = None,
        sample: bool = False,
        output: Optional[str] = None,
        llm: Optional[str] = None,
        as_json: bool = False,
        verbose: bool = False,
    ):
        self.config_path = config_path
        self.files = {
            DocumentType.BUSINESS_PLAN: business_plan,
            DocumentType.LEGAL_DOCS: legal_docs,
            DocumentType.POLICY_DOCS: policy_docs,
        }
        self.sample = sample
        self.output = output
        self.llm = llm
        self.as_json = as_json
        self.verbose = verbose
        self.console = Console()

    def load_documents(self) -> DocumentSet:
        """
        サンプルまたは指定されたファイルから書類セットを作る。
        ファイルが指定された書類はサンプルの内容を上書きする。
        """
        documents = sample_documents() if self.sample else DocumentSet()
        for doc_type, path in self.files.items():
            if path:
                logger.info(f"{doc_type.label} を読み込みます: {path}")
                documents = documents.with_text(doc_type, read_document(path).strip())
        return documents

    def print_result(self, result: AnalysisResult) -> None:
        """スコアカードとギャップ一覧を表形式で表示する。"""
        color = score_color(result.overall_score)
        self.console.print(
            f"\n[bold]Overall Readiness:[/bold] [{color}]{format_score(result.overall_score)}[/{color}] / 100"
        )

        scorecard = Table(title="Readiness Scorecard")
        scorecard.add_column("Category")
        scorecard.add_column("Score", justify="right")
        for category, label in CATEGORY_DISPLAY:
            score = result.category_scores.get(category)
            scorecard.add_row(
                label, f"[{score_color(score)}]{format_score(score)}[/{score_color(score)}]"
            )
        self.console.print(scorecard)

        if needs_expert_review(result):
            self.console.print(
                "[bold yellow]⚠ Expert Review Recommended:[/bold yellow] a manual review "
                "by a compliance expert is highly recommended."
            )

        if not result.gaps:
            self.console.print("[bold green]✅ No Compliance Gaps Found![/bold green]")
            return

        gaps = Table(title="Compliance Gap Analysis", show_lines=True)
        gaps.add_column("Rule Violated")
        gaps.add_column("Severity")
        gaps.add_column("Description")
        gaps.add_column("Recommendation")
        for gap in result.gaps:
            recommendation = gap.recommendation
            resource = get_expert(gap.expert_id)
            if resource:
                recommendation += f"\n[dim]Support: {resource.name}[/dim]"
            gaps.add_row(
                gap.rule,
                f"{SEVERITY_ICONS.get(gap.severity, '')} {gap.severity.value}",
                gap.description,
                recommendation,
            )
        self.console.print(gaps)

    def run(self):
        """
        checkコマンドの実行ロジック。

        終了コード: 0 = 専門家レビュー不要、1 = 専門家レビュー推奨、-1 = エラー
        """
        if self.verbose:
            set_level("DEBUG")

        success, _ = load_config(self.config_path)
        if not success:
            sys.exit(-1)

        try:
            documents = self.load_documents()
            analyzer = ReadinessAnalyzer(llm_name=self.llm)
            with self.console.status("Analyzing regulatory compliance..."):
                result = analyzer.analyze(documents, self.output)
        except FinRegXError as e:
            logger.error(f"分析に失敗しました: {str(e)}")
            self.console.print(f"[bold red]Analysis Failed:[/bold red] {str(e)}")
            sys.exit(-1)
        except Exception as e:
            logger.exception("エラーが発生しました")
            self.console.print(f"[bold red]エラー:[/bold red] {str(e)}")
            sys.exit(-1)

        if self.as_json:
            click.echo(json.dumps(result.to_api_dict(), ensure_ascii=False, indent=2))
        else:
            self.print_result(result)
            if self.output:
                self.console.print(f"\nレポートを保存しました: {self.output}")
            elif self.verbose:
                report = analyzer.report_generator.generate_report(result)
                self.console.print(Markdown(report))

        sys.exit(1 if needs_expert_review(result) else 0)


@click.command()
@click.option(
    "--business-plan",
    "-b",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="事業計画書のパス（.txt/.md/.pdf/.docx）",
)
@click.option(
    "--legal-docs",
    "-l",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="法務書類のパス（.txt/.md/.pdf/.docx）",
)
@click.option(
    "--policy-docs",
    "-p",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="社内規程のパス（.txt/.md/.pdf/.docx）",
)
@click.option("--sample", is_flag=True, help="デモ用のサンプル書類を使用")
@click.option(
    "--output",
    "-o",
    type=click.Path(writable=True),
    help="Markdownレポートの出力先パス",
)
@click.option(
    "--llm",
    "-m",
    type=click.Choice(ReadinessAnalyzer.get_available_processors()),
    default=None,
    help="使用するLLM（デフォルト: 設定ファイルの値）",
)
@click.option("--json", "as_json", is_flag=True, help="結果をJSONで出力")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(readable=True),
    help="追加の設定ファイルのパス",
)
@click.option("--verbose", "-v", is_flag=True, help="詳細なログを出力")
def check_command(
    business_plan: Optional[str] = None,
    legal_docs: Optional[str] = None,
    policy_docs: Optional[str] = None,
    sample: bool = False,
    output: Optional[str] = None,
    llm: Optional[str] = None,
    as_json: bool = False,
    config_path: Optional[str] = None,
    verbose: bool = False,
):
    """
    書類の規制準備度を評価する。

    事業計画書、法務書類、社内規程をQCBの規制要件と照合し、
    準備度スコアとコンプライアンス上のギャップを表示する。
    """
    command = CheckCommand(
        config_path=config_path,
        business_plan=business_plan,
        legal_docs=legal_docs,
        policy_docs=policy_docs,
        sample=sample,
        output=output,
        llm=llm,
        as_json=as_json,
        verbose=verbose,
    )
    command.run()
