"""
extractコマンドの実装
"""

import sys
from typing import Optional

import click
from rich.console import Console

from ...core.exceptions import FinRegXError
from ...file_processors import extract_text_from_path
from ...utils.logging import logger

console = Console()


@click.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    "--output",
    "-o",
    type=click.Path(writable=True),
    help="抽出したテキストの出力先パス（指定しない場合は標準出力）",
)
def extract_command(file_path: str, output: Optional[str] = None):
    """
    PDF/DOCXファイルからテキストを抽出する。
    """
    try:
        text = extract_text_from_path(file_path)
    except FinRegXError as e:
        logger.error(f"テキスト抽出に失敗しました: {file_path}: {str(e)}")
        console.print(f"[bold red]Failed to parse file:[/bold red] {str(e)}")
        sys.exit(-1)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text)
        console.print(f"テキストを保存しました: {output} ({len(text)}文字)")
    else:
        click.echo(text)
