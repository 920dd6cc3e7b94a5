"""
コマンドラインインターフェースパッケージ
"""

import click

from finregx.cli.commands.check import check_command
from finregx.cli.commands.extract import extract_command
from finregx.cli.commands.serve import serve_command
from finregx.cli.commands.ui import ui_command


@click.group()
@click.version_option(package_name="finregx")
def cli():
    """FinRegX 規制準備度プレスクリーニングツール"""


# コマンドを登録
cli.add_command(check_command, name="check")
cli.add_command(extract_command, name="extract")
cli.add_command(serve_command, name="serve")
cli.add_command(ui_command, name="ui")


def main():
    """エントリーポイント"""
    cli()
