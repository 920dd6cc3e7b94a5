"""
serveコマンドの実装
"""

import sys
from typing import Optional

import click
import uvicorn
from rich.console import Console

from ...utils.config import config
from ...utils.logging import logger

console = Console()

APP_IMPORT_PATH = "finregx.api:app"


@click.command()
@click.option("--host", default=None, help="ホストアドレス（デフォルト: api.host）")
@click.option("--port", "-p", default=None, type=int, help="ポート番号（デフォルト: api.port）")
@click.option("--reload", is_flag=True, help="ファイル変更時に自動リロード")
def serve_command(host: Optional[str], port: Optional[int], reload: bool):
    """
    REST APIサーバーを起動する。

    書類のテキスト抽出、準備度分析、Markdownレポートのエンドポイントを提供する。
    """
    host = host or config.get("api.host", "127.0.0.1")
    port = port or config.get("api.port", 8000)

    console.print(f"FinRegX API: http://{host}:{port}/docs")
    logger.info(f"APIサーバーを起動します: {host}:{port} (reload={reload})")
    try:
        uvicorn.run(APP_IMPORT_PATH, host=host, port=port, reload=reload)
    except Exception as e:
        logger.error(f"サーバー起動中にエラーが発生しました: {str(e)}")
        console.print(f"[bold red]エラー:[/bold red] {str(e)}")
        sys.exit(-1)
