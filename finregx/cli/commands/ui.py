"""
uiコマンドの実装
"""

import subprocess
import sys
from pathlib import Path

import click
from rich.console import Console

from ...utils.logging import logger

console = Console()

APP_PATH = Path(__file__).resolve().parents[2] / "ui" / "app.py"


@click.command()
@click.option("--port", "-p", default=8501, type=int, help="ポート番号")
@click.option("--headless", is_flag=True, help="ブラウザを自動で開かない")
def ui_command(port: int, headless: bool):
    """
    ブラウザUIを起動する。

    Streamlitで書類の入力、分析、結果表示を行う画面を提供する。
    """
    command = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        str(APP_PATH),
        "--server.port",
        str(port),
    ]
    if headless:
        command += ["--server.headless", "true"]

    console.print(f"ブラウザUIを起動します: http://localhost:{port}")
    logger.debug(f"実行コマンド: {' '.join(command)}")
    try:
        returncode = subprocess.call(command)
    except KeyboardInterrupt:
        returncode = 0
    sys.exit(returncode)
