"""
--config オプションの処理を提供するモジュール
"""

from typing import Optional, Tuple

import yaml
from rich.console import Console

from ...utils.config import config

console = Console()

CONFIG_EXAMPLE = """
llm:
  default: "gemini"
ui:
  expert_review_threshold: 60
"""


def load_config(config_path: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    利用者の設定ファイルをグローバルなconfigに重ねて読み込む。
    パスが指定されない場合はデフォルト設定のまま。

    Args:
        config_path: 設定ファイルのパス

    Returns:
        (成功したかどうか, エラーメッセージ)
    """
    if not config_path:
        return True, None

    try:
        config.reload(config_path)
    except FileNotFoundError as e:
        console.print(f"[bold red]エラー:[/bold red] {str(e)}")
        return False, "設定ファイルが見つかりません"
    except yaml.YAMLError as e:
        console.print(
            f"[bold red]エラー:[/bold red] 設定ファイルの読み込みに失敗しました: {str(e)}"
        )
        console.print("\nYAMLファイルの例：")
        console.print(CONFIG_EXAMPLE)
        return False, f"設定ファイルの読み込みに失敗しました: {str(e)}"

    return True, None
