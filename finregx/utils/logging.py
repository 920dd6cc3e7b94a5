"""
ロギングモジュール。
アプリケーション全体で使用するロガーを設定する。
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from .config import config

# 外部SDKのデバッグ出力はアプリのログレベルに関わらず抑える
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "google", "openai", "fitz")


def setup_logger(
    name: str = "finregx",
    log_file: Optional[str] = None,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """
    ロガーを設定する。

    Args:
        name: ロガー名
        log_file: ログファイルのパス。指定されない場合は設定から取得。
        quiet_loggers: WARNING以上のみ出力させる外部ライブラリのロガー名

    Returns:
        設定されたロガー
    """
    log_level_str = str(config.get("logging.level", "INFO"))
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    # Streamlitやuvicornのルートハンドラーとの二重出力を防ぐ
    logger.propagate = False

    for quiet_name in quiet_loggers:
        logging.getLogger(quiet_name).setLevel(max(log_level, logging.WARNING))

    # ハンドラーが既に設定されている場合は何もしない（Streamlitの再実行対策）
    if logger.handlers:
        return logger

    log_format = config.get(
        "logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is None:
        log_file = config.get("logging.file")

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def set_level(level: str) -> None:
    """
    実行中にログレベルを変更する（CLIの--verbose用）。

    Args:
        level: ログレベル名（DEBUG, INFOなど）
    """
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


# デフォルトロガー
logger = setup_logger()
