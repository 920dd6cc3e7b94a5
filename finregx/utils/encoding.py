"""
テキスト読み込み時にエンコーディングを自動判定するユーティリティ

CLIで .txt / .md の書類を読み込む際に使用する。
試行順は UTF-8 (BOM付き含む) → システム既定 → CP1256 (Windowsのアラビア語環境)。
すべて失敗した場合は UTF-8 で errors="replace" として読み込む。
"""

from __future__ import annotations

import locale
from pathlib import Path
from typing import Iterable, List, Union

FALLBACK_ENCODINGS = ("utf-8-sig", "utf-8", "cp1256")


def _candidate_encodings(extra_encodings: Iterable[str] | None) -> List[str]:
    """重複を除いて優先順にエンコーディング候補を並べる"""
    preferred_locale = locale.getpreferredencoding(False) or "utf-8"
    candidates: List[str] = list(extra_encodings or [])
    candidates.extend(FALLBACK_ENCODINGS[:2])
    candidates.append(preferred_locale)
    candidates.extend(FALLBACK_ENCODINGS[2:])

    seen: set[str] = set()
    ordered: List[str] = []
    for enc in candidates:
        key = enc.lower()
        if key not in seen:
            ordered.append(enc)
            seen.add(key)
    return ordered


def decode_text_auto(data: bytes, extra_encodings: Iterable[str] | None = None) -> str:
    """
    バイト列を複数エンコーディングで試行しながらデコードする。

    Parameters
    ----------
    data: bytes
        デコード対象のバイト列
    extra_encodings: Iterable[str] | None
        追加で試したいエンコーディング名のリスト (先頭が最優先)

    Returns
    -------
    str
        デコードされたテキスト
    """
    for enc in _candidate_encodings(extra_encodings):
        try:
            return data.decode(enc)
        except (UnicodeDecodeError, LookupError):
            continue

    return data.decode("utf-8", errors="replace")


def read_text_auto(
    path: Union[str, Path], extra_encodings: Iterable[str] | None = None
) -> str:
    """
    ファイルを読み込み、decode_text_auto でテキストに変換する。

    Raises
    ------
    FileNotFoundError
        ファイルが存在しない場合
    """
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"ファイルが見つかりません: {p}")
    return decode_text_auto(p.read_bytes(), extra_encodings)
