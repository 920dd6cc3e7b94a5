"""
設定管理モジュール。
パッケージ内の default.yaml、利用者のYAML、環境変数の順に設定を重ねる。
APIキーは設定ファイルには持たず、取得のたびに環境変数から読む。
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from dotenv import load_dotenv

# .envファイルを読み込む
load_dotenv()

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "default.yaml"

# 環境変数名 → 上書きする設定キー
ENV_OVERRIDES: Dict[str, List[str]] = {
    "FINREGX_LLM": ["llm", "default"],
    "GEMINI_MODEL_NAME": ["llm", "models", "gemini", "model_name"],
    "OPENAI_MODEL_NAME": ["llm", "models", "openai", "model_name"],
    "LOG_LEVEL": ["logging", "level"],
}

# プロバイダー → APIキーを探す環境変数（先頭を優先）
API_KEY_ENV: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "API_KEY"),
    "openai": ("OPENAI_API_KEY",),
}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    辞書を再帰的にマージした新しい辞書を返す。override 側の値を優先する。
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"設定ファイルが見つかりません: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Config:
    """設定管理クラス"""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        設定を初期化する。

        Args:
            config_path: 利用者の設定ファイルのパス。default.yaml に重ねて読み込む。

        Raises:
            FileNotFoundError: 設定ファイルが存在しない場合
        """
        self.config_dir = CONFIG_DIR
        self.config_path: Optional[Path] = None
        self.config: Dict[str, Any] = {}
        self.reload(config_path)

    def reload(self, config_path: Optional[Union[str, Path]] = None) -> None:
        """
        設定を読み直す。読み込みに失敗した場合は現在の設定を変更しない。

        Args:
            config_path: 利用者の設定ファイルのパス
        """
        settings = _read_yaml(DEFAULT_CONFIG_PATH)

        path = Path(config_path) if config_path else None
        if path and path.resolve() != DEFAULT_CONFIG_PATH:
            settings = deep_merge(settings, _read_yaml(path))

        for env_name, keys in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                self._set(settings, keys, value)

        self.config = settings
        self.config_path = path

    @staticmethod
    def _set(settings: Dict[str, Any], keys: List[str], value: Any) -> None:
        current = settings
        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[keys[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        設定値を取得する。

        Args:
            key: ドット区切りの設定キー（例: "llm.models.gemini.model_name"）
            default: キーが存在しない場合の値

        Returns:
            設定値
        """
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def get_api_key(self, provider: str) -> str:
        """
        プロバイダーのAPIキーを環境変数から取得する。

        Raises:
            ValueError: APIキーが設定されていない場合。メッセージはそのまま画面に表示される。
        """
        env_names = API_KEY_ENV[provider]
        for env_name in env_names:
            api_key = os.getenv(env_name)
            if api_key:
                return api_key
        raise ValueError(f"{env_names[0]} environment variable is not set.")

    def get_gemini_api_key(self) -> str:
        """Gemini APIキー（GEMINI_API_KEY、無ければAPI_KEY）"""
        return self.get_api_key("gemini")

    def get_openai_api_key(self) -> str:
        """OpenAI APIキー（OPENAI_API_KEY）"""
        return self.get_api_key("openai")

    def get_llm_config(self, llm_name: Optional[str] = None) -> Dict[str, Any]:
        """
        LLMのモデル設定を取得する。

        Args:
            llm_name: LLM名。指定されない場合は llm.default。

        Raises:
            ValueError: 設定が存在しない場合
        """
        llm_name = llm_name or self.get("llm.default", "gemini")
        llm_config = self.get(f"llm.models.{llm_name}")
        if not llm_config:
            raise ValueError(f"LLM '{llm_name}' の設定が見つかりません。")
        return llm_config

    def get_prompt_content(self, prompt_key: str) -> str:
        """
        プロンプトテンプレートを読み込む。
        相対パスはカレントディレクトリ、configディレクトリの順に探す。

        Args:
            prompt_key: prompts 以下のキー（"system" または "user"）

        Raises:
            ValueError: キーが設定に無い場合
            FileNotFoundError: ファイルが見つからない場合
        """
        relative = self.get(f"prompts.{prompt_key}")
        if not relative:
            raise ValueError(f"プロンプト設定のキー '{prompt_key}' が見つかりません。")

        for candidate in (Path(relative), self.config_dir / relative):
            if candidate.is_file():
                return candidate.read_text(encoding="utf-8")
        raise FileNotFoundError(f"プロンプトファイルが見つかりません: {relative}")


# シングルトンインスタンス
config = Config()
