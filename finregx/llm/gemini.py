"""
Gemini LLMプロセッサーモジュール。
Google Gemini APIを使用したLLMプロセッサーの実装。
"""

from typing import Any, Dict, List, Optional

import google.generativeai as genai

from ..core.exceptions import MissingCredentialError
from ..core.models import Rule
from ..utils.config import config
from .base import BaseLLMProcessor


class GeminiProcessor(BaseLLMProcessor):
    """Gemini LLMプロセッサークラス"""

    def __init__(
        self,
        model_config: Optional[Dict[str, Any]] = None,
        rules: Optional[List[Rule]] = None,
    ):
        """
        初期化

        Args:
            model_config: モデル設定。指定されない場合は設定ファイルから取得。
            rules: プロンプトに埋め込む条文

        Raises:
            MissingCredentialError: APIキーが設定されていない場合
        """
        super().__init__(model_config, rules)

        try:
            api_key = config.get_gemini_api_key()
        except ValueError as e:
            raise MissingCredentialError(str(e)) from e
        genai.configure(api_key=api_key)

        if not self.model_config:
            self.model_config = config.get_llm_config("gemini")

        self.model_name = self.model_config.get("model_name", "gemini-2.5-pro")
        self.generation_config = {
            "temperature": self.model_config.get("temperature", 0.1),
            "max_output_tokens": self.model_config.get("max_output_tokens", 8192),
            "response_mime_type": "application/json",
            "response_schema": self.response_schema,
        }

        self.logger.info(f"Geminiプロセッサーを初期化しました: {self.model_name}")

    def call_llm(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        """
        Gemini APIを呼び出す。
        システムプロンプトはモデル生成時に system_instruction として渡す。

        Args:
            system_prompt: システムプロンプト
            user_prompt: ユーザープロンプト

        Returns:
            Gemini APIからの応答
        """
        self.logger.debug(f"Gemini APIを呼び出します: {self.model_name}")

        try:
            model = genai.GenerativeModel(
                model_name=self.model_name,
                generation_config=self.generation_config,
                system_instruction=system_prompt,
            )
            response = model.generate_content(user_prompt)
        except Exception as e:
            self.logger.error(f"Gemini API呼び出し中にエラーが発生しました: {str(e)}")
            raise

        # 安全フィルタ等で候補が無い場合 response.text は ValueError を送出する
        try:
            text = response.text
        except ValueError as e:
            self.logger.warning(f"Geminiの応答に本文がありません: {str(e)}")
            text = ""

        return {"text": text, "raw_response": response}
