"""
OpenAI LLMプロセッサーモジュール。
OpenAI APIを使用したLLMプロセッサーの実装。
"""

from typing import Any, Dict, List, Optional

import openai

from ..core.exceptions import MissingCredentialError
from ..core.models import Rule
from ..core.prompt_generator import to_json_schema
from ..utils.config import config
from .base import BaseLLMProcessor


class OpenAIProcessor(BaseLLMProcessor):
    """OpenAI LLMプロセッサークラス"""

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
            api_key = config.get_openai_api_key()
        except ValueError as e:
            raise MissingCredentialError(str(e)) from e
        openai.api_key = api_key

        if not self.model_config:
            self.model_config = config.get_llm_config("openai")

        self.model_name = self.model_config.get("model_name", "gpt-4o")
        self.temperature = self.model_config.get("temperature", 0.1)
        self.max_tokens = self.model_config.get("max_tokens", 4096)

        # Structured Outputs 用のスキーマ
        self.response_format = {
            "type": "json_schema",
            "json_schema": {
                "name": "readiness_assessment",
                "strict": True,
                "schema": to_json_schema(self.response_schema),
            },
        }

        self.logger.info(f"OpenAIプロセッサーを初期化しました: {self.model_name}")

    def call_llm(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        """
        OpenAI APIを呼び出す。

        Args:
            system_prompt: システムプロンプト
            user_prompt: ユーザープロンプト

        Returns:
            OpenAI APIからの応答
        """
        self.logger.debug(f"OpenAI APIを呼び出します: {self.model_name}")

        try:
            response = openai.chat.completions.create(
                model=self.model_name,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                response_format=self.response_format,
            )
        except Exception as e:
            self.logger.error(f"OpenAI API呼び出し中にエラーが発生しました: {str(e)}")
            raise

        return {
            "text": response.choices[0].message.content or "",
            "raw_response": response,
        }
