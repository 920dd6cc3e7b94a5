import json
import re
from typing import Any, Dict

from pydantic import ValidationError

from .exceptions import EmptyResponseError, InvalidResponseError
from .models import AnalysisResult

INVALID_JSON_MESSAGE = (
    "The model returned an invalid JSON format. "
    "Please check the input documents for unusual characters or formatting."
)
SCHEMA_MISMATCH_MESSAGE = (
    "The model returned a response that does not match the expected schema."
)


class ResponseParser:
    """LLM応答解析クラス"""

    def __init__(self, logger):
        self.logger = logger

    def _extract_json_block(self, text: str) -> str:
        """
        応答テキストからJSON部分を取り出す。
        JSONモードでも ```json ... ``` で囲まれて返ることがあるため両方に対応する。
        """
        match = re.search(r"```(?:json)?\s*(.*?)\s*```", text, re.DOTALL)
        if match:
            self.logger.debug("JSONブロックを抽出しました。")
            return match.group(1).strip()
        return text.strip()

    def parse(self, response: Dict[str, Any]) -> AnalysisResult:
        """
        LLMの応答を解析し、Pydanticスキーマで検証する。

        Args:
            response: LLMからの応答（"text"キーに本文）

        Returns:
            分析結果

        Raises:
            EmptyResponseError: 応答が空の場合
            InvalidResponseError: JSONとして不正、またはスキーマに合わない場合
        """
        text = (response.get("text") or "").strip()
        if not text:
            self.logger.error("LLMから空の応答が返されました")
            raise EmptyResponseError()

        json_block = self._extract_json_block(text)
        self.logger.debug(f"解析対象のJSONブロック:\n{json_block}")

        try:
            payload = json.loads(json_block)
        except json.JSONDecodeError as e:
            self.logger.error(f"JSON解析エラー: {e}")
            self.logger.error(f"LLMからの生応答テキスト (全体):\n{text}")
            raise InvalidResponseError(INVALID_JSON_MESSAGE) from e

        try:
            return AnalysisResult.model_validate(payload)
        except ValidationError as e:
            self.logger.error(f"Pydanticバリデーションエラー: {e}")
            self.logger.error(f"解析対象テキスト (抽出されたJSONブロック):\n{json_block}")
            raise InvalidResponseError(SCHEMA_MISMATCH_MESSAGE) from e
