"""
プロンプト生成モジュール。
システムプロンプト（規制条文と採点ルール）とユーザープロンプト（書類本文）、
およびLLMに渡す応答JSONスキーマを組み立てる。
"""

from typing import Any, Dict, List, Optional

from ..utils.config import config
from .models import Category, DocumentSet, Rule, Severity
from .rules import format_rules

NOT_PROVIDED = "Not provided."

# ユーザープロンプトに並べる順序と見出し
DOCUMENT_HEADINGS = [
    ("business_plan", "Business Plan"),
    ("legal_docs", "Legal Documents"),
    ("policy_docs", "Policy Documents"),
]

GAP_FIELDS = [
    "gapId",
    "category",
    "rule",
    "description",
    "severity",
    "recommendation",
    "expertId",
]

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "overallScore": {
            "type": "NUMBER",
            "description": "Overall readiness score from 0 to 100.",
        },
        "categoryScores": {
            "type": "OBJECT",
            "properties": {c.value: {"type": "NUMBER"} for c in Category},
            "required": [c.value for c in Category],
        },
        "gaps": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "gapId": {
                        "type": "STRING",
                        "description": "A unique identifier for the gap, e.g., GAP-001.",
                    },
                    "category": {
                        "type": "STRING",
                        "enum": [c.value for c in Category],
                    },
                    "rule": {
                        "type": "STRING",
                        "description": "The specific QCB article violated, e.g., 'QCB Article 2.1.1'.",
                    },
                    "description": {
                        "type": "STRING",
                        "description": "A clear explanation of the compliance gap.",
                    },
                    "severity": {
                        "type": "STRING",
                        "enum": [s.value for s in Severity],
                    },
                    "recommendation": {
                        "type": "STRING",
                        "description": "An actionable recommendation to fix the gap.",
                    },
                    "expertId": {
                        "type": "STRING",
                        "description": "A reference to a QDB expert, e.g., 'QDB_EXPERT_002'.",
                    },
                },
                "required": GAP_FIELDS,
            },
        },
    },
    "required": ["overallScore", "categoryScores", "gaps"],
}


def to_json_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Gemini形式のスキーマ（型名が大文字）を標準的なJSON Schemaに変換する。
    OpenAIのstrictモードに合わせてすべてのオブジェクトに
    additionalProperties: false を付与する。

    Args:
        schema: Gemini形式のスキーマ

    Returns:
        JSON Schema
    """
    converted: Dict[str, Any] = {}
    for key, value in schema.items():
        if key == "type":
            converted[key] = value.lower()
        elif key == "properties":
            converted[key] = {k: to_json_schema(v) for k, v in value.items()}
        elif key == "items":
            converted[key] = to_json_schema(value)
        else:
            converted[key] = value
    if converted.get("type") == "object":
        converted["additionalProperties"] = False
    return converted


class PromptGenerator:
    """プロンプト生成クラス"""

    def __init__(self, logger, rules: Optional[List[Rule]] = None):
        self.logger = logger
        self.rules = rules

    def combine_documents(self, documents: DocumentSet) -> str:
        """
        3つの書類を見出し付きで連結する。空の書類は "Not provided." とする。

        Args:
            documents: 書類セット

        Returns:
            連結されたテキスト
        """
        sections = []
        for field_name, heading in DOCUMENT_HEADINGS:
            text = getattr(documents, field_name).strip()
            sections.append(f"**{heading}:**\n{text or NOT_PROVIDED}")
        return "\n---\n".join(sections)

    def get_system_prompt(self) -> str:
        """
        規制条文を埋め込んだシステムプロンプトを取得する。

        Returns:
            システムプロンプト
        """
        template = config.get_prompt_content("system")
        # プレースホルダー以外の波括弧はそのまま残す
        prompt = template.replace("{relevant_rules}", format_rules(self.rules))
        self.logger.debug(f"システムプロンプトを生成しました ({len(prompt)}文字)")
        return prompt

    def get_user_prompt(self, documents: DocumentSet) -> str:
        """
        書類本文を含むユーザープロンプトを取得する。

        Args:
            documents: 書類セット

        Returns:
            ユーザープロンプト
        """
        template = config.get_prompt_content("user")
        prompt = template.replace(
            "{combined_documents}", self.combine_documents(documents)
        )
        self.logger.debug(f"ユーザープロンプトを生成しました ({len(prompt)}文字)")
        return prompt
