"""
データモデルモジュール。
書類セット、ギャップ、スコア、分析結果などのデータ構造を定義する。
JSONのキー名はLLMの応答スキーマ（camelCase）に合わせてエイリアスで定義する。
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class DocumentType(str, Enum):
    """書類の種類を表す列挙型"""

    BUSINESS_PLAN = "businessPlan"
    LEGAL_DOCS = "legalDocs"
    POLICY_DOCS = "policyDocs"

    @property
    def label(self) -> str:
        """画面表示用のラベル"""
        return DOCUMENT_LABELS[self]

    @property
    def field_name(self) -> str:
        """DocumentSet上の属性名"""
        return DOCUMENT_FIELDS[self]


DOCUMENT_LABELS: Dict[DocumentType, str] = {
    DocumentType.BUSINESS_PLAN: "Business Plan",
    DocumentType.LEGAL_DOCS: "Legal Docs",
    DocumentType.POLICY_DOCS: "Policy Docs",
}

DOCUMENT_FIELDS: Dict[DocumentType, str] = {
    DocumentType.BUSINESS_PLAN: "business_plan",
    DocumentType.LEGAL_DOCS: "legal_docs",
    DocumentType.POLICY_DOCS: "policy_docs",
}


class Category(str, Enum):
    """規制カテゴリ"""

    AML = "AML"
    GOVERNANCE = "Governance"
    CAPITAL = "Capital"
    DATA_RESIDENCY = "Data Residency"


class Severity(str, Enum):
    """ギャップの重大度"""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class DocumentSet(BaseModel):
    """分析対象の3種類の書類"""

    model_config = ConfigDict(populate_by_name=True)

    business_plan: str = Field(default="", alias="businessPlan")
    legal_docs: str = Field(default="", alias="legalDocs")
    policy_docs: str = Field(default="", alias="policyDocs")

    def get(self, doc_type: DocumentType) -> str:
        """指定した種類の書類テキストを返す。"""
        return getattr(self, doc_type.field_name)

    def with_text(self, doc_type: DocumentType, text: str) -> "DocumentSet":
        """指定した種類の書類だけを差し替えた新しいDocumentSetを返す。"""
        return self.model_copy(update={doc_type.field_name: text})

    def is_empty(self) -> bool:
        """3つの書類がすべて空（空白のみを含む）ならTrue"""
        return not any(self.get(doc_type).strip() for doc_type in DocumentType)


class Gap(BaseModel):
    """コンプライアンス上のギャップ1件"""

    model_config = ConfigDict(populate_by_name=True)

    gap_id: str = Field(alias="gapId")
    category: Category
    rule: str
    description: str
    severity: Severity
    recommendation: str
    expert_id: str = Field(alias="expertId")


class CategoryScores(BaseModel):
    """4カテゴリのスコア（0〜100）"""

    model_config = ConfigDict(populate_by_name=True)

    aml: float = Field(alias="AML")
    governance: float = Field(alias="Governance")
    capital: float = Field(alias="Capital")
    data_residency: float = Field(alias="Data Residency")

    def get(self, category: Category) -> float:
        """カテゴリに対応するスコアを返す。"""
        return {
            Category.AML: self.aml,
            Category.GOVERNANCE: self.governance,
            Category.CAPITAL: self.capital,
            Category.DATA_RESIDENCY: self.data_residency,
        }[category]


class AnalysisResult(BaseModel):
    """LLMから返された準備度評価の結果"""

    model_config = ConfigDict(populate_by_name=True)

    overall_score: float = Field(alias="overallScore")
    category_scores: CategoryScores = Field(alias="categoryScores")
    gaps: List[Gap] = Field(default_factory=list)

    def to_api_dict(self) -> dict:
        """応答スキーマと同じキー名の辞書に変換する。"""
        return self.model_dump(by_alias=True, mode="json")


class ExpertResource(BaseModel):
    """ギャップから参照される専門家・支援サービス"""

    name: str
    description: str
    link: str


class Rule(BaseModel):
    """規制条文1件"""

    model_config = ConfigDict(populate_by_name=True)

    rule_id: str = Field(alias="ruleId")
    category: Category
    text: str
