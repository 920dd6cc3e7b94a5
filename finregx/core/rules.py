"""
QCB規制条文と専門家リソースの静的データ。
条文テキストはシステムプロンプトにそのまま埋め込まれる。
"""

from typing import Dict, List, Optional

from .models import Category, ExpertResource, Rule

QCB_RULES: List[Rule] = [
    Rule(
        rule_id="1.1.1",
        category=Category.GOVERNANCE,
        text=(
            "**Article 1.1.1: Governance & Compliance - Compliance Officer**\n"
            "The startup must appoint a qualified and independent Compliance Officer."
        ),
    ),
    Rule(
        rule_id="1.1.2",
        category=Category.GOVERNANCE,
        text=(
            "**Article 1.1.2: Governance & Compliance - Organizational Structure**\n"
            "The startup must have a clear organizational structure defining roles "
            "and responsibilities."
        ),
    ),
    Rule(
        rule_id="1.2.1",
        category=Category.CAPITAL,
        text=(
            "**Article 1.2.1: Capital Requirements - Minimum Capital**\n"
            "The startup must meet the minimum paid-up capital requirement of "
            "QAR 1,000,000."
        ),
    ),
    Rule(
        rule_id="1.2.2",
        category=Category.CAPITAL,
        text=(
            "**Article 1.2.2: Capital Requirements - Source of Funds**\n"
            "The source of funds must be clearly documented and legitimate."
        ),
    ),
    Rule(
        rule_id="2.1.1",
        category=Category.DATA_RESIDENCY,
        text=(
            "**Article 2.1.1: Data Management & Residency - Data Storage**\n"
            "All customer financial data must be stored on servers physically "
            "located within Qatar."
        ),
    ),
    Rule(
        rule_id="2.1.2",
        category=Category.DATA_RESIDENCY,
        text=(
            "**Article 2.1.2: Data Management & Residency - Privacy Policy**\n"
            "The startup must have a robust data privacy policy compliant with "
            "Qatari law."
        ),
    ),
    Rule(
        rule_id="2.2.1",
        category=Category.AML,
        text=(
            "**Article 2.2.1: Anti-Money Laundering (AML) & Counter-Terrorist "
            "Financing (CTF) - Framework**\n"
            "The startup must implement a risk-based AML/CTF framework."
        ),
    ),
    Rule(
        rule_id="2.2.2",
        category=Category.AML,
        text=(
            "**Article 2.2.2: Anti-Money Laundering (AML) & Counter-Terrorist "
            "Financing (CTF) - Monitoring**\n"
            "The startup must have a system for monitoring and reporting "
            "suspicious transactions."
        ),
    ),
]

EXPERT_RESOURCES: Dict[str, ExpertResource] = {
    "QDB_EXPERT_001": ExpertResource(
        name="QDB Legal Advisory",
        description=(
            "Specialized consultancy for corporate structuring, governance "
            "frameworks, and board composition."
        ),
        link="#",
    ),
    "QDB_EXPERT_002": ExpertResource(
        name="QCB Compliance Unit",
        description=(
            "Direct guidance from the regulator on implementing a robust AML/CTF "
            "framework and transaction monitoring systems."
        ),
        link="#",
    ),
    "QDB_EXPERT_003": ExpertResource(
        name="QDB Startup Funding Program",
        description=(
            "Explore various funding options, grants, and investment connections "
            "to meet the minimum capital requirements."
        ),
        link="#",
    ),
    "QDB_EXPERT_004": ExpertResource(
        name="MOTC Cybersecurity Division",
        description=(
            "Expert consultancy on Qatar's data residency laws, privacy policies, "
            "and secure server infrastructure."
        ),
        link="#",
    ),
}

# プロンプト内の指示と同じ対応関係
CATEGORY_EXPERTS: Dict[Category, str] = {
    Category.GOVERNANCE: "QDB_EXPERT_001",
    Category.AML: "QDB_EXPERT_002",
    Category.CAPITAL: "QDB_EXPERT_003",
    Category.DATA_RESIDENCY: "QDB_EXPERT_004",
}


def format_rules(rules: Optional[List[Rule]] = None) -> str:
    """
    条文テキストを空行区切りで連結する。

    Args:
        rules: 条文のリスト。指定されない場合はQCB_RULES全件。

    Returns:
        プロンプトに埋め込むテキスト
    """
    rules = QCB_RULES if rules is None else rules
    return "\n\n".join(rule.text for rule in rules)


def get_expert(expert_id: str) -> Optional[ExpertResource]:
    """専門家IDに対応するリソースを返す。未知のIDならNone。"""
    return EXPERT_RESOURCES.get(expert_id)
