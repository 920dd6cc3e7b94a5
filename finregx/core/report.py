"""
レポート生成モジュール。
分析結果をMarkdownレポートに変換する。
スコアの色分けやカテゴリ表示名など、画面表示と共通の表示ルールもここで定義する。
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..utils.config import config
from ..utils.logging import logger
from .models import AnalysisResult, Category, Gap, Severity
from .rules import get_expert

# スコアカードでの表示順と表示名
CATEGORY_DISPLAY: List[Tuple[Category, str]] = [
    (Category.AML, "AML / CTF"),
    (Category.GOVERNANCE, "Governance"),
    (Category.CAPITAL, "Capital"),
    (Category.DATA_RESIDENCY, "Data Residency"),
]

SCORE_EXPLANATION = (
    "The overall score is a weighted average of the categories "
    "(Capital: 30%, AML: 30%, Governance: 20%, Data Residency: 20%). "
    "Scores are impacted by the number and severity of identified compliance gaps."
)

SEVERITY_ICONS = {
    Severity.HIGH: "🔴",
    Severity.MEDIUM: "🟡",
    Severity.LOW: "🔵",
}

DEFAULT_EXPERT_REVIEW_THRESHOLD = 60


def score_band(score: float) -> str:
    """
    スコアの区分を返す。80以上は "good"、50以上は "fair"、それ未満は "poor"。
    """
    if score >= 80:
        return "good"
    if score >= 50:
        return "fair"
    return "poor"


def score_color(score: float) -> str:
    """スコア区分に対応する表示色"""
    return {"good": "green", "fair": "orange", "poor": "red"}[score_band(score)]


def format_score(score: float) -> str:
    """整数値のスコアは小数点なしで表示する。"""
    return str(int(score)) if float(score).is_integer() else f"{score:.1f}"


def expert_review_threshold() -> float:
    """専門家レビューを推奨する総合スコアの閾値"""
    return config.get("ui.expert_review_threshold", DEFAULT_EXPERT_REVIEW_THRESHOLD)


def needs_expert_review(result: AnalysisResult) -> bool:
    """総合スコアが閾値未満なら専門家レビューを推奨する。"""
    return result.overall_score < expert_review_threshold()


class ReportGenerator:
    """レポート生成クラス"""

    def __init__(self):
        """初期化"""
        self.logger = logger
        self.config = config

    def generate_report(
        self, result: AnalysisResult, title: str = "Readiness Assessment Report"
    ) -> str:
        """
        分析結果からMarkdownレポートを生成する。

        Args:
            result: 分析結果
            title: レポートの見出し

        Returns:
            Markdownレポート
        """
        now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        self.logger.info(f"レポート生成開始: ギャップ {len(result.gaps)}件")

        header = f"""# {title}

**Generated:** {now}

## Readiness Scorecard

**Overall Readiness:** {format_score(result.overall_score)} / 100 ({score_band(result.overall_score)})

| Category | Score | Band |
|---|---|---|
"""
        for category, label in CATEGORY_DISPLAY:
            score = result.category_scores.get(category)
            header += f"| {label} | {format_score(score)} | {score_band(score)} |\n"

        header += f"\n_{SCORE_EXPLANATION}_\n"

        if needs_expert_review(result):
            header += (
                "\n> ⚠️ **Expert Review Recommended.** Due to the number of critical "
                "gaps identified, a manual review by a compliance expert is highly "
                "recommended.\n"
            )

        gaps_section = "\n## Compliance Gap Analysis\n\n"
        if result.gaps:
            for gap in result.gaps:
                gaps_section += self._format_gap(gap)
        else:
            gaps_section += (
                "✅ **No Compliance Gaps Found!** Congratulations, your documents "
                "appear to meet all key regulatory requirements.\n"
            )

        footer = """
---
*This report was generated automatically as a pre-screening aid and does not constitute legal or regulatory advice.*
"""

        report = header + gaps_section + footer

        self.logger.info("レポート生成完了")
        return report

    def _format_gap(self, gap: Gap) -> str:
        """ギャップ1件をMarkdownに整形する。"""
        icon = SEVERITY_ICONS.get(gap.severity, "")
        section = f"""### {gap.gap_id}: {gap.rule}

- **Category:** {gap.category.value}
- **Severity:** {icon} {gap.severity.value}
- **Description:** {gap.description}
- **Recommendation:** {gap.recommendation}
"""
        resource = get_expert(gap.expert_id)
        if resource:
            section += (
                f"- **Recommended Support Service:** [{resource.name}]({resource.link}): "
                f"{resource.description}\n"
            )
        return section + "\n"

    def save_report(
        self, report: str, output_path: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        レポートをファイルに保存する。

        Args:
            report: レポート内容
            output_path: 出力先パス。指定されない場合は自動生成。

        Returns:
            保存先のパス
        """
        if output_path is None:
            now = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = f"readiness_report_{now}.md"

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            f.write(report)

        self.logger.info(f"レポートを保存しました: {path}")
        return path
