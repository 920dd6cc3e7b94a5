"""
FinRegX

フィンテック企業のライセンス申請書類（事業計画書、法務書類、社内規程）を
QCB（カタール中央銀行）の規制要件に照らして事前審査する生成AIベースのアプリケーションです。
"""

__version__ = "0.1.0"

from .core.analyzer import ReadinessAnalyzer
from .core.models import AnalysisResult, CategoryScores, DocumentSet, DocumentType, Gap
from .core.report import ReportGenerator

__all__ = [
    "ReadinessAnalyzer",
    "AnalysisResult",
    "CategoryScores",
    "DocumentSet",
    "DocumentType",
    "Gap",
    "ReportGenerator",
]
