"""
APIインターフェースモジュール。
FastAPIベースのREST APIを提供する。
"""

from typing import Dict, List, Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from . import __version__
from .core.analyzer import ReadinessAnalyzer
from .core.exceptions import (
    AnalysisError,
    DocumentParseError,
    EmptyDocumentsError,
    UnsupportedFileTypeError,
)
from .core.models import AnalysisResult, DocumentSet, ExpertResource, Rule
from .core.report import ReportGenerator
from .core.rules import EXPERT_RESOURCES, QCB_RULES
from .file_processors import extract_text
from .utils.config import config
from .utils.logging import logger


# FastAPIアプリケーションを作成
app = FastAPI(
    title="FinRegX API",
    description="Pre-screening of fintech license documents against QCB regulations",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("api.allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AnalysisRequest(BaseModel):
    """分析リクエストを表すデータモデル"""

    model_config = ConfigDict(populate_by_name=True)

    business_plan: str = Field(default="", alias="businessPlan")
    legal_docs: str = Field(default="", alias="legalDocs")
    policy_docs: str = Field(default="", alias="policyDocs")
    llm: Optional[str] = None

    def to_documents(self) -> DocumentSet:
        return DocumentSet(
            business_plan=self.business_plan,
            legal_docs=self.legal_docs,
            policy_docs=self.policy_docs,
        )


class ExtractionResponse(BaseModel):
    """テキスト抽出結果を表すデータモデル"""

    filename: str
    text: str


def _run_analysis(request: AnalysisRequest) -> AnalysisResult:
    """
    分析を実行し、アプリケーション例外をHTTPエラーに変換する。

    Raises:
        HTTPException: 入力不備は400、分析の失敗は502
    """
    try:
        analyzer = ReadinessAnalyzer(llm_name=request.llm)
        return analyzer.analyze(request.to_documents())
    except (EmptyDocumentsError, ValueError) as e:
        logger.warning(f"不正なリクエスト: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except AnalysisError as e:
        logger.error(f"APIエラー: {str(e)}")
        raise HTTPException(status_code=502, detail=str(e))


@app.get("/")
async def root():
    """ルートエンドポイント"""
    return {
        "message": "FinRegX API",
        "version": __version__,
        "endpoints": [
            "/api/processors",
            "/api/rules",
            "/api/experts",
            "/api/extract",
            "/api/analyze",
            "/api/analyze/report",
        ],
    }


@app.get("/api/processors")
async def get_processors():
    """利用可能なLLMプロセッサーを取得する"""
    return {
        "processors": ReadinessAnalyzer.get_available_processors(),
        "default": config.get("llm.default", "gemini"),
    }


@app.get("/api/rules", response_model=List[Rule], response_model_by_alias=True)
async def get_rules():
    """評価に使う規制条文の一覧"""
    return QCB_RULES


@app.get("/api/experts", response_model=Dict[str, ExpertResource])
async def get_experts():
    """ギャップから参照される支援サービスの一覧"""
    return EXPERT_RESOURCES


@app.post("/api/extract", response_model=ExtractionResponse)
async def extract(file: UploadFile = File(...)):
    """
    アップロードされたPDF/DOCXからテキストを抽出する

    - **file**: PDFまたはDOCXファイル
    """
    logger.info(f"抽出リクエスト受信: {file.filename}")
    data = await file.read()
    try:
        text = extract_text(file.filename or "", data, file.content_type)
    except UnsupportedFileTypeError as e:
        raise HTTPException(status_code=415, detail=str(e))
    except DocumentParseError as e:
        raise HTTPException(status_code=422, detail=f"Failed to parse file: {str(e)}")

    return ExtractionResponse(filename=file.filename or "", text=text)


@app.post("/api/analyze")
def analyze(request: AnalysisRequest):
    """
    書類セットを分析し、スコアとギャップを返す

    - **businessPlan** / **legalDocs** / **policyDocs**: 書類のテキスト
    - **llm**: 使用するLLM（オプション）
    """
    logger.info("分析リクエスト受信")
    result = _run_analysis(request)
    return result.to_api_dict()


@app.post("/api/analyze/report")
def analyze_with_report(request: AnalysisRequest):
    """
    書類セットを分析し、Markdownレポートを返す
    """
    logger.info("レポートリクエスト受信")
    result = _run_analysis(request)
    report = ReportGenerator().generate_report(result)
    return Response(
        content=report,
        media_type="text/markdown",
        headers={
            "Content-Disposition": 'attachment; filename="readiness_report.md"'
        },
    )
