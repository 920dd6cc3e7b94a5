"""
画面部品モジュール。
スコアカード、ギャップ一覧、専門家レビューのバナーなどを描画する。
"""

from typing import List

import streamlit as st

from ..core.models import AnalysisResult, DocumentType, Gap, Severity
from ..core.report import (
    CATEGORY_DISPLAY,
    SCORE_EXPLANATION,
    format_score,
    score_color,
)
from ..core.rules import get_expert
from ..file_processors import ACCEPTED_EXTENSIONS
from .session import AssessmentSession

SEVERITY_BADGES = {
    Severity.HIGH: ":red[✖ High]",
    Severity.MEDIUM: ":orange[⚠ Medium]",
    Severity.LOW: ":blue[Low]",
}


def text_key(doc_type: DocumentType) -> str:
    """テキストエリアのウィジェットキー"""
    return f"finregx_text_{doc_type.value}"


def upload_key(doc_type: DocumentType) -> str:
    """ファイルアップローダーのウィジェットキー"""
    return f"finregx_upload_{doc_type.value}"


def sync_widgets(session: AssessmentSession) -> None:
    """セッションの書類内容をテキストエリアの状態に反映する。"""
    for doc_type in DocumentType:
        st.session_state[text_key(doc_type)] = session.documents.get(doc_type)


def _on_text_change(session: AssessmentSession, doc_type: DocumentType) -> None:
    session.set_text(doc_type, st.session_state[text_key(doc_type)])


def _on_upload(session: AssessmentSession, doc_type: DocumentType) -> None:
    uploaded = st.session_state.get(upload_key(doc_type))
    if uploaded is None:
        return
    if session.upload(doc_type, uploaded.name, uploaded.getvalue(), uploaded.type):
        st.session_state[text_key(doc_type)] = session.documents.get(doc_type)


def _on_load_sample(session: AssessmentSession) -> None:
    session.load_sample_data()
    sync_widgets(session)


def render_header(title: str) -> None:
    st.title(f"🏦 {title}")
    st.caption(
        "AI-assisted pre-screening of fintech license applications against the "
        "QCB Regulatory Framework."
    )


def render_document_input(session: AssessmentSession) -> bool:
    """
    書類入力フォームを描画する。

    Returns:
        「Analyze Readiness」が押された場合はTrue
    """
    with st.container(border=True):
        st.subheader("Provide Startup Documents")
        st.write("Paste content directly or upload PDF/DOCX files for each document type.")

        if session.alert:
            st.error(session.alert, icon="🚫")

        tabs = st.tabs([doc_type.label for doc_type in DocumentType])
        for tab, doc_type in zip(tabs, DocumentType):
            with tab:
                st.session_state.setdefault(
                    text_key(doc_type), session.documents.get(doc_type)
                )
                st.text_area(
                    doc_type.label,
                    key=text_key(doc_type),
                    height=200,
                    placeholder=f"Paste your {doc_type.label} content here...",
                    label_visibility="collapsed",
                    on_change=_on_text_change,
                    args=(session, doc_type),
                )
                st.markdown("<center><small>OR</small></center>", unsafe_allow_html=True)
                st.file_uploader(
                    f"Upload {doc_type.label} (PDF, DOCX)",
                    type=ACCEPTED_EXTENSIONS,
                    key=upload_key(doc_type),
                    on_change=_on_upload,
                    args=(session, doc_type),
                    disabled=session.parsing[doc_type],
                )

        left, right = st.columns(2)
        with left:
            st.button(
                "📋 Load Mock Data",
                on_click=_on_load_sample,
                args=(session,),
            )
        with right:
            return st.button("Analyze Readiness", type="primary")


def render_error(session: AssessmentSession) -> None:
    st.error(f"**Error:** {session.error}")
    st.button("Try Again", on_click=session.reset, type="primary")


def render_expert_review_banner(session: AssessmentSession) -> None:
    """総合スコアが閾値未満の場合に専門家レビューを促すバナーを描画する。"""
    if session.review_flagged:
        st.success(
            "✅ This assessment has been successfully flagged for manual expert review."
        )
        return

    with st.container(border=True):
        text_col, button_col = st.columns([4, 1])
        with text_col:
            st.warning(
                "**Expert Review Recommended**\n\n"
                "Due to the number of critical gaps identified, a manual review by "
                "a compliance expert is highly recommended.",
                icon="⚠️",
            )
        with button_col:
            st.button("Flag for Review", on_click=session.flag_for_review)


def _render_score(label: str, score: float) -> None:
    color = score_color(score)
    st.markdown(f"**{label}** &nbsp; :{color}[**{format_score(score)}**]")
    st.progress(int(max(0, min(100, score))))


def render_scorecard(result: AnalysisResult) -> None:
    with st.container(border=True):
        st.subheader("Readiness Scorecard", help=SCORE_EXPLANATION)
        overall_col, categories_col = st.columns([1, 2])
        with overall_col:
            color = score_color(result.overall_score)
            st.markdown(
                f"## :{color}[{format_score(result.overall_score)}]\nReadiness"
            )
            st.progress(int(max(0, min(100, result.overall_score))))
        with categories_col:
            columns = st.columns(2)
            for i, (category, label) in enumerate(CATEGORY_DISPLAY):
                with columns[i % 2]:
                    _render_score(label, result.category_scores.get(category))


def render_gaps_table(gaps: List[Gap]) -> None:
    if not gaps:
        with st.container(border=True):
            st.success("### No Compliance Gaps Found!", icon="✅")
            st.write(
                "Congratulations, your documents appear to meet all key regulatory "
                "requirements."
            )
        return

    with st.container(border=True):
        st.subheader("Compliance Gap Analysis")
        st.caption(
            "Review the identified gaps and follow the recommendations to improve "
            "your readiness score."
        )
        for gap in gaps:
            st.divider()
            rule_col, severity_col, description_col, recommendation_col = st.columns(
                [3, 1, 4, 4]
            )
            with rule_col:
                st.caption("Rule Violated")
                st.code(gap.rule, language=None)
            with severity_col:
                st.caption("Severity")
                st.markdown(SEVERITY_BADGES.get(gap.severity, gap.severity.value))
            with description_col:
                st.caption("Description")
                st.write(gap.description)
            with recommendation_col:
                st.caption("Recommendation")
                st.write(gap.recommendation)
                resource = get_expert(gap.expert_id)
                if resource:
                    st.caption("Recommended Support Service:")
                    st.markdown(f"[**{resource.name}**]({resource.link})")
                    st.caption(resource.description)


def render_result(session: AssessmentSession) -> None:
    result = session.result
    if session.expert_review_recommended:
        render_expert_review_banner(session)
    st.button("Start New Analysis", on_click=session.reset, type="primary")
    render_scorecard(result)
    render_gaps_table(result.gaps)
