"""
FinRegX ブラウザUI（Streamlit）

起動方法:
    finregx ui
    または streamlit run finregx/ui/app.py
"""

import time
from concurrent.futures import ThreadPoolExecutor, wait

import streamlit as st

from finregx.ui.components import (
    render_document_input,
    render_error,
    render_header,
    render_result,
)
from finregx.ui.session import AssessmentSession, SessionView, loading_message
from finregx.utils.config import config
from finregx.utils.logging import logger

SESSION_KEY = "finregx_session"
POLL_INTERVAL = 0.5  # 秒


def get_session() -> AssessmentSession:
    """ブラウザのセッションごとに1つの AssessmentSession を保持する。"""
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = AssessmentSession()
        logger.debug("新しいセッションを開始しました")
    return st.session_state[SESSION_KEY]


def run_analysis(session: AssessmentSession) -> None:
    """
    別スレッドで分析を実行し、完了まで読み込み中メッセージを切り替えて表示する。
    Streamlit の描画はメインスレッドからのみ行う。
    """
    placeholder = st.empty()
    started = time.monotonic()
    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(session.analyze)
        while not future.done():
            placeholder.info(f"⏳ {loading_message(time.monotonic() - started)}")
            wait([future], timeout=POLL_INTERVAL)
    placeholder.empty()


def main() -> None:
    title = config.get("ui.page_title", "FinRegX Readiness Pre-Screening")
    st.set_page_config(page_title=title, page_icon="🏦", layout="wide")
    render_header(title)

    session = get_session()

    if session.view == SessionView.INPUT:
        if render_document_input(session):
            run_analysis(session)
            st.rerun()
    elif session.view == SessionView.ERROR:
        render_error(session)
    elif session.view == SessionView.RESULT:
        render_result(session)


main()
