"""
デモ用のサンプル書類（架空のスタートアップ「PayQatar」）。
"""

from .models import DocumentSet

SAMPLE_BUSINESS_PLAN = """PayQatar Business Plan

1. Executive Summary
PayQatar is a mobile payment solution aiming to revolutionize the fintech landscape in Doha. We will offer peer-to-peer transfers and merchant payment services. Our initial funding is QAR 500,000.

2. Team
Our team is composed of experienced developers and business strategists. We are currently searching for a Head of Compliance.

3. Technology
Our platform will be built on a secure cloud infrastructure using AWS servers located in their Bahrain region to ensure low latency for our users in the Middle East."""

SAMPLE_LEGAL_DOCS = """Legal Structure of PayQatar

PayQatar is registered as a Limited Liability Company (LLC) in Qatar. The company's organizational chart is currently under development but will feature a flat hierarchy to promote agility. Key roles will be defined in Q3."""

SAMPLE_POLICY_DOCS = """PayQatar Draft Policies

Data Privacy: We are committed to user privacy and will develop a policy in line with international best practices.

AML Policy: PayQatar acknowledges the importance of AML/CTF regulations. We will implement a basic transaction flagging system for unusually large transfers."""


def sample_documents() -> DocumentSet:
    """サンプル書類一式を返す。"""
    return DocumentSet(
        business_plan=SAMPLE_BUSINESS_PLAN,
        legal_docs=SAMPLE_LEGAL_DOCS,
        policy_docs=SAMPLE_POLICY_DOCS,
    )
