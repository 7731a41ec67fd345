"""
pytest 공용 fixture 모듈
========================

모든 테스트에서 공유하는 fixture를 정의합니다.

fixture 목록:
- mock_config: 테스트용 AppConfig (메모리 DB)
- sample_urls: 안전/의심/위험/잘못된 URL 모음
- sample_emails: 정상/피싱 이메일 본문 샘플
- temp_db: 임시 SQLite 데이터베이스 경로
- db: 연결된 메모리 AwarenessDatabase
- service: 초기화된 AwarenessService
"""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio

from cyberaware.core.config import AppConfig, DatabaseConfig, ReportConfig
from cyberaware.core.service import AwarenessService
from cyberaware.utils.awareness_db import AwarenessDatabase


# ============================================================
# 설정 fixture
# ============================================================

@pytest.fixture
def mock_config() -> AppConfig:
    """메모리 DB를 사용하는 테스트용 설정"""
    return AppConfig(
        app_name="test-cyberaware",
        version="1.0.0-test",
        debug=True,
        log_level="DEBUG",
        database=DatabaseConfig(db_path=":memory:"),
        report=ReportConfig(recent_check_limit=5, email_excerpt_length=500),
    )


# ============================================================
# 샘플 데이터 fixture
# ============================================================

@pytest.fixture
def sample_urls() -> dict[str, list[str]]:
    """
    테스트용 URL 모음

    카테고리별로 분류된 URL 목록을 제공합니다.
    """
    return {
        # 위험 요소 없음
        "safe": [
            "https://example.com",
            "https://www.google.com/search?q=python",
            "https://docs.python.org/3/library/asyncio.html",
            "https://www.paypal.com/signin",
            "https://github.com/",
            # 앞뒤 공백은 무시
            "  https://example.com \n",
        ],
        # 위험도 20 이상 50 미만
        "suspicious": [
            "http://example.com",
            "http://192.168.1.1/login",
            "https://bit.ly/abc",
        ],
        # 위험도 50 이상
        "dangerous": [
            "https://paypal-secure-login.com/verify",
            "http://amazon-account-update.net/login",
            "http://user@paypal-secure.example.net/aaaaaaaaaaaaaaaaaaaaaaaa",
        ],
        # 파싱 실패
        "invalid": [
            "not a url",
            "",
            "example.com",
            "http://",
            "http://example.com:99999/",
            # 범위를 벗어난 IPv4 호스트
            "http://300.1.1.1/",
        ],
    }


@pytest.fixture
def sample_emails() -> dict[str, str]:
    """테스트용 이메일 본문 샘플"""
    return {
        "clean": (
            "Hi Jordan,\n\n"
            "Thanks for the notes from yesterday's meeting. "
            "See you at the review on Thursday.\n\nSam"
        ),
        "phishing": (
            "Dear customer,\n\n"
            "URGENT: unusual activity was detected and your account locked. "
            "Verify your account within 24 hours or it will be terminated.\n"
            "Please send your password and credit card number to "
            "http://203.0.113.5/secure\n"
        ),
    }


# ============================================================
# 저장소 / 서비스 fixture
# ============================================================

@pytest.fixture
def temp_db(tmp_path: Path) -> str:
    """임시 SQLite 데이터베이스 파일 경로"""
    return str(tmp_path / "data" / "test_awareness.db")


@pytest_asyncio.fixture
async def db() -> AsyncIterator[AwarenessDatabase]:
    """연결된 메모리 DB"""
    async with AwarenessDatabase(":memory:") as database:
        yield database


@pytest_asyncio.fixture
async def service(mock_config: AppConfig) -> AsyncIterator[AwarenessService]:
    """초기화된 서비스"""
    svc = AwarenessService(mock_config)
    await svc.initialize()
    try:
        yield svc
    finally:
        await svc.shutdown()
