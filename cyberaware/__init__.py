"""
CyberAware 보안 인식 서비스
==========================

비밀번호 강도, URL 피싱 위험, 이메일 피싱 위험을 휴리스틱으로 평가하고
학습 모듈 진행과 함께 종합 보안 점수를 제공합니다.

aiohttp HTTP 서버로 웹 클라이언트와 통신합니다.
"""

__version__ = "0.1.0"
__description__ = "사이버 보안 인식 교육용 휴리스틱 분석 서비스"

from cyberaware.analyzers import analyze_email, analyze_password, analyze_url
from cyberaware.core.config import AppConfig
from cyberaware.core.report import compute_security_report
from cyberaware.core.service import AwarenessService

__all__ = [
    "AwarenessService",
    "AppConfig",
    "analyze_password",
    "analyze_url",
    "analyze_email",
    "compute_security_report",
    "__version__",
]
