"""
코어 모듈
=========

평가 결과 타입, 설정, 보안 점수 집계, 학습 콘텐츠, 서비스 계층.

서비스(AwarenessService)는 분석기를 임포트하므로
cyberaware.core.service 에서 직접 임포트합니다.
"""

from cyberaware.core.config import AppConfig
from cyberaware.core.report import SecurityScoreAggregator, compute_security_report

__all__ = [
    "AppConfig",
    "SecurityScoreAggregator",
    "compute_security_report",
]
