"""
유틸리티 모듈
=============

- AwarenessDatabase: aiosqlite 검사 이력 저장소
- IPV4_PATTERN / LINK_PATTERN: 분석기 공용 정규식
"""

from cyberaware.utils.awareness_db import AwarenessDatabase
from cyberaware.utils.patterns import IPV4_PATTERN, LINK_PATTERN

__all__ = [
    "AwarenessDatabase",
    "IPV4_PATTERN",
    "LINK_PATTERN",
]
