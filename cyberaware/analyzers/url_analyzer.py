"""
URL 피싱 분석기
===============

URL 문자열과 호스트명에 대한 구문 기반 휴리스틱으로 위험도를 산출합니다.
DNS 조회나 페이지 요청 등 네트워크 접근은 하지 않습니다.

위험도 가산:
- HTTPS 미사용 +30
- 패턴 매칭 (IP 주소, 로그인 키워드, 긴 랜덤 문자열, @, 하이픈) 각 +15
- URL 단축 서비스 +20
- 브랜드 도용 도메인 +40 (분석당 최대 1회)

위험도는 100을 넘을 수 있으며 상한을 두지 않습니다.
분류: 50 이상 dangerous, 20 이상 suspicious, 그 외 safe
"""

from __future__ import annotations

import ipaddress
import logging
import re
from typing import Optional
from urllib.parse import ParseResult, urlparse

from cyberaware.core.assessments import UrlAssessment, UrlSafety
from cyberaware.utils.patterns import IPV4_PATTERN

logger = logging.getLogger(__name__)

# ============================================================
# 고정 목록
# ============================================================

URL_SHORTENERS: tuple[str, ...] = (
    "bit.ly", "tinyurl.com", "goo.gl", "ow.ly", "t.co",
)

BRAND_KEYWORDS: tuple[str, ...] = (
    "paypal", "amazon", "apple", "microsoft", "google", "facebook", "bank",
)

# ============================================================
# 위협 메시지
# ============================================================

THREAT_INVALID_URL = "Invalid URL format"
THREAT_NO_HTTPS = "Not using secure HTTPS protocol"
THREAT_IP_ADDRESS = "Uses IP address instead of domain"
THREAT_LOGIN_KEYWORDS = "Contains suspicious login-related keywords"
THREAT_LONG_RANDOM = "Contains unusually long random strings"
THREAT_AT_SYMBOL = "Contains @ symbol (possible phishing technique)"
THREAT_HYPHENS = "Multiple hyphens in domain (common in phishing)"
THREAT_SHORTENER = "URL shortener detected (can hide real destination)"
THREAT_BRAND_MIMICRY = "Domain name mimics legitimate service"
VERDICT_SAFE = "URL appears to be safe"

# ============================================================
# 점수 가중치
# ============================================================

NO_HTTPS_POINTS = 30
PATTERN_POINTS = 15
SHORTENER_POINTS = 20
BRAND_MIMICRY_POINTS = 40
INVALID_URL_RISK = 100

# URL 앞뒤에서 무시하는 문자
_C0_CONTROL_OR_SPACE = "".join(chr(c) for c in range(0x21))

DANGEROUS_THRESHOLD = 50
SUSPICIOUS_THRESHOLD = 20


class UrlAnalyzer:
    """
    URL 피싱 위험 분석기

    잘못된 형식의 URL은 예외 대신 최대 위험(dangerous, 100) 결과로 반환합니다.
    """

    def __init__(self) -> None:
        # 전체 URL 문자열에 적용되는 패턴 (순서대로 위협 메시지 추가)
        self._suspicious_patterns: tuple[tuple[re.Pattern[str], str], ...] = (
            (IPV4_PATTERN, THREAT_IP_ADDRESS),
            (
                re.compile(
                    r"(login|verify|account|secure|update).*\.(com|net|org)",
                    re.IGNORECASE | re.ASCII,
                ),
                THREAT_LOGIN_KEYWORDS,
            ),
            (re.compile(r"[a-z0-9]{20,}", re.IGNORECASE | re.ASCII), THREAT_LONG_RANDOM),
            (re.compile(r"@"), THREAT_AT_SYMBOL),
            # 하이픈은 존재 여부만 본다 (개수 무관)
            (re.compile(r"-"), THREAT_HYPHENS),
        )

    def analyze(self, url: str) -> UrlAssessment:
        """
        URL 위험도 평가

        Args:
            url: 평가할 URL 문자열

        Returns:
            UrlAssessment
        """
        parsed = self._parse(url)
        if parsed is None:
            logger.debug("URL 파싱 실패: %r", url)
            return UrlAssessment(
                safety=UrlSafety.DANGEROUS,
                risk_level=INVALID_URL_RISK,
                threats=(THREAT_INVALID_URL,),
            )

        threats: list[str] = []
        risk_level = 0
        hostname = parsed.hostname or ""

        if parsed.scheme != "https":
            threats.append(THREAT_NO_HTTPS)
            risk_level += NO_HTTPS_POINTS

        for pattern, message in self._suspicious_patterns:
            if pattern.search(url):
                threats.append(message)
                risk_level += PATTERN_POINTS

        if self._uses_shortener(hostname):
            threats.append(THREAT_SHORTENER)
            risk_level += SHORTENER_POINTS

        if self._mimics_brand(hostname):
            threats.append(THREAT_BRAND_MIMICRY)
            risk_level += BRAND_MIMICRY_POINTS

        safety = self._risk_to_safety(risk_level)
        if safety is UrlSafety.SAFE:
            threats.append(VERDICT_SAFE)

        logger.debug("URL 분석: %s → %s (위험도 %d)", url, safety.value, risk_level)
        return UrlAssessment(safety=safety, risk_level=risk_level, threats=tuple(threats))

    # ============================
    # 내부 검사
    # ============================

    @staticmethod
    def _parse(url: str) -> Optional[ParseResult]:
        """
        절대 URL 구문 검사

        앞뒤의 공백/제어 문자(U+0000~U+0020)는 무시합니다.
        스킴과 호스트가 모두 있어야 하며, 포트는 숫자여야 합니다.
        숫자로만 된 점 구분 호스트는 유효한 IPv4 주소여야 합니다.
        """
        try:
            parsed = urlparse(url.strip(_C0_CONTROL_OR_SPACE))
            # 잘못된 포트는 여기서 ValueError
            parsed.port
        except ValueError:
            return None

        hostname = parsed.hostname
        if not parsed.scheme or not hostname:
            return None
        if any(c.isspace() for c in parsed.netloc):
            return None
        if all(label.isascii() and label.isdigit() for label in hostname.split(".")):
            try:
                ipaddress.IPv4Address(hostname)
            except ValueError:
                return None
        return parsed

    @staticmethod
    def _uses_shortener(hostname: str) -> bool:
        return any(shortener in hostname for shortener in URL_SHORTENERS)

    @staticmethod
    def _mimics_brand(hostname: str) -> bool:
        """브랜드 키워드를 포함하지만 <키워드>.com 으로 끝나지 않는 호스트"""
        return any(
            keyword in hostname and not hostname.endswith(f"{keyword}.com")
            for keyword in BRAND_KEYWORDS
        )

    @staticmethod
    def _risk_to_safety(risk_level: int) -> UrlSafety:
        if risk_level >= DANGEROUS_THRESHOLD:
            return UrlSafety.DANGEROUS
        elif risk_level >= SUSPICIOUS_THRESHOLD:
            return UrlSafety.SUSPICIOUS
        return UrlSafety.SAFE


_default_analyzer = UrlAnalyzer()


def analyze_url(url: str) -> UrlAssessment:
    """기본 분석기로 URL 위험도 평가"""
    return _default_analyzer.analyze(url)
