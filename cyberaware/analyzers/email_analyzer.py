"""
이메일 피싱 분석기
=================

본문 텍스트를 고정 문구 목록과 대조하여 피싱 위험 점수를 산출합니다.

검사 범주:
- 긴급/압박 문구 (+15, 문구 명시)
- 일반적인 인사말 (+10)
- 민감 정보 요청 (+20, 키워드 명시)
- 링크 밀도 (3개 초과 +15), IP 주소 링크 (링크당 +25)
- 흔한 철자 오류 (단어당 +10)
- 법적 위협 문구 (+15, 문구 명시)

누적 점수는 제한 없이 합산한 뒤 출력 시 100으로 제한합니다.
분류는 제한된 점수 기준: 50 이상 high, 25 이상 medium, 그 외 low
"""

from __future__ import annotations

import logging

from cyberaware.core.assessments import EmailAssessment, EmailRiskLevel
from cyberaware.utils.patterns import IPV4_PATTERN, LINK_PATTERN

logger = logging.getLogger(__name__)

# ============================================================
# 고정 문구 목록
# ============================================================

URGENCY_PHRASES: tuple[str, ...] = (
    "urgent", "immediate action", "verify now", "account locked", "suspended",
    "act now", "limited time", "expire", "confirm your", "unusual activity",
    "verify your account", "click here immediately", "security alert",
)

GENERIC_GREETINGS: tuple[str, ...] = (
    "dear customer", "dear user", "dear member", "valued customer",
)

SENSITIVE_REQUESTS: tuple[str, ...] = (
    "password", "credit card", "ssn", "social security", "bank account",
    "pin", "verification code", "cvv", "account number",
)

COMMON_MISSPELLINGS: tuple[str, ...] = (
    "recieve", "occured", "untill", "seperate", "definately",
)

LEGAL_THREATS: tuple[str, ...] = (
    "legal action", "will be closed", "will be terminated", "face charges",
)

# ============================================================
# 위협 메시지
# ============================================================

THREAT_GENERIC_GREETING = "Uses generic greeting instead of your name"
THREAT_IP_LINK = "Link uses IP address instead of domain name"
THREAT_MISSPELLING = "Contains spelling errors (common in phishing)"
VERDICT_CLEAN = "No obvious phishing indicators detected"

# ============================================================
# 점수 가중치
# ============================================================

URGENCY_POINTS = 15
GREETING_POINTS = 10
SENSITIVE_POINTS = 20
LINK_DENSITY_POINTS = 15
IP_LINK_POINTS = 25
MISSPELLING_POINTS = 10
LEGAL_THREAT_POINTS = 15

MAX_LINKS = 3
MAX_SCORE = 100
HIGH_THRESHOLD = 50
MEDIUM_THRESHOLD = 25


class EmailAnalyzer:
    """이메일 본문 피싱 위험 분석기"""

    def analyze(self, content: str) -> EmailAssessment:
        """
        이메일 본문 위험도 평가

        Args:
            content: 이메일 본문 (헤더 포함 가능)

        Returns:
            EmailAssessment (risk_score는 100으로 제한)
        """
        threats: list[str] = []
        raw_score = 0
        lowered = content.lower()

        for phrase in URGENCY_PHRASES:
            if phrase in lowered:
                threats.append(f'Contains urgent/pressure language: "{phrase}"')
                raw_score += URGENCY_POINTS

        for greeting in GENERIC_GREETINGS:
            if greeting in lowered:
                threats.append(THREAT_GENERIC_GREETING)
                raw_score += GREETING_POINTS

        for keyword in SENSITIVE_REQUESTS:
            if keyword in lowered:
                threats.append(f'Requests sensitive information: "{keyword}"')
                raw_score += SENSITIVE_POINTS

        links = LINK_PATTERN.findall(content)
        if len(links) > MAX_LINKS:
            threats.append(f"Contains multiple links ({len(links)})")
            raw_score += LINK_DENSITY_POINTS

        for link in links:
            if IPV4_PATTERN.search(link):
                threats.append(THREAT_IP_LINK)
                raw_score += IP_LINK_POINTS

        for word in COMMON_MISSPELLINGS:
            if word in lowered:
                threats.append(THREAT_MISSPELLING)
                raw_score += MISSPELLING_POINTS

        for phrase in LEGAL_THREATS:
            if phrase in lowered:
                threats.append(f'Contains threatening language: "{phrase}"')
                raw_score += LEGAL_THREAT_POINTS

        risk_score = min(raw_score, MAX_SCORE)
        risk_level = self._score_to_level(risk_score)

        if risk_level is EmailRiskLevel.LOW and not threats:
            threats.append(VERDICT_CLEAN)

        logger.debug(
            "이메일 분석: %d자, 원점수=%d, 점수=%d, 수준=%s",
            len(content), raw_score, risk_score, risk_level.value,
        )
        return EmailAssessment(
            risk_level=risk_level,
            risk_score=risk_score,
            detected_threats=tuple(threats),
        )

    @staticmethod
    def _score_to_level(score: int) -> EmailRiskLevel:
        if score >= HIGH_THRESHOLD:
            return EmailRiskLevel.HIGH
        elif score >= MEDIUM_THRESHOLD:
            return EmailRiskLevel.MEDIUM
        return EmailRiskLevel.LOW


_default_analyzer = EmailAnalyzer()


def analyze_email(content: str) -> EmailAssessment:
    """기본 분석기로 이메일 위험도 평가"""
    return _default_analyzer.analyze(content)
