"""
비밀번호 강도 분석기
===================

다섯 가지 독립 규칙과 길이 보너스로 0~100 점수를 산출합니다.

규칙 (가산):
- 길이: 12자 이상 +25, 8자 이상 +15
- 소문자 +15, 대문자 +15, 숫자 +15
- 특수문자 +20
- 16자 이상 보너스 +10

분류: 70 이상 strong, 40 이상 medium, 그 외 weak
"""

from __future__ import annotations

import logging
import re

from cyberaware.core.assessments import PasswordAssessment, PasswordStrength

logger = logging.getLogger(__name__)

# ============================================================
# 제안 메시지
# ============================================================

SUGGEST_LENGTH = "Use at least 12 characters for better security"
SUGGEST_LOWERCASE = "Add lowercase letters"
SUGGEST_UPPERCASE = "Add uppercase letters"
SUGGEST_DIGIT = "Add numbers"
SUGGEST_SPECIAL = "Add special characters (!@#$%^&*)"
PRAISE_STRONG = "Excellent! Your password is strong"

# ============================================================
# 점수 가중치
# ============================================================

LONG_LENGTH = 12
MIN_LENGTH = 8
BONUS_LENGTH = 16

LONG_LENGTH_POINTS = 25
MIN_LENGTH_POINTS = 15
LOWERCASE_POINTS = 15
UPPERCASE_POINTS = 15
DIGIT_POINTS = 15
SPECIAL_POINTS = 20
BONUS_LENGTH_POINTS = 10

MAX_SCORE = 100
STRONG_THRESHOLD = 70
MEDIUM_THRESHOLD = 40


class PasswordAnalyzer:
    """
    비밀번호 강도 분석기

    상태를 갖지 않으며, 같은 입력에 대해 항상 같은 결과를 반환합니다.
    """

    def __init__(self) -> None:
        # 문자 클래스는 ASCII 기준
        self._lower_pattern = re.compile(r"[a-z]")
        self._upper_pattern = re.compile(r"[A-Z]")
        self._digit_pattern = re.compile(r"[0-9]")
        self._special_pattern = re.compile(r"[^a-zA-Z0-9]")

    def analyze(self, password: str) -> PasswordAssessment:
        """
        비밀번호 강도 평가

        Args:
            password: 평가할 비밀번호 (빈 문자열 허용)

        Returns:
            PasswordAssessment
        """
        score = 0
        suggestions: list[str] = []
        length = len(password)

        if length >= LONG_LENGTH:
            score += LONG_LENGTH_POINTS
        elif length >= MIN_LENGTH:
            score += MIN_LENGTH_POINTS
        else:
            suggestions.append(SUGGEST_LENGTH)

        checks = (
            (self._lower_pattern, LOWERCASE_POINTS, SUGGEST_LOWERCASE),
            (self._upper_pattern, UPPERCASE_POINTS, SUGGEST_UPPERCASE),
            (self._digit_pattern, DIGIT_POINTS, SUGGEST_DIGIT),
            (self._special_pattern, SPECIAL_POINTS, SUGGEST_SPECIAL),
        )
        for pattern, points, suggestion in checks:
            if pattern.search(password):
                score += points
            else:
                suggestions.append(suggestion)

        if length >= BONUS_LENGTH:
            score += BONUS_LENGTH_POINTS

        score = max(0, min(MAX_SCORE, score))
        strength = self._score_to_strength(score)

        if strength is PasswordStrength.STRONG:
            suggestions.append(PRAISE_STRONG)

        logger.debug("비밀번호 분석: 길이=%d, 점수=%d, 강도=%s", length, score, strength.value)
        return PasswordAssessment(
            strength=strength,
            score=score,
            suggestions=tuple(suggestions),
        )

    @staticmethod
    def _score_to_strength(score: int) -> PasswordStrength:
        """점수를 강도로 변환"""
        if score >= STRONG_THRESHOLD:
            return PasswordStrength.STRONG
        elif score >= MEDIUM_THRESHOLD:
            return PasswordStrength.MEDIUM
        return PasswordStrength.WEAK


_default_analyzer = PasswordAnalyzer()


def analyze_password(password: str) -> PasswordAssessment:
    """기본 분석기로 비밀번호 강도 평가"""
    return _default_analyzer.analyze(password)
