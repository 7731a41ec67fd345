"""
보안 점수 집계기
===============

저장된 검사 이력과 학습 진행 기록을 하나의 SecurityReport로 합칩니다.

점수 (0~100):
- 기본 50
- strong 비밀번호가 하나라도 있으면 +15
- safe URL이 하나라도 있으면 +10
- low 위험 이메일이 하나라도 있으면 +10
- 학습 보너스 min(완료 모듈 / 전체 모듈 × 15, 15)

보너스는 개수가 아닌 존재 여부로만 결정됩니다.
I/O를 수행하지 않는 순수 계산입니다.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, TypeVar

from cyberaware.core.assessments import (
    EmailCheck,
    EmailRiskLevel,
    LearningProgress,
    PasswordCheck,
    PasswordStrength,
    SecurityReport,
    UrlCheck,
    UrlSafety,
    UserProgress,
    round_half_up,
)

logger = logging.getLogger(__name__)

BASE_SCORE = 50
STRONG_PASSWORD_BONUS = 15
SAFE_URL_BONUS = 10
LOW_RISK_EMAIL_BONUS = 10
MAX_LEARNING_BONUS = 15
DEFAULT_RECENT_LIMIT = 5

_CheckT = TypeVar("_CheckT", PasswordCheck, UrlCheck, EmailCheck)


class SecurityScoreAggregator:
    """
    검사 이력 → 종합 보안 보고서 집계기

    사용 예:
        aggregator = SecurityScoreAggregator(recent_limit=5)
        report = aggregator.compute(passwords, urls, emails, progress, total_modules=6)
    """

    def __init__(self, recent_limit: int = DEFAULT_RECENT_LIMIT) -> None:
        if recent_limit < 0:
            raise ValueError(f"recent_limit은 0 이상이어야 합니다: {recent_limit}")
        self.recent_limit = recent_limit

    def compute(
        self,
        password_history: Iterable[PasswordCheck],
        url_history: Iterable[UrlCheck],
        email_history: Iterable[EmailCheck],
        completion_history: Iterable[UserProgress],
        total_modules: int,
    ) -> SecurityReport:
        """
        종합 보안 보고서 생성

        Args:
            password_history: 전체 비밀번호 검사 이력
            url_history: 전체 URL 검사 이력
            email_history: 전체 이메일 검사 이력
            completion_history: 전체 학습 모듈 완료 기록
            total_modules: 정의된 학습 모듈 수

        Returns:
            SecurityReport
        """
        passwords = self._most_recent_first(password_history)
        urls = self._most_recent_first(url_history)
        emails = self._most_recent_first(email_history)
        progress = list(completion_history)

        learning = self._learning_progress(progress, total_modules)
        score = self._overall_score(passwords, urls, emails, learning)

        report = SecurityReport(
            total_checks=len(passwords) + len(urls) + len(emails),
            password_checks=tuple(passwords[:self.recent_limit]),
            url_checks=tuple(urls[:self.recent_limit]),
            email_checks=tuple(emails[:self.recent_limit]),
            learning_progress=learning,
            overall_security_score=score,
        )
        logger.debug(
            "보안 보고서 집계: 검사 %d건, 완료 모듈 %d/%d, 점수 %d",
            report.total_checks, learning.completed_modules,
            learning.total_modules, score,
        )
        return report

    # ============================
    # 내부 계산
    # ============================

    @staticmethod
    def _most_recent_first(history: Iterable[_CheckT]) -> list[_CheckT]:
        """created_at 내림차순 (동일 시각은 입력 순서 유지)"""
        return sorted(history, key=lambda check: check.created_at, reverse=True)

    @staticmethod
    def _learning_progress(
        progress: Sequence[UserProgress], total_modules: int
    ) -> LearningProgress:
        completed = {p.module_id for p in progress if p.is_completed}
        quiz_scores = [p.quiz_score for p in progress if p.quiz_score is not None]
        average = (
            round_half_up(sum(quiz_scores) / len(quiz_scores)) if quiz_scores else 0
        )
        return LearningProgress(
            completed_modules=len(completed),
            total_modules=total_modules,
            average_quiz_score=average,
        )

    @staticmethod
    def _overall_score(
        passwords: Sequence[PasswordCheck],
        urls: Sequence[UrlCheck],
        emails: Sequence[EmailCheck],
        learning: LearningProgress,
    ) -> int:
        score: float = BASE_SCORE

        if any(p.strength is PasswordStrength.STRONG for p in passwords):
            score += STRONG_PASSWORD_BONUS
        if any(u.safety is UrlSafety.SAFE for u in urls):
            score += SAFE_URL_BONUS
        if any(e.risk_level is EmailRiskLevel.LOW for e in emails):
            score += LOW_RISK_EMAIL_BONUS

        # 모듈이 없으면 학습 보너스 없음
        if learning.total_modules > 0:
            ratio = learning.completed_modules / learning.total_modules
            score += min(ratio * MAX_LEARNING_BONUS, MAX_LEARNING_BONUS)

        return max(0, min(100, round_half_up(score)))


def compute_security_report(
    password_history: Iterable[PasswordCheck],
    url_history: Iterable[UrlCheck],
    email_history: Iterable[EmailCheck],
    completion_history: Iterable[UserProgress],
    total_module_count: int,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> SecurityReport:
    """종합 보안 보고서 생성 (함수형 진입점)"""
    return SecurityScoreAggregator(recent_limit).compute(
        password_history,
        url_history,
        email_history,
        completion_history,
        total_module_count,
    )
