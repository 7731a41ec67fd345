"""
보안 인식 서비스 코어 모듈
=========================

분석기와 저장소를 조율하는 AwarenessService 클래스.
요청 처리 계층은 이 서비스만 호출하며,
분석 → 저장 → 보고서 집계 흐름을 담당합니다.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from cyberaware.analyzers import EmailAnalyzer, PasswordAnalyzer, UrlAnalyzer
from cyberaware.core.assessments import (
    EmailAssessment,
    EmailCheck,
    LearningModule,
    PasswordAssessment,
    PasswordCheck,
    SecurityReport,
    UrlAssessment,
    UrlCheck,
    UserProgress,
)
from cyberaware.core.config import AppConfig
from cyberaware.core.learning import grade_quiz
from cyberaware.utils.awareness_db import AwarenessDatabase

logger = logging.getLogger(__name__)


def password_fingerprint(password: str, assessment: PasswordAssessment) -> str:
    """
    저장용 비밀번호 지문

    길이와 점수만 담은 비밀 아닌 식별자입니다. 자격 증명 해시가 아닙니다.
    """
    return f"hash_{len(password)}_{assessment.score}"


class AwarenessService:
    """
    보안 인식 서비스

    비밀번호/URL/이메일 분석 결과를 저장하고,
    학습 진행과 종합 보안 보고서를 제공합니다.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        db: Optional[AwarenessDatabase] = None,
    ) -> None:
        """
        서비스 초기화

        Args:
            config: 서비스 설정. None이면 기본 설정 사용.
            db: 저장소. None이면 설정의 db_path로 생성.
        """
        self.config = config or AppConfig()
        self.db = db or AwarenessDatabase(self.config.database.db_path)
        self._password_analyzer = PasswordAnalyzer()
        self._url_analyzer = UrlAnalyzer()
        self._email_analyzer = EmailAnalyzer()
        self._initialized = False

        logger.info("AwarenessService 인스턴스 생성 (v%s)", self.config.version)

    async def initialize(self) -> None:
        """저장소 연결"""
        if self._initialized:
            logger.warning("AwarenessService가 이미 초기화되어 있습니다")
            return

        await self.db.connect()
        self._initialized = True
        logger.info("AwarenessService 초기화 완료")

    async def shutdown(self) -> None:
        """저장소 연결 종료"""
        await self.db.close()
        self._initialized = False
        logger.info("AwarenessService 종료 완료")

    # ============================
    # 검사
    # ============================

    async def check_password(
        self, password: str
    ) -> tuple[PasswordCheck, PasswordAssessment]:
        """비밀번호 분석 후 지문과 결과 저장"""
        self._ensure_initialized()

        assessment = self._password_analyzer.analyze(password)
        check = await self.db.add_password_check(
            password_fingerprint(password, assessment), assessment
        )
        logger.info("비밀번호 검사: %s (점수 %d)", assessment.strength.value, assessment.score)
        return check, assessment

    async def check_url(self, url: str) -> tuple[UrlCheck, UrlAssessment]:
        """URL 분석 후 결과 저장"""
        self._ensure_initialized()

        assessment = self._url_analyzer.analyze(url)
        check = await self.db.add_url_check(url, assessment)
        logger.info(
            "URL 검사: %s → %s (위험도 %d)",
            url, assessment.safety.value, assessment.risk_level,
        )
        return check, assessment

    async def check_email(self, content: str) -> tuple[EmailCheck, EmailAssessment]:
        """이메일 분석 후 결과 저장 (본문은 앞부분만 저장)"""
        self._ensure_initialized()

        assessment = self._email_analyzer.analyze(content)
        excerpt = content[:self.config.report.email_excerpt_length]
        check = await self.db.add_email_check(excerpt, assessment)
        logger.info(
            "이메일 검사: %s (점수 %d, 위협 %d건)",
            assessment.risk_level.value, assessment.risk_score,
            len(assessment.detected_threats),
        )
        return check, assessment

    async def list_password_checks(self) -> list[PasswordCheck]:
        self._ensure_initialized()
        return await self.db.get_password_checks()

    async def list_url_checks(self) -> list[UrlCheck]:
        self._ensure_initialized()
        return await self.db.get_url_checks()

    async def list_email_checks(self) -> list[EmailCheck]:
        self._ensure_initialized()
        return await self.db.get_email_checks()

    # ============================
    # 학습
    # ============================

    async def list_learning_modules(self) -> list[LearningModule]:
        self._ensure_initialized()
        return await self.db.get_learning_modules()

    async def get_learning_module(self, module_id: str) -> Optional[LearningModule]:
        self._ensure_initialized()
        return await self.db.get_learning_module(module_id)

    async def list_progress(self) -> list[UserProgress]:
        self._ensure_initialized()
        return await self.db.get_user_progress()

    async def record_progress(
        self,
        module_id: str,
        completed: str,
        quiz_score: Optional[int] = None,
    ) -> UserProgress:
        """
        학습 진행 기록

        Raises:
            LookupError: 존재하지 않는 모듈
        """
        self._ensure_initialized()

        if await self.db.get_learning_module(module_id) is None:
            raise LookupError(f"학습 모듈을 찾을 수 없습니다: {module_id}")

        progress = await self.db.add_user_progress(module_id, completed, quiz_score)
        logger.info("학습 진행 기록: module=%s, completed=%s", module_id, completed)
        return progress

    async def submit_quiz(
        self, module_id: str, answers: Sequence[int]
    ) -> UserProgress:
        """
        퀴즈 채점 후 완료 기록 저장

        Raises:
            LookupError: 존재하지 않는 모듈
            ValueError: 응답 수가 문항 수보다 많은 경우
        """
        self._ensure_initialized()

        module = await self.db.get_learning_module(module_id)
        if module is None:
            raise LookupError(f"학습 모듈을 찾을 수 없습니다: {module_id}")

        score = grade_quiz(module, answers)
        progress = await self.db.add_user_progress(module_id, "yes", score)
        logger.info("퀴즈 채점: %s → %d점", module.title, score)
        return progress

    # ============================
    # 보고서
    # ============================

    async def get_security_report(self) -> SecurityReport:
        """종합 보안 보고서"""
        self._ensure_initialized()
        return await self.db.get_security_report(self.config.report.recent_check_limit)

    # ============================
    # 유틸리티
    # ============================

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError(
                "AwarenessService가 초기화되지 않았습니다. "
                "await service.initialize()를 먼저 호출하세요."
            )

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def __repr__(self) -> str:
        return (
            f"AwarenessService(name={self.config.app_name!r}, "
            f"version={self.config.version!r}, "
            f"initialized={self._initialized})"
        )
