"""
보안 인식 데이터베이스
=====================

aiosqlite 기반 비동기 검사 이력 저장소.

스키마:
- password_checks: 비밀번호 검사 (id, password_hash, strength, score, suggestions, created_at)
- url_checks: URL 검사 (id, url, is_safe, risk_level, threats, created_at)
- email_checks: 이메일 검사 (id, email_content, risk_score, risk_level, detected_threats, created_at)
- learning_modules: 학습 모듈 (id, title, description, content, category, icon, quiz_questions, position)
- user_progress: 학습 진행 (id, module_id, completed, quiz_score, completed_at)

기능:
- 비동기 생성/조회
- 최초 연결 시 학습 모듈 시드
- 보안 보고서 집계 (SecurityScoreAggregator 위임)
- 컨텍스트 매니저 (자동 연결/종료)
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from pathlib import Path
from typing import Any, Iterable, Optional

import aiosqlite

from cyberaware.core.assessments import (
    EmailAssessment,
    EmailCheck,
    EmailRiskLevel,
    LearningModule,
    PasswordAssessment,
    PasswordCheck,
    PasswordStrength,
    QuizQuestion,
    SecurityReport,
    UrlAssessment,
    UrlCheck,
    UrlSafety,
    UserProgress,
)
from cyberaware.core.learning import DEFAULT_LEARNING_MODULES
from cyberaware.core.report import DEFAULT_RECENT_LIMIT, SecurityScoreAggregator

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


# ============================================================
# DB 스키마 정의
# ============================================================

_SCHEMA_SQL = """
-- 비밀번호 검사 (원문 대신 길이/점수 지문만 저장)
CREATE TABLE IF NOT EXISTS password_checks (
    id TEXT PRIMARY KEY,
    password_hash TEXT NOT NULL,
    strength TEXT NOT NULL,
    score INTEGER NOT NULL,
    suggestions TEXT NOT NULL DEFAULT '[]',
    created_at REAL NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_password_checks_created ON password_checks(created_at);

-- URL 검사
CREATE TABLE IF NOT EXISTS url_checks (
    id TEXT PRIMARY KEY,
    url TEXT NOT NULL,
    is_safe TEXT NOT NULL,
    risk_level INTEGER NOT NULL,
    threats TEXT NOT NULL DEFAULT '[]',
    created_at REAL NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_url_checks_created ON url_checks(created_at);

-- 이메일 검사
CREATE TABLE IF NOT EXISTS email_checks (
    id TEXT PRIMARY KEY,
    email_content TEXT NOT NULL,
    risk_score INTEGER NOT NULL,
    risk_level TEXT NOT NULL,
    detected_threats TEXT NOT NULL DEFAULT '[]',
    created_at REAL NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_email_checks_created ON email_checks(created_at);

-- 학습 모듈
CREATE TABLE IF NOT EXISTS learning_modules (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    content TEXT NOT NULL,
    category TEXT NOT NULL,
    icon TEXT NOT NULL,
    quiz_questions TEXT NOT NULL DEFAULT '[]',
    position INTEGER NOT NULL DEFAULT 0
);

-- 학습 진행
CREATE TABLE IF NOT EXISTS user_progress (
    id TEXT PRIMARY KEY,
    module_id TEXT NOT NULL,
    completed TEXT NOT NULL,
    quiz_score INTEGER,
    completed_at REAL NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_user_progress_module ON user_progress(module_id);
"""


# ============================================================
# 보안 인식 데이터베이스
# ============================================================

class AwarenessDatabase:
    """
    비동기 검사 이력 데이터베이스

    aiosqlite를 사용하여 비동기 SQLite 연산을 수행합니다.
    컨텍스트 매니저 패턴을 지원합니다.

    사용 예:
        async with AwarenessDatabase(":memory:") as db:
            check = await db.add_url_check(url, analyze_url(url))
            report = await db.get_security_report()
    """

    def __init__(
        self,
        db_path: str = MEMORY_DB,
        seed_modules: Iterable[LearningModule] = DEFAULT_LEARNING_MODULES,
    ) -> None:
        """
        데이터베이스 초기화

        Args:
            db_path: SQLite 파일 경로 (기본값: 메모리 DB)
            seed_modules: 모듈 테이블이 비어 있을 때 채울 학습 모듈
        """
        self._db_path = db_path
        self._seed_modules = tuple(seed_modules)
        self._connection: Optional[aiosqlite.Connection] = None
        self._initialized = False
        logger.info("AwarenessDatabase 인스턴스 생성: %s", db_path)

    # ============================
    # 컨텍스트 매니저
    # ============================

    async def __aenter__(self) -> "AwarenessDatabase":
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # ============================
    # 연결 관리
    # ============================

    async def connect(self) -> None:
        """
        DB 연결, 스키마 초기화, 학습 모듈 시드

        파일 DB의 경우 디렉토리가 없으면 자동 생성합니다.
        """
        if self._connection is not None:
            return

        if self._db_path != MEMORY_DB:
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

        self._connection = await aiosqlite.connect(self._db_path)
        if self._db_path != MEMORY_DB:
            await self._connection.execute("PRAGMA journal_mode=WAL")
        self._connection.row_factory = aiosqlite.Row

        await self._connection.executescript(_SCHEMA_SQL)
        await self._connection.commit()
        self._initialized = True

        await self._seed_learning_modules()
        logger.info("AwarenessDatabase 연결 완료: %s", self._db_path)

    async def close(self) -> None:
        """DB 연결 종료"""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None
            self._initialized = False
            logger.info("AwarenessDatabase 연결 종료")

    def _ensure_connected(self) -> aiosqlite.Connection:
        """연결 상태 확인"""
        if self._connection is None or not self._initialized:
            raise RuntimeError(
                "AwarenessDatabase가 연결되지 않았습니다. "
                "await db.connect() 또는 async with를 사용하세요."
            )
        return self._connection

    async def _seed_learning_modules(self) -> None:
        """학습 모듈 테이블이 비어 있으면 기본 모듈 저장"""
        if await self.count_learning_modules() > 0 or not self._seed_modules:
            return

        conn = self._ensure_connected()
        rows = [
            (
                str(uuid.uuid4()),
                module.title,
                module.description,
                module.content,
                module.category,
                module.icon,
                module.quiz_questions_json(),
                position,
            )
            for position, module in enumerate(self._seed_modules)
        ]
        await conn.executemany(
            """
            INSERT INTO learning_modules
                (id, title, description, content, category, icon, quiz_questions, position)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            rows,
        )
        await conn.commit()
        logger.info("학습 모듈 시드 완료: %d개", len(rows))

    # ============================
    # 비밀번호 검사
    # ============================

    async def add_password_check(
        self, password_hash: str, assessment: PasswordAssessment
    ) -> PasswordCheck:
        """
        비밀번호 검사 결과 저장

        Args:
            password_hash: 비밀번호 지문 (원문/자격 증명 해시 아님)
            assessment: 분석 결과

        Returns:
            ID와 생성 시각이 부여된 PasswordCheck
        """
        conn = self._ensure_connected()
        check = PasswordCheck(
            id=str(uuid.uuid4()),
            password_hash=password_hash,
            strength=assessment.strength,
            score=assessment.score,
            suggestions=assessment.suggestions,
            created_at=time.time(),
        )
        await conn.execute(
            """
            INSERT INTO password_checks (id, password_hash, strength, score, suggestions, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                check.id, check.password_hash, check.strength.value, check.score,
                _dump_list(check.suggestions), check.created_at,
            ),
        )
        await conn.commit()
        logger.debug("비밀번호 검사 저장: id=%s, 강도=%s", check.id, check.strength.value)
        return check

    async def get_password_checks(self) -> list[PasswordCheck]:
        """전체 비밀번호 검사 이력 (최신순)"""
        rows = await self._fetch_recent("password_checks", "created_at")
        return [
            PasswordCheck(
                id=row["id"],
                password_hash=row["password_hash"],
                strength=PasswordStrength(row["strength"]),
                score=row["score"],
                suggestions=_load_list(row["suggestions"]),
                created_at=row["created_at"],
            )
            for row in rows
        ]

    # ============================
    # URL 검사
    # ============================

    async def add_url_check(self, url: str, assessment: UrlAssessment) -> UrlCheck:
        """URL 검사 결과 저장"""
        conn = self._ensure_connected()
        check = UrlCheck(
            id=str(uuid.uuid4()),
            url=url,
            safety=assessment.safety,
            risk_level=assessment.risk_level,
            threats=assessment.threats,
            created_at=time.time(),
        )
        await conn.execute(
            """
            INSERT INTO url_checks (id, url, is_safe, risk_level, threats, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                check.id, check.url, check.safety.value, check.risk_level,
                _dump_list(check.threats), check.created_at,
            ),
        )
        await conn.commit()
        logger.debug("URL 검사 저장: id=%s, 판정=%s", check.id, check.safety.value)
        return check

    async def get_url_checks(self) -> list[UrlCheck]:
        """전체 URL 검사 이력 (최신순)"""
        rows = await self._fetch_recent("url_checks", "created_at")
        return [
            UrlCheck(
                id=row["id"],
                url=row["url"],
                safety=UrlSafety(row["is_safe"]),
                risk_level=row["risk_level"],
                threats=_load_list(row["threats"]),
                created_at=row["created_at"],
            )
            for row in rows
        ]

    # ============================
    # 이메일 검사
    # ============================

    async def add_email_check(
        self, email_content: str, assessment: EmailAssessment
    ) -> EmailCheck:
        """
        이메일 검사 결과 저장

        본문 길이 제한은 호출자 책임입니다.
        """
        conn = self._ensure_connected()
        check = EmailCheck(
            id=str(uuid.uuid4()),
            email_content=email_content,
            risk_score=assessment.risk_score,
            risk_level=assessment.risk_level,
            detected_threats=assessment.detected_threats,
            created_at=time.time(),
        )
        await conn.execute(
            """
            INSERT INTO email_checks
                (id, email_content, risk_score, risk_level, detected_threats, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                check.id, check.email_content, check.risk_score, check.risk_level.value,
                _dump_list(check.detected_threats), check.created_at,
            ),
        )
        await conn.commit()
        logger.debug("이메일 검사 저장: id=%s, 수준=%s", check.id, check.risk_level.value)
        return check

    async def get_email_checks(self) -> list[EmailCheck]:
        """전체 이메일 검사 이력 (최신순)"""
        rows = await self._fetch_recent("email_checks", "created_at")
        return [
            EmailCheck(
                id=row["id"],
                email_content=row["email_content"],
                risk_score=row["risk_score"],
                risk_level=EmailRiskLevel(row["risk_level"]),
                detected_threats=_load_list(row["detected_threats"]),
                created_at=row["created_at"],
            )
            for row in rows
        ]

    # ============================
    # 학습 모듈
    # ============================

    async def get_learning_modules(self) -> list[LearningModule]:
        """전체 학습 모듈 (시드 순서)"""
        conn = self._ensure_connected()
        cursor = await conn.execute(
            "SELECT * FROM learning_modules ORDER BY position, rowid"
        )
        rows = await cursor.fetchall()
        return [self._row_to_module(row) for row in rows]

    async def get_learning_module(self, module_id: str) -> Optional[LearningModule]:
        """ID로 학습 모듈 조회"""
        conn = self._ensure_connected()
        cursor = await conn.execute(
            "SELECT * FROM learning_modules WHERE id = ?", (module_id,)
        )
        row = await cursor.fetchone()
        return self._row_to_module(row) if row else None

    async def count_learning_modules(self) -> int:
        """학습 모듈 수"""
        conn = self._ensure_connected()
        cursor = await conn.execute("SELECT COUNT(*) FROM learning_modules")
        row = await cursor.fetchone()
        return row[0]

    # ============================
    # 학습 진행
    # ============================

    async def add_user_progress(
        self,
        module_id: str,
        completed: str,
        quiz_score: Optional[int] = None,
    ) -> UserProgress:
        """
        학습 진행 기록 저장

        Args:
            module_id: 학습 모듈 ID
            completed: "yes" 또는 "no"
            quiz_score: 퀴즈 점수 (0~100, 선택)

        Returns:
            저장된 UserProgress
        """
        conn = self._ensure_connected()
        progress = UserProgress(
            id=str(uuid.uuid4()),
            module_id=module_id,
            completed=completed,
            quiz_score=quiz_score,
            completed_at=time.time(),
        )
        await conn.execute(
            """
            INSERT INTO user_progress (id, module_id, completed, quiz_score, completed_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                progress.id, progress.module_id, progress.completed,
                progress.quiz_score, progress.completed_at,
            ),
        )
        await conn.commit()
        logger.debug("학습 진행 저장: module=%s, completed=%s", module_id, completed)
        return progress

    async def get_user_progress(self) -> list[UserProgress]:
        """전체 학습 진행 기록 (저장 순서)"""
        conn = self._ensure_connected()
        cursor = await conn.execute("SELECT * FROM user_progress ORDER BY rowid")
        rows = await cursor.fetchall()
        return [
            UserProgress(
                id=row["id"],
                module_id=row["module_id"],
                completed=row["completed"],
                quiz_score=row["quiz_score"],
                completed_at=row["completed_at"],
            )
            for row in rows
        ]

    # ============================
    # 보안 보고서
    # ============================

    async def get_security_report(
        self, recent_limit: int = DEFAULT_RECENT_LIMIT
    ) -> SecurityReport:
        """
        저장된 전체 이력으로 종합 보안 보고서 생성

        Args:
            recent_limit: 유형별로 노출할 최근 검사 수

        Returns:
            SecurityReport
        """
        aggregator = SecurityScoreAggregator(recent_limit=recent_limit)
        return aggregator.compute(
            await self.get_password_checks(),
            await self.get_url_checks(),
            await self.get_email_checks(),
            await self.get_user_progress(),
            await self.count_learning_modules(),
        )

    # ============================
    # 유틸리티
    # ============================

    async def _fetch_recent(self, table: str, time_column: str) -> list[aiosqlite.Row]:
        """테이블 전체를 최신순으로 조회 (동일 시각은 나중 삽입 우선)"""
        conn = self._ensure_connected()
        cursor = await conn.execute(
            f"SELECT * FROM {table} ORDER BY {time_column} DESC, rowid DESC"
        )
        return list(await cursor.fetchall())

    @staticmethod
    def _row_to_module(row: aiosqlite.Row) -> LearningModule:
        questions = json.loads(row["quiz_questions"] or "[]")
        return LearningModule(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            content=row["content"],
            category=row["category"],
            icon=row["icon"],
            quiz_questions=tuple(QuizQuestion.from_dict(q) for q in questions),
        )

    @property
    def is_connected(self) -> bool:
        """연결 상태"""
        return self._connection is not None and self._initialized

    def __repr__(self) -> str:
        return (
            f"AwarenessDatabase(path={self._db_path!r}, "
            f"connected={self.is_connected})"
        )


def _dump_list(values: Iterable[str]) -> str:
    return json.dumps(list(values), ensure_ascii=False)


def _load_list(raw: Optional[str]) -> tuple[str, ...]:
    return tuple(json.loads(raw or "[]"))
