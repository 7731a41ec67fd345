"""
평가 결과 데이터 모델
====================

분석기가 생성하는 불변 평가 결과(Assessment)와,
저장소가 ID/타임스탬프를 부여한 검사 기록(Check) 타입을 정의합니다.

모든 타입은 to_dict()로 HTTP 응답용 camelCase JSON 형태를 반환합니다.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


# ============================================================
# 열거형
# ============================================================

class PasswordStrength(str, Enum):
    """비밀번호 강도"""
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"


class UrlSafety(str, Enum):
    """URL 안전성 판정"""
    SAFE = "safe"
    SUSPICIOUS = "suspicious"
    DANGEROUS = "dangerous"


class EmailRiskLevel(str, Enum):
    """이메일 위험 수준"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ============================================================
# 공용 헬퍼
# ============================================================

def round_half_up(value: float) -> int:
    """0.5를 올림하는 반올림 (Python round()의 은행가 반올림 대신 사용)"""
    return int(math.floor(value + 0.5))


def _isoformat(timestamp: float) -> str:
    """epoch 초 → ISO-8601 UTC 문자열"""
    return (
        datetime.fromtimestamp(timestamp, tz=timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


# ============================================================
# 분석기 평가 결과
# ============================================================

@dataclass(frozen=True)
class PasswordAssessment:
    """비밀번호 강도 평가 결과"""
    strength: PasswordStrength
    score: int  # 0 ~ 100
    suggestions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "strength": self.strength.value,
            "score": self.score,
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class UrlAssessment:
    """URL 피싱 위험 평가 결과 (risk_level은 100을 넘을 수 있음)"""
    safety: UrlSafety
    risk_level: int
    threats: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "isSafe": self.safety.value,
            "riskLevel": self.risk_level,
            "threats": list(self.threats),
        }


@dataclass(frozen=True)
class EmailAssessment:
    """이메일 피싱 위험 평가 결과 (risk_score는 0 ~ 100으로 제한)"""
    risk_level: EmailRiskLevel
    risk_score: int
    detected_threats: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "riskScore": self.risk_score,
            "riskLevel": self.risk_level.value,
            "detectedThreats": list(self.detected_threats),
        }


# ============================================================
# 저장된 검사 기록
# ============================================================

@dataclass(frozen=True)
class PasswordCheck:
    """저장된 비밀번호 검사 기록 (비밀번호 원문은 저장하지 않음)"""
    id: str
    password_hash: str
    strength: PasswordStrength
    score: int
    suggestions: tuple[str, ...]
    created_at: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "passwordHash": self.password_hash,
            "strength": self.strength.value,
            "score": self.score,
            "suggestions": list(self.suggestions),
            "createdAt": _isoformat(self.created_at),
        }


@dataclass(frozen=True)
class UrlCheck:
    """저장된 URL 검사 기록"""
    id: str
    url: str
    safety: UrlSafety
    risk_level: int
    threats: tuple[str, ...]
    created_at: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "isSafe": self.safety.value,
            "riskLevel": self.risk_level,
            "threats": list(self.threats),
            "createdAt": _isoformat(self.created_at),
        }


@dataclass(frozen=True)
class EmailCheck:
    """저장된 이메일 검사 기록 (본문은 앞부분만 저장)"""
    id: str
    email_content: str
    risk_score: int
    risk_level: EmailRiskLevel
    detected_threats: tuple[str, ...]
    created_at: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "emailContent": self.email_content,
            "riskScore": self.risk_score,
            "riskLevel": self.risk_level.value,
            "detectedThreats": list(self.detected_threats),
            "createdAt": _isoformat(self.created_at),
        }


# ============================================================
# 학습 모듈 / 진행 상황
# ============================================================

@dataclass(frozen=True)
class QuizQuestion:
    """퀴즈 문항"""
    question: str
    options: tuple[str, ...]
    correct_answer: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.question,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuizQuestion":
        return cls(
            question=data["question"],
            options=tuple(data["options"]),
            correct_answer=int(data["correctAnswer"]),
        )


@dataclass(frozen=True)
class LearningModule:
    """보안 학습 모듈"""
    id: str
    title: str
    description: str
    content: str
    category: str
    icon: str
    quiz_questions: tuple[QuizQuestion, ...] = ()

    def quiz_questions_json(self) -> str:
        """퀴즈 문항 JSON 문자열 (API 응답에서는 문자열 필드)"""
        return json.dumps([q.to_dict() for q in self.quiz_questions], ensure_ascii=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "content": self.content,
            "category": self.category,
            "icon": self.icon,
            "quizQuestions": self.quiz_questions_json(),
        }


@dataclass(frozen=True)
class UserProgress:
    """학습 모듈 완료 기록"""
    id: str
    module_id: str
    completed: str  # "yes" | "no"
    quiz_score: Optional[int]
    completed_at: float

    @property
    def is_completed(self) -> bool:
        return self.completed == "yes"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "moduleId": self.module_id,
            "completed": self.completed,
            "quizScore": self.quiz_score,
            "completedAt": _isoformat(self.completed_at),
        }


# ============================================================
# 보안 보고서
# ============================================================

@dataclass(frozen=True)
class LearningProgress:
    """학습 진행 요약"""
    completed_modules: int = 0
    total_modules: int = 0
    average_quiz_score: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "completedModules": self.completed_modules,
            "totalModules": self.total_modules,
            "averageQuizScore": self.average_quiz_score,
        }


@dataclass(frozen=True)
class SecurityReport:
    """검사 이력과 학습 진행을 합친 종합 보안 보고서"""
    total_checks: int
    password_checks: tuple[PasswordCheck, ...] = ()
    url_checks: tuple[UrlCheck, ...] = ()
    email_checks: tuple[EmailCheck, ...] = ()
    learning_progress: LearningProgress = field(default_factory=LearningProgress)
    overall_security_score: int = 50

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalChecks": self.total_checks,
            "passwordChecks": [c.to_dict() for c in self.password_checks],
            "urlChecks": [c.to_dict() for c in self.url_checks],
            "emailChecks": [c.to_dict() for c in self.email_checks],
            "learningProgress": self.learning_progress.to_dict(),
            "overallSecurityScore": self.overall_security_score,
        }
