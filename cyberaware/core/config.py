"""
서비스 설정 모듈
================

Pydantic BaseSettings 기반 CyberAware 전역 설정.
환경 변수, .env 파일, 기본값을 지원합니다.

분석기 가중치/임계값은 설정이 아닌 고정 상수입니다.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class DatabaseConfig(BaseSettings):
    """저장소 설정"""

    # 기본값은 메모리 DB (영속성 보장 없음)
    db_path: str = Field(
        default=":memory:",
        description="SQLite DB 파일 경로 (:memory: 허용)"
    )

    model_config = {"env_prefix": "DB_", "env_file": ".env", "extra": "ignore"}


class ServerConfig(BaseSettings):
    """HTTP 서버 설정"""

    host: str = Field(default="127.0.0.1", description="HTTP 서버 호스트")
    port: int = Field(default=5000, ge=1, le=65535, description="HTTP 서버 포트")
    client_max_size: int = Field(
        default=1024 * 1024,  # 1MB
        description="최대 요청 본문 크기 (바이트)"
    )

    model_config = {"env_prefix": "HTTP_", "env_file": ".env", "extra": "ignore"}


class ReportConfig(BaseSettings):
    """보안 보고서 및 저장 정책"""

    recent_check_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="보고서에 노출할 유형별 최근 검사 수"
    )
    email_excerpt_length: int = Field(
        default=500,
        ge=1,
        description="저장할 이메일 본문 최대 길이"
    )

    model_config = {"env_prefix": "REPORT_", "env_file": ".env", "extra": "ignore"}


class AppConfig(BaseSettings):
    """
    서비스 전역 설정

    모든 하위 설정을 통합 관리합니다.
    환경 변수 또는 .env 파일에서 설정을 로드합니다.
    """

    app_name: str = Field(default="cyberaware", description="서비스 이름")
    version: str = Field(default="0.1.0", description="서비스 버전")
    debug: bool = Field(default=False, description="디버그 모드")
    log_level: str = Field(default="INFO", description="로그 레벨")

    # 하위 설정
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    model_config = {"env_prefix": "CYBERAWARE_", "env_file": ".env", "extra": "ignore"}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """유효한 로그 레벨인지 확인"""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"유효하지 않은 로그 레벨: {v}. 가능한 값: {valid_levels}")
        return upper

    @property
    def uses_memory_db(self) -> bool:
        """메모리 DB 사용 여부"""
        return self.database.db_path == ":memory:"
