"""
HTTP 보안 인식 API 서버
=======================

aiohttp.web 기반 비동기 REST 서버.

엔드포인트:
- POST /api/password-check, GET /api/password-checks
- POST /api/url-check, GET /api/url-checks
- POST /api/email-check, GET /api/email-checks
- GET  /api/learning-modules, GET /api/learning-modules/{id}
- POST /api/learning-modules/{id}/quiz
- POST /api/learning-progress, GET /api/learning-progress
- GET  /api/security-report
- GET  /api/health

입력 검증 실패는 400, 없는 모듈은 404, 내부 오류는 500으로 응답합니다.
서버는 SIGINT/SIGTERM 시 graceful shutdown을 수행합니다.
"""

from __future__ import annotations

import asyncio
import json
import logging
import signal
import time
from typing import Any, AsyncIterator, Literal, Optional

from aiohttp import web
from pydantic import BaseModel, Field, StrictInt, ValidationError

from cyberaware.core.config import AppConfig
from cyberaware.core.service import AwarenessService

logger = logging.getLogger(__name__)

SERVICE_KEY = web.AppKey("service", AwarenessService)


# ============================================================
# 요청 모델
# ============================================================

class ProgressRequest(BaseModel):
    """학습 진행 기록 요청"""
    module_id: str = Field(alias="moduleId", min_length=1)
    completed: Literal["yes", "no"]
    quiz_score: Optional[StrictInt] = Field(default=None, alias="quizScore", ge=0, le=100)

    model_config = {"populate_by_name": True}


class QuizSubmission(BaseModel):
    """퀴즈 응답 제출 요청"""
    answers: list[StrictInt] = Field(default_factory=list)


def _error(status: int, message: str, **extra: Any) -> web.Response:
    return web.json_response({"message": message, **extra}, status=status)


async def _read_json(request: web.Request) -> dict[str, Any]:
    """요청 본문 JSON 파싱 (객체가 아니거나 깨진 본문은 빈 딕셔너리)"""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


# ============================================================
# 요청 핸들러
# ============================================================

class AwarenessHandlers:
    """
    REST 요청 핸들러

    모든 핸들러는 AwarenessService를 통해 분석/저장을 수행합니다.
    """

    def __init__(self, service: AwarenessService) -> None:
        self._service = service

    # ============================
    # 비밀번호
    # ============================

    async def check_password(self, request: web.Request) -> web.Response:
        body = await _read_json(request)
        password = body.get("password")
        if not password or not isinstance(password, str):
            return _error(400, "Password is required")

        try:
            check, assessment = await self._service.check_password(password)
        except Exception as e:
            logger.error("비밀번호 검사 오류: %s", e)
            return _error(500, "Failed to analyze password")

        return web.json_response({**check.to_dict(), "analysis": assessment.to_dict()})

    async def list_password_checks(self, request: web.Request) -> web.Response:
        try:
            checks = await self._service.list_password_checks()
        except Exception as e:
            logger.error("비밀번호 검사 이력 조회 오류: %s", e)
            return _error(500, "Failed to fetch password checks")
        return web.json_response([c.to_dict() for c in checks])

    # ============================
    # URL
    # ============================

    async def check_url(self, request: web.Request) -> web.Response:
        body = await _read_json(request)
        url = body.get("url")
        if not url or not isinstance(url, str):
            return _error(400, "URL is required")

        try:
            check, assessment = await self._service.check_url(url)
        except Exception as e:
            logger.error("URL 검사 오류: %s", e)
            return _error(500, "Failed to analyze URL")

        return web.json_response({**check.to_dict(), "analysis": assessment.to_dict()})

    async def list_url_checks(self, request: web.Request) -> web.Response:
        try:
            checks = await self._service.list_url_checks()
        except Exception as e:
            logger.error("URL 검사 이력 조회 오류: %s", e)
            return _error(500, "Failed to fetch URL checks")
        return web.json_response([c.to_dict() for c in checks])

    # ============================
    # 이메일
    # ============================

    async def check_email(self, request: web.Request) -> web.Response:
        body = await _read_json(request)
        content = body.get("emailContent")
        if not content or not isinstance(content, str):
            return _error(400, "Email content is required")

        try:
            check, assessment = await self._service.check_email(content)
        except Exception as e:
            logger.error("이메일 검사 오류: %s", e)
            return _error(500, "Failed to analyze email")

        return web.json_response({**check.to_dict(), "analysis": assessment.to_dict()})

    async def list_email_checks(self, request: web.Request) -> web.Response:
        try:
            checks = await self._service.list_email_checks()
        except Exception as e:
            logger.error("이메일 검사 이력 조회 오류: %s", e)
            return _error(500, "Failed to fetch email checks")
        return web.json_response([c.to_dict() for c in checks])

    # ============================
    # 학습 모듈
    # ============================

    async def list_learning_modules(self, request: web.Request) -> web.Response:
        try:
            modules = await self._service.list_learning_modules()
        except Exception as e:
            logger.error("학습 모듈 조회 오류: %s", e)
            return _error(500, "Failed to fetch learning modules")
        return web.json_response([m.to_dict() for m in modules])

    async def get_learning_module(self, request: web.Request) -> web.Response:
        module_id = request.match_info["module_id"]
        try:
            module = await self._service.get_learning_module(module_id)
        except Exception as e:
            logger.error("학습 모듈 조회 오류 (%s): %s", module_id, e)
            return _error(500, "Failed to fetch learning module")

        if module is None:
            return _error(404, "Module not found")
        return web.json_response(module.to_dict())

    async def submit_quiz(self, request: web.Request) -> web.Response:
        module_id = request.match_info["module_id"]
        try:
            submission = QuizSubmission.model_validate(await _read_json(request))
        except ValidationError as e:
            return _error(400, "Invalid request data", errors=json.loads(e.json()))

        try:
            progress = await self._service.submit_quiz(module_id, submission.answers)
        except LookupError:
            return _error(404, "Module not found")
        except ValueError as e:
            return _error(400, "Invalid request data", errors=[{"msg": str(e)}])
        except Exception as e:
            logger.error("퀴즈 채점 오류 (%s): %s", module_id, e)
            return _error(500, "Failed to grade quiz")

        return web.json_response(progress.to_dict())

    # ============================
    # 학습 진행
    # ============================

    async def record_progress(self, request: web.Request) -> web.Response:
        try:
            data = ProgressRequest.model_validate(await _read_json(request))
        except ValidationError as e:
            return _error(400, "Invalid request data", errors=json.loads(e.json()))

        try:
            progress = await self._service.record_progress(
                data.module_id, data.completed, data.quiz_score
            )
        except LookupError:
            return _error(404, "Module not found")
        except Exception as e:
            logger.error("학습 진행 저장 오류: %s", e)
            return _error(500, "Failed to save progress")

        return web.json_response(progress.to_dict())

    async def list_progress(self, request: web.Request) -> web.Response:
        try:
            progress = await self._service.list_progress()
        except Exception as e:
            logger.error("학습 진행 조회 오류: %s", e)
            return _error(500, "Failed to fetch progress")
        return web.json_response([p.to_dict() for p in progress])

    # ============================
    # 보고서 / 상태
    # ============================

    async def security_report(self, request: web.Request) -> web.Response:
        try:
            report = await self._service.get_security_report()
        except Exception as e:
            logger.error("보안 보고서 생성 오류: %s", e)
            return _error(500, "Failed to generate security report")
        return web.json_response(report.to_dict())

    async def health(self, request: web.Request) -> web.Response:
        return web.json_response({
            "status": "SERVING",
            "initialized": self._service.is_initialized,
            "timestamp": time.time(),
            "version": self._service.config.version,
        })


# ============================================================
# 애플리케이션 구성
# ============================================================

async def _service_lifecycle(app: web.Application) -> AsyncIterator[None]:
    """앱 시작 시 서비스 초기화, 종료 시 정리"""
    service = app[SERVICE_KEY]
    await service.initialize()
    yield
    await service.shutdown()


def create_app(
    config: Optional[AppConfig] = None,
    service: Optional[AwarenessService] = None,
) -> web.Application:
    """
    aiohttp 애플리케이션 생성

    Args:
        config: 서비스 설정. None이면 기본 설정 사용.
        service: 미리 구성된 서비스 (테스트용). None이면 새로 생성.
    """
    config = config or AppConfig()
    service = service or AwarenessService(config)
    handlers = AwarenessHandlers(service)

    app = web.Application(client_max_size=config.server.client_max_size)
    app[SERVICE_KEY] = service
    app.cleanup_ctx.append(_service_lifecycle)

    app.router.add_post("/api/password-check", handlers.check_password)
    app.router.add_get("/api/password-checks", handlers.list_password_checks)
    app.router.add_post("/api/url-check", handlers.check_url)
    app.router.add_get("/api/url-checks", handlers.list_url_checks)
    app.router.add_post("/api/email-check", handlers.check_email)
    app.router.add_get("/api/email-checks", handlers.list_email_checks)
    app.router.add_get("/api/learning-modules", handlers.list_learning_modules)
    app.router.add_get("/api/learning-modules/{module_id}", handlers.get_learning_module)
    app.router.add_post("/api/learning-modules/{module_id}/quiz", handlers.submit_quiz)
    app.router.add_post("/api/learning-progress", handlers.record_progress)
    app.router.add_get("/api/learning-progress", handlers.list_progress)
    app.router.add_get("/api/security-report", handlers.security_report)
    app.router.add_get("/api/health", handlers.health)

    return app


# ============================================================
# 서버 실행
# ============================================================

def _setup_signal_handlers(
    shutdown_event: asyncio.Event, loop: asyncio.AbstractEventLoop
) -> None:
    """SIGINT (Ctrl+C) 및 SIGTERM 시 종료 이벤트 설정"""
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, shutdown_event.set)


async def serve(config: Optional[AppConfig] = None) -> None:
    """
    HTTP 서버 실행

    서버를 시작하고 종료 시그널을 대기합니다.

    Args:
        config: 서비스 설정. None이면 기본 설정 사용.
    """
    if config is None:
        config = AppConfig()

    app = create_app(config)
    runner = web.AppRunner(app)
    shutdown_event = asyncio.Event()
    _setup_signal_handlers(shutdown_event, asyncio.get_running_loop())

    await runner.setup()
    try:
        site = web.TCPSite(runner, config.server.host, config.server.port)
        await site.start()
        logger.info(
            "CyberAware HTTP 서버 실행 중 (호스트: %s, 포트: %d)",
            config.server.host, config.server.port,
        )
        await shutdown_event.wait()
        logger.info("종료 시그널 수신, 서버 종료 중...")
    finally:
        await runner.cleanup()
        logger.info("HTTP 서버 종료 완료")


# ============================================================
# 엔트리포인트
# ============================================================

def main() -> None:
    """CLI 엔트리포인트"""
    config = AppConfig()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    asyncio.run(serve(config))


if __name__ == "__main__":
    main()
