"""
API 모듈
========

aiohttp HTTP 서버를 통해 웹 클라이언트에 분석/보고서 API를 제공합니다.
"""

from cyberaware.api.http_server import create_app, serve

__all__ = [
    "create_app",
    "serve",
]
