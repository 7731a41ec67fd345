"""
분석기 모듈
===========

비밀번호, URL, 이메일 본문에 대한 휴리스틱 위험 분석기 모음.
모든 분석기는 순수 함수이며 네트워크에 접근하지 않습니다.

- PasswordAnalyzer: 비밀번호 강도 평가
- UrlAnalyzer: URL 피싱 위험 평가
- EmailAnalyzer: 이메일 피싱 위험 평가
"""

from cyberaware.analyzers.email_analyzer import EmailAnalyzer, analyze_email
from cyberaware.analyzers.password_analyzer import PasswordAnalyzer, analyze_password
from cyberaware.analyzers.url_analyzer import UrlAnalyzer, analyze_url

__all__ = [
    "PasswordAnalyzer",
    "UrlAnalyzer",
    "EmailAnalyzer",
    "analyze_password",
    "analyze_url",
    "analyze_email",
]
