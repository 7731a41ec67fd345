"""분석기 공용 정규식 패턴"""

import re

# IPv4 형태의 점 구분 숫자 (문자열 어디서든 매칭, 옥텟 범위는 검사하지 않음)
IPV4_PATTERN = re.compile(r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}", re.ASCII)

# http(s):// 로 시작하는 링크 토큰
LINK_PATTERN = re.compile(r"https?://\S+", re.IGNORECASE)
