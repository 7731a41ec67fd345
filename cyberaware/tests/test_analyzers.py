"""분석기 유닛 테스트"""
import pytest

from cyberaware.analyzers import analyze_email, analyze_password, analyze_url
from cyberaware.analyzers import email_analyzer as email_mod
from cyberaware.analyzers import password_analyzer as password_mod
from cyberaware.analyzers import url_analyzer as url_mod
from cyberaware.core.assessments import EmailRiskLevel, PasswordStrength, UrlSafety

# === PasswordAnalyzer 테스트 ===

class TestPasswordAnalyzer:
    """비밀번호 강도 분석기 테스트"""

    def test_empty_password(self):
        """빈 문자열: 0점, weak, 다섯 가지 결함 제안"""
        result = analyze_password("")
        assert result.score == 0
        assert result.strength == PasswordStrength.WEAK
        assert result.suggestions == (
            password_mod.SUGGEST_LENGTH,
            password_mod.SUGGEST_LOWERCASE,
            password_mod.SUGGEST_UPPERCASE,
            password_mod.SUGGEST_DIGIT,
            password_mod.SUGGEST_SPECIAL,
        )
        assert password_mod.PRAISE_STRONG not in result.suggestions

    def test_perfect_password(self):
        """16자 + 모든 문자 클래스: 100점, 칭찬 메시지 하나만"""
        result = analyze_password("Abcdefgh1!jklmn2")
        assert result.score == 100
        assert result.strength == PasswordStrength.STRONG
        assert result.suggestions == (password_mod.PRAISE_STRONG,)

    @pytest.mark.parametrize(
        "password, score, strength",
        [
            ("abc", 15, PasswordStrength.WEAK),
            ("password", 30, PasswordStrength.WEAK),
            ("Password1", 60, PasswordStrength.MEDIUM),
            ("Password123!", 90, PasswordStrength.STRONG),
            ("aaaaaaaaaaaaaaaa", 50, PasswordStrength.MEDIUM),
            ("ABCDEFGH", 30, PasswordStrength.WEAK),
            ("12345678!", 50, PasswordStrength.MEDIUM),
        ],
    )
    def test_scoring_rules(self, password, score, strength):
        """규칙별 가산 점수와 강도 분류"""
        result = analyze_password(password)
        assert result.score == score
        assert result.strength == strength

    def test_medium_password_suggestions(self):
        """누락된 규칙만 제안"""
        result = analyze_password("Password1")
        assert result.suggestions == (password_mod.SUGGEST_SPECIAL,)

    def test_length_tiers(self):
        """8자는 +15, 12자는 +25, 16자는 보너스 +10"""
        assert analyze_password("a" * 7).score == 15
        assert analyze_password("a" * 8).score == 30
        assert analyze_password("a" * 12).score == 40
        assert analyze_password("a" * 16).score == 50

    def test_short_password_gets_length_suggestion(self):
        result = analyze_password("Ab1!")
        assert result.suggestions[0] == password_mod.SUGGEST_LENGTH
        assert result.score == 65
        assert result.strength == PasswordStrength.MEDIUM

    def test_character_classes_are_ascii(self):
        """비 ASCII 문자는 특수문자로만 계산"""
        result = analyze_password("пароль")
        assert result.score == 20
        assert password_mod.SUGGEST_LOWERCASE in result.suggestions

    @pytest.mark.parametrize(
        "password",
        ["", "a", "P@ss", "correct horse battery staple", "Tr0ub4dor&3", "x" * 200, "Zz9!" * 10],
    )
    def test_score_bounds_and_thresholds(self, password):
        """점수는 0~100, 강도는 임계값과 일치"""
        result = analyze_password(password)
        assert 0 <= result.score <= 100
        if result.score >= 70:
            assert result.strength == PasswordStrength.STRONG
        elif result.score >= 40:
            assert result.strength == PasswordStrength.MEDIUM
        else:
            assert result.strength == PasswordStrength.WEAK

    def test_idempotent(self):
        assert analyze_password("Secret#2024") == analyze_password("Secret#2024")

# === UrlAnalyzer 테스트 ===

class TestUrlAnalyzer:
    """URL 피싱 분석기 테스트"""

    def test_invalid_url(self):
        """잘못된 URL: 최대 위험, 단일 위협"""
        result = analyze_url("not a url")
        assert result.safety == UrlSafety.DANGEROUS
        assert result.risk_level == 100
        assert result.threats == (url_mod.THREAT_INVALID_URL,)

    def test_invalid_samples(self, sample_urls):
        for url in sample_urls["invalid"]:
            result = analyze_url(url)
            assert result.threats == (url_mod.THREAT_INVALID_URL,), url

    def test_safe_url(self):
        result = analyze_url("https://example.com")
        assert result.safety == UrlSafety.SAFE
        assert result.risk_level == 0
        assert result.threats == (url_mod.VERDICT_SAFE,)

    def test_sample_categories(self, sample_urls):
        """카테고리별 판정"""
        for url in sample_urls["safe"]:
            assert analyze_url(url).safety == UrlSafety.SAFE, url
        for url in sample_urls["suspicious"]:
            assert analyze_url(url).safety == UrlSafety.SUSPICIOUS, url
        for url in sample_urls["dangerous"]:
            assert analyze_url(url).safety == UrlSafety.DANGEROUS, url

    def test_ip_address_over_http(self):
        """HTTP(+30) + IP 주소(+15) = 45 → suspicious"""
        result = analyze_url("http://192.168.1.1/login")
        assert result.risk_level == 45
        assert result.safety == UrlSafety.SUSPICIOUS
        assert result.threats == (url_mod.THREAT_NO_HTTPS, url_mod.THREAT_IP_ADDRESS)

    def test_ip_address_with_login_keyword(self):
        """로그인 키워드 뒤에 TLD가 오면 추가 +15 → dangerous"""
        result = analyze_url("http://192.168.1.1/login.com")
        assert result.risk_level == 60
        assert result.safety == UrlSafety.DANGEROUS
        assert url_mod.THREAT_LOGIN_KEYWORDS in result.threats

    def test_brand_mimicry(self):
        result = analyze_url("https://paypal-secure-login.com/verify")
        assert result.risk_level == 70
        assert result.threats == (
            url_mod.THREAT_LOGIN_KEYWORDS,
            url_mod.THREAT_HYPHENS,
            url_mod.THREAT_BRAND_MIMICRY,
        )

    def test_brand_mimicry_added_once(self):
        """여러 브랜드 키워드가 있어도 도용 위협은 한 번만"""
        result = analyze_url("https://google-apple-bank.net")
        assert result.threats.count(url_mod.THREAT_BRAND_MIMICRY) == 1
        assert result.risk_level == 55

    def test_official_brand_domain_not_flagged(self):
        result = analyze_url("https://www.amazon.com/")
        assert url_mod.THREAT_BRAND_MIMICRY not in result.threats

    def test_hyphens_counted_once(self):
        """하이픈 개수와 무관하게 +15"""
        one = analyze_url("https://a-b.org")
        many = analyze_url("https://a-b-c-d-e.org")
        assert one.risk_level == many.risk_level == 15

    @pytest.mark.parametrize("shortener", url_mod.URL_SHORTENERS)
    def test_shorteners(self, shortener):
        result = analyze_url(f"https://{shortener}/x")
        assert url_mod.THREAT_SHORTENER in result.threats
        assert result.risk_level == 20

    @pytest.mark.parametrize("keyword", url_mod.BRAND_KEYWORDS)
    def test_brand_keywords(self, keyword):
        mimic = analyze_url(f"https://{keyword}.example.org")
        official = analyze_url(f"https://{keyword}.com")
        assert url_mod.THREAT_BRAND_MIMICRY in mimic.threats
        assert url_mod.THREAT_BRAND_MIMICRY not in official.threats

    def test_at_symbol(self):
        result = analyze_url("https://user@example.com")
        assert result.threats == (url_mod.THREAT_AT_SYMBOL, url_mod.VERDICT_SAFE)
        assert result.risk_level == 15

    def test_long_random_string(self):
        result = analyze_url("https://example.com/" + "a1B2" * 5)
        assert url_mod.THREAT_LONG_RANDOM in result.threats

    def test_risk_level_not_clamped(self):
        """위험도는 100을 넘을 수 있음"""
        result = analyze_url("http://user@paypal-secure.example.net/aaaaaaaaaaaaaaaaaaaaaaaa")
        assert result.risk_level == 130
        assert result.safety == UrlSafety.DANGEROUS

    def test_scheme_case_insensitive(self):
        assert analyze_url("HTTPS://EXAMPLE.COM").risk_level == 0

    @pytest.mark.parametrize(
        "url",
        ["https://example.com ", " https://example.com", "\thttps://example.com\x00", "https://example.com\r\n"],
    )
    def test_surrounding_whitespace_ignored(self, url):
        """앞뒤 공백/제어 문자는 파싱에 영향 없음"""
        result = analyze_url(url)
        assert result.safety == UrlSafety.SAFE
        assert result.risk_level == 0
        assert result.threats == (url_mod.VERDICT_SAFE,)

    def test_inner_whitespace_still_invalid(self):
        assert analyze_url("https://exa mple.com").threats == (url_mod.THREAT_INVALID_URL,)

    @pytest.mark.parametrize(
        "url",
        ["http://300.1.1.1/", "http://256.0.0.1", "https://1.2.3.999/login"],
    )
    def test_out_of_range_ipv4_host_invalid(self, url):
        """범위를 벗어난 숫자 호스트는 잘못된 URL"""
        result = analyze_url(url)
        assert result.risk_level == 100
        assert result.threats == (url_mod.THREAT_INVALID_URL,)

    def test_valid_ipv4_host(self):
        result = analyze_url("http://255.255.255.255/")
        assert result.threats == (url_mod.THREAT_NO_HTTPS, url_mod.THREAT_IP_ADDRESS)

    @pytest.mark.parametrize("char", ["ſ", "K", "ı"])
    def test_non_ascii_letters_not_random_string(self, char):
        """대소문자 무시 매칭은 ASCII 문자만"""
        result = analyze_url("https://example.com/" + char * 20)
        assert url_mod.THREAT_LONG_RANDOM not in result.threats
        assert result.risk_level == 0

    def test_non_ascii_letters_not_login_keyword(self):
        """'ſ'는 's'와 대소문자 무시 매칭되지 않음"""
        result = analyze_url("https://example.com/ſecure.com")
        assert url_mod.THREAT_LOGIN_KEYWORDS not in result.threats
        assert result.risk_level == 0

    def test_idempotent(self):
        url = "http://amazon-account-update.net/login"
        assert analyze_url(url) == analyze_url(url)

# === EmailAnalyzer 테스트 ===

class TestEmailAnalyzer:
    """이메일 피싱 분석기 테스트"""

    def test_empty_email(self):
        result = analyze_email("")
        assert result.risk_score == 0
        assert result.risk_level == EmailRiskLevel.LOW
        assert result.detected_threats == (email_mod.VERDICT_CLEAN,)

    def test_clean_email(self, sample_emails):
        result = analyze_email(sample_emails["clean"])
        assert result.risk_score == 0
        assert result.detected_threats == (email_mod.VERDICT_CLEAN,)

    def test_phishing_email_clamped(self, sample_emails):
        """원점수 150 → 100으로 제한"""
        result = analyze_email(sample_emails["phishing"])
        assert result.risk_score == 100
        assert result.risk_level == EmailRiskLevel.HIGH
        assert email_mod.THREAT_GENERIC_GREETING in result.detected_threats
        assert email_mod.THREAT_IP_LINK in result.detected_threats
        assert 'Contains threatening language: "will be terminated"' in result.detected_threats

    def test_five_urgency_phrases(self):
        text = "URGENT: immediate action required. Verify now or your account locked. Act now."
        result = analyze_email(text)
        assert result.risk_score == 75
        assert result.risk_level == EmailRiskLevel.HIGH
        assert result.detected_threats == tuple(
            f'Contains urgent/pressure language: "{p}"'
            for p in ("urgent", "immediate action", "verify now", "account locked", "act now")
        )

    def test_raw_score_clamped(self):
        result = analyze_email("urgent password credit card ssn cvv legal action")
        assert result.risk_score == 100
        assert result.risk_level == EmailRiskLevel.HIGH
        assert len(result.detected_threats) == 6

    def test_low_with_threats_has_no_clean_verdict(self):
        """low 이지만 위협이 있으면 정상 문구를 추가하지 않음"""
        result = analyze_email("Dear customer, thanks for your order.")
        assert result.risk_score == 10
        assert result.risk_level == EmailRiskLevel.LOW
        assert result.detected_threats == (email_mod.THREAT_GENERIC_GREETING,)

    def test_medium_threshold(self):
        result = analyze_email("dear user, this is urgent")
        assert result.risk_score == 25
        assert result.risk_level == EmailRiskLevel.MEDIUM

    def test_link_density(self):
        text = "https://a.com https://b.com https://c.com https://d.com"
        result = analyze_email(text)
        assert result.risk_score == 15
        assert result.detected_threats == ("Contains multiple links (4)",)

    def test_three_links_not_flagged(self):
        result = analyze_email("https://a.com http://b.com HTTPS://c.com")
        assert result.detected_threats == (email_mod.VERDICT_CLEAN,)

    def test_ip_links_not_deduplicated(self):
        result = analyze_email("see http://10.0.0.1/a and http://192.168.1.1/b")
        assert result.detected_threats == (email_mod.THREAT_IP_LINK, email_mod.THREAT_IP_LINK)
        assert result.risk_score == 50
        assert result.risk_level == EmailRiskLevel.HIGH

    def test_misspellings_repeat_generic_message(self):
        result = analyze_email("You will recieve it untill friday")
        assert result.detected_threats == (
            email_mod.THREAT_MISSPELLING,
            email_mod.THREAT_MISSPELLING,
        )
        assert result.risk_score == 20

    def test_legal_threats(self):
        result = analyze_email("Your profile will be terminated and you may face charges")
        assert result.risk_score == 30
        assert result.risk_level == EmailRiskLevel.MEDIUM

    def test_case_insensitive(self):
        result = analyze_email("VERIFY YOUR ACCOUNT")
        assert 'Contains urgent/pressure language: "verify your account"' in result.detected_threats

    @pytest.mark.parametrize("phrase", email_mod.URGENCY_PHRASES)
    def test_each_urgency_phrase(self, phrase):
        result = analyze_email(f"Notice: {phrase}.")
        assert f'Contains urgent/pressure language: "{phrase}"' in result.detected_threats

    @pytest.mark.parametrize("greeting", email_mod.GENERIC_GREETINGS)
    def test_each_generic_greeting(self, greeting):
        result = analyze_email(f"{greeting.title()},")
        assert result.detected_threats == (email_mod.THREAT_GENERIC_GREETING,)
        assert result.risk_score == 10

    @pytest.mark.parametrize("keyword", email_mod.SENSITIVE_REQUESTS)
    def test_each_sensitive_request(self, keyword):
        result = analyze_email(f"Please reply with your {keyword}.")
        assert f'Requests sensitive information: "{keyword}"' in result.detected_threats

    @pytest.mark.parametrize("word", email_mod.COMMON_MISSPELLINGS)
    def test_each_misspelling(self, word):
        result = analyze_email(f"We {word} that.")
        assert result.detected_threats == (email_mod.THREAT_MISSPELLING,)

    @pytest.mark.parametrize("phrase", email_mod.LEGAL_THREATS)
    def test_each_legal_threat(self, phrase):
        result = analyze_email(f"Otherwise it {phrase}.")
        assert f'Contains threatening language: "{phrase}"' in result.detected_threats

    def test_idempotent(self, sample_emails):
        text = sample_emails["phishing"]
        assert analyze_email(text) == analyze_email(text)
