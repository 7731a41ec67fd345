"""
보안 학습 콘텐츠
===============

기본 학습 모듈 6종과 퀴즈 채점 로직.
저장소는 최초 연결 시 이 목록으로 학습 모듈 테이블을 채웁니다.
"""

from __future__ import annotations

from typing import Sequence

from cyberaware.core.assessments import LearningModule, QuizQuestion, round_half_up


def _module(
    title: str,
    description: str,
    content: str,
    category: str,
    icon: str,
    questions: list[tuple[str, tuple[str, ...], int]],
) -> LearningModule:
    # ID는 저장 시점에 부여
    return LearningModule(
        id="",
        title=title,
        description=description,
        content=content,
        category=category,
        icon=icon,
        quiz_questions=tuple(
            QuizQuestion(question=q, options=opts, correct_answer=answer)
            for q, opts, answer in questions
        ),
    )


DEFAULT_LEARNING_MODULES: tuple[LearningModule, ...] = (
    _module(
        "Identifying Phishing Attacks",
        "Learn how to spot fake emails and websites designed to steal your information",
        "Phishing is a type of cyber attack where attackers impersonate legitimate "
        "organizations to steal sensitive information. Look for suspicious sender "
        "addresses, urgent language, spelling errors, and unusual requests for "
        "personal information.",
        "Email Security",
        "Mail",
        [
            (
                "What is a common sign of a phishing email?",
                ("Urgent requests for personal information", "Professional formatting",
                 "Company logo present", "Addressed to you by name"),
                0,
            ),
            (
                "What should you do if you receive a suspicious email?",
                ("Click links to verify", "Reply with your info",
                 "Report and delete it", "Forward to friends"),
                2,
            ),
        ],
    ),
    _module(
        "Creating Strong Passwords",
        "Master the art of creating and managing secure passwords",
        "A strong password should be at least 12 characters long and include "
        "uppercase letters, lowercase letters, numbers, and special symbols. Never "
        "reuse passwords across different accounts. Use a password manager to keep "
        "track of your passwords securely.",
        "Account Security",
        "Lock",
        [
            (
                "What is the minimum recommended password length?",
                ("6 characters", "8 characters", "10 characters", "12 characters"),
                3,
            ),
            (
                "Should you reuse passwords across different accounts?",
                ("Yes, for easy memory", "No, never",
                 "Only for similar sites", "Only for unimportant accounts"),
                1,
            ),
        ],
    ),
    _module(
        "Social Media Privacy",
        "Protect your personal information on social platforms",
        "Review your privacy settings regularly. Limit who can see your posts, "
        "personal information, and location. Be cautious about accepting friend "
        "requests from unknown people. Avoid sharing sensitive information like "
        "your address, phone number, or daily routines publicly.",
        "Privacy",
        "Users",
        [
            (
                "What information should you avoid sharing publicly on social media?",
                ("Your interests", "Your home address",
                 "Your favorite movies", "Your pet's name"),
                1,
            ),
            (
                "How often should you review your privacy settings?",
                ("Never", "Once a year", "Regularly", "Only when changing jobs"),
                2,
            ),
        ],
    ),
    _module(
        "Two-Factor Authentication",
        "Add an extra layer of security to your accounts",
        "Two-factor authentication (2FA) adds an extra security step when logging "
        "into your accounts. Even if someone steals your password, they won't be "
        "able to access your account without the second factor. Use authenticator "
        "apps rather than SMS when possible for better security.",
        "Account Security",
        "Shield",
        [
            (
                "What does 2FA provide?",
                ("Faster login", "Extra security layer", "Better passwords", "Free storage"),
                1,
            ),
            (
                "Which 2FA method is more secure?",
                ("SMS codes", "Authenticator apps", "Email codes", "Security questions"),
                1,
            ),
        ],
    ),
    _module(
        "Safe Browsing Habits",
        "Stay safe while surfing the web",
        "Always check for HTTPS in the URL before entering sensitive information. "
        "Be cautious of pop-ups and unexpected downloads. Keep your browser and "
        "plugins updated. Use ad blockers and anti-tracking extensions to enhance "
        "your privacy and security.",
        "Web Security",
        "Globe",
        [
            (
                "What does HTTPS indicate?",
                ("Fast website", "Secure connection", "Popular site", "Mobile friendly"),
                1,
            ),
            (
                "Should you click on unexpected pop-ups?",
                ("Yes, always", "Only from known sites", "No, close them", "Only on mobile"),
                2,
            ),
        ],
    ),
    _module(
        "Public Wi-Fi Security",
        "Protect yourself on public networks",
        "Public Wi-Fi networks are often unsecured and can be monitored by "
        "attackers. Avoid accessing sensitive accounts or making financial "
        "transactions on public Wi-Fi. Use a VPN (Virtual Private Network) to "
        "encrypt your connection when using public networks.",
        "Network Security",
        "Wifi",
        [
            (
                "What should you avoid on public Wi-Fi?",
                ("Reading news", "Checking weather", "Online banking", "Watching videos"),
                2,
            ),
            (
                "What tool can help secure public Wi-Fi connections?",
                ("Antivirus", "VPN", "Firewall", "Ad blocker"),
                1,
            ),
        ],
    ),
)


def grade_quiz(module: LearningModule, answers: Sequence[int]) -> int:
    """
    퀴즈 채점

    응답하지 않은 문항은 오답으로 처리합니다.

    Args:
        module: 학습 모듈
        answers: 문항 순서대로 선택한 보기 인덱스

    Returns:
        정답률 (0~100, 반올림)

    Raises:
        ValueError: 문항 수보다 응답이 많은 경우
    """
    questions = module.quiz_questions
    if len(answers) > len(questions):
        raise ValueError(
            f"응답 수({len(answers)})가 문항 수({len(questions)})보다 많습니다"
        )
    if not questions:
        return 0

    correct = sum(
        1 for question, answer in zip(questions, answers)
        if answer == question.correct_answer
    )
    return round_half_up(correct / len(questions) * 100)
