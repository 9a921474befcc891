"""
대체 문항 은행: 모델 호출이 실패하거나 문항이 모자랄 때 쓰는 난이도·유형별 템플릿.
"""

from __future__ import annotations

import random
from typing import Any, Sequence

from app.schema.models import Question

MULTIPLE_CHOICE_BANK: dict[str, list[dict[str, Any]]] = {
    "easy": [
        {
            "question": "What is the primary focus of active learning methodologies?",
            "options": [
                "Passive information absorption",
                "Direct student engagement with material",
                "Teacher-centered instruction",
                "Standardized testing preparation",
            ],
            "correct_answer": 1,
            "explanation": "Active learning methodologies emphasize direct student engagement with the material through participation, discussion, and hands-on activities.",
        },
        {
            "question": "Which of the following is a benefit of active learning?",
            "options": [
                "Reduced student participation",
                "Lower retention rates",
                "Better information retention",
                "Less critical thinking",
            ],
            "correct_answer": 2,
            "explanation": "Research shows that active learning leads to better information retention and deeper understanding compared to passive learning methods.",
        },
    ],
    "medium": [
        {
            "question": "How do modern assessment techniques differ from traditional methods?",
            "options": [
                "They focus solely on memorization",
                "They measure deep understanding through varied evaluation methods",
                "They only use multiple-choice formats",
                "They eliminate all forms of testing",
            ],
            "correct_answer": 1,
            "explanation": "Modern assessment techniques go beyond simple memorization to measure deep understanding through project-based evaluations, peer assessments, and self-reflection exercises.",
        },
        {
            "question": "What characterizes a blended learning environment?",
            "options": [
                "Only online instruction",
                "Only traditional classroom teaching",
                "Integration of digital tools with traditional teaching methods",
                "Elimination of all technology",
            ],
            "correct_answer": 2,
            "explanation": "Blended learning combines digital tools with traditional teaching methods to create flexible, personalized learning experiences that accommodate different learning styles.",
        },
    ],
    "hard": [
        {
            "question": "What is the relationship between metacognitive skills and academic performance?",
            "options": [
                "Metacognitive skills are irrelevant to academic success",
                "They help students monitor and regulate their own learning processes",
                "They only apply to advanced students",
                "They replace the need for content knowledge",
            ],
            "correct_answer": 1,
            "explanation": "Metacognitive skills enable students to monitor, evaluate, and regulate their own learning processes, leading to more effective learning strategies and improved academic performance.",
        },
        {
            "question": "How do quantitative and qualitative research methodologies complement each other?",
            "options": [
                "They are mutually exclusive approaches",
                "Quantitative methods are always superior",
                "They provide different perspectives that together offer comprehensive insights",
                "Only qualitative methods are valid in education",
            ],
            "correct_answer": 2,
            "explanation": "Quantitative and qualitative research methodologies provide different but complementary perspectives, with mixed-method approaches offering more comprehensive insights into educational phenomena.",
        },
    ],
}

TRUE_FALSE_BANK: dict[str, list[dict[str, Any]]] = {
    "easy": [
        {
            "question": "Active learning strategies require students to participate directly in the learning process.",
            "correct_answer": "True",
            "explanation": "This statement is true. Active learning strategies are specifically designed to engage students directly with the material through participation and interaction.",
        },
        {
            "question": "Traditional passive learning methods are more effective than active learning approaches.",
            "correct_answer": "False",
            "explanation": "This statement is false. Research consistently shows that active learning methodologies are more effective than traditional passive approaches for retention and understanding.",
        },
    ],
    "medium": [
        {
            "question": "Blended learning environments only benefit students who prefer digital technology.",
            "correct_answer": "False",
            "explanation": "This statement is false. Blended learning environments are designed to cater to different learning styles, benefiting students with various preferences, not just those who prefer technology.",
        },
        {
            "question": "Modern assessment techniques include project-based evaluations and peer assessments.",
            "correct_answer": "True",
            "explanation": "This statement is true. Modern assessment goes beyond traditional testing to include diverse evaluation methods like projects and peer assessments.",
        },
    ],
    "hard": [
        {
            "question": "The development of metacognitive skills requires only self-reflection exercises without external assessment.",
            "correct_answer": "False",
            "explanation": "This statement is false. While self-reflection is important, metacognitive skills are best developed through a combination of self-reflection exercises and varied external assessment methods that provide feedback on learning processes.",
        },
        {
            "question": "Research methodologies in education must exclusively use either quantitative or qualitative approaches.",
            "correct_answer": "False",
            "explanation": "This statement is false. Mixed-method approaches that combine both quantitative and qualitative research methodologies are increasingly recognized as providing more comprehensive insights in educational research.",
        },
    ],
}


def _pool(bank: dict[str, list[dict[str, Any]]], difficulty: str) -> list[dict[str, Any]]:
    return bank.get(difficulty) or bank["medium"]


def _source(file_names: Sequence[str], index: int) -> str:
    return file_names[index % len(file_names)] if file_names else "unknown"


def fallback_multiple_choice(index: int, difficulty: str, source_file: str) -> Question:
    pool = _pool(MULTIPLE_CHOICE_BANK, difficulty)
    template = pool[index % len(pool)]
    return Question(
        id=f"fallback-mc-{index}",
        type="multiple-choice",
        question=template["question"],
        options=list(template["options"]),
        correct_answer=template["correct_answer"],
        explanation=template["explanation"],
        difficulty=difficulty if difficulty in MULTIPLE_CHOICE_BANK else "medium",
        source_file=source_file,
    )


def fallback_true_false(index: int, difficulty: str, source_file: str) -> Question:
    pool = _pool(TRUE_FALSE_BANK, difficulty)
    template = pool[index % len(pool)]
    return Question(
        id=f"fallback-tf-{index}",
        type="true-false",
        question=template["question"],
        correct_answer=template["correct_answer"],
        explanation=template["explanation"],
        difficulty=difficulty if difficulty in TRUE_FALSE_BANK else "medium",
        source_file=source_file,
    )


def generate_fallback_questions(
    count: int,
    question_types: Sequence[str],
    difficulty: str,
    file_names: Sequence[str],
    rng: random.Random | None = None,
) -> list[Question]:
    """
    템플릿을 순환해 정확히 count개의 문항을 만든다.
    두 유형을 모두 요청하면 객관식이 count // 2, OX가 나머지를 가진다.
    결과는 유형이 섞이도록 무작위로 섞은 뒤 반환한다.
    """
    if count <= 0:
        return []
    want_mc = "multiple-choice" in question_types
    want_tf = "true-false" in question_types
    total_types = int(want_mc) + int(want_tf)
    if total_types == 0:
        raise ValueError("at least one question type is required")

    per_type = count // total_types
    remaining = count
    questions: list[Question] = []

    mc_count = 0
    if want_mc:
        mc_count = remaining if total_types == 1 else per_type
        for i in range(mc_count):
            questions.append(fallback_multiple_choice(i, difficulty, _source(file_names, i)))
        remaining -= mc_count

    if want_tf:
        for i in range(remaining):
            questions.append(fallback_true_false(i + mc_count, difficulty, _source(file_names, i)))

    (rng or random).shuffle(questions)
    return questions[:count]
