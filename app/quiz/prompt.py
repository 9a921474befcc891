"""
문항 생성 프롬프트 구성 및 블록 포맷.

모델 응답은 QUESTION_START ... QUESTION_END 블록의 반복이어야 하며,
app.quiz.parser가 같은 포맷을 읽는다.
"""

from __future__ import annotations

import logging
from typing import Sequence

from app.schema.models import Question

logger = logging.getLogger(__name__)

QUESTION_START = "QUESTION_START"
QUESTION_END = "QUESTION_END"
OPTION_LETTERS = "ABCD"
TRUNCATION_MARKER = "..."

DIFFICULTY_DESCRIPTIONS = {
    "easy": "Focus on basic concepts and direct information from the text",
    "medium": "Require some analysis and connection of concepts",
    "hard": "Demand critical thinking, synthesis, and deeper understanding",
}


def option_letter(index: int) -> str:
    return chr(ord("A") + index)


def difficulty_description(difficulty: str) -> str:
    return DIFFICULTY_DESCRIPTIONS.get(
        difficulty,
        "Use moderate difficulty requiring understanding beyond memorization",
    )


def truncate_source(text: str, max_chars: int) -> tuple[str, bool]:
    if max_chars and len(text) > max_chars:
        return f"{text[:max_chars]} {TRUNCATION_MARKER}", True
    return text, False


def type_distribution(question_count: int, question_types: Sequence[str]) -> str:
    """"12 multiple-choice, 12 true-false" 형태. 나머지는 모델이 한 유형에 흡수한다."""
    if not question_types:
        return ""
    per_type = question_count // len(question_types)
    return ", ".join(f"{per_type} {t}" for t in question_types)


def build_prompt(
    text: str,
    question_count: int,
    question_types: Sequence[str],
    difficulty: str,
    chunk_number: int | None = None,
    max_chars: int = 12000,
) -> str:
    """
    추출 텍스트로 문항 생성 프롬프트를 만든다.
    chunk_number가 있으면 (Set k) 표기와 함께 이전 세트와 다른 측면을 다루도록 지시한다.
    """
    source, truncated = truncate_source(text, max_chars)
    if truncated:
        logger.warning("원문이 %d자를 넘어 잘림 (원문 %d자)", max_chars, len(text))
    set_label = f" (Set {chunk_number})" if chunk_number else ""
    variety_line = (
        "\n- Focus on different aspects of the content than previous sets" if chunk_number else ""
    )
    options_section = ""
    if "multiple-choice" in question_types:
        options_section = "Options: [For multiple-choice only]\n" + "\n".join(
            f"{letter}) Option {i}" for i, letter in enumerate(OPTION_LETTERS, 1)
        ) + "\n"

    return f"""
You are an expert educational content creator. Generate EXACTLY {question_count} high-quality quiz questions{set_label}.

CONTENT TO ANALYZE:
{source}

CRITICAL REQUIREMENTS:
- You MUST generate exactly {question_count} questions - no more, no less
- Question types to include: {", ".join(question_types)}
- Difficulty level: {difficulty}
- Distribute questions evenly across the requested types ({type_distribution(question_count, question_types)})
- Each question should test understanding of key concepts from the content
- Provide clear, accurate answers and explanations
- Ensure variety in question topics and concepts{variety_line}

MANDATORY RESPONSE FORMAT:
Generate ALL {question_count} questions using this EXACT format for each:

{QUESTION_START}
Type: [multiple-choice OR true-false]
Question: [Your question here]
{options_section}Answer: [Correct answer - for multiple-choice use letter (A, B, C, D), for true-false use "True" or "False"]
Explanation: [Detailed explanation of why this is correct]
Difficulty: {difficulty}
{QUESTION_END}

CRITICAL INSTRUCTIONS:
- Make questions that test genuine understanding, not just memorization
- Ensure all multiple-choice options are plausible
- Base questions directly on the provided content
- For {difficulty} difficulty: {difficulty_description(difficulty)}
- DO NOT STOP until you have generated ALL {question_count} questions
- Each question must have the complete {QUESTION_START}...{QUESTION_END} format

BEGIN GENERATING EXACTLY {question_count} QUESTIONS NOW:
""".strip()


def format_question_block(question: Question) -> str:
    """문항 하나를 모델 응답과 같은 블록 포맷으로 직렬화한다."""
    lines = [
        QUESTION_START,
        f"Type: {question.type}",
        f"Question: {question.question}",
    ]
    if question.type == "multiple-choice" and question.options:
        lines.append("Options:")
        lines.extend(f"{option_letter(i)}) {option}" for i, option in enumerate(question.options))
        answer = option_letter(question.correct_answer)
    else:
        answer = str(question.correct_answer)
    lines.extend(
        [
            f"Answer: {answer}",
            f"Explanation: {question.explanation}",
            f"Difficulty: {question.difficulty}",
            QUESTION_END,
        ]
    )
    return "\n".join(lines)
