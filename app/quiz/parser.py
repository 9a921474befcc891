"""
모델 응답 파싱: QUESTION_START ... QUESTION_END 블록을 Question 목록으로 변환.

블록 하나가 깨져도 나머지 블록에는 영향을 주지 않는다. 필수 필드가 빠진 블록은
경고 로그만 남기고 버린다.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Sequence

from pydantic import ValidationError

from app.quiz.prompt import QUESTION_END, QUESTION_START
from app.schema.models import DIFFICULTIES, QUESTION_TYPES, Question

logger = logging.getLogger(__name__)

OPTION_LINE = re.compile(r"^[A-D]\)")
ANSWER_LETTER = re.compile(r"^[A-D]")


def split_blocks(text: str) -> list[str]:
    """시작 마커 이전 텍스트와 종료 마커가 없는 블록은 버린다."""
    blocks: list[str] = []
    for segment in text.split(QUESTION_START)[1:]:
        end = segment.find(QUESTION_END)
        if end == -1:
            logger.debug("종료 마커 없는 블록 건너뜀")
            continue
        blocks.append(segment[:end].strip())
    return blocks


def _resolve_answer(question_type: str | None, raw: str | None) -> int | str | None:
    if raw is None or question_type is None:
        return None
    if question_type == "multiple-choice":
        match = ANSWER_LETTER.match(raw)
        if not match:
            return None
        return ord(match.group()) - ord("A")
    if raw.lower() in ("true", "false"):
        return raw.capitalize()
    return raw


def parse_block(
    lines: Sequence[str],
    index: int,
    file_names: Sequence[str],
    default_difficulty: str = "medium",
) -> Question | None:
    """
    한 블록의 줄 목록을 Question으로 변환. 인식하지 못한 줄은 무시한다.
    필수 필드(type, question, explanation, 정답)가 없거나 문항 규칙에 어긋나면 None.
    """
    fields: dict[str, Any] = {
        "id": f"q-{index}",
        "source_file": file_names[index % len(file_names)] if file_names else "unknown",
        "difficulty": default_difficulty,
    }
    options: list[str] | None = None
    raw_answer: str | None = None

    for line in lines:
        if line.startswith("Type:"):
            value = line[len("Type:"):].strip().lower()
            if value in QUESTION_TYPES:
                fields["type"] = value
        elif line.startswith("Question:"):
            fields["question"] = line[len("Question:"):].strip()
        elif line.startswith("Options:"):
            options = []
        elif OPTION_LINE.match(line):
            if options is None:
                options = []
            options.append(line[2:].strip())
        elif line.startswith("Answer:"):
            raw_answer = line[len("Answer:"):].strip()
        elif line.startswith("Explanation:"):
            fields["explanation"] = line[len("Explanation:"):].strip()
        elif line.startswith("Difficulty:"):
            value = line[len("Difficulty:"):].strip().lower()
            if value in DIFFICULTIES:
                fields["difficulty"] = value

    question_type = fields.get("type")
    answer = _resolve_answer(question_type, raw_answer)
    if not question_type or not fields.get("question") or not fields.get("explanation") or answer is None:
        logger.warning("불완전한 문항 블록 버림 index=%d fields=%s", index, sorted(fields))
        return None

    fields["correct_answer"] = answer
    if question_type == "multiple-choice":
        fields["options"] = options
    try:
        return Question(**fields)
    except ValidationError as exc:
        logger.warning("문항 규칙 위반 블록 버림 index=%d error=%s", index, exc.errors()[0].get("msg"))
        return None


def parse_generated_questions(
    text: str,
    file_names: Sequence[str],
    offset: int = 0,
    default_difficulty: str = "medium",
) -> list[Question]:
    """
    모델 응답 전체를 파싱해 블록 순서대로 Question 목록을 반환한다.
    offset: id 번호와 출처 파일 순환의 시작 위치 (청크 병합 시 누적 문항 수).
    출처 파일 순환은 블록 위치가 아니라 채택된 문항 순서를 따르므로 버려진 블록은 건너뛴다.
    """
    blocks = split_blocks(text)
    questions: list[Question] = []
    for block in blocks:
        lines = [line.strip() for line in block.splitlines() if line.strip()]
        # 채택된 문항 기준으로 번호를 매겨 청크 사이에 id가 겹치지 않게 한다
        question = parse_block(lines, offset + len(questions), file_names, default_difficulty)
        if question is not None:
            questions.append(question)
    logger.info("응답 파싱 완료 블록=%d 유효 문항=%d", len(blocks), len(questions))
    return questions
