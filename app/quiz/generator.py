"""
업로드 파일 기반 퀴즈 생성 오케스트레이터.

요청 검증 → 코퍼스 구성 → (단일 또는 청크 단위) 모델 호출·파싱 → 부족분 대체 문항 보충.
모델 호출이 실패하면 대체 문항 은행만으로 결과를 만든다.
"""

from __future__ import annotations

import logging
import random
import time

from app.quiz.llm import LLMError, TextCompletionClient
from app.quiz.parser import parse_generated_questions
from app.quiz.prompt import build_prompt
from app.quiz.question_bank import generate_fallback_questions
from app.schema.models import GenerationRequest, GenerationResult, Question
from app.services.pdf_extraction import document_text

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = "\n\n--- NEW DOCUMENT ---\n\n"


def plan_chunks(question_count: int, max_per_request: int) -> list[int]:
    """60, 25 → [25, 25, 10]"""
    sizes: list[int] = []
    remaining = question_count
    while remaining > 0:
        size = min(max_per_request, remaining)
        sizes.append(size)
        remaining -= size
    return sizes


def validate_request(req: GenerationRequest, llm_configured: bool) -> str | None:
    """실패 사유 메시지, 통과하면 None."""
    if not req.files:
        return "At least one file is required"
    if req.question_count <= 0:
        return "Question count must be greater than 0"
    if not req.question_types:
        return "At least one question type must be selected"
    if not llm_configured:
        return "Model API key not configured"
    return None


def build_corpus(file_names: list[str]) -> str:
    return DOCUMENT_SEPARATOR.join(document_text(name) for name in file_names)


class QuizGenerator:
    def __init__(
        self,
        llm: TextCompletionClient | None,
        max_questions_per_request: int = 25,
        max_source_chars: int = 12000,
        rng: random.Random | None = None,
    ) -> None:
        self.llm = llm
        self.max_questions_per_request = max_questions_per_request
        self.max_source_chars = max_source_chars
        self._rng = rng

    def generate(self, req: GenerationRequest) -> GenerationResult:
        error = validate_request(req, self.llm is not None)
        if error:
            logger.warning("생성 요청 거절: %s", error)
            return GenerationResult(success=False, message=error)

        logger.info(
            "문항 생성 시작 files=%d count=%d types=%s difficulty=%s",
            len(req.files),
            req.question_count,
            ",".join(req.question_types),
            req.difficulty,
        )
        started = time.monotonic()
        try:
            ai_questions = self._generate_with_model(req)
        except LLMError as exc:
            logger.warning("모델 호출 실패, 대체 문항으로 전환: %s", exc)
            questions = generate_fallback_questions(
                req.question_count, req.question_types, req.difficulty, req.file_names, rng=self._rng
            )
            return GenerationResult(
                questions=questions,
                processing_time_ms=self._elapsed_ms(started),
                success=True,
                message=(
                    f"Generated {len(questions)} questions using fallback method "
                    "(AI temporarily unavailable)"
                ),
                fallback_count=len(questions),
            )

        questions = self._top_up(ai_questions, req)
        ai_count = min(len(ai_questions), req.question_count)
        fallback_count = len(questions) - ai_count
        message = (
            f"Successfully generated {len(questions)} questions from {len(req.files)} file(s) using AI"
        )
        if fallback_count:
            message += f" ({ai_count} AI-generated, {fallback_count} from fallback question bank)"
        logger.info("문항 생성 완료 total=%d ai=%d fallback=%d", len(questions), ai_count, fallback_count)
        return GenerationResult(
            questions=questions,
            processing_time_ms=self._elapsed_ms(started),
            success=True,
            message=message,
            ai_count=ai_count,
            fallback_count=fallback_count,
        )

    def _generate_with_model(self, req: GenerationRequest) -> list[Question]:
        """
        요청 수가 청크 상한 이하면 1회 호출, 초과하면 청크별로 순차 호출한다.
        청크 하나의 실패는 건너뛰지만, 모든 청크가 실패하면 LLMError를 다시 올린다.
        """
        corpus = build_corpus(req.file_names)
        if req.question_count <= self.max_questions_per_request:
            return self._call_and_parse(corpus, req, req.question_count, offset=0)

        sizes = plan_chunks(req.question_count, self.max_questions_per_request)
        logger.info("요청 %d문항을 %d개 청크로 분할 sizes=%s", req.question_count, len(sizes), sizes)
        collected: list[Question] = []
        last_error: LLMError | None = None
        for number, size in enumerate(sizes, 1):
            logger.info("청크 %d/%d 생성 중 (%d문항)", number, len(sizes), size)
            try:
                chunk = self._call_and_parse(
                    corpus, req, size, offset=len(collected), chunk_number=number
                )
            except LLMError as exc:
                logger.warning("청크 %d 실패, 건너뜀: %s", number, exc)
                last_error = exc
                continue
            collected.extend(chunk)
            logger.info("청크 %d 완료 문항=%d", number, len(chunk))

        if not collected and last_error is not None:
            raise last_error
        return collected

    def _call_and_parse(
        self,
        corpus: str,
        req: GenerationRequest,
        count: int,
        offset: int,
        chunk_number: int | None = None,
    ) -> list[Question]:
        prompt = build_prompt(
            corpus,
            count,
            req.question_types,
            req.difficulty,
            chunk_number=chunk_number,
            max_chars=self.max_source_chars,
        )
        text = self.llm.complete(prompt)
        questions = parse_generated_questions(
            text, req.file_names, offset=offset, default_difficulty=req.difficulty
        )
        return questions[:count]

    def _top_up(self, questions: list[Question], req: GenerationRequest) -> list[Question]:
        questions = questions[: req.question_count]
        missing = req.question_count - len(questions)
        if missing <= 0:
            return questions
        logger.info("생성 문항 부족 (%d/%d), 대체 문항 %d개 보충", len(questions), req.question_count, missing)
        fallback = generate_fallback_questions(
            missing, req.question_types, req.difficulty, req.file_names, rng=self._rng
        )
        start = len(questions)
        retagged = [
            q.model_copy(update={"id": f"fallback-{start + i}"}) for i, q in enumerate(fallback)
        ]
        return questions + retagged

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.monotonic() - started) * 1000)
