"""
퀴즈 생성 CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from app.api.schemas import GenerateQuestionsRequest
from app.core.config import settings
from app.quiz.generator import QuizGenerator
from app.quiz.llm import build_llm_client
from app.quiz.prompt import format_question_block
from app.schema.models import GenerationRequest, SourceFile

logger = logging.getLogger(__name__)


def parse_question_types(raw: str | None) -> list[str]:
    if not raw:
        return ["multiple-choice", "true-false"]
    items = [item.strip().replace("_", "-") for item in raw.split(",") if item.strip()]
    return items or ["multiple-choice", "true-false"]


def load_payload(input_path: Path | None, use_stdin: bool) -> dict | None:
    if use_stdin:
        raw = sys.stdin.read()
        if not raw.strip():
            raise ValueError("stdin이 비어 있습니다.")
        return json.loads(raw)

    if not input_path:
        return None

    if not input_path.exists():
        raise FileNotFoundError(f"파일을 찾을 수 없습니다: {input_path}")
    return json.loads(input_path.read_text(encoding="utf-8"))


def build_request(payload: dict | None, args: argparse.Namespace) -> GenerationRequest:
    """요청 JSON(HTTP 요청과 같은 형태)이 있으면 그걸 기준으로, CLI 인자로 덮어쓴다."""
    if payload is not None:
        base = GenerateQuestionsRequest.model_validate(payload).to_generation_request()
    else:
        if not args.files:
            raise ValueError("--files, --input, --stdin 중 하나는 필요합니다.")
        base = GenerationRequest(
            files=[],
            question_count=args.num_questions or 10,
            question_types=parse_question_types(args.question_types),
            difficulty=args.difficulty or "medium",
        )
    return apply_overrides(base, args)


def apply_overrides(base: GenerationRequest, args: argparse.Namespace) -> GenerationRequest:
    update: dict = {}
    if args.files:
        update["files"] = [SourceFile(name=Path(f).name) for f in args.files]
    if args.num_questions is not None:
        update["question_count"] = args.num_questions
    if args.question_types is not None:
        update["question_types"] = parse_question_types(args.question_types)
    if args.difficulty is not None:
        update["difficulty"] = args.difficulty
    # model_copy는 검증을 건너뛰므로 다시 검증한다
    return GenerationRequest.model_validate({**base.model_dump(), **update}) if update else base


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PDF 챕터로 퀴즈 문항을 생성합니다.")
    parser.add_argument("--files", nargs="+", help="PDF 파일 경로 (여러 개 가능)")
    parser.add_argument("-i", "--input", help="요청 JSON 파일 경로 (API 요청 형식)")
    parser.add_argument("--stdin", action="store_true", help="표준 입력에서 JSON 읽기")
    parser.add_argument("--output", help="결과 저장 경로 (없으면 stdout)")
    parser.add_argument("--num-questions", type=int, help="생성할 문항 수")
    parser.add_argument(
        "--question-types",
        help="문항 유형 CSV (multiple-choice,true-false)",
    )
    parser.add_argument("--difficulty", choices=["easy", "medium", "hard"], help="난이도")
    parser.add_argument("--format", choices=["json", "text"], default="json", help="출력 형식")
    parser.add_argument("--pretty", action="store_true", help="예쁘게 출력")
    return parser


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    parser = build_parser()
    args = parser.parse_args()

    try:
        input_path = Path(args.input).expanduser() if args.input else None
        payload = load_payload(input_path, args.stdin)
        req = build_request(payload, args)
    except (ValueError, FileNotFoundError, json.JSONDecodeError, ValidationError) as exc:
        print(f"입력 처리 실패: {exc}", file=sys.stderr)
        sys.exit(1)

    generator = QuizGenerator(
        build_llm_client(settings),
        max_questions_per_request=settings.MAX_QUESTIONS_PER_REQUEST,
        max_source_chars=settings.MAX_SOURCE_CHARS,
    )
    result = generator.generate(req)
    if not result.success:
        print(f"생성 실패: {result.message}", file=sys.stderr)
        sys.exit(1)
    logger.info("%s (%dms)", result.message, result.processing_time_ms)

    if args.format == "text":
        output = "\n\n".join(format_question_block(q) for q in result.questions)
    else:
        output = json.dumps(
            result.model_dump(mode="json", by_alias=True),
            ensure_ascii=False,
            indent=2 if args.pretty else None,
        )

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        print(output)


if __name__ == "__main__":
    main()
