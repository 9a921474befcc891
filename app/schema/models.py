"""
문항 생성 도메인 스키마: 문항, 생성 요청, 생성 결과.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

QuestionType = Literal["multiple-choice", "true-false"]
Difficulty = Literal["easy", "medium", "hard"]

QUESTION_TYPES: tuple[str, ...] = ("multiple-choice", "true-false")
DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")
TRUE_FALSE_ANSWERS: tuple[str, ...] = ("True", "False")


class Question(BaseModel):
    """퀴즈 한 문항. 객관식은 선택지 인덱스(0부터), OX는 "True"/"False"가 정답."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: QuestionType
    question: str = Field(min_length=1)
    options: list[str] | None = None
    correct_answer: int | str = Field(alias="correctAnswer")
    explanation: str = Field(min_length=1)
    difficulty: Difficulty = "medium"
    source_file: str = Field(default="unknown", alias="sourceFile")

    @field_validator("question", "explanation")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @model_validator(mode="after")
    def validate_answer(self):
        if self.type == "multiple-choice":
            if not self.options or len(self.options) < 2:
                raise ValueError("multiple-choice question needs at least 2 options")
            if not isinstance(self.correct_answer, int) or isinstance(self.correct_answer, bool):
                raise ValueError("multiple-choice answer must be an option index")
            if not 0 <= self.correct_answer < len(self.options):
                raise ValueError("multiple-choice answer index out of range")
        else:
            if self.options:
                raise ValueError("true-false question must not have options")
            if self.correct_answer not in TRUE_FALSE_ANSWERS:
                raise ValueError('true-false answer must be "True" or "False"')
        return self


class SourceFile(BaseModel):
    name: str
    content: str = ""  # base64 PDF, 현재 추출기는 사용하지 않음


class GenerationRequest(BaseModel):
    """생성 요청 1건. 값의 유효성은 QuizGenerator가 검사해 실패 결과로 돌려준다."""

    files: list[SourceFile] = Field(default_factory=list)
    question_count: int
    question_types: list[QuestionType] = Field(default_factory=list)
    difficulty: Difficulty = "medium"

    @property
    def file_names(self) -> list[str]:
        return [f.name for f in self.files]


class GenerationResult(BaseModel):
    questions: list[Question] = Field(default_factory=list)
    processing_time_ms: int = 0
    success: bool
    message: str
    ai_count: int = 0
    fallback_count: int = 0
