"""
API 요청/응답 스키마. 필드 이름은 프런트엔드(camelCase)와 맞춘다.
"""

from typing import Literal

from pydantic import BaseModel, Field

from app.schema.models import (
    GenerationRequest,
    GenerationResult,
    Question,
    QuestionType,
    SourceFile,
)


# ----- 문항 생성 -----


class UploadedFile(BaseModel):
    name: str = Field(..., description="업로드 파일 이름")
    content: str = Field("", description="Base64 인코딩된 PDF 내용")


class QuestionTypeSelection(BaseModel):
    multipleChoice: bool = False
    trueFalse: bool = False

    def to_list(self) -> list[QuestionType]:
        selected: list[QuestionType] = []
        if self.multipleChoice:
            selected.append("multiple-choice")
        if self.trueFalse:
            selected.append("true-false")
        return selected


class GenerateQuestionsRequest(BaseModel):
    """문항 생성 요청. 개수·유형의 유효성은 생성기에서 검사해 400으로 돌려준다."""

    files: list[UploadedFile] = Field(default_factory=list, description="업로드 파일 목록")
    questionCount: int = Field(..., description="생성할 문항 수")
    questionTypes: QuestionTypeSelection = Field(default_factory=QuestionTypeSelection)
    difficulty: Literal["easy", "medium", "hard"] = "medium"

    def to_generation_request(self) -> GenerationRequest:
        return GenerationRequest(
            files=[SourceFile(name=f.name, content=f.content) for f in self.files],
            question_count=self.questionCount,
            question_types=self.questionTypes.to_list(),
            difficulty=self.difficulty,
        )


class GenerateQuestionsResponse(BaseModel):
    success: bool
    questions: list[Question] = Field(default_factory=list)
    processingTime: int = Field(0, description="처리 시간 (ms)")
    message: str | None = None

    @classmethod
    def from_result(cls, result: GenerationResult) -> "GenerateQuestionsResponse":
        return cls(
            success=result.success,
            questions=result.questions,
            processingTime=result.processing_time_ms,
            message=result.message,
        )


# ----- PDF 처리 -----


class ProcessPDFRequest(BaseModel):
    fileName: str = ""
    fileContent: str = Field("", description="Base64 인코딩된 PDF 내용")


class ProcessPDFResponse(BaseModel):
    success: bool
    extractedText: str = ""
    pageCount: int = 0
    message: str | None = None


# ----- 내보내기 -----


class ExportRequest(BaseModel):
    questions: list[Question] = Field(..., description="내보낼 문항 목록 (검토·수정 후)")
    title: str | None = Field(None, description="PDF 제목")


class PingResponse(BaseModel):
    message: str
