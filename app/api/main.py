"""
FastAPI 앱: PDF 처리(대체 추출), 퀴즈 문항 생성, 문항 내보내기 API.
실행: python -m app.api.main
"""

import logging
import sys

from fastapi import HTTPException
from fastapi.responses import JSONResponse, Response, StreamingResponse

from app.api.schemas import (
    ExportRequest,
    GenerateQuestionsRequest,
    GenerateQuestionsResponse,
    PingResponse,
    ProcessPDFRequest,
    ProcessPDFResponse,
    QuestionTypeSelection,
    UploadedFile,
)
from app.core.config import Settings, settings as default_settings
from app.quiz.generator import QuizGenerator
from app.quiz.llm import TextCompletionClient, build_llm_client
from app.services.export import DEFAULT_TITLE, export_filename, export_json, export_pdf
from app.services.pdf_extraction import extract_text

logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# GET /api/test-questions 가 생성기에 넘기는 고정 요청
SAMPLE_REQUEST = GenerateQuestionsRequest(
    files=[UploadedFile(name="test-chapter.pdf", content="base64encodedcontent")],
    questionCount=5,
    questionTypes=QuestionTypeSelection(multipleChoice=True, trueFalse=True),
    difficulty="medium",
)


def _error_body(message: str) -> dict:
    return GenerateQuestionsResponse(success=False, message=message).model_dump(exclude_none=True)


def create_app(
    settings: Settings | None = None,
    llm: TextCompletionClient | None = None,
):
    """
    settings 미지정 시 환경 설정 사용. llm 미지정 시 설정의 API 키로 OpenAI 클라이언트를 만든다
    (키가 없으면 생성 요청이 400으로 거절됨). 테스트에서는 llm에 가짜 클라이언트를 넣는다.
    """
    from fastapi import FastAPI
    from fastapi.middleware.cors import CORSMiddleware

    settings = settings or default_settings
    if llm is None:
        llm = build_llm_client(settings)
    generator = QuizGenerator(
        llm,
        max_questions_per_request=settings.MAX_QUESTIONS_PER_REQUEST,
        max_source_chars=settings.MAX_SOURCE_CHARS,
    )

    app = FastAPI(
        title="PDF Quiz Generator API",
        description="PDF 챕터 업로드 → AI 퀴즈 문항 생성 → 검토 후 JSON/PDF 내보내기",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def run_generation(body: GenerateQuestionsRequest):
        try:
            result = generator.generate(body.to_generation_request())
        except Exception:
            logger.exception("문항 생성 중 예기치 못한 오류")
            return JSONResponse(status_code=500, content=_error_body("Error generating questions"))
        response = GenerateQuestionsResponse.from_result(result)
        if not result.success:
            return JSONResponse(status_code=400, content=response.model_dump(exclude_none=True))
        return JSONResponse(
            status_code=200,
            content=response.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    @app.get("/api/ping", response_model=PingResponse, summary="헬스 체크")
    def ping() -> PingResponse:
        return PingResponse(message=settings.PING_MESSAGE)

    @app.post(
        "/api/process-pdf",
        response_model=ProcessPDFResponse,
        summary="PDF 텍스트 추출 (대체 구현)",
        description="고정 예시 텍스트와 글자 수 기반 추정 페이지 수를 반환.",
    )
    def process_pdf(body: ProcessPDFRequest):
        try:
            doc = extract_text(body.fileName, body.fileContent)
        except ValueError as e:
            return JSONResponse(
                status_code=400,
                content=ProcessPDFResponse(success=False, message=str(e)).model_dump(),
            )
        except Exception:
            logger.exception("PDF 처리 실패 file=%s", body.fileName)
            return JSONResponse(
                status_code=500,
                content=ProcessPDFResponse(
                    success=False, message="Internal server error during PDF processing"
                ).model_dump(),
            )
        logger.info("PDF 처리 완료 file=%s chars=%d pages=%d", doc.file_name, len(doc.text), doc.page_count)
        return ProcessPDFResponse(
            success=True,
            extractedText=doc.text,
            pageCount=doc.page_count,
            message=(
                f"Successfully processed {doc.file_name} - extracted {len(doc.text)} characters "
                f"from {doc.page_count} pages"
            ),
        )

    @app.post(
        "/api/generate-questions",
        response_model=GenerateQuestionsResponse,
        summary="퀴즈 문항 생성",
        description="검증 실패는 400, 모델 호출 실패는 대체 문항으로 200, 그 밖의 오류는 500.",
    )
    def generate_questions(body: GenerateQuestionsRequest):
        logger.info("문항 생성 요청 수신 files=%d count=%d", len(body.files), body.questionCount)
        return run_generation(body)

    @app.get(
        "/api/test-questions",
        response_model=GenerateQuestionsResponse,
        summary="고정 요청으로 생성 파이프라인 점검",
    )
    def test_questions():
        return run_generation(SAMPLE_REQUEST)

    @app.post("/api/export/json", summary="문항 JSON 내보내기")
    def export_questions_json(body: ExportRequest) -> Response:
        return Response(
            content=export_json(body.questions),
            media_type="application/json",
            headers={"Content-Disposition": f"attachment; filename={export_filename('json')}"},
        )

    @app.post("/api/export/pdf", summary="문항 PDF 내보내기")
    def export_questions_pdf(body: ExportRequest) -> StreamingResponse:
        if not body.questions:
            raise HTTPException(status_code=400, detail="No questions to export")
        try:
            pdf_buffer = export_pdf(body.questions, title=body.title or DEFAULT_TITLE)
        except Exception:
            logger.exception("PDF 내보내기 실패")
            raise HTTPException(status_code=500, detail="Error exporting questions to PDF")
        return StreamingResponse(
            pdf_buffer,
            media_type="application/pdf",
            headers={"Content-Disposition": f"attachment; filename={export_filename('pdf')}"},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.api.main:app", host="0.0.0.0", port=8080)
