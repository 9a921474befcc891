"""
HTTP API 테스트 (가짜 모델 클라이언트 주입).
"""

import pytest
from fastapi.testclient import TestClient

from app.api.main import create_app
from app.core.config import Settings

from tests.conftest import FailingLLM, FakeLLM


def _payload(**overrides):
    body = {
        "files": [{"name": "chapter1.pdf", "content": "ZmFrZQ=="}],
        "questionCount": 4,
        "questionTypes": {"multipleChoice": True, "trueFalse": True},
        "difficulty": "medium",
    }
    body.update(overrides)
    return body


@pytest.fixture
def settings():
    return Settings(OPENAI_API_KEY="test-key", PING_MESSAGE="pong")


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings=settings, llm=FakeLLM()))


def test_ping(client):
    assert client.get("/api/ping").json() == {"message": "pong"}


def test_generate_questions(client):
    resp = client.post("/api/generate-questions", json=_payload())
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert len(body["questions"]) == 4
    assert isinstance(body["processingTime"], int)
    first = body["questions"][0]
    assert {"id", "type", "question", "correctAnswer", "explanation", "difficulty", "sourceFile"} <= set(first)


def test_no_type_selected_is_400(client):
    resp = client.post(
        "/api/generate-questions",
        json=_payload(questionTypes={"multipleChoice": False, "trueFalse": False}),
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "At least one question type must be selected"


def test_missing_files_is_400(client):
    resp = client.post("/api/generate-questions", json=_payload(files=[]))
    assert resp.status_code == 400
    assert resp.json()["message"] == "At least one file is required"


def test_missing_api_key_is_400():
    app = create_app(settings=Settings(OPENAI_API_KEY=None))
    resp = TestClient(app).post("/api/generate-questions", json=_payload())
    assert resp.status_code == 400
    assert resp.json()["message"] == "Model API key not configured"


def test_invalid_difficulty_is_422(client):
    resp = client.post("/api/generate-questions", json=_payload(difficulty="extreme"))
    assert resp.status_code == 422


def test_model_failure_returns_fallback(settings):
    client = TestClient(create_app(settings=settings, llm=FailingLLM()))
    resp = client.post("/api/generate-questions", json=_payload(questionCount=7))
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert len(body["questions"]) == 7
    assert "fallback" in body["message"]


def test_unexpected_error_is_500(settings):
    class BrokenLLM:
        def complete(self, prompt):
            raise RuntimeError("boom")

    client = TestClient(create_app(settings=settings, llm=BrokenLLM()))
    resp = client.post("/api/generate-questions", json=_payload())
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "questions": [], "processingTime": 0, "message": "Error generating questions"}


def test_test_questions_endpoint(client):
    body = client.get("/api/test-questions").json()
    assert body["success"] is True
    assert len(body["questions"]) == 5
    assert {q["sourceFile"] for q in body["questions"]} == {"test-chapter.pdf"}


def test_process_pdf(client):
    resp = client.post("/api/process-pdf", json={"fileName": "ch1.pdf", "fileContent": "ZmFrZQ=="})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["pageCount"] >= 1
    assert "ch1.pdf" in body["message"]


def test_process_pdf_requires_fields(client):
    resp = client.post("/api/process-pdf", json={"fileName": "ch1.pdf"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "fileName and fileContent are required"


def test_export_json_and_pdf(client):
    questions = client.post("/api/generate-questions", json=_payload()).json()["questions"]

    json_resp = client.post("/api/export/json", json={"questions": questions})
    assert json_resp.status_code == 200
    assert "attachment; filename=quiz-questions-" in json_resp.headers["content-disposition"]
    assert len(json_resp.json()) == 4

    pdf_resp = client.post("/api/export/pdf", json={"questions": questions, "title": "Chapter 1"})
    assert pdf_resp.status_code == 200
    assert pdf_resp.headers["content-type"] == "application/pdf"
    assert pdf_resp.content.startswith(b"%PDF")


def test_export_pdf_requires_questions(client):
    assert client.post("/api/export/pdf", json={"questions": []}).status_code == 400
