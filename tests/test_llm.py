"""
OpenAI 텍스트 클라이언트 테스트: 응답 추출과 오류 → LLMError 변환 (네트워크 없음).
"""

from types import SimpleNamespace

import httpx
import openai
import pytest
from fastapi.testclient import TestClient

from app.api.main import create_app
from app.core.config import Settings
from app.quiz.llm import LLMError, OpenAITextClient, build_llm_client

API_URL = "https://api.openai.com/v1/chat/completions"


class StubCompletions:
    def __init__(self, result=None, error=None) -> None:
        self.result = result
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


def make_client(result=None, error=None) -> tuple[OpenAITextClient, StubCompletions]:
    client = OpenAITextClient(api_key="test-key", model="test-model")
    completions = StubCompletions(result=result, error=error)
    client._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return client, completions


def status_error(status: int) -> openai.APIStatusError:
    response = httpx.Response(status, request=httpx.Request("POST", API_URL))
    return openai.APIStatusError(f"status {status}", response=response, body=None)


def reply(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def test_complete_returns_text():
    client, completions = make_client(result=reply("QUESTION_START ..."))
    assert client.complete("prompt") == "QUESTION_START ..."
    assert completions.calls[0]["model"] == "test-model"
    assert completions.calls[0]["messages"] == [{"role": "user", "content": "prompt"}]


def test_none_content_becomes_empty_string():
    client, _ = make_client(result=reply(None))
    assert client.complete("prompt") == ""


@pytest.mark.parametrize("result", [SimpleNamespace(choices=[]), SimpleNamespace(choices=None)])
def test_missing_choices_raise_llm_error(result):
    client, _ = make_client(result=result)
    with pytest.raises(LLMError, match="no completion"):
        client.complete("prompt")


@pytest.mark.parametrize(
    "status, expected",
    [
        (404, "Model not available"),
        (401, "invalid or quota exceeded"),
        (403, "invalid or quota exceeded"),
        (429, "invalid or quota exceeded"),
        (500, "Model API error: status 500"),
    ],
)
def test_status_errors_mapped(status, expected):
    client, _ = make_client(error=status_error(status))
    with pytest.raises(LLMError, match=expected):
        client.complete("prompt")


def test_connection_error_mapped():
    error = openai.APIConnectionError(request=httpx.Request("POST", API_URL))
    client, _ = make_client(error=error)
    with pytest.raises(LLMError, match="Model API error"):
        client.complete("prompt")


def test_build_llm_client_without_key():
    assert build_llm_client(Settings(OPENAI_API_KEY=None)) is None


def test_build_llm_client_with_key():
    client = build_llm_client(Settings(OPENAI_API_KEY="test-key", OPENAI_MODEL="gpt-test"))
    assert isinstance(client, OpenAITextClient)
    assert client.model == "gpt-test"


def test_empty_choices_fall_back_over_http():
    client, _ = make_client(result=SimpleNamespace(choices=[]))
    app = create_app(settings=Settings(OPENAI_API_KEY="test-key"), llm=client)
    resp = TestClient(app).post(
        "/api/generate-questions",
        json={
            "files": [{"name": "chapter1.pdf", "content": "ZmFrZQ=="}],
            "questionCount": 3,
            "questionTypes": {"multipleChoice": True, "trueFalse": True},
            "difficulty": "easy",
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert len(body["questions"]) == 3
    assert "fallback" in body["message"]
