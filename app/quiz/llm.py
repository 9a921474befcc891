"""
문항 생성용 텍스트 완성 클라이언트 (OpenAI 호환 API).
"""

from __future__ import annotations

import logging
from typing import Protocol

from openai import APIStatusError, OpenAI, OpenAIError

from app.core.config import Settings

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """모델 호출 실패 (인증, 할당량, 모델 없음, 네트워크)."""


class TextCompletionClient(Protocol):
    def complete(self, prompt: str) -> str: ...


class OpenAITextClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        temperature: float = 0.2,
        timeout: float = 60,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self._client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAITextClient":
        if not settings.OPENAI_API_KEY:
            raise ValueError("OPENAI_API_KEY is not configured")
        return cls(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            base_url=settings.OPENAI_BASE_URL,
            temperature=settings.OPENAI_TEMPERATURE,
            timeout=settings.REQUEST_TIMEOUT,
        )

    def complete(self, prompt: str) -> str:
        """프롬프트 하나를 보내고 응답 텍스트를 반환. 실패는 LLMError로 감싼다."""
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except APIStatusError as exc:
            logger.error("모델 API 오류 status=%s model=%s", exc.status_code, self.model)
            if exc.status_code == 404:
                raise LLMError("Model not available. Please check API configuration.") from exc
            if exc.status_code in (401, 403, 429):
                raise LLMError("Model API key invalid or quota exceeded.") from exc
            raise LLMError(f"Model API error: {exc.message}") from exc
        except OpenAIError as exc:
            logger.error("모델 API 호출 실패 model=%s error=%s", self.model, exc)
            raise LLMError(f"Model API error: {exc}") from exc

        # 차단된 응답 등은 choices가 비어 있거나 None으로 온다
        choices = getattr(response, "choices", None)
        if not choices or getattr(choices[0], "message", None) is None:
            logger.error("모델 응답에 completion 없음 model=%s", self.model)
            raise LLMError("Model returned no completion")
        return choices[0].message.content or ""


def build_llm_client(settings: Settings) -> OpenAITextClient | None:
    """API 키가 없으면 None. 생성 요청은 검증 단계에서 거절된다."""
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY 미설정: 문항 생성 요청은 거절됩니다")
        return None
    return OpenAITextClient.from_settings(settings)
