"""
공통 픽스처: 가짜 모델 클라이언트, 모델 응답 샘플, 생성 요청.
"""

import random

import pytest

from app.quiz.llm import LLMError
from app.schema.models import GenerationRequest, SourceFile

MC_BLOCK = """QUESTION_START
Type: multiple-choice
Question: What do active learning methods emphasize?
Options:
A) Passive listening
B) Student engagement
C) Rote memorization
D) Standardized tests
Answer: B
Explanation: Active learning keeps students engaged with the material.
Difficulty: medium
QUESTION_END"""

TF_BLOCK = """QUESTION_START
Type: true-false
Question: Blended learning combines digital tools with classroom teaching.
Answer: True
Explanation: Blended learning mixes online and face-to-face instruction.
Difficulty: medium
QUESTION_END"""


def make_reply(count: int) -> str:
    """객관식/OX를 번갈아 count개 블록으로 이어 붙인 모델 응답."""
    blocks = [MC_BLOCK if i % 2 == 0 else TF_BLOCK for i in range(count)]
    return "Here are your questions:\n\n" + "\n\n".join(blocks)


class FakeLLM:
    """프롬프트를 기록하고, 요청 문항 수만큼(또는 고정 개수) 블록을 돌려준다."""

    def __init__(self, per_call: int | None = None, replies: list[str] | None = None) -> None:
        self.per_call = per_call
        self.replies = list(replies or [])
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.replies:
            return self.replies.pop(0)
        count = self.per_call
        if count is None:
            # "Generate EXACTLY N high-quality quiz questions"
            count = int(prompt.split("EXACTLY ", 1)[1].split(" ", 1)[0])
        return make_reply(count)


class FailingLLM:
    def __init__(self) -> None:
        self.calls = 0

    def complete(self, prompt: str) -> str:
        self.calls += 1
        raise LLMError("Model API key invalid or quota exceeded.")


class FlakyLLM(FakeLLM):
    """지정한 호출 번호(1부터)에서만 실패."""

    def __init__(self, fail_on: set[int]) -> None:
        super().__init__()
        self.fail_on = fail_on

    def complete(self, prompt: str) -> str:
        if len(self.prompts) + 1 in self.fail_on:
            self.prompts.append(prompt)
            raise LLMError("Model not available. Please check API configuration.")
        return super().complete(prompt)


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def failing_llm():
    return FailingLLM()


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def make_request():
    def _make(count=5, types=("multiple-choice", "true-false"), difficulty="medium", files=("chapter1.pdf",)):
        return GenerationRequest(
            files=[SourceFile(name=name, content="ZmFrZQ==") for name in files],
            question_count=count,
            question_types=list(types),
            difficulty=difficulty,
        )

    return _make
