"""
프롬프트 구성 테스트.
"""

from app.quiz.prompt import (
    QUESTION_END,
    QUESTION_START,
    build_prompt,
    truncate_source,
    type_distribution,
)


def test_prompt_states_exact_count_and_types():
    prompt = build_prompt("Some chapter text", 7, ["multiple-choice", "true-false"], "hard")
    assert "Generate EXACTLY 7 high-quality quiz questions" in prompt
    assert "exactly 7 questions - no more, no less" in prompt
    assert "Question types to include: multiple-choice, true-false" in prompt
    assert "(3 multiple-choice, 3 true-false)" in prompt
    assert "Demand critical thinking" in prompt
    assert QUESTION_START in prompt and QUESTION_END in prompt


def test_options_section_only_for_multiple_choice():
    with_mc = build_prompt("text", 3, ["multiple-choice"], "easy")
    tf_only = build_prompt("text", 3, ["true-false"], "easy")
    assert "A) Option 1" in with_mc and "D) Option 4" in with_mc
    assert "Options:" not in tf_only


def test_chunk_number_adds_set_label_and_variety():
    first = build_prompt("text", 25, ["true-false"], "medium", chunk_number=2)
    single = build_prompt("text", 25, ["true-false"], "medium")
    assert "(Set 2)" in first
    assert "different aspects of the content than previous sets" in first
    assert "(Set" not in single
    assert "previous sets" not in single


def test_source_truncated_with_marker():
    text = "x" * 50
    truncated, was_truncated = truncate_source(text, 20)
    assert was_truncated
    assert truncated == "x" * 20 + " ..."

    prompt = build_prompt(text, 1, ["true-false"], "easy", max_chars=20)
    assert "x" * 21 not in prompt
    assert "x" * 20 + " ..." in prompt


def test_short_source_not_truncated():
    text, was_truncated = truncate_source("short", 100)
    assert text == "short"
    assert not was_truncated


def test_type_distribution_integer_division():
    assert type_distribution(5, ["multiple-choice", "true-false"]) == "2 multiple-choice, 2 true-false"
    assert type_distribution(5, ["true-false"]) == "5 true-false"


def test_truncation_is_logged(caplog):
    with caplog.at_level("WARNING", logger="app.quiz.prompt"):
        build_prompt("x" * 50, 1, ["true-false"], "easy", max_chars=20)
    assert "잘림" in caplog.text

    caplog.clear()
    with caplog.at_level("WARNING", logger="app.quiz.prompt"):
        build_prompt("short", 1, ["true-false"], "easy", max_chars=20)
    assert caplog.text == ""
