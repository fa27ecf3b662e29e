"""Tests for prompt templates."""

from mwanafrika.tutor.prompts import (
    QUIZ_CATEGORIES,
    TUTOR_GUARDRAILS,
    build_analysis_prompt,
    build_curriculum_prompt,
    build_quiz_prompt,
    build_topics_prompt,
    build_tutor_instructions,
)


def test_tutor_instructions_without_subject():
    """Without a subject only the guardrails are sent"""
    assert build_tutor_instructions() == TUTOR_GUARDRAILS
    assert build_tutor_instructions("") == TUTOR_GUARDRAILS


def test_tutor_instructions_with_subject():
    prompt = build_tutor_instructions("Mathematics")
    assert prompt.startswith(TUTOR_GUARDRAILS)
    assert prompt.endswith("- The subject is: Mathematics.")


def test_curriculum_prompt_fills_fields():
    prompt = build_curriculum_prompt("Science", "primary", "Water cycle", "lesson")
    assert "Subject: Science" in prompt
    assert "Topic: Water cycle" in prompt
    assert '"realWorldApplication"' in prompt
    assert "{{" not in prompt


def test_topics_prompt_mentions_level():
    prompt = build_topics_prompt("English", "secondary")
    assert "English" in prompt
    assert "secondary level" in prompt


def test_quiz_prompt_lists_categories():
    prompt = build_quiz_prompt(None, None)
    assert "Not specified" in prompt
    assert "career-exploration" in prompt
    for category in QUIZ_CATEGORIES:
        assert f'"{category}"' in prompt


def test_analysis_prompt_embeds_answers_as_json():
    prompt = build_analysis_prompt({"1": "social"}, ["football", "art"])
    assert '{"1": "social"}' in prompt
    assert "football, art" in prompt
