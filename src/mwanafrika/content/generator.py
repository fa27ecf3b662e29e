"""Curriculum, topic-list and career-quiz generation."""

from typing import Any

import structlog

from mwanafrika.content.fallbacks import fallback_for
from mwanafrika.errors import ContentParseError, MissingCredentialsError, UpstreamError
from mwanafrika.models.tutoring import CurriculumRequest, QuizRequest
from mwanafrika.tutor.client import TutorClient, get_tutor_client
from mwanafrika.tutor.prompts import (
    build_analysis_prompt,
    build_curriculum_prompt,
    build_quiz_prompt,
    build_topics_prompt,
)

logger = structlog.get_logger()

QUIZ_ACTIONS = ("generate", "analyze")


async def generate_lesson(request: CurriculumRequest, client: TutorClient) -> Any:
    """Generate a structured lesson. Provider and parse errors propagate."""
    prompt = build_curriculum_prompt(
        subject=request.subject,
        level=request.level,
        topic=request.topic,
        lesson_type=request.lesson_type,
    )
    lesson = await client.generate_json(prompt)
    logger.info("lesson_generated", subject=request.subject, topic=request.topic)
    return lesson


async def generate_topics(subject: str, level: str, client: TutorClient) -> dict[str, Any]:
    topics = await client.generate_json(build_topics_prompt(subject, level))
    return {"subject": subject, "level": level, "topics": topics}


async def generate_quiz(request: QuizRequest) -> dict[str, Any]:
    """Generate quiz questions or analyse answers, degrading to bundled content.

    A missing key, an unparsable model response, and any provider error all
    yield the bundled fallback for the action; quota errors additionally
    carry a ``fallbackMessage``.

    Raises:
        ValueError: ``request.action`` is not a known quiz action.
    """
    action = request.action
    if action not in QUIZ_ACTIONS:
        raise ValueError("Invalid action specified")

    try:
        client = get_tutor_client()
    except MissingCredentialsError:
        logger.warning("quiz_fallback", action=action, reason="missing_api_key")
        return fallback_for(action)

    if action == "generate":
        prompt = build_quiz_prompt(request.interests, request.quiz_type)
    else:
        prompt = build_analysis_prompt(request.previous_answers, request.interests)

    try:
        return await client.generate_json(prompt)
    except ContentParseError:
        logger.warning("quiz_fallback", action=action, reason="parse_error")
        return fallback_for(action)
    except UpstreamError as exc:
        if exc.quota_exceeded:
            logger.warning("quiz_fallback", action=action, reason="quota_exceeded")
            return fallback_for(action, quota_exceeded=True)
        logger.warning("quiz_fallback", action=action, reason="upstream_error", status=exc.status)
        return fallback_for(action)
    except Exception:
        logger.exception("quiz_fallback", action=action, reason="unexpected_error")
        return fallback_for(action)
