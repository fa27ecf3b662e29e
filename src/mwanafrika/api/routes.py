"""REST API routes for tutoring chat, curriculum and career quizzes."""

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from mwanafrika.content.generator import generate_lesson, generate_quiz, generate_topics
from mwanafrika.errors import ContentParseError, MissingCredentialsError
from mwanafrika.models.tutoring import ChatRequest, CurriculumRequest, QuizRequest
from mwanafrika.tutor.client import get_tutor_client

logger = structlog.get_logger()
router = APIRouter(prefix="/api")


def error_response(message: str, status_code: int = 500, **extra) -> JSONResponse:
    return JSONResponse({"error": message, **extra}, status_code=status_code)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.post("/chat")
async def chat(request: ChatRequest):
    """Answer the latest message of a tutoring conversation."""
    try:
        client = get_tutor_client()
        text = await client.generate_reply(request.messages, subject=request.subject)
    except MissingCredentialsError as exc:
        return error_response(str(exc))
    except Exception:
        logger.exception("chat_failed")
        return error_response("Failed to fetch response from the tutor model.")
    return {"text": text}


@router.post("/curriculum")
async def create_lesson(request: CurriculumRequest):
    """Generate a structured, culturally relevant lesson."""
    try:
        client = get_tutor_client()
    except MissingCredentialsError:
        return error_response("Missing GOOGLE_API_KEY")
    try:
        return await generate_lesson(request, client)
    except ContentParseError as exc:
        return error_response(
            "Failed to generate structured lesson content", rawResponse=exc.raw_response
        )
    except Exception:
        logger.exception("curriculum_generation_failed", subject=request.subject)
        return error_response("Failed to generate curriculum content")


@router.get("/curriculum")
async def list_topics(subject: str | None = None, level: str = "primary"):
    """Generate the topic list for a subject and level."""
    if not subject:
        return error_response("Subject parameter required", status_code=400)
    try:
        client = get_tutor_client()
    except MissingCredentialsError:
        return error_response("Missing GOOGLE_API_KEY")
    try:
        return await generate_topics(subject, level, client)
    except ContentParseError as exc:
        return error_response("Failed to generate topics list", rawResponse=exc.raw_response)
    except Exception:
        logger.exception("topics_generation_failed", subject=subject)
        return error_response("Failed to generate topics")


@router.post("/quiz")
async def quiz(request: QuizRequest):
    """Generate a career quiz or analyse answers; falls back to bundled content."""
    try:
        return await generate_quiz(request)
    except ValueError as exc:
        return error_response(str(exc), status_code=400)
