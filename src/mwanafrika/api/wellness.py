"""Wellness companion routes."""

import structlog
from fastapi import APIRouter

from mwanafrika.models.wellness import MoodCheckRequest, WellnessChatRequest, WellnessChatResponse
from mwanafrika.wellness.companion import (
    VOLUNTEERS,
    WellnessSessions,
    mood_check,
    support_response,
)

logger = structlog.get_logger()
router = APIRouter(prefix="/api/wellness")

# Conversation state lives in-process, keyed by the client's session id
_sessions = WellnessSessions()


@router.post("/chat")
async def wellness_chat(request: WellnessChatRequest) -> dict:
    engine = _sessions.get(request.session_id)
    reply, result = engine.generate_response(request.message)
    response = WellnessChatResponse(
        reply=reply,
        level=result.level,
        category=result.category,
        show_banner=engine.show_banner,
        show_crisis_alert=engine.show_crisis_alert,
        volunteers=VOLUNTEERS if engine.show_volunteers else None,
    )
    return response.model_dump(by_alias=True, exclude_none=True)


@router.delete("/chat/{session_id}")
async def end_wellness_chat(session_id: str) -> dict:
    _sessions.end(session_id)
    return {"status": "cleared"}


@router.post("/mood")
async def record_mood(request: MoodCheckRequest) -> dict:
    """Check a newly selected mood against the recent mood history."""
    level = mood_check(request.recent_moods, request.mood)
    result: dict = {"distressLevel": level, "openSupport": level > 0}
    if level > 0:
        result["reply"] = support_response(request.mood)
        logger.info("mood_distress_pattern", level=level)
    return result


@router.post("/support")
async def support_chat(request: WellnessChatRequest) -> dict:
    return {"reply": support_response(request.message)}


@router.get("/volunteers")
async def volunteers() -> list[dict]:
    return [v.model_dump() for v in VOLUNTEERS]
