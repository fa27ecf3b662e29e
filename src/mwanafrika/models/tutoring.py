"""Request models for the tutor, curriculum and quiz endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ImageData(BaseModel):
    """Inline image attached to a tutor message (base64 payload)."""

    model_config = ConfigDict(populate_by_name=True)

    data: str = ""
    mime_type: str = Field(default="", alias="mimeType")


class TutorMessage(BaseModel):
    """A single turn of a tutoring conversation."""

    model_config = ConfigDict(populate_by_name=True)

    sender: str  # "user" or "ai"
    content: str | None = None
    image_data: ImageData | None = Field(default=None, alias="imageData")


class ChatRequest(BaseModel):
    messages: list[TutorMessage] = Field(default_factory=list)
    subject: str | None = None


class CurriculumRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    subject: str
    level: str = "primary"
    topic: str = ""
    lesson_type: str = Field(default="lesson", alias="lessonType")


class QuizRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    action: str = ""  # "generate" or "analyze"
    quiz_type: str | None = Field(default=None, alias="quizType")
    interests: list[str] | None = None
    previous_answers: Any = Field(default=None, alias="previousAnswers")
