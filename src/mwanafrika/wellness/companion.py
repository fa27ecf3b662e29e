"""Wellness companion: keyword-based concern scoring with canned replies.

This is a placeholder heuristic with no clinical validity. Matching is
ordered substring search on lower-cased text; the first matching tier wins.
"""

from collections import OrderedDict
from dataclasses import dataclass

import structlog
from pydantic import BaseModel

logger = structlog.get_logger()

CRISIS_KEYWORDS = ("suicide", "kill myself", "end it all", "want to die", "hurt myself")
HIGH_CONCERN_KEYWORDS = ("depressed", "hopeless", "give up", "worthless", "hate myself")
MODERATE_KEYWORDS = ("sad", "lonely", "anxious", "worried", "stressed", "scared", "overwhelmed")
ACADEMIC_KEYWORDS = ("exam", "test", "grades", "failing", "study", "homework")
POSITIVE_KEYWORDS = ("better", "good", "happy", "excited", "hopeful")

MAX_LEVEL = 10
VOLUNTEER_THRESHOLD = 6
BANNER_THRESHOLD = 6
CRISIS_ALERT_THRESHOLD = 9
MAX_SESSIONS = 1000

RESPONSES = {
    "crisis": (
        "I'm very concerned about what you're telling me. Your safety is the most important "
        "thing. Please reach out to a crisis helpline immediately at 0800-567-567. You don't "
        "have to face this alone."
    ),
    "high-distress": (
        "I hear that you're going through a really difficult time. Your feelings are valid. "
        "Please consider talking to a volunteer psychologist who can provide professional support."
    ),
    "anxious": (
        "Anxiety can feel overwhelming. Let's try a breathing exercise together. Breathe in "
        "slowly for 4 counts, hold for 4, then breathe out for 6 counts. You're doing great."
    ),
    "moderate-distress": (
        "Thank you for sharing. Your feelings matter. Remember that difficult feelings are "
        "temporary. Would you like some coping strategies?"
    ),
    "academic-stress": (
        "Academic pressure can be tough. Remember that your worth isn't defined by grades. "
        "Let's break down what's stressing you most. Taking care of your mental health helps "
        "you learn better too."
    ),
    "positive": (
        "I'm so glad to hear that! Keep doing what's working for you. Remember that healing "
        "isn't always linear, and that's okay."
    ),
    "greeting": (
        "Hello, I'm here to listen and support you. This is a safe space. "
        "How are you feeling today?"
    ),
    "neutral": "I'm here with you. Tell me more about what's on your mind. Your feelings are valid.",
}


class Volunteer(BaseModel):
    id: str
    name: str
    role: str
    email: str
    phone: str | None = None
    region: str
    availability: str


VOLUNTEERS: list[Volunteer] = [
    Volunteer(id="v1", name="Dr. Amina Mtshali", role="Clinical Psychologist",
              email="amina.mtshali@wellness.org", phone="+27-82-555-0101",
              region="South Africa", availability="Mon-Fri, 9AM-5PM"),
    Volunteer(id="v2", name="Dr. Kofi Mensah", role="Educational Psychologist",
              email="kofi.mensah@wellness.org", phone="+233-24-555-0202",
              region="Ghana", availability="Mon-Sat, 10AM-6PM"),
    Volunteer(id="v3", name="Ms. Thandiwe Nyathi", role="Counseling Therapist",
              email="thandiwe.nyathi@wellness.org", phone="+263-77-555-0303",
              region="Zimbabwe", availability="Tue-Fri, 2PM-8PM"),
    Volunteer(id="v4", name="Mr. Jabari Okello", role="Youth Counselor",
              email="jabari.okello@wellness.org", phone="+254-72-555-0404",
              region="Kenya", availability="Mon-Fri, 8AM-4PM"),
]


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(kw in text for kw in keywords)


@dataclass
class ConcernResult:
    level: int
    category: str


@dataclass
class WellnessDialogueEngine:
    """Per-conversation concern tracker; one instance per chat session.

    Only the turn count is kept, not the messages themselves. Once the
    volunteer directory has been offered it stays offered for the session.
    """

    concern_level: int = 0
    turns: int = 0
    volunteers_offered: bool = False

    def analyze_concern(self, text: str) -> ConcernResult:
        lower = text.lower()
        if _contains_any(lower, CRISIS_KEYWORDS):
            self.concern_level = MAX_LEVEL
            return ConcernResult(MAX_LEVEL, "crisis")
        if _contains_any(lower, HIGH_CONCERN_KEYWORDS):
            self.concern_level = min(9, self.concern_level + 2)
            return ConcernResult(self.concern_level, "high-distress")
        if _contains_any(lower, MODERATE_KEYWORDS):
            self.concern_level = min(7, self.concern_level + 1)
            return ConcernResult(self.concern_level, "moderate-distress")
        if _contains_any(lower, ACADEMIC_KEYWORDS):
            return ConcernResult(self.concern_level, "academic-stress")
        if _contains_any(lower, POSITIVE_KEYWORDS):
            self.concern_level = max(0, self.concern_level - 1)
            return ConcernResult(self.concern_level, "positive")
        return ConcernResult(self.concern_level, "neutral")

    def generate_response(self, text: str) -> tuple[str, ConcernResult]:
        self.turns += 1
        result = self.analyze_concern(text)
        category = result.category
        if category == "moderate-distress" and "anxious" in text.lower():
            reply = RESPONSES["anxious"]
        elif category == "neutral":
            reply = RESPONSES["greeting"] if self.turns == 1 else RESPONSES["neutral"]
        else:
            reply = RESPONSES[category]
        if result.level >= VOLUNTEER_THRESHOLD:
            self.volunteers_offered = True
        if category in ("crisis", "high-distress"):
            logger.warning("wellness_concern_raised", level=result.level, category=category)
        return reply, result

    @property
    def show_volunteers(self) -> bool:
        return self.volunteers_offered

    @property
    def show_banner(self) -> bool:
        return self.concern_level >= BANNER_THRESHOLD

    @property
    def show_crisis_alert(self) -> bool:
        return self.concern_level >= CRISIS_ALERT_THRESHOLD


class WellnessSessions:
    """Engines keyed by client session id, least recently used evicted first."""

    def __init__(self, max_sessions: int = MAX_SESSIONS):
        self.max_sessions = max_sessions
        self._engines: OrderedDict[str, WellnessDialogueEngine] = OrderedDict()

    def __len__(self) -> int:
        return len(self._engines)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._engines

    def get(self, session_id: str) -> WellnessDialogueEngine:
        engine = self._engines.get(session_id)
        if engine is None:
            engine = self._engines[session_id] = WellnessDialogueEngine()
            while len(self._engines) > self.max_sessions:
                evicted, _ = self._engines.popitem(last=False)
                logger.debug("wellness_session_evicted", session_id=evicted)
        else:
            self._engines.move_to_end(session_id)
        return engine

    def end(self, session_id: str) -> None:
        self._engines.pop(session_id, None)


def support_response(message: str) -> str:
    """Canned reply for the simpler support chat opened from the mood tracker."""
    text = message.lower()
    if _contains_any(text, ("sad", "down", "depressed")):
        return (
            "I hear that you're feeling sad. It's completely normal to have difficult days. "
            "Remember that these feelings are temporary. Would you like to talk about what's "
            "making you feel this way?"
        )
    if _contains_any(text, ("stressed", "anxious", "worried")):
        return (
            "Stress and anxiety can be overwhelming. Let's try some breathing exercises "
            "together. Take a deep breath in for 4 counts, hold for 7, and exhale for 8. "
            "You're not alone in this."
        )
    if _contains_any(text, ("angry", "mad", "frustrated")):
        return (
            "It sounds like you're feeling frustrated. Anger is a valid emotion. Let's find "
            "healthy ways to express these feelings. Would you like some suggestions for "
            "managing anger?"
        )
    if _contains_any(text, ("help", "support")):
        return (
            "I'm glad you're reaching out for help. That takes courage. I'm here to listen and "
            "support you. If you need immediate help, please consider contacting a counselor "
            "or trusted adult."
        )
    return (
        "Thank you for sharing with me. Your feelings are valid and important. I'm here to "
        "listen without judgment. How can I best support you right now?"
    )


def mood_check(recent_moods: list[str], mood: str) -> int:
    """Distress level implied by a newly selected mood.

    A sad or stressed mood after at least two sad/stressed entries in the
    recent history yields ``count + 1``; otherwise 0.
    """
    low = ("sad", "stressed")
    recent_low = sum(1 for m in recent_moods if m in low)
    if mood in low and recent_low >= 2:
        return recent_low + 1
    return 0
