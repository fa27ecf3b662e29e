"""Prompt templates for tutoring, curriculum and career-quiz generation."""

import json
from typing import Any

TUTOR_GUARDRAILS = """\
You are mwanAfrika Tutor, a friendly, patient, curriculum-aligned AI tutor for \
primary and early-secondary students.
- Always be encouraging and respectful. Use simple, clear language appropriate to the student's grade.
- Prioritize step-by-step explanations, short examples, and practice questions with answers.
- If asked about real-world safety, medical, legal, financial, or self-harm topics, do not give \
instructions; instead follow escalation protocol and suggest a teacher or trusted adult.
- Do not ask for, store, or request personal identifying information from students. For voucher \
redemption require server-side confirmation and caregiver/teacher approval.
- If unsure about an answer, say "I might be mistaken" and offer a safe verification step or \
suggest asking a teacher."""

CURRICULUM_PROMPT = """\
You are an expert curriculum designer for African primary and secondary education.
Create engaging, culturally relevant lesson content for underprivileged students.

Subject: {subject}
Level: {level} (Primary/Secondary)
Topic: {topic}
Lesson Type: {lesson_type}

Requirements:
- Use African contexts, examples, and cultural references
- Make content relatable to students in South Africa, Kenya, Zimbabwe, Zambia, Malawi
- Include practical, real-world applications
- Use simple, clear language appropriate for the level
- Include interactive elements and questions
- Align with African curriculum standards
- Be encouraging and motivational

Generate a structured lesson with:
1. Introduction (hook the student's interest)
2. Main content (core concepts with examples)
3. Interactive exercises (3-5 questions/activities)
4. Real-world application (how this applies to daily life)
5. Summary and key takeaways

Format as JSON with this structure:
{{
  "title": "Engaging lesson title",
  "description": "Brief lesson description",
  "duration": "Estimated time in minutes",
  "difficulty": "Beginner/Intermediate/Advanced",
  "skillCoins": "Reward amount (20-100)",
  "content": {{
    "introduction": {{
      "title": "Introduction title",
      "content": "Engaging introduction text",
      "culturalContext": "African context or example"
    }},
    "mainContent": [
      {{
        "section": "Section name",
        "explanation": "Clear explanation",
        "example": "African-relevant example",
        "visualDescription": "Description for visual aid"
      }}
    ],
    "exercises": [
      {{
        "type": "multiple-choice|fill-blank|practical",
        "question": "Question text",
        "options": ["A", "B", "C", "D"],
        "correctAnswer": "Correct answer",
        "explanation": "Why this is correct",
        "contextualHint": "African context hint"
      }}
    ],
    "realWorldApplication": {{
      "title": "How this helps in real life",
      "examples": ["Example 1", "Example 2"],
      "communityConnection": "How it connects to African communities"
    }},
    "summary": {{
      "keyPoints": ["Key point 1", "Key point 2"],
      "nextSteps": "What to learn next"
    }}
  }}
}}

Ensure all content is educational, age-appropriate, and inspiring for African students."""

TOPICS_PROMPT = """\
Generate a comprehensive list of topics for {subject} at {level} level,
suitable for African students (South Africa, Kenya, Zimbabwe, Zambia, Malawi).

Requirements:
- Align with African curriculum standards
- Progress from basic to advanced concepts
- Include culturally relevant topics
- Practical, real-world applications
- Age-appropriate for {level} students

Format as JSON array:
[
  {{
    "id": "unique-topic-id",
    "title": "Topic Title",
    "description": "Brief description",
    "difficulty": "Beginner/Intermediate/Advanced",
    "estimatedLessons": 3,
    "prerequisites": ["topic-id-1", "topic-id-2"],
    "realWorldApplication": "How this applies to daily life",
    "culturalRelevance": "African context"
  }}
]

Generate 10-15 topics covering the full {subject} curriculum for {level} level."""

QUIZ_CATEGORIES = (
    "creative", "analytical", "social", "technical",
    "leadership", "healthcare", "business", "education",
)

QUIZ_GENERATE_PROMPT = """\
Create a career exploration quiz for students aged 13-18. Generate exactly 8 multiple-choice \
questions that help identify career interests and aptitudes.

User's current interests: {interests}
Quiz type: {quiz_type}

Format the response as a JSON object with this structure:
{{
  "title": "Career Explorer Quiz",
  "description": "Discover career paths that match your interests and strengths",
  "questions": [
    {{
      "id": 1,
      "question": "Question text here",
      "options": [
        {{ "id": "a", "text": "Option A", "value": "category1" }},
        {{ "id": "b", "text": "Option B", "value": "category2" }},
        {{ "id": "c", "text": "Option C", "value": "category3" }},
        {{ "id": "d", "text": "Option D", "value": "category4" }}
      ]
    }}
  ]
}}

Categories to use in values: {categories}

Make questions engaging and relevant to South African students. Include questions about:
- Work environment preferences
- Problem-solving approaches
- Communication styles
- Subject interests
- Values and motivations
- Skills and talents
- Future goals
- Learning preferences

Only return valid JSON, no additional text."""

QUIZ_ANALYZE_PROMPT = """\
Analyze these career quiz results and provide personalized career recommendations for a \
South African student.

Quiz Answers: {answers}
User Interests: {interests}

Based on the answers, provide career recommendations in this JSON format:
{{
  "analysis": {{
    "primaryStrengths": ["strength1", "strength2", "strength3"],
    "personalityType": "Brief description of their work style and preferences",
    "motivations": ["motivation1", "motivation2"]
  }},
  "recommendedCareers": [
    {{
      "title": "Career Title",
      "match": 95,
      "description": "Why this career fits them",
      "pathway": "Education/qualification requirements",
      "salaryRange": "R000,000 - R000,000",
      "growth": "Job market outlook",
      "nextSteps": ["step1", "step2", "step3"]
    }}
  ],
  "additionalSuggestions": {{
    "subjects": ["subject1", "subject2"],
    "skills": ["skill1", "skill2"],
    "experiences": ["experience1", "experience2"]
  }}
}}

Provide 3-5 career recommendations ranked by match percentage. Focus on careers available in \
South Africa with realistic salary ranges in South African Rand. Include both traditional and \
emerging career options.

Only return valid JSON, no additional text."""


def build_tutor_instructions(subject: str | None = None) -> str:
    if subject:
        return f"{TUTOR_GUARDRAILS}\n- The subject is: {subject}."
    return TUTOR_GUARDRAILS


def _interests_text(interests: list[str] | None) -> str:
    return ", ".join(interests) if interests else "Not specified"


def build_curriculum_prompt(subject: str, level: str, topic: str, lesson_type: str) -> str:
    return CURRICULUM_PROMPT.format(
        subject=subject, level=level, topic=topic, lesson_type=lesson_type
    )


def build_topics_prompt(subject: str, level: str) -> str:
    return TOPICS_PROMPT.format(subject=subject, level=level)


def build_quiz_prompt(interests: list[str] | None, quiz_type: str | None) -> str:
    return QUIZ_GENERATE_PROMPT.format(
        interests=_interests_text(interests),
        quiz_type=quiz_type or "career-exploration",
        categories=", ".join(f'"{c}"' for c in QUIZ_CATEGORIES),
    )


def build_analysis_prompt(answers: Any, interests: list[str] | None) -> str:
    return QUIZ_ANALYZE_PROMPT.format(
        answers=json.dumps(answers),
        interests=_interests_text(interests),
    )
