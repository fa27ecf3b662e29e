"""Bundled career-quiz content served when the generative provider is unavailable."""

import copy
from typing import Any


def _options(*pairs: tuple[str, str]) -> list[dict[str, str]]:
    return [
        {"id": option_id, "text": text, "value": value}
        for option_id, (text, value) in zip("abcd", pairs)
    ]


FALLBACK_QUIZ: dict[str, Any] = {
    "title": "Career Explorer Quiz",
    "description": "Discover career paths that match your interests and strengths",
    "questions": [
        {
            "id": 1,
            "question": "What type of work environment do you prefer?",
            "options": _options(
                ("Quiet office with individual focus", "analytical"),
                ("Collaborative team environment", "social"),
                ("Creative studio or workshop", "creative"),
                ("Fast-paced, high-energy setting", "leadership"),
            ),
        },
        {
            "id": 2,
            "question": "How do you prefer to solve problems?",
            "options": _options(
                ("Analyze data and research thoroughly", "analytical"),
                ("Brainstorm with others and collaborate", "social"),
                ("Think outside the box and be innovative", "creative"),
                ("Take charge and make quick decisions", "leadership"),
            ),
        },
        {
            "id": 3,
            "question": "What motivates you most at work?",
            "options": _options(
                ("Solving complex technical challenges", "technical"),
                ("Helping people and making a difference", "healthcare"),
                ("Creating something new and original", "creative"),
                ("Leading teams and driving results", "business"),
            ),
        },
        {
            "id": 4,
            "question": "Which subjects did you enjoy most in school?",
            "options": _options(
                ("Mathematics, Science, Technology", "technical"),
                ("Biology, Health Sciences, Psychology", "healthcare"),
                ("Art, Design, Literature, Music", "creative"),
                ("Business Studies, Economics, History", "business"),
            ),
        },
        {
            "id": 5,
            "question": "How do you prefer to communicate?",
            "options": _options(
                ("Through detailed reports and analysis", "analytical"),
                ("Face-to-face conversations and meetings", "social"),
                ("Visual presentations and storytelling", "creative"),
                ("Clear directives and action plans", "leadership"),
            ),
        },
        {
            "id": 6,
            "question": "What type of impact do you want to make?",
            "options": _options(
                ("Advance technology and innovation", "technical"),
                ("Improve people's health and wellbeing", "healthcare"),
                ("Inspire and entertain others", "creative"),
                ("Shape future leaders and minds", "education"),
            ),
        },
        {
            "id": 7,
            "question": "How do you handle stress and pressure?",
            "options": _options(
                ("Focus on data and systematic approaches", "analytical"),
                ("Seek support from team members", "social"),
                ("Find creative outlets and solutions", "creative"),
                ("Take control and organize priorities", "leadership"),
            ),
        },
        {
            "id": 8,
            "question": "What's your ideal work-life balance?",
            "options": _options(
                ("Structured hours with deep focus time", "analytical"),
                ("Flexible schedule with people interaction", "social"),
                ("Creative freedom with project-based work", "creative"),
                ("High responsibility with leadership opportunities", "business"),
            ),
        },
    ],
}

FALLBACK_ANALYSIS: dict[str, Any] = {
    "analysis": {
        "primaryStrengths": ["Problem-solving", "Communication", "Adaptability"],
        "personalityType": (
            "You are a well-rounded individual who can adapt to different situations "
            "and work well both independently and in teams."
        ),
        "motivations": ["Personal growth", "Making a positive impact", "Achieving excellence"],
    },
    "recommendedCareers": [
        {
            "title": "Project Manager",
            "match": 85,
            "description": (
                "Your leadership and organizational skills make you well-suited for "
                "managing projects and teams."
            ),
            "pathway": "Business or relevant degree + Project Management certification",
            "salaryRange": "R350,000 - R800,000",
            "growth": "High demand across industries",
            "nextSteps": [
                "Develop leadership skills",
                "Learn project management methodologies",
                "Gain team experience",
            ],
        },
        {
            "title": "Business Analyst",
            "match": 78,
            "description": (
                "Your analytical thinking and communication skills are perfect for "
                "bridging business and technical teams."
            ),
            "pathway": "Business, IT, or relevant degree + analyst certification",
            "salaryRange": "R300,000 - R650,000",
            "growth": "Growing demand in digital transformation",
            "nextSteps": [
                "Learn data analysis tools",
                "Develop business process knowledge",
                "Practice stakeholder management",
            ],
        },
        {
            "title": "Marketing Specialist",
            "match": 72,
            "description": (
                "Your creativity and people skills would thrive in developing marketing "
                "strategies and campaigns."
            ),
            "pathway": "Marketing, Communications, or Business degree",
            "salaryRange": "R250,000 - R550,000",
            "growth": "Evolving with digital marketing trends",
            "nextSteps": [
                "Build digital marketing skills",
                "Create a portfolio",
                "Learn analytics tools",
            ],
        },
    ],
    "additionalSuggestions": {
        "subjects": ["Business Studies", "Communication", "Psychology", "Computer Literacy"],
        "skills": ["Leadership", "Critical thinking", "Teamwork", "Digital literacy"],
        "experiences": [
            "Volunteer leadership roles",
            "Team projects",
            "Internships",
            "Public speaking",
        ],
    },
}

QUOTA_MESSAGES = {
    "generate": "Using offline quiz due to high demand. Your results will still be accurate!",
    "analyze": "Analysis completed using our built-in career matching system.",
}


def fallback_for(action: str, quota_exceeded: bool = False) -> dict[str, Any]:
    """Return a fresh copy of the bundled content for a quiz action."""
    source = FALLBACK_QUIZ if action == "generate" else FALLBACK_ANALYSIS
    data = copy.deepcopy(source)
    if quota_exceeded:
        data["fallbackMessage"] = QUOTA_MESSAGES[action]
    return data
