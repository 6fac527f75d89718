"""Prompt templates for the generative text model."""

from emerge_career.models.content import ProfileContext
from emerge_career.models.records import ChatMessage

NOT_SPECIFIED = "Not specified"

GOALS_PROMPT = """\
Suggest {count} specific and actionable career development goals focused on the subjects: {subjects}
Consider these aspects - Current Skills: {skills}, Interests: {interests}

Suggest varied career development activities like:
- Industry research and analysis
- Skill-building exercises
- Portfolio development
- Professional networking
- Personal branding
- Technical learning
- Career exploration

Requirements for goals:
- Must be achievable in 1-2 hours
- Should be specific and actionable
- Vary between different types of activities
- Focus on career exploration and professional development in the subject field
- Include industry-relevant skills or knowledge
- Be specific and measurable
- Example: "Research 2 companies hiring {first_subject} professionals and list their requirements"

Format as a JSON array of {count} short strings. Example:
["Complete 3 linear algebra practice problems", "Write a 1-page summary of photosynthesis process"]

Response must be only the JSON array, no other text.
"""

COURSE_PROMPT = """\
Recommend one specific, free online course for a student interested in {subjects}.
Their current skills: {skills}. Their career goal: {goal}.

Return only a JSON object with the following fields:
"title": the course title,
"description": a brief description of the course content,
"duration": estimated time to complete (e.g., "4 weeks"),
"level": difficulty level ("Beginner", "Intermediate" or "Advanced"),
"url": a real URL to the course on Coursera, edX, Khan Academy or MIT OpenCourseWare
"""

TRENDS_PROMPT = """\
Generate {count} current trending topics or news items relevant to careers in {subject}.
Return only a JSON array of objects with this structure:
{{
  "id": a unique string ID,
  "title": a brief headline (max 10 words),
  "description": a one-sentence description,
  "type": either "article" or "post",
  "url": a real URL related to the topic
}}
"""

COACH_SYSTEM_PROMPT = """\
You are "Emerge", a supportive and knowledgeable career coach for {display_name}.

User Profile:
- Focus Areas: {subjects}
- Skills: {skills}
- Interests: {interests}
- Primary Goal: {goal}
- Thinking Style: {thinking_style}

Your Instructions:
1. Be concise and conversational (keep responses under 150 words generally).
2. Use clear formatting (bullet points) for lists.
3. Provide specific, actionable advice based on their profile.
4. If they ask a general question, relate it back to their specific interests/goals.
5. Tone: Encouraging, professional, and forward-looking.
"""


def _or_default(value: str | None) -> str:
    return value.strip() if value and value.strip() else NOT_SPECIFIED


def build_goals_prompt(subjects: list[str], skills: str, interests: str, count: int) -> str:
    return GOALS_PROMPT.format(
        count=count,
        subjects=", ".join(subjects),
        first_subject=subjects[0],
        skills=_or_default(skills),
        interests=_or_default(interests),
    )


def build_course_prompt(profile: ProfileContext) -> str:
    return COURSE_PROMPT.format(
        subjects=", ".join(profile.subjects) or "career development",
        skills=_or_default(profile.skills),
        goal=_or_default(profile.goal),
    )


def build_trends_prompt(subject: str, count: int = 2) -> str:
    return TRENDS_PROMPT.format(subject=subject, count=count)


def build_coach_system_prompt(profile: ProfileContext) -> str:
    return COACH_SYSTEM_PROMPT.format(
        display_name=profile.name or profile.username or "this student",
        subjects=", ".join(profile.subjects) or NOT_SPECIFIED,
        skills=_or_default(profile.skills),
        interests=_or_default(profile.interests),
        goal=_or_default(profile.goal),
        thinking_style=profile.thinking_style or "Plan",
    )


def build_coach_prompt(message: str, history: list[ChatMessage]) -> str:
    """The user turn: replayed history (oldest first) followed by the new message."""
    lines = []
    if history:
        lines.append("Conversation so far:")
        for entry in history:
            speaker = "Student" if entry.sender == "user" else "Emerge"
            lines.append(f"{speaker}: {entry.message}")
        lines.append("")
    lines.append(f"User Message: {message}")
    return "\n".join(lines)
