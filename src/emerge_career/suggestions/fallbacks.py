"""Static, subject-keyed content used when an upstream call or its parsing fails."""

from urllib.parse import quote_plus

from emerge_career.models.content import CourseSuggestion, Trend, TrendMetrics, VideoSuggestion

CHAT_OFFLINE_REPLY = (
    "I apologize, but I'm having trouble connecting right now. "
    "Please try again in a moment."
)
CHAT_EMPTY_REPLY = "I'm having trouble understanding. Can you rephrase your question?"

GOALS_BY_SUBJECT: dict[str, list[str]] = {
    "biology": [
        "Read one recent research paper abstract in a biology field you enjoy",
        "List 3 career paths in biology and the degrees each requires",
        "Watch a 20-minute lab techniques tutorial and note 3 key steps",
        "Find one biology research internship and write down its requirements",
        "Join an online biology forum and introduce yourself",
    ],
    "computer science": [
        "Build a small command-line tool in a language you are learning",
        "Research 2 companies hiring software engineers and list their requirements",
        "Solve 3 beginner algorithm problems on an online judge",
        "Push one personal project to a public code repository with a README",
        "Read one engineering blog post about how a real system was built",
    ],
    "mathematics": [
        "Complete 3 practice problems in a topic you find challenging",
        "Research 3 careers that rely heavily on mathematics",
        "Watch a 20-minute lecture on an applied math topic and summarize it",
        "Write a one-page explanation of a proof you recently learned",
        "Find a data set and compute basic statistics for it",
    ],
    "physics": [
        "Summarize one recent physics news story in your own words",
        "List 3 industries that hire physics graduates and one role in each",
        "Work through 3 problems from a physics chapter you are studying",
        "Watch a 20-minute talk on a modern physics topic",
        "Find one physics summer research program and check its deadline",
    ],
    "chemistry": [
        "Research 3 career options for chemistry graduates",
        "Review the safety rules for one common lab technique",
        "Watch a 20-minute video on an industrial chemistry process",
        "Write a one-page summary of a chemical reaction used in everyday products",
        "Find one chemistry internship and list its requirements",
    ],
    "engineering": [
        "Research 2 engineering firms and list the skills they hire for",
        "Sketch a design for a simple device and list its components",
        "Watch a 20-minute tutorial on a CAD or simulation tool",
        "Read one case study of an engineering failure and note the lessons",
        "Find one engineering club or competition you could join",
    ],
    "business": [
        "Analyze one company's business model in a one-page summary",
        "Research 3 entry-level roles in business and their requirements",
        "Watch a 20-minute lecture on marketing or finance fundamentals",
        "Update your LinkedIn profile headline and summary",
        "Reach out to one professional for a 15-minute informational chat",
    ],
    "psychology": [
        "Read one psychology study summary and note its method",
        "List 3 career paths in psychology and the training each needs",
        "Watch a 20-minute talk on a psychology topic you find interesting",
        "Find one volunteer opportunity related to mental health",
        "Write a one-page reflection on a psychology concept you learned",
    ],
    "art": [
        "Create one small piece for your portfolio in a new medium",
        "Research 3 careers in the creative industry and their requirements",
        "Watch a 20-minute tutorial on a digital art tool",
        "Share one piece of work online and ask for feedback",
        "Visit a virtual gallery and write notes on two works",
    ],
}


def _generic_goals(subject: str | None) -> list[str]:
    field = subject or "your field"
    return [
        f"Research top 3 companies hiring for {field} roles",
        f"Update your LinkedIn profile with {subject or 'relevant'} skills",
        f"Watch a 20-minute tutorial on {subject or 'a key concept'}",
        f"Read one industry news article about {subject or 'recent trends'}",
        f"Network with one professional in {subject or 'the industry'}",
    ]


def fallback_goals(subjects: list[str], count: int) -> list[str]:
    """Goals for the first subject with a table entry, else generic ones."""
    for subject in subjects:
        goals = GOALS_BY_SUBJECT.get(subject.strip().lower())
        if goals:
            return goals[:count]
    primary = subjects[0].strip() if subjects else None
    return _generic_goals(primary or None)[:count]


COURSES_BY_SUBJECT: dict[str, CourseSuggestion] = {
    "biology": CourseSuggestion(
        title="Introduction to Biology - The Secret of Life",
        description="Explore the molecular foundations of life: biochemistry, genetics and molecular biology.",
        duration="16 weeks",
        level="Introductory",
        url="https://www.edx.org/learn/biology/massachusetts-institute-of-technology-introduction-to-biology-the-secret-of-life",
        platform="edX",
    ),
    "computer science": CourseSuggestion(
        title="CS50's Introduction to Computer Science",
        description="Harvard's introduction to the intellectual enterprises of computer science and the art of programming.",
        duration="12 weeks",
        level="Beginner",
        url="https://www.edx.org/learn/computer-science/harvard-university-cs50-s-introduction-to-computer-science",
        platform="edX",
    ),
    "mathematics": CourseSuggestion(
        title="Single Variable Calculus",
        description="Differentiation and integration of functions of one variable, with applications.",
        duration="15 weeks",
        level="Beginner",
        url="https://ocw.mit.edu/courses/18-01sc-single-variable-calculus-fall-2010/",
        platform="MIT OpenCourseWare",
    ),
    "physics": CourseSuggestion(
        title="Physics I: Classical Mechanics",
        description="An introduction to Newtonian mechanics, energy, momentum and rotation.",
        duration="14 weeks",
        level="Beginner",
        url="https://ocw.mit.edu/courses/8-01sc-classical-mechanics-fall-2016/",
        platform="MIT OpenCourseWare",
    ),
    "chemistry": CourseSuggestion(
        title="Chemistry",
        description="Atoms, bonding, reactions and stoichiometry taught through short lessons and practice.",
        duration="Self-paced",
        level="Beginner",
        url="https://www.khanacademy.org/science/chemistry",
        platform="Khan Academy",
    ),
    "business": CourseSuggestion(
        title="Business Foundations",
        description="Marketing, accounting, operations and finance fundamentals for new business professionals.",
        duration="6 months",
        level="Beginner",
        url="https://www.coursera.org/specializations/wharton-business-foundations",
        platform="Coursera",
    ),
    "psychology": CourseSuggestion(
        title="Introduction to Psychology",
        description="A tour of the science of the mind: perception, memory, emotion and social behavior.",
        duration="6 weeks",
        level="Beginner",
        url="https://www.coursera.org/learn/introduction-psychology",
        platform="Coursera",
    ),
}


def fallback_course(subjects: list[str]) -> CourseSuggestion:
    for subject in subjects:
        course = COURSES_BY_SUBJECT.get(subject.strip().lower())
        if course:
            return course.model_copy()
    subject = subjects[0].strip() if subjects else "Career Development"
    return CourseSuggestion(
        title=f"Exploring Careers in {subject}",
        description=f"Free courses introducing the core ideas and career paths in {subject}.",
        duration="Self-paced",
        level="Beginner",
        url=f"https://www.classcentral.com/search?q={quote_plus(subject)}",
        platform="Class Central",
    )


def fallback_trends(subject: str) -> list[Trend]:
    return [
        Trend(
            id="fallback-1",
            title=f"The Future of {subject} Careers",
            description=f"Explore emerging opportunities and skills needed for a successful career in {subject}.",
            url=f"https://www.google.com/search?q={quote_plus(subject + ' career trends')}",
            type="article",
            metrics=TrendMetrics(like_count=42, retweet_count=5, reply_count=2),
        ),
        Trend(
            id="fallback-2",
            title=f"Top Skills for {subject} Professionals",
            description="Stay ahead of the curve by mastering these in-demand skills.",
            url=f"https://www.google.com/search?q={quote_plus(subject + ' top skills')}",
            type="post",
            metrics=TrendMetrics(like_count=89, retweet_count=12, reply_count=8),
        ),
    ]


def fallback_video(subject: str) -> VideoSuggestion:
    return VideoSuggestion(
        title=f"{subject} Career Guide",
        description="Career development and guidance",
        url=f"https://www.youtube.com/results?search_query={quote_plus(subject + ' career guide')}",
        thumbnail_url="https://placehold.co/320x180?text=Career+Development+Guide",
        channel_title="Career Insights",
    )
