"""
Demo data for a fresh database
"""
import logging

from skillforge.schemas.course import Course, Difficulty
from skillforge.schemas.quiz import Question, QuestionType, Quiz
from skillforge.schemas.user import Identity, Role
from skillforge.services.store import Collection, Store, store, utcnow

logger = logging.getLogger(__name__)

ADMIN_ID = "user-admin-01"
MENTOR_ID = "user-mentor-01"
STUDENT_ID = "user-student-01"
JS_COURSE_ID = "course-js-01"
REACT_COURSE_ID = "course-react-02"
JS_QUIZ_ID = "quiz-js-vars-01"

# email -> mock secret
DEMO_CREDENTIALS = {
    "admin@skillforge.com": "admin123",
    "mentor@skillforge.com": "mentor123",
    "student@skillforge.com": "student123",
}


def seed_demo_data(target: Store = None) -> bool:
    """Seed users, courses and one quiz; does nothing if any user exists"""
    target = target or store
    if target.list_all(Collection.USERS):
        return False

    now = utcnow()
    users = [
        Identity(id=ADMIN_ID, email="admin@skillforge.com", name="Admin User", role=Role.ADMIN, created_at=now),
        Identity(id=MENTOR_ID, email="mentor@skillforge.com", name="Mentor User", role=Role.MENTOR, created_at=now),
        Identity(id=STUDENT_ID, email="student@skillforge.com", name="Student User", role=Role.STUDENT, created_at=now),
    ]
    courses = [
        Course(
            id=JS_COURSE_ID,
            title="JavaScript Fundamentals",
            description="Master the basics of JavaScript.",
            difficulty=Difficulty.BEGINNER,
            mentor_id=MENTOR_ID,
            topics=["Variables", "Functions", "Arrays", "Objects"],
            created_at=now,
        ),
        Course(
            id=REACT_COURSE_ID,
            title="React Advanced Patterns",
            description="Learn advanced patterns for building scalable React apps.",
            difficulty=Difficulty.ADVANCED,
            mentor_id=MENTOR_ID,
            topics=["Hooks", "Context API", "Performance", "Render Props"],
            created_at=now,
        ),
    ]
    quiz = Quiz(
        id=JS_QUIZ_ID,
        course_id=JS_COURSE_ID,
        title="JavaScript Variables Quiz",
        difficulty=Difficulty.BEGINNER,
        created_by=MENTOR_ID,
        created_at=now,
        questions=[
            Question(
                id="q1",
                type=QuestionType.MULTIPLE_CHOICE,
                question="Which keyword is used to declare a variable that cannot be reassigned?",
                options=["let", "var", "const", "static"],
                correct_answer="const",
                points=10,
            ),
            Question(
                id="q2",
                type=QuestionType.SHORT_ANSWER,
                question="What is the data type of `null` in JavaScript?",
                correct_answer="object",
                points=10,
            ),
        ],
    )

    for user in users:
        target.create(Collection.USERS, user)
    for course in courses:
        target.create(Collection.COURSES, course)
    target.create(Collection.QUIZZES, quiz)
    for email, secret in DEMO_CREDENTIALS.items():
        target.set_credential(email, secret)

    logger.info("Seeded demo users, courses and quiz")
    return True
