"""
Course and quiz catalog
"""
import logging
from typing import List

from skillforge.errors import NotFound
from skillforge.schemas.course import Course, CourseCreate
from skillforge.schemas.quiz import Question, Quiz, QuizCreate, QuizGenerateRequest
from skillforge.schemas.user import Identity
from skillforge.services.gemini_service import GeminiService, gemini_service
from skillforge.services.store import Collection, Store, new_id, store, utcnow

logger = logging.getLogger(__name__)


class CatalogService:
    """Courses owned by mentors and the quizzes inside them"""

    def __init__(self, store: Store, generator: GeminiService):
        self.store = store
        self.generator = generator

    # --- Courses ---

    def list_courses(self) -> List[Course]:
        return self.store.list_all(Collection.COURSES)

    def courses_for_mentor(self, mentor_id: str) -> List[Course]:
        return [c for c in self.list_courses() if c.mentor_id == mentor_id]

    def get_course(self, course_id: str) -> Course:
        course = self.store.get_by_id(Collection.COURSES, course_id)
        if course is None:
            raise NotFound(f"Course {course_id} not found")
        return course

    def create_course(self, mentor: Identity, request: CourseCreate) -> Course:
        course = Course(
            id=new_id("course"),
            mentor_id=mentor.id,
            created_at=utcnow(),
            **request.model_dump(),
        )
        self.store.create(Collection.COURSES, course)
        logger.info(f"Course created: {course.id} by {mentor.id}")
        return course

    def owned_course(self, mentor: Identity, course_id: str) -> Course:
        course = self.get_course(course_id)
        if course.mentor_id != mentor.id:
            # Another mentor's course is treated as absent
            raise NotFound(f"Course {course_id} not found")
        return course

    # --- Quizzes ---

    def list_quizzes(self) -> List[Quiz]:
        return self.store.list_all(Collection.QUIZZES)

    def quizzes_for_course(self, course_id: str) -> List[Quiz]:
        return [q for q in self.list_quizzes() if q.course_id == course_id]

    def get_quiz(self, quiz_id: str) -> Quiz:
        quiz = self.store.get_by_id(Collection.QUIZZES, quiz_id)
        if quiz is None:
            raise NotFound(f"Quiz {quiz_id} not found")
        return quiz

    def _save_quiz(self, mentor: Identity, course: Course, title: str, difficulty, questions: List[Question]) -> Quiz:
        quiz = Quiz(
            id=new_id("quiz"),
            course_id=course.id,
            title=title,
            questions=questions,
            difficulty=difficulty,
            created_by=mentor.id,
            created_at=utcnow(),
        )
        self.store.create(Collection.QUIZZES, quiz)
        logger.info(f"Quiz created: {quiz.id} in {course.id} ({len(questions)} questions)")
        return quiz

    def create_quiz(self, mentor: Identity, course_id: str, request: QuizCreate) -> Quiz:
        """Hand-authored quiz; questions without an id get one"""
        course = self.owned_course(mentor, course_id)
        questions = [
            Question(**{**draft.model_dump(), "id": draft.id or new_id("q")})
            for draft in request.questions
        ]
        return self._save_quiz(mentor, course, request.title, request.difficulty, questions)

    def generate_quiz(self, mentor: Identity, course_id: str, request: QuizGenerateRequest) -> Quiz:
        """
        Generate questions with Gemini and save them as a new quiz

        Raises:
            NotFound: course missing or owned by another mentor
            GenerationFailed: the generator could not produce questions
        """
        course = self.owned_course(mentor, course_id)
        logger.info(f"Generating {request.count} questions on '{request.topic}' for {course.id}")
        questions = self.generator.generate_questions(request.topic, request.difficulty, request.count)
        return self._save_quiz(mentor, course, request.title, request.difficulty, questions)


# Global instance
catalog_service = CatalogService(store, gemini_service)
