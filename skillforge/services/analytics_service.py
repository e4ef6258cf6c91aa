"""
Analytics service for course and student performance summaries

Read-only. Each summary is built from one batched read per collection and
joined in memory by id; dangling references are labelled rather than failing.
"""
import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from skillforge.schemas.analytics import (
    CourseAnalytics,
    MentorOverview,
    PlatformOverview,
    ProgressEntry,
    StudentAnalytics,
    StudentProgress,
)
from skillforge.schemas.course import Course
from skillforge.schemas.quiz import Quiz, QuizAttempt
from skillforge.schemas.user import Identity, Role
from skillforge.services.scoring import percentage, round_half_up
from skillforge.services.store import Collection, Store, store

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


def attempt_percent(attempt: QuizAttempt) -> float:
    """Unrounded percentage of one attempt; a zero-point attempt counts as 0"""
    if attempt.total_points <= 0:
        return 0.0
    return attempt.score / attempt.total_points * 100


def average_percent(attempts: List[QuizAttempt]) -> Optional[int]:
    """Rounded mean of attempt percentages, None when there are no attempts"""
    if not attempts:
        return None
    return round_half_up(sum(attempt_percent(a) for a in attempts) / len(attempts))


def _names(users: Iterable[Identity]) -> Dict[str, str]:
    return {u.id: u.name for u in users}


def build_course_summaries(
    courses: List[Course],
    quizzes: List[Quiz],
    attempts: List[QuizAttempt],
    users: List[Identity],
) -> List[CourseAnalytics]:
    """
    One row per course, busiest first

    Args:
        courses: All courses
        quizzes: All quizzes
        attempts: All attempt records
        users: All identities, used to name course owners

    Returns:
        Rows sorted by attempt_count descending; equal counts keep course order
    """
    names = _names(users)
    course_of_quiz = {q.id: q.course_id for q in quizzes}

    quiz_counts: Dict[str, int] = {}
    for quiz in quizzes:
        quiz_counts[quiz.course_id] = quiz_counts.get(quiz.course_id, 0) + 1

    attempts_by_course: Dict[str, List[QuizAttempt]] = {}
    for attempt in attempts:
        course_id = course_of_quiz.get(attempt.quiz_id)
        if course_id is None:
            continue  # quiz no longer exists
        attempts_by_course.setdefault(course_id, []).append(attempt)

    rows = []
    for course in courses:
        course_attempts = attempts_by_course.get(course.id, [])
        rows.append(CourseAnalytics(
            course=course,
            owner_name=names.get(course.mentor_id, UNKNOWN),
            quiz_count=quiz_counts.get(course.id, 0),
            attempt_count=len(course_attempts),
            average_score_percent=average_percent(course_attempts),
        ))

    rows.sort(key=lambda r: r.attempt_count, reverse=True)
    return rows


def build_student_summaries(
    mentor_quiz_ids: Iterable[str],
    attempts: List[QuizAttempt],
    users: List[Identity],
) -> List[StudentAnalytics]:
    """
    Leaderboard of students who attempted the given quizzes

    Students appear in the order their first attempt is encountered; the sort
    by average is stable so ties keep that order.
    """
    quiz_ids = set(mentor_quiz_ids)
    names = _names(users)

    per_student: "OrderedDict[str, List[QuizAttempt]]" = OrderedDict()
    for attempt in attempts:
        if attempt.quiz_id in quiz_ids:
            per_student.setdefault(attempt.student_id, []).append(attempt)

    rows = [
        StudentAnalytics(
            student_id=student_id,
            student_name=names.get(student_id, UNKNOWN),
            attempts_count=len(student_attempts),
            average_score_percent=average_percent(student_attempts),
        )
        for student_id, student_attempts in per_student.items()
    ]

    rows.sort(key=lambda r: r.average_score_percent, reverse=True)
    return rows


class AnalyticsService:
    """Service for generating performance analytics"""

    def __init__(self, store: Store):
        self.store = store

    def _mentor_scope(self, mentor_id: str):
        courses = [c for c in self.store.list_all(Collection.COURSES) if c.mentor_id == mentor_id]
        course_ids = {c.id for c in courses}
        quizzes = [q for q in self.store.list_all(Collection.QUIZZES) if q.course_id in course_ids]
        return courses, quizzes

    def course_summaries(self) -> List[CourseAnalytics]:
        rows = build_course_summaries(
            self.store.list_all(Collection.COURSES),
            self.store.list_all(Collection.QUIZZES),
            self.store.list_all(Collection.ATTEMPTS),
            self.store.list_all(Collection.USERS),
        )
        logger.info(f"Built analytics for {len(rows)} courses")
        return rows

    def student_summaries(self, mentor_id: str) -> List[StudentAnalytics]:
        """Students who took any quiz in the mentor's own courses"""
        _, quizzes = self._mentor_scope(mentor_id)
        return build_student_summaries(
            [q.id for q in quizzes],
            self.store.list_all(Collection.ATTEMPTS),
            self.store.list_all(Collection.USERS),
        )

    def student_progress(self, student_id: str) -> StudentProgress:
        """
        A student's own attempt history, newest first

        Args:
            student_id: Identity id of the student

        Returns:
            StudentProgress with completed count, average and entries
        """
        attempts = [a for a in self.store.list_all(Collection.ATTEMPTS) if a.student_id == student_id]
        titles = {q.id: q.title for q in self.store.list_all(Collection.QUIZZES)}

        entries = [
            ProgressEntry(
                attempt_id=a.id,
                quiz_id=a.quiz_id,
                quiz_title=titles.get(a.quiz_id, UNKNOWN),
                score=a.score,
                total_points=a.total_points,
                percentage=percentage(a.score, a.total_points),
                submitted_at=a.submitted_at,
            )
            for a in attempts
        ]
        entries.sort(key=lambda e: e.submitted_at, reverse=True)

        return StudentProgress(
            student_id=student_id,
            completed=len(attempts),
            average_score_percent=average_percent(attempts),
            attempts=entries,
        )

    def mentor_overview(self, mentor_id: str) -> MentorOverview:
        courses, quizzes = self._mentor_scope(mentor_id)
        quiz_ids = {q.id for q in quizzes}
        attempts = [a for a in self.store.list_all(Collection.ATTEMPTS) if a.quiz_id in quiz_ids]

        return MentorOverview(
            mentor_id=mentor_id,
            courses=len(courses),
            quizzes=len(quizzes),
            attempts=len(attempts),
            average_score_percent=average_percent(attempts),
        )

    def platform_overview(self) -> PlatformOverview:
        users = self.store.list_all(Collection.USERS)
        return PlatformOverview(
            users=len(users),
            mentors=sum(1 for u in users if u.role == Role.MENTOR),
            students=sum(1 for u in users if u.role == Role.STUDENT),
            courses=len(self.store.list_all(Collection.COURSES)),
            quizzes=len(self.store.list_all(Collection.QUIZZES)),
            attempts=len(self.store.list_all(Collection.ATTEMPTS)),
        )


# Global instance
analytics_service = AnalyticsService(store)
