"""
Pydantic schemas for analytics endpoints
"""
from pydantic import BaseModel, computed_field
from typing import List, Optional
from datetime import datetime

from skillforge.schemas.course import Course


class CourseAnalytics(BaseModel):
    """Engagement and performance for one course"""
    course: Course
    owner_name: str
    quiz_count: int
    attempt_count: int
    average_score_percent: Optional[int] = None  # None when attempt_count == 0

    @computed_field
    @property
    def average_display(self) -> str:
        if self.average_score_percent is None:
            return "N/A"
        return f"{self.average_score_percent}%"


class StudentAnalytics(BaseModel):
    """Leaderboard row for a mentor's quizzes"""
    student_id: str
    student_name: str
    attempts_count: int
    average_score_percent: int


class ProgressEntry(BaseModel):
    attempt_id: str
    quiz_id: str
    quiz_title: str
    score: int
    total_points: int
    percentage: int
    submitted_at: datetime


class StudentProgress(BaseModel):
    """A student's own attempt history"""
    student_id: str
    completed: int
    average_score_percent: Optional[int] = None
    attempts: List[ProgressEntry]


class MentorOverview(BaseModel):
    mentor_id: str
    courses: int
    quizzes: int
    attempts: int
    average_score_percent: Optional[int] = None


class PlatformOverview(BaseModel):
    users: int
    mentors: int
    students: int
    courses: int
    quizzes: int
    attempts: int
