"""
Database models package
"""
from skillforge.models.user import User, Credential
from skillforge.models.course import Course
from skillforge.models.quiz import Quiz
from skillforge.models.quiz_attempt import QuizAttempt
from skillforge.models.key_value import KeyValue

__all__ = ["User", "Credential", "Course", "Quiz", "QuizAttempt", "KeyValue"]
