"""
QuizAttempt model - stores scored quiz submissions
"""
from sqlalchemy import Column, String, Integer, DateTime, JSON
from skillforge.database import Base


class QuizAttempt(Base):
    """
    Quiz attempts table - one immutable row per submission
    """
    __tablename__ = "quiz_attempts"

    pk = Column(Integer, primary_key=True, autoincrement=True)  # insertion order
    id = Column(String(64), unique=True, nullable=False, index=True)
    quiz_id = Column(String(64), nullable=False, index=True)
    student_id = Column(String(64), nullable=False, index=True)
    answers = Column(JSON, nullable=False)  # {question_id: answer}, answered questions only
    score = Column(Integer, nullable=False)
    total_points = Column(Integer, nullable=False)  # frozen at submission time
    submitted_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<QuizAttempt(student_id={self.student_id}, quiz_id={self.quiz_id}, score={self.score})>"
