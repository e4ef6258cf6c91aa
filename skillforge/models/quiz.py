"""
Quiz model - stores quizzes with their questions
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON
from skillforge.database import Base


class Quiz(Base):
    """
    Quizzes table - questions are kept inline as an ordered JSON list
    """
    __tablename__ = "quizzes"

    pk = Column(Integer, primary_key=True, autoincrement=True)  # insertion order
    id = Column(String(64), unique=True, nullable=False, index=True)
    course_id = Column(String(64), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    questions = Column(JSON, nullable=False)  # Full question data
    difficulty = Column(String(20), nullable=False)
    created_by = Column(String(64), nullable=False)  # mentor id
    created_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Quiz(id={self.id}, course_id={self.course_id}, difficulty={self.difficulty})>"
