"""
Course model - mentor-owned courses
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from skillforge.database import Base


class Course(Base):
    """
    Courses table - each course is owned by exactly one mentor
    """
    __tablename__ = "courses"

    pk = Column(Integer, primary_key=True, autoincrement=True)  # insertion order
    id = Column(String(64), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, default="")
    difficulty = Column(String(20), nullable=False)
    mentor_id = Column(String(64), nullable=False, index=True)  # no FK: orphans are tolerated
    topics = Column(JSON, default=list)  # ["Variables", "Functions"]
    created_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Course(id={self.id}, title={self.title})>"
