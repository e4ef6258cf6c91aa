"""
Pydantic schemas for courses
"""
from pydantic import BaseModel, Field
from typing import List
from enum import Enum
from datetime import datetime


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class Course(BaseModel):
    """A course owned by one mentor"""
    id: str
    title: str
    description: str = ""
    difficulty: Difficulty
    mentor_id: str
    topics: List[str] = []
    created_at: datetime

    class Config:
        from_attributes = True


class CourseCreate(BaseModel):
    """Request schema for a new course; the owner comes from the session"""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    difficulty: Difficulty = Difficulty.BEGINNER
    topics: List[str] = []
