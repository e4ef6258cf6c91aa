"""
Pydantic schemas for quizzes, questions and attempts
"""
from pydantic import BaseModel, Field, model_validator
from typing import List, Dict, Optional
from enum import Enum
from datetime import datetime

from skillforge.schemas.course import Difficulty


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    SHORT_ANSWER = "short-answer"


def normalize_answer(value: Optional[str]) -> str:
    """Case and surrounding whitespace are the only differences ignored"""
    return (value or "").strip().lower()


class QuestionBody(BaseModel):
    """Question content without an id, as produced by the generator"""
    type: QuestionType
    question: str = Field(..., min_length=1)
    options: Optional[List[str]] = None  # Multiple-choice only
    correct_answer: str = Field(..., min_length=1)
    points: int = Field(10, gt=0)

    @model_validator(mode="after")
    def check_options(self):
        # A blank answer would match an unanswered question
        if not self.correct_answer.strip():
            raise ValueError("correct_answer must not be blank")
        if self.type == QuestionType.MULTIPLE_CHOICE:
            if not self.options:
                raise ValueError("multiple-choice questions need options")
            if self.correct_answer not in self.options:
                raise ValueError("correct_answer must be one of the options")
        elif self.options:
            raise ValueError("short-answer questions take no options")
        return self


class Question(QuestionBody):
    """Individual quiz question"""
    id: str


class QuestionDraft(QuestionBody):
    """Hand-authored question; an id is assigned when missing"""
    id: Optional[str] = None


class Quiz(BaseModel):
    """A quiz belonging to one course"""
    id: str
    course_id: str
    title: str
    questions: List[Question]
    difficulty: Difficulty
    created_by: str
    created_at: datetime

    class Config:
        from_attributes = True

    @property
    def total_points(self) -> int:
        return sum(q.points for q in self.questions)


class QuizSummary(BaseModel):
    """Quiz listing row without the questions"""
    id: str
    course_id: str
    title: str
    difficulty: Difficulty
    question_count: int
    total_points: int

    @classmethod
    def from_quiz(cls, quiz: "Quiz") -> "QuizSummary":
        return cls(
            id=quiz.id,
            course_id=quiz.course_id,
            title=quiz.title,
            difficulty=quiz.difficulty,
            question_count=len(quiz.questions),
            total_points=quiz.total_points,
        )


class QuizCreate(BaseModel):
    """Request schema for a hand-authored quiz"""
    title: str = Field(..., min_length=1, max_length=255)
    difficulty: Difficulty = Difficulty.BEGINNER
    questions: List[QuestionDraft] = Field(..., min_length=1)


class QuizGenerateRequest(BaseModel):
    """Request schema for AI quiz generation"""
    title: str = Field(..., min_length=1, max_length=255)
    topic: str = Field(..., min_length=1)
    difficulty: Difficulty = Difficulty.BEGINNER
    count: int = Field(5, ge=1, le=10, description="Number of questions")


class QuizAttempt(BaseModel):
    """One scored pass through a quiz; never mutated after creation"""
    id: str
    quiz_id: str
    student_id: str
    answers: Dict[str, str]
    score: int = Field(..., ge=0)
    total_points: int = Field(..., ge=0)
    submitted_at: datetime

    class Config:
        from_attributes = True

    @model_validator(mode="after")
    def check_score(self):
        if self.score > self.total_points:
            raise ValueError("score cannot exceed total_points")
        return self


class QuestionResult(BaseModel):
    """Grading details for a single question"""
    question_id: str
    user_answer: Optional[str] = None
    correct_answer: str
    is_correct: bool
    points_awarded: int
    max_points: int


class GradingResult(BaseModel):
    """Score, total and per-question breakdown of a submission"""
    score: int
    total_points: int
    percentage: int
    breakdown: List[QuestionResult]


class AnswerRequest(BaseModel):
    question_id: str
    value: str


class AttemptStateResponse(BaseModel):
    """Snapshot of a quiz-taking session"""
    status: str
    quiz_id: str
    title: Optional[str] = None
    question_index: int = 0
    question_count: int = 0
    current_question: Optional[Dict] = None
    answers: Dict[str, str] = {}
    score: Optional[int] = None
    total_points: Optional[int] = None
    attempt_id: Optional[str] = None
