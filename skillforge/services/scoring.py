"""
Quiz scoring

Exact-match policy for every question type: the submitted answer must equal
the correct answer once case and surrounding whitespace are ignored. No
partial credit, no numeric tolerance. Everything here is pure.
"""
import math
from typing import List, Mapping, Optional, Tuple

from skillforge.schemas.quiz import GradingResult, Question, QuestionResult, normalize_answer


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percentage(score: int, total_points: int) -> int:
    """Whole-number percentage; 0 when there is nothing to score"""
    if total_points <= 0:
        return 0
    return round_half_up(score / total_points * 100)


def is_correct(question: Question, answer: Optional[str]) -> bool:
    if answer is None:
        return False
    return normalize_answer(answer) == normalize_answer(question.correct_answer)


def score(questions: List[Question], answers: Mapping[str, str]) -> Tuple[int, int]:
    """
    Score a submission

    Args:
        questions: Ordered quiz questions
        answers: Submitted answers {question_id: answer}; unanswered ids are absent

    Returns:
        Tuple of (score, total_points)
    """
    total_points = sum(q.points for q in questions)
    earned = sum(q.points for q in questions if is_correct(q, answers.get(q.id)))
    return earned, total_points


def grade(questions: List[Question], answers: Mapping[str, str]) -> GradingResult:
    """Score plus a per-question breakdown for the review screen"""
    breakdown = []
    for question in questions:
        answer = answers.get(question.id)
        correct = is_correct(question, answer)
        breakdown.append(QuestionResult(
            question_id=question.id,
            user_answer=answer,
            correct_answer=question.correct_answer,
            is_correct=correct,
            points_awarded=question.points if correct else 0,
            max_points=question.points,
        ))

    earned, total_points = score(questions, answers)
    return GradingResult(
        score=earned,
        total_points=total_points,
        percentage=percentage(earned, total_points),
        breakdown=breakdown,
    )
