"""
Student quiz-taking and progress endpoints
"""

from fastapi import APIRouter, Depends
from typing import List
import logging

from skillforge.api.deps import get_attempts, require_view
from skillforge.errors import InvalidTransition, NotFound
from skillforge.schemas.analytics import StudentProgress
from skillforge.schemas.quiz import AnswerRequest, AttemptStateResponse, GradingResult, QuizSummary
from skillforge.schemas.user import Identity
from skillforge.services.analytics_service import analytics_service
from skillforge.services.catalog_service import catalog_service
from skillforge.services.quiz_session import AttemptStatus, QuizAttemptSession
from skillforge.services.store import store


router = APIRouter(prefix="/student", tags=["student"])
logger = logging.getLogger(__name__)

RECENT_LIMIT = 3


def _state(machine: QuizAttemptSession) -> AttemptStateResponse:
    """Attempt snapshot; the correct answer is never sent while in progress"""
    quiz = machine.quiz
    question = machine.current_question
    return AttemptStateResponse(
        status=machine.status.value,
        quiz_id=machine.quiz_id,
        title=quiz.title if quiz else None,
        question_index=machine.question_index,
        question_count=len(quiz.questions) if quiz else 0,
        current_question=question.model_dump(mode="json", exclude={"correct_answer"}) if question else None,
        answers=machine.answers,
        score=machine.score,
        total_points=machine.total_points,
        attempt_id=machine.last_attempt.id if machine.last_attempt else None,
    )


def _active(attempts: dict, identity: Identity, quiz_id: str) -> QuizAttemptSession:
    machine = attempts.get((identity.id, quiz_id))
    if machine is None:
        raise InvalidTransition(f"Quiz {quiz_id} has not been started")
    return machine


@router.get("")
async def student_home(identity: Identity = Depends(require_view("/student"))):
    """Dashboard: completion stats, recent attempts and quizzes not yet taken"""
    progress = analytics_service.student_progress(identity.id)
    attempted = {entry.quiz_id for entry in progress.attempts}
    recommended = [q for q in catalog_service.list_quizzes() if q.id not in attempted]

    return {
        "completed": progress.completed,
        "average_score_percent": progress.average_score_percent,
        "recent_attempts": progress.attempts[:RECENT_LIMIT],
        "recommended_quizzes": [{"id": q.id, "title": q.title} for q in recommended[:RECENT_LIMIT]],
    }


@router.get("/quizzes", response_model=List[QuizSummary])
async def list_quizzes(identity: Identity = Depends(require_view("/student/quizzes"))):
    return [QuizSummary.from_quiz(q) for q in catalog_service.list_quizzes()]


@router.get("/progress", response_model=StudentProgress)
async def progress(identity: Identity = Depends(require_view("/student/progress"))):
    return analytics_service.student_progress(identity.id)


@router.get("/quiz/{quiz_id}", response_model=AttemptStateResponse)
async def take_quiz(
    quiz_id: str,
    identity: Identity = Depends(require_view("/student/quiz/{quiz_id}")),
    attempts: dict = Depends(get_attempts),
):
    """
    Open a quiz

    Starts a new attempt machine, or returns the one already running for
    this student and quiz.
    """
    key = (identity.id, quiz_id)
    machine = attempts.get(key)
    if machine is None:
        machine = QuizAttemptSession(store, quiz_id, identity.id)
        if machine.load() == AttemptStatus.NOT_FOUND:
            raise NotFound("Quiz not found.")
        attempts[key] = machine
        logger.info(f"{identity.id} started quiz {quiz_id}")

    return _state(machine)


@router.post("/quiz/{quiz_id}/answers", response_model=AttemptStateResponse)
async def record_answer(
    quiz_id: str,
    answer: AnswerRequest,
    identity: Identity = Depends(require_view("/student/quiz/{quiz_id}")),
    attempts: dict = Depends(get_attempts),
):
    machine = _active(attempts, identity, quiz_id)
    machine.record_answer(answer.question_id, answer.value)
    return _state(machine)


@router.post("/quiz/{quiz_id}/next", response_model=AttemptStateResponse)
async def next_question(
    quiz_id: str,
    identity: Identity = Depends(require_view("/student/quiz/{quiz_id}")),
    attempts: dict = Depends(get_attempts),
):
    machine = _active(attempts, identity, quiz_id)
    machine.next()
    return _state(machine)


@router.post("/quiz/{quiz_id}/previous", response_model=AttemptStateResponse)
async def previous_question(
    quiz_id: str,
    identity: Identity = Depends(require_view("/student/quiz/{quiz_id}")),
    attempts: dict = Depends(get_attempts),
):
    machine = _active(attempts, identity, quiz_id)
    machine.previous()
    return _state(machine)


@router.post("/quiz/{quiz_id}/submit", response_model=AttemptStateResponse)
async def submit_quiz(
    quiz_id: str,
    identity: Identity = Depends(require_view("/student/quiz/{quiz_id}")),
    attempts: dict = Depends(get_attempts),
):
    """Score the answers and record the attempt; unanswered questions count as wrong"""
    machine = _active(attempts, identity, quiz_id)
    machine.submit()
    return _state(machine)


@router.post("/quiz/{quiz_id}/retake", response_model=AttemptStateResponse)
async def retake_quiz(
    quiz_id: str,
    identity: Identity = Depends(require_view("/student/quiz/{quiz_id}")),
    attempts: dict = Depends(get_attempts),
):
    machine = _active(attempts, identity, quiz_id)
    machine.retake()
    return _state(machine)


@router.get("/quiz/{quiz_id}/review", response_model=GradingResult)
async def review_quiz(
    quiz_id: str,
    identity: Identity = Depends(require_view("/student/quiz/{quiz_id}")),
    attempts: dict = Depends(get_attempts),
):
    return _active(attempts, identity, quiz_id).review()
