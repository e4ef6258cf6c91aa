"""
Quiz attempt state machine

    LOADING -> NOT_FOUND (terminal)
    LOADING -> IN_PROGRESS(index=0, answers={})
    IN_PROGRESS -> FINISHED(score)       via submit()
    FINISHED -> IN_PROGRESS(0, {})       via retake()
"""
import logging
from enum import Enum
from typing import Dict, Optional

from skillforge.errors import InvalidTransition, OperationInProgress, ValidationError
from skillforge.schemas.quiz import GradingResult, Question, Quiz, QuizAttempt
from skillforge.services import scoring
from skillforge.services.store import Collection, Store, new_id, utcnow

logger = logging.getLogger(__name__)


class AttemptStatus(str, Enum):
    LOADING = "loading"
    NOT_FOUND = "not-found"
    IN_PROGRESS = "in-progress"
    FINISHED = "finished"


class QuizAttemptSession:
    """Drives one student through one quiz, from first question to scored result"""

    def __init__(self, store: Store, quiz_id: str, student_id: str) -> None:
        self.store = store
        self.quiz_id = quiz_id
        self.student_id = student_id

        self._status = AttemptStatus.LOADING
        self._quiz: Optional[Quiz] = None
        self._question_index = 0
        self._answers: Dict[str, str] = {}
        self._result: Optional[GradingResult] = None
        self._last_attempt: Optional[QuizAttempt] = None
        self._submitting = False

    # --- State ---

    @property
    def status(self) -> AttemptStatus:
        return self._status

    @property
    def quiz(self) -> Optional[Quiz]:
        return self._quiz

    @property
    def question_index(self) -> int:
        return self._question_index

    @property
    def answers(self) -> Dict[str, str]:
        return dict(self._answers)

    @property
    def score(self) -> Optional[int]:
        return self._result.score if self._result else None

    @property
    def total_points(self) -> Optional[int]:
        return self._result.total_points if self._result else None

    @property
    def last_attempt(self) -> Optional[QuizAttempt]:
        return self._last_attempt

    @property
    def current_question(self) -> Optional[Question]:
        if self._status != AttemptStatus.IN_PROGRESS or not self._quiz.questions:
            return None
        return self._quiz.questions[self._question_index]

    def _require(self, status: AttemptStatus, action: str) -> None:
        if self._status != status:
            raise InvalidTransition(f"Cannot {action} while {self._status.value}")

    def _last_index(self) -> int:
        return max(len(self._quiz.questions) - 1, 0)

    # --- Transitions ---

    def load(self) -> AttemptStatus:
        self._require(AttemptStatus.LOADING, "load")

        quiz = self.store.get_by_id(Collection.QUIZZES, self.quiz_id)
        if quiz is None:
            logger.info(f"Quiz {self.quiz_id} not found")
            self._status = AttemptStatus.NOT_FOUND
            return self._status

        self._quiz = quiz
        self._start()
        return self._status

    def _start(self) -> None:
        self._status = AttemptStatus.IN_PROGRESS
        self._question_index = 0
        self._answers = {}
        self._result = None

    def record_answer(self, question_id: str, value: str) -> None:
        """Upsert an answer; the current index does not move"""
        self._require(AttemptStatus.IN_PROGRESS, "record an answer")
        if not any(q.id == question_id for q in self._quiz.questions):
            raise ValidationError(f"Question {question_id} is not part of quiz {self.quiz_id}")
        self._answers[question_id] = value

    def next(self) -> int:
        self._require(AttemptStatus.IN_PROGRESS, "move to the next question")
        self._question_index = min(self._question_index + 1, self._last_index())
        return self._question_index

    def previous(self) -> int:
        self._require(AttemptStatus.IN_PROGRESS, "move to the previous question")
        self._question_index = max(self._question_index - 1, 0)
        return self._question_index

    def submit(self) -> QuizAttempt:
        """
        Score the answers, persist a new attempt record and finish

        Unanswered questions count as wrong. The record is written before the
        state changes, so a failed write leaves the session in progress.
        """
        self._require(AttemptStatus.IN_PROGRESS, "submit")
        if self._submitting:
            raise OperationInProgress("Submission already in progress")

        self._submitting = True
        try:
            result = scoring.grade(self._quiz.questions, self._answers)
            attempt = QuizAttempt(
                id=new_id("attempt"),
                quiz_id=self._quiz.id,
                student_id=self.student_id,
                answers=dict(self._answers),
                score=result.score,
                total_points=result.total_points,
                submitted_at=utcnow(),
            )
            self.store.create(Collection.ATTEMPTS, attempt)
        finally:
            self._submitting = False

        self._result = result
        self._last_attempt = attempt
        self._status = AttemptStatus.FINISHED

        logger.info(
            f"Quiz {self._quiz.id} submitted by {self.student_id}: "
            f"{result.score}/{result.total_points}"
        )
        return attempt

    def retake(self) -> None:
        """Start over; the previous attempt record is left untouched"""
        self._require(AttemptStatus.FINISHED, "retake")
        self._start()

    def review(self) -> GradingResult:
        self._require(AttemptStatus.FINISHED, "review")
        return self._result
