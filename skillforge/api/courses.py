"""
Mentor course and quiz management endpoints
"""

from fastapi import APIRouter, Depends
from typing import List
import logging

from skillforge.api.deps import require_view
from skillforge.schemas.analytics import MentorOverview
from skillforge.schemas.course import Course, CourseCreate
from skillforge.schemas.quiz import Quiz, QuizCreate, QuizGenerateRequest
from skillforge.schemas.user import Identity
from skillforge.services.analytics_service import analytics_service
from skillforge.services.catalog_service import catalog_service


router = APIRouter(prefix="/mentor", tags=["mentor"])
logger = logging.getLogger(__name__)


@router.get("", response_model=MentorOverview)
async def mentor_home(identity: Identity = Depends(require_view("/mentor"))):
    return analytics_service.mentor_overview(identity.id)


@router.get("/courses", response_model=List[Course])
async def list_courses(identity: Identity = Depends(require_view("/mentor/courses"))):
    """Courses owned by the signed-in mentor"""
    return catalog_service.courses_for_mentor(identity.id)


@router.post("/courses", response_model=Course, status_code=201)
async def create_course(
    request: CourseCreate,
    identity: Identity = Depends(require_view("/mentor/courses")),
):
    return catalog_service.create_course(identity, request)


@router.get("/course/{course_id}/quizzes", response_model=List[Quiz])
async def list_course_quizzes(
    course_id: str,
    identity: Identity = Depends(require_view("/mentor/course/{course_id}/quizzes")),
):
    catalog_service.owned_course(identity, course_id)
    return catalog_service.quizzes_for_course(course_id)


@router.post("/course/{course_id}/quizzes", response_model=Quiz, status_code=201)
async def create_quiz(
    course_id: str,
    request: QuizCreate,
    identity: Identity = Depends(require_view("/mentor/course/{course_id}/quizzes")),
):
    return catalog_service.create_quiz(identity, course_id, request)


@router.post("/course/{course_id}/quizzes/generate", response_model=Quiz, status_code=201)
async def generate_quiz(
    course_id: str,
    request: QuizGenerateRequest,
    identity: Identity = Depends(require_view("/mentor/course/{course_id}/quizzes")),
):
    """
    Generate a quiz with Gemini AI

    - Reuses cached generator output for the same topic, difficulty and count
    - Every generated question gets a fresh id
    - Generator errors are reported as 502, never retried
    """
    return catalog_service.generate_quiz(identity, course_id, request)
