"""
Performance analytics API endpoints
"""
from fastapi import APIRouter, Depends
from typing import List
import logging

from skillforge.api.deps import require_view
from skillforge.schemas.analytics import CourseAnalytics, PlatformOverview, StudentAnalytics
from skillforge.schemas.user import Identity
from skillforge.services.analytics_service import analytics_service

router = APIRouter(tags=["analytics"])
logger = logging.getLogger(__name__)


@router.get("/mentor/analytics", response_model=List[StudentAnalytics])
async def student_analytics(identity: Identity = Depends(require_view("/mentor/analytics"))):
    """
    Leaderboard of students who took the mentor's quizzes

    Sorted by average score descending; ties keep first-seen order.
    """
    logger.info(f"Fetching student analytics for mentor {identity.id}")
    return analytics_service.student_summaries(identity.id)


@router.get("/admin", response_model=PlatformOverview)
async def admin_home(identity: Identity = Depends(require_view("/admin"))):
    return analytics_service.platform_overview()


@router.get("/admin/analytics", response_model=List[CourseAnalytics])
async def course_analytics(identity: Identity = Depends(require_view("/admin/analytics"))):
    """
    System-wide course analytics

    Returns per course:
    - Owner name ("Unknown" when the mentor no longer exists)
    - Quiz and attempt counts
    - Average score percent, or "N/A" when nobody attempted it
    """
    return analytics_service.course_summaries()
