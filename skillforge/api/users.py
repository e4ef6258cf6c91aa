"""
Admin user management endpoints
"""
from fastapi import APIRouter, Depends
from typing import List
import logging

from skillforge.api.deps import require_view
from skillforge.schemas.user import Identity, PasswordReset, UserCreate, UserUpdate
from skillforge.services.user_service import user_service

router = APIRouter(prefix="/admin/users", tags=["admin"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[Identity])
async def list_users(identity: Identity = Depends(require_view("/admin/users"))):
    return user_service.list_users()


@router.post("/create", response_model=Identity, status_code=201)
async def create_user(
    request: UserCreate,
    identity: Identity = Depends(require_view("/admin/users/create")),
):
    """
    Create a user with a password

    - 400 when the password is too short
    - 409 when the email is already taken
    """
    return user_service.create_user(request)


@router.put("/{user_id}", response_model=Identity)
async def update_user(
    user_id: str,
    request: UserUpdate,
    identity: Identity = Depends(require_view("/admin/users")),
):
    return user_service.update_user(user_id, request)


@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: str, identity: Identity = Depends(require_view("/admin/users"))):
    user_service.delete_user(user_id)


@router.post("/{user_id}/password")
async def reset_password(
    user_id: str,
    request: PasswordReset,
    identity: Identity = Depends(require_view("/admin/users")),
):
    user_service.reset_password(user_id, request.new_password, request.confirm_password)
    return {"status": "password_reset"}
