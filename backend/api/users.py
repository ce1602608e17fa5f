"""
User API Endpoints
==================

Read-only access to accounts and the caller's own identity.

Endpoints:
- GET /api/users           - all users
- GET /api/users/{user_id} - one user
- GET /api/userByToken     - the user behind the bearer token
- GET /api/isUserAdmin     - whether that user holds ROLE_ADMIN
"""

from fastapi import APIRouter, Depends, HTTPException
from typing import List
import logging

from middleware.auth import get_viewer_required
from models.api.user import UserResponse
from models.domain.viewer import Authenticated
from repositories import Repositories, get_repositories

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["users"])


@router.get("/users", response_model=List[UserResponse])
async def list_users(repos: Repositories = Depends(get_repositories)):
    users = await repos.users.list_all()
    return [UserResponse.from_domain(u) for u in users]


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, repos: Repositories = Depends(get_repositories)):
    user = await repos.users.get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail=f"User id not found - {user_id}")
    return UserResponse.from_domain(user)


@router.get("/userByToken", response_model=UserResponse)
async def get_user_by_token(viewer: Authenticated = Depends(get_viewer_required)):
    return UserResponse.from_domain(viewer.user)


@router.get("/isUserAdmin")
async def is_user_admin(viewer: Authenticated = Depends(get_viewer_required)) -> bool:
    return viewer.user.is_admin
