"""User API — the caller's own profile.

Learn: Mounted behind get_current_user, so by the time a handler runs the
identity is already verified. There is no way to address another user.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from warden.auth.dependencies import CurrentIdentity, get_current_user
from warden.db.engine import get_db
from warden.schemas.user import UserRead, UserUpdate
from warden.services.user_service import UserService

router = APIRouter(prefix="/users")


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("/me", response_model=UserRead)
async def get_me(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    return await svc.get_user(identity)


@router.patch("", response_model=UserRead)
async def edit_user(
    body: UserUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    return await svc.update_user(identity, body)
