"""
Basic user CRUD for administrators.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends

from mathquest.auth.models import User
from mathquest.auth.routes import user_out
from mathquest.auth.schemas import RegisterIn, UserOut
from mathquest.core.deps import get_admin, get_current_user, get_storage, is_admin
from mathquest.core.errors import ConflictError, ForbiddenError, NotFoundError
from mathquest.core.schemas import MessageOut
from mathquest.core.security import hash_password
from mathquest.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


class UserCreateIn(RegisterIn):
    role: Optional[str] = "user"


@router.post("", status_code=201, response_model=UserOut)
def create_user(
    payload: UserCreateIn,
    admin: User = Depends(get_admin),
    storage: Storage = Depends(get_storage),
):
    if storage.get_user_by_username(payload.username):
        raise ConflictError("Username already exists")
    user = storage.create_user(
        username=payload.username,
        password_hash=hash_password(payload.password),
        name=payload.name,
        grade=payload.grade,
        role="admin" if payload.role == "admin" else "user",
    )
    logger.info("[ADMIN] user=%s created user=%s", admin.id, user.id)
    return user_out(storage, user)


# Unset fields are dropped, so other users never see which recovery questions were chosen
@router.get("/{user_id}", response_model=UserOut, response_model_exclude_unset=True)
def get_user(
    user_id: int,
    current: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    user = storage.get_user(user_id)
    if not user:
        raise NotFoundError("User not found")
    if current.id == user.id or is_admin(current):
        return user_out(storage, user)
    return UserOut.model_validate(user)


@router.delete("/{user_id}", response_model=MessageOut)
def delete_user(
    user_id: int,
    admin: User = Depends(get_admin),
    storage: Storage = Depends(get_storage),
):
    if user_id == admin.id:
        raise ForbiddenError("Admins cannot delete their own account")
    if not storage.delete_user(user_id):
        raise NotFoundError("User not found")
    logger.info("[ADMIN] user=%s deleted user=%s", admin.id, user_id)
    return {"message": "User deleted successfully"}
