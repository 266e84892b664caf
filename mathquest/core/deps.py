import logging
from datetime import datetime, timezone

from fastapi import Request, Depends
from sqlalchemy.orm import Session

from mathquest.db.session import get_db
from mathquest.auth.models import User
from mathquest.core.errors import AuthError, ForbiddenError
from mathquest.core.security import decode_access_token
from mathquest.core.config import MAIN_ADMIN_USER_ID
from mathquest.storage.base import Storage
from mathquest.storage.sql import SqlStorage

logger = logging.getLogger(__name__)

COOKIE_NAME = "access_token"


def get_storage(db: Session = Depends(get_db)) -> Storage:
    return SqlStorage(db)


def _user_from_cookie(request: Request, storage: Storage):
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        return None

    # Support both "Bearer <token>" and raw token values.
    if isinstance(token, str) and token.lower().startswith("bearer "):
        token = token[7:].strip()

    payload = decode_access_token(token)
    if not payload:
        logger.info("[AUTH] reject reason=invalid_token path=%s", request.url.path)
        return None

    username = payload.get("sub")
    if not username:
        logger.info("[AUTH] reject reason=no_username_in_token path=%s", request.url.path)
        return None

    user = storage.get_user_by_username(username)
    if not user:
        logger.info("[AUTH] reject reason=user_not_found path=%s", request.url.path)
    return user


def get_current_user(
    request: Request,
    storage: Storage = Depends(get_storage),
) -> User:
    user = _user_from_cookie(request, storage)
    if not user:
        raise AuthError("Not authenticated")

    # Update last_active timestamp so admins can see who is online
    try:
        storage.update_user(user.id, last_active=datetime.now(timezone.utc))
    except Exception as exc:
        logger.warning("[AUTH] could not stamp last_active for user=%s: %r", user.id, exc)

    return user


def get_optional_user(
    request: Request,
    storage: Storage = Depends(get_storage),
):
    """Current user when a valid session cookie is present, else None."""
    return _user_from_cookie(request, storage)


def is_admin(user: User) -> bool:
    return user.id == MAIN_ADMIN_USER_ID or user.role == "admin"


def get_admin(
    user: User = Depends(get_current_user)
) -> User:
    """Dependency to ensure the user is the main admin or has the admin role."""
    if not is_admin(user):
        raise ForbiddenError("Admin access required")
    return user
