import logging

from fastapi import APIRouter, Depends, Response

from mathquest.auth.models import User
from mathquest.auth.schemas import (
    SECURITY_QUESTIONS,
    LoginIn,
    PasswordChangeIn,
    PasswordResetIn,
    ProfileStatusOut,
    ProfileUpdateIn,
    RegisterIn,
    UserOut,
)
from mathquest.core.config import COOKIE_SECURE
from mathquest.core.deps import COOKIE_NAME, get_current_user, get_storage
from mathquest.core.errors import AuthError, ConflictError, ValidationError
from mathquest.core.schemas import MessageOut
from mathquest.core.security import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    create_access_token,
    hash_password,
    hash_security_answer,
    verify_password,
    verify_security_answer,
)
from mathquest.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])

# Same message for every reset failure so usernames cannot be probed
RESET_FAILED = "Invalid username or security answer"


def user_out(storage: Storage, user: User) -> UserOut:
    out = UserOut.model_validate(user)
    out.security_questions = [q.question for q in storage.get_security_questions(user.id)]
    return out


def _start_session(response: Response, user: User) -> None:
    token = create_access_token({"sub": user.username})
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=COOKIE_SECURE,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


# =========================
# REGISTER / LOGIN / LOGOUT
# =========================
@router.post("/register", status_code=201, response_model=UserOut)
def register(
    payload: RegisterIn,
    response: Response,
    storage: Storage = Depends(get_storage),
):
    if storage.get_user_by_username(payload.username):
        raise ConflictError("Username already exists")

    user = storage.create_user(
        username=payload.username,
        password_hash=hash_password(payload.password),
        name=payload.name,
        grade=payload.grade,
    )
    _start_session(response, user)
    logger.info("[AUTH] registered user=%s", user.id)
    return user_out(storage, user)


@router.post("/login", response_model=UserOut)
def login(
    payload: LoginIn,
    response: Response,
    storage: Storage = Depends(get_storage),
):
    user = storage.get_user_by_username(payload.username.strip())
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("[AUTH] invalid credentials")
        raise AuthError("Invalid username or password")

    _start_session(response, user)
    logger.info("[AUTH] login successful for user=%s", user.id)
    return user_out(storage, user)


@router.post("/logout", response_model=MessageOut)
def logout(response: Response):
    response.delete_cookie(COOKIE_NAME)
    return {"message": "Logged out"}


# =========================
# CURRENT USER / PROFILE
# =========================
@router.get("/user", response_model=UserOut)
def current_user(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return user_out(storage, user)


@router.get("/user/profile-status", response_model=ProfileStatusOut)
def profile_status(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    has_name = bool(user.name)
    has_grade = bool(user.grade)
    has_questions = len(storage.get_security_questions(user.id)) == 3
    return ProfileStatusOut(
        is_complete=has_name and has_grade and has_questions,
        has_name=has_name,
        has_grade=has_grade,
        has_security_questions=has_questions,
    )


@router.patch("/user/profile", response_model=UserOut)
def update_profile(
    payload: ProfileUpdateIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    updated = storage.update_user(user.id, name=payload.name, grade=payload.grade)
    storage.replace_security_questions(
        user.id,
        [(q.question, hash_security_answer(q.answer)) for q in payload.security_questions],
    )
    logger.info("[AUTH] profile updated for user=%s", user.id)
    return user_out(storage, updated)


@router.post("/user/password", response_model=MessageOut)
def change_password(
    payload: PasswordChangeIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    if not verify_password(payload.current_password, user.password_hash):
        raise ValidationError("Current password is incorrect")

    storage.update_user(user.id, password_hash=hash_password(payload.new_password))
    logger.info("[AUTH] password changed for user=%s", user.id)
    return {"message": "Password updated successfully"}


# =========================
# ACCOUNT RECOVERY
# =========================
@router.post("/reset-password", response_model=MessageOut)
def reset_password(
    payload: PasswordResetIn,
    storage: Storage = Depends(get_storage),
):
    user = storage.get_user_by_username(payload.username.strip())
    if not user:
        raise ValidationError(RESET_FAILED)

    stored = next(
        (q for q in storage.get_security_questions(user.id)
         if q.question.lower() == payload.security_question.strip().lower()),
        None,
    )
    if not stored or not verify_security_answer(payload.security_answer, stored.answer_hash, stored.answer_salt):
        logger.info("[AUTH] password reset rejected for user=%s", user.id)
        raise ValidationError(RESET_FAILED)

    storage.update_user(user.id, password_hash=hash_password(payload.new_password))
    logger.info("[AUTH] password reset for user=%s", user.id)
    return {"message": "Password reset successfully"}


@router.get("/security-questions", response_model=list[str])
def security_questions():
    return SECURITY_QUESTIONS
