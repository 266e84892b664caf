from datetime import datetime, timedelta
from typing import NamedTuple, Optional
import hashlib
import hmac
import logging
import os
from jose import jwt, JWTError

logger = logging.getLogger(__name__)

# ======================
# SECRET HASHING (PBKDF2)
# ======================

PBKDF2_ITERATIONS = 100_000
SALT_BYTES = 16


class HashedSecret(NamedTuple):
    digest: str
    salt: str


def _derive(secret: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac(
        "sha256",
        secret.encode(),
        salt,
        PBKDF2_ITERATIONS,
    )


def hash_secret(secret: str) -> HashedSecret:
    salt = os.urandom(SALT_BYTES)
    return HashedSecret(digest=_derive(secret, salt).hex(), salt=salt.hex())


def verify_secret(secret: str, digest: str, salt: str) -> bool:
    try:
        salt_bytes = bytes.fromhex(salt)
        expected = bytes.fromhex(digest)
    except (TypeError, ValueError):
        return False
    return hmac.compare_digest(_derive(secret, salt_bytes), expected)


def hash_password(password: str) -> str:
    hashed = hash_secret(password)
    return hashed.salt + ":" + hashed.digest


def verify_password(password: str, stored: str) -> bool:
    salt_hex, sep, hash_hex = (stored or "").partition(":")
    if not sep:
        return False
    return verify_secret(password, hash_hex, salt_hex)


# Answers are compared case- and whitespace-insensitively.
def normalize_answer(answer: str) -> str:
    return " ".join(answer.split()).lower()


def hash_security_answer(answer: str) -> HashedSecret:
    return hash_secret(normalize_answer(answer))


def verify_security_answer(answer: str, digest: str, salt: str) -> bool:
    return verify_secret(normalize_answer(answer), digest, salt)


# ======================
# JWT
# ======================

SECRET_KEY = os.getenv("SECRET_KEY", os.getenv("JWT_SECRET_KEY", ""))
if not SECRET_KEY:
    # In production, require a secret; for local dev, use a default (UNSAFE for prod)
    if os.getenv("ENVIRONMENT", "").lower() == "production":
        raise RuntimeError("SECRET_KEY or JWT_SECRET_KEY env var is required in production")
    SECRET_KEY = "dev-secret-key-CHANGE-IN-PRODUCTION-12345678901234567890"
    logger.warning("[AUTH] Using default SECRET_KEY for development. DO NOT USE IN PRODUCTION!")
else:
    logger.info("[AUTH] SECRET_KEY present: True (length=%d)", len(SECRET_KEY))

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str):
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.info("[AUTH] Token expired")
        return None
    except JWTError as e:
        logger.info("[AUTH] JWT decode error: %s", type(e).__name__)
        return None
