from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from core.config import settings

ADMIN = "admin"
USER = "user"
ROLES = (ADMIN, USER)

# bcrypt ignores everything past 72 bytes
BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _checked(password: str) -> str:
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password too long (max {BCRYPT_MAX_BYTES} bytes).")
    return password


def hash_password(password: str) -> str:
    return pwd_context.hash(_checked(password))


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(_checked(password), hashed)


def role_for_new_account(existing_accounts: int) -> str:
    """The site owner signs up first and gets the admin dashboard; later sign-ups are plain users."""
    return ADMIN if existing_accounts == 0 else USER


def create_access_token(subject: str, role: str) -> str:
    if role not in ROLES:
        raise ValueError(f"Unknown role '{role}'")
    expire = datetime.utcnow() + timedelta(minutes=settings.jwt_exp_minutes)
    payload = {"sub": subject, "role": role, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Claims of a valid token, or None when the signature, expiry, subject or role is off."""
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if not claims.get("sub") or claims.get("role") not in ROLES:
        return None
    return claims
