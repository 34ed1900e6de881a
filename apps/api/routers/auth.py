from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel, EmailStr
from sqlalchemy.orm import Session

from apps.api.utils.auth import ADMIN, create_access_token, decode_token, hash_password, role_for_new_account, verify_password
from core.db import get_db
from core.models.users import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    name: str | None = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


@router.post("/register")
def register(req: RegisterRequest, db: Session = Depends(get_db)):
    existing = db.query(User).filter(User.email == req.email).one_or_none()
    if existing:
        raise HTTPException(status_code=400, detail="User already exists")

    try:
        password_hash = hash_password(req.password)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    role = role_for_new_account(db.query(User).count())
    user = User(email=req.email, password_hash=password_hash, name=req.name, role=role)
    db.add(user)
    db.commit()
    logger.info("registered %s as %s", user.email, role)

    token = create_access_token(subject=user.email, role=user.role)
    return {"access_token": token, "token_type": "bearer", "role": user.role}


@router.post("/login")
def login(req: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == req.email).one_or_none()
    try:
        ok = user and verify_password(req.password, user.password_hash)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not ok:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    user.last_signed_in = datetime.utcnow()
    db.commit()

    token = create_access_token(subject=user.email, role=user.role)
    return {"access_token": token, "token_type": "bearer", "role": user.role}


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    payload = decode_token(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid token")

    user = db.query(User).filter(User.email == payload.get("sub")).one_or_none()
    if not user:
        raise HTTPException(status_code=401, detail="Invalid user")

    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
