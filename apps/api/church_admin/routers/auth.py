from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from church_admin.core.db import get_db
from church_admin.core.security import create_access_token
from church_admin.routers.users import to_user_response
from church_admin.schemas.users import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from church_admin.services.users import authenticate, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange an email-or-username plus password for a bearer token.

    The token carries `userId` and `role`; role checks read the claim, so a
    role change takes effect on the next login.
    """
    user = authenticate(db, payload.identifier.strip(), payload.password)
    if user is None:
        raise HTTPException(status_code=401, detail="invalid credentials")
    token = create_access_token(user.id, user.role.value)
    return AuthResponse(token=token, user=to_user_response(user))


@router.post("/register", response_model=UserResponse, status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user = register_user(db, payload.email, payload.password)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="email already in use")
    db.refresh(user)
    return to_user_response(user)
