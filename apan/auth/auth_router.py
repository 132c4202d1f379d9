# apan/auth/auth_router.py

from datetime import datetime
from typing import Optional
import logging

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from apan.auth.security import (
    create_access_token,
    generate_reset_token,
    hash_password,
    reset_token_expiry,
    verify_password,
)
from apan.database import get_db
from apan.mail.mail_service import MailService, MailServiceError, get_mail_service
from apan.models.user import User
from apan.schemas.user_schema import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UserRead,
)

logger = logging.getLogger("apan.auth")

DEFAULT_ROLE = "student"

# ================= PUBLIC ROUTES =================
router = APIRouter(prefix="/users", tags=["auth"])


@router.post("", response_model=UserRead, status_code=201)
def register_user(
    request: Optional[RegisterRequest] = Body(default=None),
    db: Session = Depends(get_db),
):
    request = request or RegisterRequest()
    if not request.name or not request.email or not request.password:
        raise HTTPException(400, "Name, email and password are required.")

    user = User(
        name=request.name,
        email=request.email,
        password=hash_password(request.password),
        role=request.role or DEFAULT_ROLE,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(400, "This email is already registered.")
    db.refresh(user)

    logger.info("user_registered", extra={"user_id": user.id})
    return user


@router.post("/login", response_model=LoginResponse)
def login(
    request: Optional[LoginRequest] = Body(default=None),
    db: Session = Depends(get_db),
):
    request = request or LoginRequest()
    if not request.email or not request.password:
        raise HTTPException(400, "Email and password are required.")

    user = db.query(User).filter(User.email == request.email).first()

    if not user or not verify_password(request.password, user.password):
        raise HTTPException(401, "Invalid credentials.")

    token = create_access_token(user.id, user.email)
    return {
        "message": "Login successful!",
        "token": token,
        "token_type": "bearer",
        "user": UserRead.model_validate(user),
    }


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    req: Optional[ForgotPasswordRequest] = Body(default=None),
    db: Session = Depends(get_db),
    mail_service: MailService = Depends(get_mail_service),
):
    req = req or ForgotPasswordRequest()
    if not req.email:
        raise HTTPException(400, "Email is required.")

    user = db.query(User).filter(User.email == req.email).first()
    if not user:
        raise HTTPException(404, "User not found.")

    # a new request replaces whatever token was pending
    token = generate_reset_token()
    user.reset_password_token = token
    user.reset_password_expires = reset_token_expiry()
    db.commit()

    try:
        mail_service.send_password_reset(user.email, user.name, token)
    except MailServiceError:
        logger.exception("password_reset_mail_failed", extra={"user_id": user.id})
        # the link never reached the user: do not leave a usable token behind
        user.reset_password_token = None
        user.reset_password_expires = None
        db.commit()
        raise HTTPException(500, "Could not send the reset email. Please try again later.")

    return {"message": "A password reset link was sent to your email."}


@router.post("/reset-password/{token}", response_model=MessageResponse)
def reset_password(
    token: str,
    req: Optional[ResetPasswordRequest] = Body(default=None),
    db: Session = Depends(get_db),
):
    req = req or ResetPasswordRequest()
    if not req.password:
        raise HTTPException(400, "A new password is required.")

    user = (
        db.query(User)
        .filter(
            User.reset_password_token == token,
            User.reset_password_expires > datetime.utcnow(),
        )
        .first()
    )
    if not user:
        raise HTTPException(400, "Password reset token is invalid or has expired.")

    user.password = hash_password(req.password)
    user.reset_password_token = None
    user.reset_password_expires = None
    db.commit()

    logger.info("password_reset_completed", extra={"user_id": user.id})
    return {"message": "Password updated successfully."}
