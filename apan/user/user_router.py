# apan/user/user_router.py

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from apan.auth.security import get_current_user
from apan.database import get_db
from apan.models.user import User
from apan.schemas.user_schema import (
    MessageResponse,
    TokenUser,
    UserDetail,
    UserRead,
    UserUpdate,
)

logger = logging.getLogger("apan.users")

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRead])
def get_all_users(
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return db.query(User).order_by(User.id).all()


@router.get("/{user_id}", response_model=UserDetail)
def get_user(
    user_id: int,
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(404, "User not found.")
    return user


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    data: Optional[UserUpdate] = Body(default=None),
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = data or UserUpdate()
    if user_id != current_user.id:
        raise HTTPException(403, "Access denied. You can only change your own profile.")

    if not data.name or not data.email:
        raise HTTPException(400, "Name and email are required.")

    user = db.get(User, user_id)
    if not user:
        raise HTTPException(404, "User not found.")

    user.name = data.name
    user.email = data.email
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(400, "This email is already in use.")
    db.refresh(user)
    return user


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if user_id != current_user.id:
        raise HTTPException(403, "Access denied. You can only delete your own profile.")

    user = db.get(User, user_id)
    if not user:
        raise HTTPException(404, "User not found.")

    db.delete(user)
    db.commit()

    logger.info("user_deleted", extra={"user_id": user_id})
    return {"message": "User deleted successfully."}
