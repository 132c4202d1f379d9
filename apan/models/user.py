# apan/models/user.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from apan.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash, never the plain text
    role = Column(String(50), nullable=False, default="student")

    # password reset: cleared once consumed
    reset_password_token = Column(String(64), nullable=True, index=True)
    reset_password_expires = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    managed_projects = relationship(
        "Project",
        back_populates="manager",
        cascade="all, delete-orphan",
    )
    memberships = relationship(
        "ProjectStudent",
        back_populates="student",
        cascade="all, delete-orphan",
    )
    # no delete cascade: progress rows outlive their author with registered_by = NULL
    progress_entries = relationship("GoalProgress", back_populates="author")
