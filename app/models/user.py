"""ORM model for application users (auth and RBAC)."""

from enum import StrEnum

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class Role(StrEnum):
    """
    Known role values. Stored as a plain string so new roles need no migration.

    ROOT is only assigned by the bootstrap script and grants nothing by itself:
    the admin gate compares against ADMIN exactly.
    """

    USER = "USER"
    ADMIN = "ADMIN"
    ROOT = "ROOT"


class User(Base):
    """
    User account for cookie-session authentication and role-based access control.

    deleted: soft-delete flag (column "delete"); rows are never hard-deleted.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value)
    deleted = Column("delete", Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    sessions = relationship("SessionToken", back_populates="user")
    tasks = relationship("Task", back_populates="user")
