"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.session_token import SessionToken
from app.models.task import Task
from app.models.user import Role, User

__all__ = ["Base", "Role", "SessionToken", "Task", "User"]
