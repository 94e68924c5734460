"""SQLAlchemy declarative Base shared by users, session tokens and tasks."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base; Base.metadata is the Alembic autogenerate target."""
