"""SQLAlchemy models."""

from packhost.models.user import User

__all__ = ["User"]
