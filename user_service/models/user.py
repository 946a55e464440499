"""User model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, func
from user_service.database import Base


class User(Base):
    """Represents an account created through the users API."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, nullable=False, index=True)
    email = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
