"""Adapters for integrating PrepScore with storage and frameworks."""

from .sqlalchemy_repo import SQLAlchemyAttemptRepository, create_session_factory

__all__ = ["SQLAlchemyAttemptRepository", "create_session_factory"]
