"""
SQLAlchemy ORM models for database tables.
Uses SQLAlchemy 2.0+ async style.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, Integer, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class Secret(Base):
    """
    Stores credentials.
    Examples: gateway_sid
    """
    __tablename__ = "secrets"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )


class ConfigStore(Base):
    """
    Single-row table holding the application config as JSON.
    """
    __tablename__ = "config_store"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, server_default="1")
    config_json: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("id = 1", name="single_row_check"),
    )
