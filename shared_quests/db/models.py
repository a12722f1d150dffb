"""SQLAlchemy declarative base and display settings tables."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""


class ProfileVisibilityModel(Base):
    """Whether a profile's row is shown in rendered status blocks."""

    __tablename__ = "profile_visibility"

    profile_name: Mapped[str] = mapped_column(String, primary_key=True)
    visible: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    first_seen: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class SettingModel(Base):
    """Key/value display settings (e.g. the global enable flag)."""

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[str] = mapped_column(String, nullable=False)
