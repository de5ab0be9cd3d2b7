"""User model."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from millops.db.base import Base, IdMixin, TimestampMixin

DEFAULT_ROLE = "Admin"


class User(Base, IdMixin, TimestampMixin):
    """Mill staff account.

    ``role`` is the operational role shown in the UI (Quality Control,
    Procurement, Accounts, Production, Warehouse, Dispatch, Admin); it is
    informational and grants nothing by itself.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    profile_image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    role: Mapped[str] = mapped_column(String(100), default=DEFAULT_ROLE, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or self.email.split("@")[0]
