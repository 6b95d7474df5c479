"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table. Alembic migrations mirror these definitions.

Key concepts:
- Integer primary keys assigned by the database
- users.email UNIQUE is the authoritative duplicate check for signup
- Write-once columns (password_hash, owner_id) guarded with @validates
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, validates

from warden.errors import IntegrityFault


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _write_once(obj, key: str, value):
    """Allow the first assignment of a column, refuse any later change."""
    current = obj.__dict__.get(key)
    if current is not None and current != value:
        raise IntegrityFault(
            f"{type(obj).__name__}.{key} is immutable once set",
            code="IMMUTABLE_FIELD",
        )
    return value


class User(Base):
    """A registered user.

    Learn: password_hash never leaves the service layer — every outward
    representation goes through schemas.user.UserRead, which has no such
    field. The hash itself is write-once.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    # Relationships
    resources: Mapped[list["Resource"]] = relationship(back_populates="owner")

    @validates("password_hash")
    def _password_hash_write_once(self, key, value):
        return _write_once(self, key, value)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"


class Resource(Base):
    """A user-owned resource (title + link + optional description).

    Learn: owner_id is set from the authenticated identity on create and
    can never be reassigned. Ownership is the only access rule.
    """

    __tablename__ = "resources"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    link: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    # Relationships
    owner: Mapped["User"] = relationship(back_populates="resources")

    @validates("owner_id")
    def _owner_id_write_once(self, key, value):
        return _write_once(self, key, value)
