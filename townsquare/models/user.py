"""
User model.

A person who signed in through Twitter. The forum engine binds to this
model by name and reads its `username` and `admin` columns.
"""
from sqlalchemy import Boolean, String, false
from sqlalchemy.orm import Mapped, mapped_column
from townsquare.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class User(UUIDPrimaryKeyMixin, Base, TimestampMixin):
    __tablename__ = "users"

    twitter_uid: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    # Unique: used for @mentions and forum profile lookups
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, admin={self.admin})>"
