"""User model: profile mirrored from the external identity provider."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from notespace.db.session import Base


class User(Base):
    """Identity profile keyed by the provider's opaque user id.

    Rows are written only by the identity sync route; a user id "resolves"
    when a row exists here.
    """

    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
