from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from tryout.db.base_class import Base


class QuizSession(Base):
    """One user's timed attempt at one subtest.

    Uniqueness of (user_id, subtest_id) is a service rule that depends on
    ALLOW_MULTIPLE_ATTEMPTS, so there is no table constraint for it.
    """

    __tablename__ = "quiz_sessions"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    package_id: Mapped[int] = mapped_column(ForeignKey("packages.id", ondelete="CASCADE"), index=True, nullable=False)
    subtest_id: Mapped[int] = mapped_column(ForeignKey("subtests.id", ondelete="CASCADE"), index=True, nullable=False)

    # minutes
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
