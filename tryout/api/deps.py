"""Common FastAPI dependencies.

Identity comes from demo headers sent by the frontend:
  - X-User-Id: numeric user id
  - X-User-Role: student | teacher | admin (defaults to student)

A minimal User row is created on first sight so foreign keys hold.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from tryout.db.session import get_db
from tryout.models.user import User
from tryout.services.user_service import ensure_user_exists, is_admin, normalize_role


__all__ = ["get_db", "get_current_user_optional", "require_user", "require_teacher"]


def get_current_user_optional(
    db: Session = Depends(get_db),
    x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
    x_user_role: Optional[str] = Header(default=None, alias="X-User-Role"),
) -> Optional[User]:
    """Return current user from demo headers, or None when they are missing."""

    if not x_user_id:
        return None

    try:
        uid = int(str(x_user_id).strip())
    except ValueError:
        return None
    if uid < 1:
        return None

    role = normalize_role(x_user_role) or "student"
    return ensure_user_exists(db, uid, role=role)


def require_user(user: Optional[User] = Depends(get_current_user_optional)) -> User:
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    if not bool(getattr(user, "is_active", True)):
        raise HTTPException(status_code=403, detail="User is inactive")
    return user


def require_teacher(user: User = Depends(require_user)) -> User:
    if not is_admin(user):
        raise HTTPException(status_code=403, detail="Teacher role required")
    return user
