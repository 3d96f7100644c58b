from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from tryout.models.user import User


logger = logging.getLogger(__name__)

ROLES = ("student", "teacher", "admin")
# Roles allowed to author packages and act on other users' sessions
ADMIN_ROLES = frozenset({"teacher", "admin"})


def normalize_role(role: Optional[str]) -> Optional[str]:
    if not role:
        return None
    r = str(role).strip().lower()
    if r in ROLES:
        return r
    return None


def is_admin(user: Optional[User]) -> bool:
    return bool(user) and normalize_role(getattr(user, "role", None)) in ADMIN_ROLES


def ensure_user_exists(db: Session, user_id: int, *, role: str = "student", sync_role: bool = True) -> User:
    """Ensure a user row exists for a given numeric ID.

    Demo headers let the frontend act as any ID, but quiz_sessions and
    user_answers carry foreign keys to ``users``. A minimal row is created
    when the id has never been seen. With ``sync_role`` off an existing row is
    returned untouched.
    """

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user:
        # Keep the role in sync with what the frontend claims in demo mode
        if sync_role and role and (user.role or "") != role:
            user.role = role
            db.commit()
        return user

    uid = int(user_id)
    email = f"{role}{uid}@demo.local"

    # If email happens to exist already, keep it unique.
    if db.query(User).filter(User.email == email).first():
        email = f"{role}{uid}-{uid}@demo.local"

    user = User(id=uid, email=email, full_name=f"{role.title()} {uid}", role=role, is_active=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created demo user id=%s role=%s", uid, role)
    return user


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id.asc()).all()
