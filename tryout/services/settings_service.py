from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from tryout.models.site_setting import SiteSetting
from tryout.schemas.quiz import AnnouncementOut


logger = logging.getLogger(__name__)

ANNOUNCEMENT_KEY = "announcement"


def get_setting(db: Session, key: str) -> Optional[SiteSetting]:
    return db.query(SiteSetting).filter(SiteSetting.key == key).first()


def set_setting(db: Session, key: str, value: Dict[str, Any]) -> SiteSetting:
    row = get_setting(db, key)
    if row is None:
        row = SiteSetting(key=key, value=dict(value))
        db.add(row)
    else:
        row.value = dict(value)
    db.commit()
    db.refresh(row)
    return row


def _announcement_out(row: SiteSetting) -> Dict[str, Any]:
    value = row.value or {}
    return AnnouncementOut(
        title=value.get("title"),
        content=value.get("content"),
        url=value.get("url"),
        updated_at=row.updated_at,
    ).model_dump()


def get_announcement(db: Session) -> Optional[Dict[str, Any]]:
    row = get_setting(db, ANNOUNCEMENT_KEY)
    if row is None:
        return None
    return _announcement_out(row)


def set_announcement(
    db: Session,
    *,
    title: Optional[str] = None,
    content: Optional[str] = None,
    url: Optional[str] = None,
) -> Dict[str, Any]:
    """Replace the global announcement (there is only ever one)."""
    row = set_setting(db, ANNOUNCEMENT_KEY, {"title": title, "content": content, "url": url})
    logger.info("Announcement updated: %s", title)
    return _announcement_out(row)
