"""Resource library: folders of links to study material."""

from __future__ import annotations

import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy.orm import Session

from tryout.models.resource import File, Folder
from tryout.schemas.resource import FileIn, FolderIn


logger = logging.getLogger(__name__)


def list_folders(db: Session) -> List[Folder]:
    return db.query(Folder).order_by(Folder.id.asc()).all()


def get_folder(db: Session, folder_id: int) -> Folder:
    folder = db.query(Folder).filter(Folder.id == int(folder_id)).first()
    if not folder:
        raise HTTPException(status_code=404, detail="Folder not found")
    return folder


def create_folder(db: Session, payload: FolderIn) -> Folder:
    folder = Folder(name=payload.name.strip(), description=payload.description or None)
    db.add(folder)
    db.commit()
    db.refresh(folder)
    logger.info("Created folder id=%s name=%r", folder.id, folder.name)
    return folder


def update_folder(db: Session, folder_id: int, payload: FolderIn) -> Folder:
    folder = get_folder(db, folder_id)
    folder.name = payload.name.strip()
    folder.description = payload.description or None
    db.commit()
    db.refresh(folder)
    return folder


def delete_folder(db: Session, folder_id: int) -> None:
    folder = get_folder(db, folder_id)
    db.delete(folder)
    db.commit()
    logger.info("Deleted folder id=%s", folder_id)


def get_files_by_folder(db: Session, folder_id: int) -> List[File]:
    get_folder(db, folder_id)
    return (
        db.query(File)
        .filter(File.folder_id == int(folder_id))
        .order_by(File.id.asc())
        .all()
    )


def _get_file_in_folder(db: Session, folder_id: int, file_id: int) -> File:
    row = (
        db.query(File)
        .filter(File.id == int(file_id), File.folder_id == int(folder_id))
        .first()
    )
    if not row:
        raise HTTPException(status_code=404, detail="File not found in folder")
    return row


def add_file(db: Session, folder_id: int, payload: FileIn) -> File:
    get_folder(db, folder_id)
    row = File(
        folder_id=int(folder_id),
        title=payload.title.strip(),
        description=payload.description or None,
        url=payload.url,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Added file id=%s to folder id=%s", row.id, folder_id)
    return row


def edit_file(db: Session, folder_id: int, file_id: int, payload: FileIn) -> File:
    row = _get_file_in_folder(db, folder_id, file_id)
    row.title = payload.title.strip()
    row.description = payload.description or None
    row.url = payload.url
    db.commit()
    db.refresh(row)
    return row


def delete_file(db: Session, folder_id: int, file_id: int) -> None:
    row = _get_file_in_folder(db, folder_id, file_id)
    db.delete(row)
    db.commit()
    logger.info("Deleted file id=%s from folder id=%s", file_id, folder_id)
