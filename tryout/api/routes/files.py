from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from tryout.api.deps import get_db, require_teacher, require_user
from tryout.models.user import User
from tryout.schemas.resource import FileIn, FileOut, FolderIn, FolderOut
from tryout.services import file_service

router = APIRouter(tags=["file"])


def _folder(row) -> dict:
    return FolderOut.model_validate(row).model_dump()


def _file(row) -> dict:
    return FileOut.model_validate(row).model_dump()


@router.get("/folders")
def list_folders(request: Request, db: Session = Depends(get_db), user: User = Depends(require_user)):
    data = [_folder(f) for f in file_service.list_folders(db)]
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.post("/folders")
def create_folder(
    request: Request,
    payload: FolderIn,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    data = _folder(file_service.create_folder(db, payload))
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.put("/folders/{folder_id}")
def update_folder(
    request: Request,
    folder_id: int,
    payload: FolderIn,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    data = _folder(file_service.update_folder(db, folder_id, payload))
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.delete("/folders/{folder_id}")
def delete_folder(
    request: Request,
    folder_id: int,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    file_service.delete_folder(db, folder_id)
    return {"request_id": request.state.request_id, "data": {"deleted": int(folder_id)}, "error": None}


@router.get("/folders/{folder_id}/files")
def file_get_files_by_folder_id(
    request: Request,
    folder_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    data = [_file(f) for f in file_service.get_files_by_folder(db, folder_id)]
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.post("/folders/{folder_id}/files")
def file_add_file(
    request: Request,
    folder_id: int,
    payload: FileIn,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    data = _file(file_service.add_file(db, folder_id, payload))
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.put("/folders/{folder_id}/files/{file_id}")
def file_edit_file(
    request: Request,
    folder_id: int,
    file_id: int,
    payload: FileIn,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    data = _file(file_service.edit_file(db, folder_id, file_id, payload))
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.delete("/folders/{folder_id}/files/{file_id}")
def file_delete_file(
    request: Request,
    folder_id: int,
    file_id: int,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    file_service.delete_file(db, folder_id, file_id)
    return {"request_id": request.state.request_id, "data": {"deleted": int(file_id)}, "error": None}
