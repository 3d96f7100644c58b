from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from tryout.api.deps import get_db, require_teacher, require_user
from tryout.models.package import PackageType
from tryout.models.user import User
from tryout.schemas.package import PackageIn, PackageOut, SubtestListItem
from tryout.services import package_service

router = APIRouter(tags=["package"])


@router.get("/packages")
def list_packages(
    request: Request,
    type: Optional[PackageType] = Query(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    rows = package_service.list_packages(db, package_type=type)
    data = [PackageOut.model_validate(p).model_dump() for p in rows]
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.get("/packages/{package_id}/subtests")
def list_package_subtests(
    request: Request,
    package_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    rows = package_service.get_subtests_by_package(db, package_id)
    data = [SubtestListItem.model_validate(s).model_dump() for s in rows]
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.get("/packages/{package_id}")
def get_package(
    request: Request,
    package_id: int,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    # Full tree including answer keys, authoring only
    data = package_service.package_tree_out(package_service.get_package(db, package_id))
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.post("/packages")
def create_package(
    request: Request,
    payload: PackageIn,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    data = package_service.package_tree_out(package_service.create_package(db, payload))
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.put("/packages/{package_id}")
def update_package(
    request: Request,
    package_id: int,
    payload: PackageIn,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    data = package_service.package_tree_out(package_service.update_package(db, package_id, payload))
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.delete("/packages/{package_id}")
def delete_package(
    request: Request,
    package_id: int,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    package_service.delete_package(db, package_id)
    return {"request_id": request.state.request_id, "data": {"deleted": int(package_id)}, "error": None}
