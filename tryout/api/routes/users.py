from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from tryout.api.deps import get_db, require_teacher, require_user
from tryout.models.user import User
from tryout.schemas.user import UserOut
from tryout.services.user_service import list_users

router = APIRouter(tags=["user"])


@router.get("/users")
def get_all_users(request: Request, db: Session = Depends(get_db), teacher: User = Depends(require_teacher)):
    data = [UserOut.model_validate(u).model_dump() for u in list_users(db)]
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.get("/users/me")
def me(request: Request, user: User = Depends(require_user)):
    data = UserOut.model_validate(user).model_dump()
    return {"request_id": request.state.request_id, "data": data, "error": None}
