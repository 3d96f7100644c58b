from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from tryout.api.deps import get_db, require_user
from tryout.models.user import User
from tryout.schemas.quiz import AnswerOut
from tryout.services.question_service import get_answers

router = APIRouter(tags=["answer"])


@router.get("/answers")
def answer_get_answer(
    request: Request,
    question_id: int = Query(..., ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    data = [AnswerOut.model_validate(a).model_dump() for a in get_answers(db, question_id)]
    return {"request_id": request.state.request_id, "data": data, "error": None}
