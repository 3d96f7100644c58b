from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from tryout.api.deps import get_db, require_teacher, require_user
from tryout.models.package import SubtestType
from tryout.models.user import User
from tryout.schemas.quiz import AnnouncementIn, SaveAnswerRequest, SessionCreateRequest, UserAnswerOut
from tryout.services.answer_service import save_answer
from tryout.services.package_service import get_drill_subtests
from tryout.services.question_service import get_questions_by_subtest
from tryout.services.scoring_service import get_package_with_scores
from tryout.services.session_service import create_session, get_session, get_session_details, session_out, submit_session
from tryout.services.settings_service import get_announcement, set_announcement
from tryout.services.user_service import ensure_user_exists, is_admin

router = APIRouter(tags=["quiz"])


def _target_user_id(user: User, user_id: Optional[int]) -> int:
    # Only admins may act on behalf of another user
    if user_id is not None and is_admin(user):
        return int(user_id)
    return int(user.id)


@router.get("/quiz/announcement")
def quiz_get_announcement(request: Request, db: Session = Depends(get_db), user: User = Depends(require_user)):
    data = get_announcement(db)
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.put("/quiz/announcement")
def quiz_upsert_announcement(
    request: Request,
    payload: AnnouncementIn,
    db: Session = Depends(get_db),
    teacher: User = Depends(require_teacher),
):
    data = set_announcement(db, title=payload.title, content=payload.content, url=payload.url)
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.get("/quiz/packages/{package_id}")
def quiz_get_package_with_subtest(
    request: Request,
    package_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    data = get_package_with_scores(db, package_id, user)
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.get("/quiz/sessions/lookup")
def quiz_get_session(
    request: Request,
    subtest_id: int = Query(..., ge=1),
    user_id: Optional[int] = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    row = get_session(db, _target_user_id(user, user_id), subtest_id)
    data = session_out(row) if row else None
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.post("/quiz/sessions")
def quiz_create_session(
    request: Request,
    payload: SessionCreateRequest,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    uid = _target_user_id(user, payload.user_id)
    if uid != int(user.id):
        # Acting for someone else must not touch their role
        ensure_user_exists(db, uid, sync_role=False)
    row = create_session(
        db,
        user_id=uid,
        package_id=payload.package_id,
        subtest_id=payload.subtest_id,
        duration=payload.duration,
    )
    return {"request_id": request.state.request_id, "data": session_out(row), "error": None}


@router.get("/quiz/subtests/{subtest_id}/questions")
def quiz_get_questions_by_subtest(
    request: Request,
    subtest_id: int,
    user_id: Optional[int] = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    data = get_questions_by_subtest(db, subtest_id, user, target_user_id=user_id)
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.get("/quiz/sessions/{session_id}")
def quiz_get_session_details(
    request: Request,
    session_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    data = get_session_details(db, session_id, user)
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.put("/quiz/answers")
def quiz_save_answer(
    request: Request,
    payload: SaveAnswerRequest,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    row = save_answer(
        db,
        user_id=int(user.id),
        package_id=payload.package_id,
        quiz_session_id=payload.quiz_session_id,
        question_id=payload.question_id,
        answer_choice=payload.answer_choice,
        essay_answer=payload.essay_answer,
    )
    data = UserAnswerOut.model_validate(row).model_dump()
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.post("/quiz/sessions/{session_id}/submit")
def quiz_submit(
    request: Request,
    session_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    row = submit_session(db, session_id, user)
    data = session_out(row) if row else None
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.get("/quiz/drill-subtests")
def quiz_get_drill_subtests(
    request: Request,
    subtest: SubtestType = Query(...),
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    data = get_drill_subtests(db, subtest)
    return {"request_id": request.state.request_id, "data": data, "error": None}
