"""Authoring of exam packages and their subtest/question/answer tree."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from fastapi import HTTPException
from sqlalchemy.orm import Session, selectinload

from tryout.models.package import Package, PackageType, Subtest, SubtestType
from tryout.models.question import Answer, Question
from tryout.schemas.package import AnswerIn, PackageIn, PackageTreeOut, QuestionIn, SubtestIn
from tryout.schemas.quiz import DrillSubtestOut


logger = logging.getLogger(__name__)


def _reconcile(existing: Sequence[Any], incoming: Sequence[Any], build: Callable, update: Callable) -> List[Any]:
    """Match incoming payloads to existing children by id.

    Matched children are updated in place, the rest of the payloads become new
    children. Existing children that are not matched are left out of the
    returned list, which the delete-orphan cascade turns into deletes.
    """
    by_id = {int(c.id): c for c in existing if c.id is not None}
    out = []
    for payload in incoming:
        child = by_id.pop(int(payload.id), None) if payload.id is not None else None
        if child is None:
            child = build(payload)
        else:
            update(child, payload)
        out.append(child)
    return out


def _build_answer(p: AnswerIn) -> Answer:
    return Answer(index=p.index, content=p.content)


def _update_answer(a: Answer, p: AnswerIn) -> None:
    a.index = p.index
    a.content = p.content


def _apply_question_fields(q: Question, p: QuestionIn) -> None:
    q.index = p.index
    q.content = p.content
    q.image_url = p.image_url or None
    q.type = p.type
    q.score = p.score
    q.explanation = p.explanation or None
    q.correct_answer_choice = p.correct_answer_choice


def _build_question(p: QuestionIn) -> Question:
    q = Question()
    _apply_question_fields(q, p)
    q.answers = [_build_answer(a) for a in p.answers]
    return q


def _update_question(q: Question, p: QuestionIn) -> None:
    _apply_question_fields(q, p)
    q.answers = _reconcile(q.answers, p.answers, _build_answer, _update_answer)


def _build_subtest(p: SubtestIn) -> Subtest:
    s = Subtest(type=p.type, duration=p.duration)
    s.questions = [_build_question(q) for q in p.questions]
    return s


def _update_subtest(s: Subtest, p: SubtestIn) -> None:
    s.type = p.type
    s.duration = p.duration
    s.questions = _reconcile(s.questions, p.questions, _build_question, _update_question)


def _load_tree(db: Session, package_id: int) -> Optional[Package]:
    return (
        db.query(Package)
        .options(
            selectinload(Package.subtests)
            .selectinload(Subtest.questions)
            .selectinload(Question.answers)
        )
        .filter(Package.id == int(package_id))
        .first()
    )


def package_tree_out(package: Package) -> Dict[str, Any]:
    return PackageTreeOut.model_validate(package).model_dump()


def list_packages(db: Session, package_type: Optional[PackageType] = None) -> List[Package]:
    q = db.query(Package)
    if package_type is not None:
        q = q.filter(Package.type == package_type)
    return q.order_by(Package.to_start.desc(), Package.id.desc()).all()


def get_package(db: Session, package_id: int) -> Package:
    package = _load_tree(db, package_id)
    if not package:
        raise HTTPException(status_code=404, detail="Package not found")
    return package


def create_package(db: Session, payload: PackageIn) -> Package:
    package = Package(
        name=payload.name.strip(),
        type=payload.type,
        class_id=payload.class_id,
        to_start=payload.to_start,
        to_end=payload.to_end,
    )
    package.subtests = [_build_subtest(s) for s in payload.subtests]
    db.add(package)
    db.commit()
    logger.info("Created package id=%s name=%r subtests=%s", package.id, package.name, len(payload.subtests))
    return get_package(db, package.id)


def update_package(db: Session, package_id: int, payload: PackageIn) -> Package:
    package = get_package(db, package_id)
    package.name = payload.name.strip()
    package.type = payload.type
    package.class_id = payload.class_id
    package.to_start = payload.to_start
    package.to_end = payload.to_end
    package.subtests = _reconcile(package.subtests, payload.subtests, _build_subtest, _update_subtest)
    db.commit()
    logger.info("Updated package id=%s", package.id)
    # Expire so the reloaded tree reflects the new child ordering
    db.expire_all()
    return get_package(db, package_id)


def delete_package(db: Session, package_id: int) -> None:
    package = get_package(db, package_id)
    db.delete(package)
    db.commit()
    logger.info("Deleted package id=%s", package_id)


def get_subtests_by_package(db: Session, package_id: int) -> List[Subtest]:
    return (
        db.query(Subtest)
        .filter(Subtest.package_id == int(package_id))
        .order_by(Subtest.id.asc())
        .all()
    )


def get_drill_subtests(db: Session, subtest_type: SubtestType) -> List[Dict[str, Any]]:
    rows = (
        db.query(Subtest, Package)
        .join(Package, Package.id == Subtest.package_id)
        .filter(Package.type == PackageType.drill, Subtest.type == subtest_type)
        .order_by(Subtest.id.asc())
        .all()
    )
    return [
        DrillSubtestOut(
            id=s.id,
            duration=s.duration,
            package={"id": p.id, "name": p.name},
        ).model_dump()
        for s, p in rows
    ]
