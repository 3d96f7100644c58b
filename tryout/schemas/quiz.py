from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from tryout.models.package import PackageType, SubtestType
from tryout.models.question import QuestionType
from tryout.services.timing import as_utc


# Stored timestamps are UTC; SQLite returns them naive
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class AnnouncementIn(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None


class AnnouncementOut(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    updated_at: Optional[UtcDatetime] = None


class SessionCreateRequest(BaseModel):
    package_id: int = Field(ge=1)
    subtest_id: int = Field(ge=1)
    # minutes; falls back to the subtest duration
    duration: Optional[int] = Field(default=None, ge=1)
    # honoured for teachers/admins only
    user_id: Optional[int] = Field(default=None, ge=1)


class QuizSessionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    package_id: int
    subtest_id: int
    duration: int
    end_time: UtcDatetime


class SaveAnswerRequest(BaseModel):
    package_id: int = Field(ge=1)
    quiz_session_id: int = Field(ge=1)
    question_id: int = Field(ge=1)
    answer_choice: Optional[int] = None
    essay_answer: Optional[str] = None


class UserAnswerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    package_id: int
    quiz_session_id: int
    question_id: int
    answer_choice: Optional[int] = None
    essay_answer: Optional[str] = None


class AnswerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    question_id: int
    index: int
    content: str


class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    subtest_id: int
    index: int
    content: str
    image_url: Optional[str] = None
    type: QuestionType
    # Null while the package window is open
    score: Optional[int] = None
    explanation: Optional[str] = None
    correct_answer_choice: Optional[int] = None
    answers: List[AnswerOut] = Field(default_factory=list)


class SubtestBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    package_id: int
    type: SubtestType
    duration: Optional[int] = None


class SessionDetailsOut(QuizSessionOut):
    subtest: SubtestBrief
    package_end: UtcDatetime
    user_answers: List[UserAnswerOut] = Field(default_factory=list)


class DrillPackageRef(BaseModel):
    id: int
    name: str


class DrillSubtestOut(BaseModel):
    id: int
    duration: Optional[int] = None
    package: DrillPackageRef


class ScoredSubtestOut(BaseModel):
    id: int
    type: SubtestType
    duration: Optional[int] = None
    # end_time of the user's session, None if not started
    quiz_session: Optional[UtcDatetime] = None
    # None until the package window closes
    score: Optional[int] = None


class ScoredPackageOut(BaseModel):
    name: str
    type: PackageType
    to_start: UtcDatetime
    to_end: UtcDatetime
    total_score: int = 0
    subtests: List[ScoredSubtestOut] = Field(default_factory=list)
