from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tryout.models.package import PackageType, SubtestType
from tryout.models.question import QuestionType
from tryout.schemas.quiz import UtcDatetime


class AnswerIn(BaseModel):
    id: Optional[int] = None
    index: int = Field(ge=0)
    content: str


class QuestionIn(BaseModel):
    id: Optional[int] = None
    index: int = Field(ge=0)
    content: str = Field(min_length=1)
    image_url: Optional[str] = None
    type: QuestionType = QuestionType.choice
    score: int = Field(default=0, ge=0)
    explanation: Optional[str] = None
    correct_answer_choice: Optional[int] = None
    answers: List[AnswerIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def _essay_has_no_choice_key(self):
        if self.type == QuestionType.essay:
            self.correct_answer_choice = None
        return self


class SubtestIn(BaseModel):
    id: Optional[int] = None
    type: SubtestType
    duration: Optional[int] = Field(default=None, ge=1)
    questions: List[QuestionIn] = Field(default_factory=list)


class PackageIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    type: PackageType = PackageType.tryout
    class_id: Optional[int] = None
    to_start: UtcDatetime
    to_end: UtcDatetime
    subtests: List[SubtestIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def _window_order(self):
        if self.to_end < self.to_start:
            raise ValueError("to_end must not be before to_start")
        return self


class AnswerTreeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    index: int
    content: str


class QuestionTreeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    index: int
    content: str
    image_url: Optional[str] = None
    type: QuestionType
    score: int
    explanation: Optional[str] = None
    correct_answer_choice: Optional[int] = None
    answers: List[AnswerTreeOut] = Field(default_factory=list)


class SubtestTreeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: SubtestType
    duration: Optional[int] = None
    questions: List[QuestionTreeOut] = Field(default_factory=list)


class PackageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: PackageType
    class_id: Optional[int] = None
    to_start: UtcDatetime
    to_end: UtcDatetime


class PackageTreeOut(PackageOut):
    subtests: List[SubtestTreeOut] = Field(default_factory=list)


class SubtestListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: SubtestType
    duration: Optional[int] = None
