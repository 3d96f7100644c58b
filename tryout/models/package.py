from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tryout.db.base_class import Base


class PackageType(str, Enum):
    tryout = "tryout"
    drill = "drill"


class SubtestType(str, Enum):
    pu = "pu"          # penalaran umum
    ppu = "ppu"        # pengetahuan dan pemahaman umum
    pbm = "pbm"        # pemahaman bacaan dan menulis
    pk = "pk"          # pengetahuan kuantitatif
    lbindo = "lbindo"  # literasi bahasa indonesia
    lbing = "lbing"    # literasi bahasa inggris
    pm = "pm"          # penalaran matematika


class Package(Base):
    __tablename__ = "packages"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[PackageType] = mapped_column(
        SQLEnum(PackageType, name="package_type", native_enum=False),
        nullable=False,
        default=PackageType.tryout,
        index=True,
    )
    class_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("classrooms.id"), index=True, nullable=True)

    # Submission window. Answer keys and scores stay hidden until to_end.
    to_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    to_end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    subtests: Mapped[List["Subtest"]] = relationship(
        back_populates="package",
        cascade="all, delete-orphan",
        order_by="Subtest.id",
    )


class Subtest(Base):
    __tablename__ = "subtests"

    id: Mapped[int] = mapped_column(primary_key=True)
    package_id: Mapped[int] = mapped_column(ForeignKey("packages.id", ondelete="CASCADE"), index=True, nullable=False)
    type: Mapped[SubtestType] = mapped_column(
        SQLEnum(SubtestType, name="subtest_type", native_enum=False),
        nullable=False,
        index=True,
    )
    # minutes
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)

    package: Mapped["Package"] = relationship(back_populates="subtests")
    questions: Mapped[List["Question"]] = relationship(
        back_populates="subtest",
        cascade="all, delete-orphan",
        order_by="Question.index",
    )
