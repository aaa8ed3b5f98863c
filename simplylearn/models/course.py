import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from simplylearn.db.base_class import Base


class MaterialType(str, enum.Enum):
    PDF = "PDF"
    VIDEO = "Video"
    LINK = "Link"


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    tutor_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    tutor = relationship("User", back_populates="courses")

    materials = relationship(
        "CourseMaterial",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="CourseMaterial.id",
    )

    enrollments = relationship(
        "Enrollment", back_populates="course", cascade="all, delete-orphan"
    )

    assignments = relationship(
        "Assignment", back_populates="course", cascade="all, delete-orphan"
    )

    quizzes = relationship("Quiz", back_populates="course", cascade="all, delete-orphan")

    @property
    def tutor_name(self) -> str | None:
        return self.tutor.name if self.tutor else None


class CourseMaterial(Base):
    __tablename__ = "course_materials"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[MaterialType] = mapped_column(
        Enum(MaterialType, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    url: Mapped[str] = mapped_column(String(1024), nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    course = relationship("Course", back_populates="materials")
