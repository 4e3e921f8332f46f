# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic progress request and response models."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

MIN_LEVEL = 1
MAX_LEVEL = 10

REQUIRED_FIELDS: tuple[str, ...] = (
    "tenant_id",
    "user_id",
    "level",
    "course_id",
    "course_name",
    "credits",
    "grade",
    "status",
    "period",
)

NO_COURSES_AT_LEVEL = "Student has not taken a course at this level."

Grade = bool | int | float | str

Credits = Annotated[StrictInt, Field(gt=0)] | Annotated[StrictFloat, Field(gt=0)]


class ProgressRecordCreate(BaseModel):
    """One course taken by one student, as submitted for recording."""

    model_config = ConfigDict(extra="ignore")

    tenant_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    level: StrictInt = Field(ge=MIN_LEVEL, le=MAX_LEVEL, description="Curriculum level")
    course_id: str = Field(min_length=1)
    course_name: str = Field(min_length=1)
    credits: Credits
    grade: Grade
    status: str = Field(min_length=1, description="e.g. completed, in_progress")
    period: str = Field(min_length=1, description="Academic term identifier")


class CourseSummary(BaseModel):
    """Course entry inside one level of the grouped view."""

    model_config = ConfigDict(from_attributes=True)

    course_id: str
    course_name: str
    credits: int | float
    grade: Grade
    status: str
    period: str


class AcademicProgressResponse(BaseModel):
    """Grouped progress view for one student.

    ``academic_progress`` maps every level 1..10 to its courses, or to
    NO_COURSES_AT_LEVEL when the student has none at that level.
    """

    tenant_id: str
    user_id: str
    academic_progress: dict[int, list[CourseSummary] | str]


class ProgressCreatedResponse(BaseModel):
    """Confirmation returned after a record is created."""

    message: str = "Academic progress recorded successfully."


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    error: str
