"""
Pydantic schemas for admin grading endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

GRADES = ("A", "B", "C", "D", "E")


class GradeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    staff_id: int | None = Field(default=None, alias="staffId")
    grade: str | None = None
    note: str | None = None


class GradeCreatedResponse(BaseModel):
    id: int
