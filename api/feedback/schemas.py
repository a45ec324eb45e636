"""
Pydantic schemas for feedback endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FeedbackCreateRequest(BaseModel):
    """
    Public feedback form payload.

    Presence is checked by the service (a falsy value counts as missing),
    so every field is optional at the schema level.
    """

    model_config = ConfigDict(populate_by_name=True)

    location_id: int | None = Field(default=None, alias="locationId")
    cleanliness: int | None = None
    water_soap: int | None = Field(default=None, alias="waterSoap")
    hygiene: int | None = None
    odor: int | None = None
    comment: str | None = None


class FeedbackCreatedResponse(BaseModel):
    id: int
