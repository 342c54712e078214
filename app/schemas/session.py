"""
Training session API schemas.

``trainingLoad`` is never read from input; it is a computed field so that
every parsed or serialised session satisfies ``trainingLoad == duration * rpe``.
"""

import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from app.tracker.load import RPE_MAX, RPE_MIN, compute_training_load


class SessionCreate(BaseModel):
    """Schema for logging a training session."""

    date: datetime.date = Field(..., description="Session date (ISO 8601)")
    duration: int = Field(..., gt=0, description="Duration in minutes")
    rpe: int = Field(..., ge=RPE_MIN, le=RPE_MAX, description="Rating of perceived exertion (1-10)")
    notes: str = Field("", max_length=1000, description="Optional session notes")

    @field_validator("notes", mode="before")
    @classmethod
    def _empty_notes(cls, value: Any) -> Any:
        return "" if value is None else value


class Session(SessionCreate):
    """Schema for a stored training session."""

    model_config = ConfigDict(from_attributes=True)

    @computed_field(alias="trainingLoad")
    @property
    def training_load(self) -> int:
        return compute_training_load(self.duration, self.rpe)
