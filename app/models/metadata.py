"""
Dataset metadata model.

Key/value rows; the ``version`` row also carries the dataset's
``updated_at`` timestamp, refreshed on every write.
"""

import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from app.core.clock import utcnow


class MetadataRecord(SQLModel, table=True):
    __tablename__ = "metadata"

    key: str = Field(primary_key=True, max_length=50)
    value: Optional[str] = Field(default=None)
    updated_at: datetime.datetime = Field(default_factory=utcnow)
