"""
Metadata repository.

Reads and touches the ``version`` row that backs the dataset's
``version``/``updatedAt`` fields.
"""

from typing import Optional

from sqlmodel import Session

from app.core.clock import utcnow
from app.models.metadata import MetadataRecord

VERSION_KEY = "version"


class MetadataRepository:
    """Repository for MetadataRecord database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_or_create_version(self, default_version: str) -> MetadataRecord:
        """Get the version row, or create it with ``default_version``."""
        existing = self.session.get(MetadataRecord, VERSION_KEY)
        if existing:
            return existing
        record = MetadataRecord(key=VERSION_KEY, value=default_version)
        self.session.add(record)
        self.session.flush()
        return record

    def touch(self, default_version: str, version: Optional[str] = None) -> MetadataRecord:
        """Refresh ``updated_at`` and optionally replace the version value."""
        record = self.get_or_create_version(default_version)
        if version is not None:
            record.value = version
        record.updated_at = utcnow()
        self.session.add(record)
        self.session.flush()
        return record
