"""Collection snapshot model for the database store backend.

Each row holds the full, ordered list of records for one collection.
Writing a collection replaces its row in a single commit, so readers
never observe a partially written collection.
"""
from datetime import datetime, timezone


def _utcnow():
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)

from studio_portal import db


class CollectionSnapshot(db.Model):
    """SQLAlchemy model holding one collection's records as JSON.

    Attributes:
        name: Collection name, e.g. 'client_projects' (primary key).
        records: Ordered list of record dicts.
        updated_at: Timestamp of the last successful save.
    """
    __tablename__ = 'collection_snapshots'

    name: str = db.Column(db.String(100), primary_key=True)
    records: list = db.Column(db.JSON, nullable=False, default=list)
    updated_at: datetime = db.Column(
        db.DateTime,
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow
    )

    def __repr__(self) -> str:
        """Return string representation of the snapshot."""
        return f'<CollectionSnapshot {self.name}: {len(self.records or [])} records>'
