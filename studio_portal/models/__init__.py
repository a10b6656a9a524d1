"""Record models package.

Status vocabularies and record builders for every collection, plus the
SQLAlchemy model used by the database store backend.
"""
from studio_portal.models.client_project import (
    ClientProjectStatus,
    ProjectHealth,
    ResourceType,
    TaskStatus,
    TimelineStatus,
    UpdateType,
)
from studio_portal.models.content import (
    ClientUserRole,
    ContactSubmissionStatus,
    DivisionType,
    InvoiceStatus,
)
from studio_portal.models.snapshot import CollectionSnapshot

__all__ = [
    'ClientProjectStatus',
    'ProjectHealth',
    'ResourceType',
    'TaskStatus',
    'TimelineStatus',
    'UpdateType',
    'ClientUserRole',
    'ContactSubmissionStatus',
    'DivisionType',
    'InvoiceStatus',
    'CollectionSnapshot',
]
