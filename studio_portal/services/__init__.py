"""Business logic services package.

This package contains service modules that implement business logic.
Routes call services; services go through the entity store.
This separation keeps routes thin and logic testable.
"""
from studio_portal.services import (
    auth_service,
    client_project_service,
    content_service,
    data_service,
    portal_service,
    progress_service,
    report_service,
)
from studio_portal.services.progress_service import (
    calculate_progress,
    derive_health,
    derive_status,
    resolve_status,
)
from studio_portal.services.report_service import get_portfolio_stats

__all__ = [
    # Modules
    'auth_service',
    'client_project_service',
    'content_service',
    'data_service',
    'portal_service',
    'progress_service',
    'report_service',
    # Progress and status derivation
    'calculate_progress',
    'derive_health',
    'derive_status',
    'resolve_status',
    # Reports
    'get_portfolio_stats',
]
