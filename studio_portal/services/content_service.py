"""Content service for the marketing site and client records.

Thin CRUD over the plain collections (divisions, projects, team,
initiatives, client invoices, client users and contact submissions).
Routes call these functions; they go through the entity store.
"""
import logging
from typing import Optional

from studio_portal.errors import ValidationError
from studio_portal.models.content import ContactSubmissionStatus
from studio_portal.models.client_project import check_choice
from studio_portal.store import store

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ['first_name', 'last_name', 'email', 'subject', 'message']


def list_records(name: str) -> list[dict]:
    return store.collection(name).list()


def get_record(name: str, id: str) -> Optional[dict]:
    return store.collection(name).get(id)


def create_record(name: str, data: dict) -> dict:
    """Create a record in the named collection.

    Raises:
        NotFoundError: If the collection name is unknown.
        ValidationError: If required fields are missing or a value invalid.
    """
    return store.collection(name).create(data)


def update_record(name: str, id: str, data: dict) -> dict:
    return store.collection(name).update(id, data)


def delete_record(name: str, id: str) -> None:
    store.collection(name).delete(id)


# ============================================================================
# Contact form
# ============================================================================

def submit_contact_form(data: dict) -> dict:
    """Store a public contact form submission.

    Only the form fields are accepted; id, status and created_at are
    always assigned server-side and the newest submission is listed first.

    Raises:
        ValidationError: If first_name, email or message is missing.
    """
    fields = {k: v for k, v in (data or {}).items() if k in CONTACT_FIELDS}
    if fields.get('email') and '@' not in str(fields['email']):
        raise ValidationError(f"Invalid email: {fields['email']}")
    submission = store.collection('contact_submissions').create(fields)
    logger.info("Contact submission received: %s", submission['id'])
    return submission


def update_submission_status(id: str, status: str) -> dict:
    """Move a contact submission through new -> in_progress -> responded."""
    if not status:
        raise ValidationError('Status is required')
    check_choice('submission status', status, ContactSubmissionStatus.ALL)
    return store.collection('contact_submissions').update(id, {'status': status})
