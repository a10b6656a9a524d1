"""Marketing site content and client billing records.

These collections are plain CRUD with no derived state: each builder
merges caller fields onto defaults and checks enumerated values.
"""
from datetime import datetime, timezone

from studio_portal.errors import ValidationError
from studio_portal.models.client_project import check_choice


class DivisionType:
    LABS = 'Labs'
    STUDIOS = 'Studios'
    IMMERSIVE = 'Immersive'
    ENTERTAINMENT = 'Entertainment'

    ALL = [LABS, STUDIOS, IMMERSIVE, ENTERTAINMENT]


class InvoiceStatus:
    PAID = 'paid'
    DUE = 'due'
    OVERDUE = 'overdue'

    ALL = [PAID, DUE, OVERDUE]


class ClientUserRole:
    ADMIN = 'admin'
    MEMBER = 'member'
    VIEWER = 'viewer'

    ALL = [ADMIN, MEMBER, VIEWER]


class ContactSubmissionStatus:
    NEW = 'new'
    IN_PROGRESS = 'in_progress'
    RESPONDED = 'responded'

    ALL = [NEW, IN_PROGRESS, RESPONDED]


def build_division(data: dict) -> dict:
    record = {
        'id': None,
        'type': DivisionType.LABS,
        'title': '',
        'tagline': '',
        'description': '',
        'icon_name': 'FlaskConical',
        'color': 'text-white',
        'theme_color': '#ffffff',
        'banner_image': None,
    }
    record.update(data)
    return record


def validate_division(record: dict) -> dict:
    record.setdefault('type', DivisionType.LABS)
    check_choice('division type', record['type'], DivisionType.ALL)
    return record


def build_project(data: dict) -> dict:
    """Public case study. Year defaults to the current year."""
    record = {
        'id': None,
        'division_id': None,
        'title': '',
        'client': None,
        'summary': '',
        'content': '',
        'images': [],
        'year': str(datetime.now(timezone.utc).year),
    }
    record.update(data)
    return record


def build_team_member(data: dict) -> dict:
    record = {
        'id': None,
        'name': '',
        'role': '',
        'bio': '',
        'image': '',
        'linked_in': None,
        'project_ids': [],
        'csr_activities': [],
        'skills': [],
        'interests': [],
        'quote': None,
        'learning_stats': None,
        'fitness_stats': None,
    }
    record.update(data)
    return record


def build_initiative(data: dict) -> dict:
    record = {
        'id': None,
        'title': '',
        'image': '',
        'description': '',
        'full_content': '',
        'icon_name': 'Heart',
        'color': 'text-white',
        'bg_hover': '',
        'text_hover': '',
        'stats': [],
    }
    record.update(data)
    return record


def build_contact_submission(data: dict) -> dict:
    """Contact form entry. Status and created_at are always server-side."""
    record = {
        'id': None,
        'first_name': '',
        'last_name': '',
        'email': '',
        'subject': 'General Inquiry',
        'message': '',
    }
    record.update(data)
    if not record['subject']:
        record['subject'] = 'General Inquiry'
    record['status'] = ContactSubmissionStatus.NEW
    record['created_at'] = datetime.now(timezone.utc).isoformat()
    return record


def validate_contact_submission(record: dict) -> dict:
    record.setdefault('status', ContactSubmissionStatus.NEW)
    check_choice('submission status', record['status'], ContactSubmissionStatus.ALL)
    return record


def build_client_invoice(data: dict) -> dict:
    record = {
        'id': None,
        'project_id': None,
        'amount': 0,
        'currency': 'USD',
        'status': InvoiceStatus.DUE,
        'issued_on': None,
        'due_on': None,
        'description': '',
        'download_url': None,
    }
    record.update(data)
    return record


def validate_client_invoice(record: dict) -> dict:
    record.setdefault('status', InvoiceStatus.DUE)
    check_choice('invoice status', record['status'], InvoiceStatus.ALL)
    return record


def build_client_user(data: dict) -> dict:
    record = {
        'id': None,
        'name': '',
        'email': '',
        'company': '',
        'role': ClientUserRole.VIEWER,
        'allowed_project_ids': [],
    }
    record.update(data)
    return record


def validate_client_user(record: dict) -> dict:
    record.setdefault('role', ClientUserRole.VIEWER)
    check_choice('client user role', record['role'], ClientUserRole.ALL)
    allowed = record.get('allowed_project_ids') or []
    if not isinstance(allowed, list) or not all(isinstance(p, str) for p in allowed):
        raise ValidationError('allowed_project_ids must be a list of project ids')
    record['allowed_project_ids'] = list(dict.fromkeys(allowed))
    return record
