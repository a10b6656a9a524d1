"""Collection definitions for the entity store.

Each CollectionSpec says how to build defaults for a new record, which
fields are required on create, and how to normalize a record on write
and on read. The client project collection is where progress derivation is
wired in; backends never see it.
"""
from typing import Callable, Optional

from studio_portal.errors import ValidationError
from studio_portal.models.client_project import (
    build_client_project,
    validate_client_project,
)
from studio_portal.models.content import (
    build_client_invoice,
    build_client_user,
    build_contact_submission,
    build_division,
    build_initiative,
    build_project,
    build_team_member,
    validate_client_invoice,
    validate_client_user,
    validate_contact_submission,
    validate_division,
)


def _unchanged(record: dict) -> dict:
    return record


class CollectionSpec:
    """Describes one collection of records.

    Attributes:
        name: Storage key, e.g. 'client_projects'.
        label: Human-readable record name used in error messages.
        id_prefix: Prefix for generated ids.
        build: Merges caller fields onto defaults for a new record.
        required: Fields that must be non-empty on create.
        validate: Checks/normalizes a record before it is written.
        sync: Derives computed fields. Called as sync(record, written)
              where written is the set of fields supplied by the write,
              or None when the record is being read.
        newest_first: Insert new records at the front instead of the end.
    """

    def __init__(
        self,
        name: str,
        label: str,
        id_prefix: str,
        build: Callable[[dict], dict],
        required: tuple = (),
        validate: Callable[[dict], dict] = _unchanged,
        sync: Optional[Callable[[dict, Optional[set]], dict]] = None,
        newest_first: bool = False,
    ):
        self.name = name
        self.label = label
        self.id_prefix = id_prefix
        self.build = build
        self.required = required
        self.validate = validate
        self.sync = sync
        self.newest_first = newest_first

    def check_required(self, data: dict) -> None:
        """Raise ValidationError listing any missing required fields.

        Zero and False count as present; None and empty strings do not.
        """
        missing = [f for f in self.required if data.get(f) is None or data.get(f) == '']
        if missing:
            raise ValidationError(f"Missing required fields: {missing}")

    def on_write(self, record: dict, written: set) -> dict:
        record = self.validate(record)
        if self.sync is not None:
            record = self.sync(record, written)
        return record

    def on_read(self, record: dict) -> dict:
        if self.sync is not None:
            record = self.sync(record, None)
        return record


def _percent(value) -> int:
    try:
        number = int(round(float(value or 0)))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid progress: {value}") from None
    return max(0, min(100, number))


def sync_client_project_progress(record: dict, written: Optional[set] = None) -> dict:
    """Keep a client project's progress consistent with its tasks.

    Progress is recomputed whenever the write supplied tasks (even an
    empty list) and whenever the record has tasks at all, including on
    read, so hand-edited snapshots self-correct. With no tasks and no task
    write, the stored value is kept, clamped to 0-100.
    """
    # Imported here: the services package imports the store at load time
    from studio_portal.services.progress_service import calculate_progress

    tasks = record.get('tasks') or []
    if tasks or (written is not None and 'tasks' in written):
        record['progress'] = calculate_progress(tasks)
        return record

    try:
        record['progress'] = _percent(record.get('progress'))
    except ValidationError:
        if written is not None:
            raise
        record['progress'] = 0
    return record


CLIENT_PROJECTS = CollectionSpec(
    'client_projects', 'Client project', 'client_proj',
    build=build_client_project,
    required=('name', 'project_id'),
    validate=validate_client_project,
    sync=sync_client_project_progress,
)

COLLECTIONS = [
    CollectionSpec(
        'divisions', 'Division', 'div',
        build=build_division, required=('title',), validate=validate_division,
    ),
    CollectionSpec(
        'projects', 'Project', 'proj',
        build=build_project, required=('title', 'division_id'),
    ),
    CollectionSpec(
        'team', 'Team member', 'team',
        build=build_team_member, required=('name', 'role'),
    ),
    CollectionSpec(
        'initiatives', 'Initiative', 'init',
        build=build_initiative, required=('title',),
    ),
    CollectionSpec(
        'contact_submissions', 'Submission', 'submission',
        build=build_contact_submission,
        required=('first_name', 'email', 'message'),
        validate=validate_contact_submission,
        newest_first=True,
    ),
    CLIENT_PROJECTS,
    CollectionSpec(
        'client_invoices', 'Invoice', 'inv',
        build=build_client_invoice,
        required=('project_id', 'amount', 'currency', 'issued_on', 'due_on'),
        validate=validate_client_invoice,
    ),
    CollectionSpec(
        'client_users', 'Client user', 'client',
        build=build_client_user, required=('name', 'email'),
        validate=validate_client_user,
    ),
]
