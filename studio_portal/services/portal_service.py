"""Client portal views.

The portal shows clients their engagements without internal fields such
as budget usage or the raw status override. A client user only sees the
client projects whose linked project id is in their allowed_project_ids.
"""
from datetime import date
from typing import Optional

from studio_portal.errors import NotFoundError
from studio_portal.models.client_project import TaskStatus, TimelineStatus
from studio_portal.models.content import InvoiceStatus
from studio_portal.services.progress_service import parse_date, resolve_status
from studio_portal.store import store


# Fields copied verbatim into the client view
CLIENT_FIELDS = [
    'id', 'project_id', 'client_name', 'name', 'summary', 'start_date',
    'end_date', 'next_milestone', 'team', 'resources', 'links', 'timeline',
    'updates',
]

CLIENT_TASK_FIELDS = ['id', 'title', 'status', 'owner', 'due_date', 'highlight']


def to_client_view(project: dict, today: Optional[date] = None) -> dict:
    """Reduce a client project to its client-visible fields.

    Status and health are the resolved values, not the stored ones.
    """
    derived = resolve_status(project, today)
    view = {field: project.get(field) for field in CLIENT_FIELDS}
    view['status'] = derived['status']
    view['health'] = derived['health']
    view['progress'] = project.get('progress', 0)
    view['tasks'] = [
        {field: task.get(field) for field in CLIENT_TASK_FIELDS}
        for task in project.get('tasks') or []
    ]
    return view


def get_portal_projects(client_user_id: Optional[str] = None) -> list[dict]:
    """Return the raw client projects visible to a client user.

    Args:
        client_user_id: Client user to scope to. None returns every
                        project (admin preview).

    Raises:
        NotFoundError: If the client user does not exist.
    """
    projects = store.collection('client_projects').list()
    if client_user_id is None:
        return projects

    user = store.collection('client_users').get(client_user_id)
    if user is None:
        raise NotFoundError('Client user not found')
    allowed = set(user.get('allowed_project_ids') or [])
    return [p for p in projects if p.get('project_id') in allowed]


def _open_task_count(projects: list[dict]) -> int:
    closed = (TaskStatus.DONE, TaskStatus.CANCELLED)
    return sum(
        1 for p in projects for t in p.get('tasks') or [] if t.get('status') not in closed
    )


def _upcoming_milestone(projects: list[dict]) -> Optional[dict]:
    candidates = []
    for project in projects:
        for item in project.get('timeline') or []:
            when = parse_date(item.get('date'))
            if when is None or item.get('status') == TimelineStatus.COMPLETE:
                continue
            candidates.append((when, {**item, 'project_id': project.get('id'),
                                      'project_name': project.get('name')}))
    if not candidates:
        return None
    return min(candidates, key=lambda c: c[0])[1]


def get_portal_summary(
    client_user_id: Optional[str] = None,
    today: Optional[date] = None,
) -> dict:
    """Build the client portal landing page data.

    Returns:
        Dictionary with:
            - projects: Client views of the visible projects
            - open_tasks: Tasks neither done nor cancelled
            - upcoming_milestone: Earliest non-complete timeline item, or None
            - invoices: Invoices for the visible projects' linked projects
            - invoices_due: How many of those are not paid

    Raises:
        NotFoundError: If the client user does not exist.
    """
    projects = get_portal_projects(client_user_id)
    linked_ids = {p.get('project_id') for p in projects if p.get('project_id')}
    invoices = [
        inv for inv in store.collection('client_invoices').list()
        if inv.get('project_id') in linked_ids
    ]

    return {
        'projects': [to_client_view(p, today) for p in projects],
        'open_tasks': _open_task_count(projects),
        'upcoming_milestone': _upcoming_milestone(projects),
        'invoices': invoices,
        'invoices_due': sum(1 for inv in invoices if inv.get('status') != InvoiceStatus.PAID),
    }
