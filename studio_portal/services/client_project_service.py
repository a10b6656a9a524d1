"""Client project service for business logic.

This module handles client project CRUD plus the inline editors of the
admin workspace: the task board, timeline milestones, the update log,
resource links, team assignment and meeting scheduling.

Every operation reads the current record, builds the new nested list and
writes it back through the store, so progress is recomputed by the store
whenever tasks change.
"""
import logging
from datetime import date
from typing import Callable, Optional

from studio_portal.errors import NotFoundError, ValidationError
from studio_portal.models.client_project import (
    ResourceType,
    TaskStatus,
    UpdateType,
    build_link,
    build_task,
    build_timeline_item,
    build_update,
    check_choice,
)
from studio_portal.services.progress_service import (
    count_tasks_by_status,
    resolve_status,
)
from studio_portal.store import store

logger = logging.getLogger(__name__)

DEFAULT_MEETING_URL = 'https://meet.google.com/new'


def _collection():
    return store.collection('client_projects')


def serialize_client_project(project: dict, today: Optional[date] = None) -> dict:
    """Return the record with a 'derived' block holding the resolved status."""
    return {**project, 'derived': resolve_status(project, today)}


# ============================================================================
# CRUD
# ============================================================================

def get_all_client_projects() -> list[dict]:
    """Return every client project with progress recomputed on read."""
    return _collection().list()


def get_client_project(id: str) -> Optional[dict]:
    """Get a client project by id, or None if it does not exist."""
    return _collection().get(id)


def create_client_project(data: dict) -> dict:
    """Create a new client project.

    Args:
        data: Project fields. Required: name, project_id. Everything else
              gets a default (status On Track, health green, empty lists).

    Returns:
        The stored client project.

    Raises:
        ValidationError: If a required field is missing or a value invalid.
    """
    return _collection().create(data)


def update_client_project(id: str, data: dict) -> dict:
    """Shallow-merge fields onto a client project.

    A patch containing tasks replaces the whole task list and recomputes
    progress; a patch without tasks keeps them.

    Raises:
        NotFoundError: If the project does not exist.
        ValidationError: If the merged record is invalid.
    """
    return _collection().update(id, data)


def delete_client_project(id: str) -> None:
    """Delete a client project. Missing ids are ignored."""
    _collection().delete(id)


# ============================================================================
# Nested list helpers
# ============================================================================

def _save_list(project_id: str, field: str, items: list[dict]) -> dict:
    return _collection().update(project_id, {field: items})


def _index_of(items: list[dict], item_id: str, label: str) -> int:
    for index, item in enumerate(items):
        if item.get('id') == item_id:
            return index
    raise NotFoundError(f"{label} not found")


def _add_item(project_id: str, field: str, item: dict) -> dict:
    project = _collection().get_or_404(project_id)
    return _save_list(project_id, field, project[field] + [item])


def _update_item(
    project_id: str,
    field: str,
    item_id: str,
    patch: dict,
    build: Callable[[dict], dict],
    label: str,
) -> dict:
    project = _collection().get_or_404(project_id)
    items = project[field]
    index = _index_of(items, item_id, label)
    if not isinstance(patch or {}, dict):
        raise ValidationError(f"{label} changes must be an object")
    changes = {k: v for k, v in (patch or {}).items() if k != 'id'}
    items[index] = build({**items[index], **changes, 'id': item_id})
    return _save_list(project_id, field, items)


def _remove_item(project_id: str, field: str, item_id: str, label: str) -> dict:
    project = _collection().get_or_404(project_id)
    items = project[field]
    _index_of(items, item_id, label)
    return _save_list(project_id, field, [i for i in items if i.get('id') != item_id])


# ============================================================================
# Task board
# ============================================================================

def add_task(project_id: str, data: dict) -> dict:
    """Append a task and return the updated project.

    Raises:
        NotFoundError: If the project does not exist.
        ValidationError: If the title is missing or the status invalid.
    """
    return _add_item(project_id, 'tasks', build_task(data or {}))


def update_task(project_id: str, task_id: str, patch: dict) -> dict:
    """Edit a task's fields in place and return the updated project."""
    return _update_item(project_id, 'tasks', task_id, patch, build_task, 'Task')


def move_task(project_id: str, task_id: str, status: str) -> dict:
    """Move a task to another board column.

    Any status may move to any other; moving to cancelled drops the task
    out of the progress denominator.
    """
    if not status:
        raise ValidationError('Task status is required')
    check_choice('task status', status, TaskStatus.ALL)
    return update_task(project_id, task_id, {'status': status})


def remove_task(project_id: str, task_id: str) -> dict:
    return _remove_item(project_id, 'tasks', task_id, 'Task')


def replace_tasks(project_id: str, tasks: list[dict]) -> dict:
    """Replace the whole task list (bulk editor).

    Raises:
        ValidationError: If tasks is not a list or any task is invalid.
    """
    if not isinstance(tasks, list):
        raise ValidationError('Tasks must be a list')
    _collection().get_or_404(project_id)
    return _save_list(project_id, 'tasks', [build_task(t) for t in tasks])


def get_task_board(project_id: str) -> dict:
    """Group a project's tasks into board columns.

    Returns:
        Dictionary with columns (status -> tasks, in stored order), counts
        per status and the project's progress.
    """
    project = _collection().get_or_404(project_id)
    columns = {status: [] for status in TaskStatus.ALL}
    for task in project['tasks']:
        columns.setdefault(task['status'], []).append(task)
    return {
        'project_id': project_id,
        'columns': columns,
        'counts': count_tasks_by_status(project['tasks']),
        'progress': project['progress'],
    }


# ============================================================================
# Timeline, updates and links
# ============================================================================

def add_timeline_item(project_id: str, data: dict) -> dict:
    return _add_item(project_id, 'timeline', build_timeline_item(data or {}))


def update_timeline_item(project_id: str, item_id: str, patch: dict) -> dict:
    return _update_item(
        project_id, 'timeline', item_id, patch, build_timeline_item, 'Timeline item'
    )


def remove_timeline_item(project_id: str, item_id: str) -> dict:
    return _remove_item(project_id, 'timeline', item_id, 'Timeline item')


def add_update(project_id: str, data: dict) -> dict:
    """Append an update log entry (date defaults to today, type to note)."""
    return _add_item(project_id, 'updates', build_update(data or {}))


def remove_update(project_id: str, update_id: str) -> dict:
    return _remove_item(project_id, 'updates', update_id, 'Update')


def add_link(project_id: str, data: dict) -> dict:
    return _add_item(project_id, 'links', build_link(data or {}))


def remove_link(project_id: str, link_id: str) -> dict:
    return _remove_item(project_id, 'links', link_id, 'Link')


def toggle_team_member(project_id: str, member_id: str) -> dict:
    """Add the member to the project's team, or remove them if present."""
    if not member_id:
        raise ValidationError('Team member id is required')
    project = _collection().get_or_404(project_id)
    team = project['team']
    if member_id in team:
        team = [m for m in team if m != member_id]
    else:
        team = team + [member_id]
    return _collection().update(project_id, {'team': team})


def schedule_meeting(
    project_id: str,
    title: str,
    date: str,
    time: str,
    note: Optional[str] = None,
    meeting_url: str = DEFAULT_MEETING_URL,
) -> dict:
    """Record a meeting as an update entry plus a meeting link.

    Both are written in a single save.

    Args:
        project_id: Client project id.
        title: Meeting title.
        date: Meeting date, YYYY-MM-DD.
        time: Meeting time, e.g. '14:30'.
        note: Optional agenda, used as the update summary.
        meeting_url: Where the meeting link points.

    Returns:
        The updated project.

    Raises:
        ValidationError: If title, date or time is missing.
    """
    missing = [name for name, value in (('title', title), ('date', date), ('time', time))
               if not value]
    if missing:
        raise ValidationError(f"Missing required meeting fields: {missing}")

    project = _collection().get_or_404(project_id)
    update = build_update({
        'title': f'Meeting scheduled: {title}',
        'date': date,
        'type': UpdateType.NOTE,
        'summary': note or f'{title} on {date} at {time}',
    })
    link = build_link({
        'label': f'{title} ({date} {time})',
        'url': meeting_url,
        'type': ResourceType.MEETING,
        'description': note or '',
    })
    logger.info("Scheduling meeting for client project %s on %s", project_id, date)
    return _collection().update(project_id, {
        'updates': project['updates'] + [update],
        'links': project['links'] + [link],
    })


# ============================================================================
# Detail view
# ============================================================================

def get_project_detail(id: str, today: Optional[date] = None) -> dict:
    """Assemble everything the admin workspace shows for one project.

    Weak references are resolved leniently: a missing linked project gives
    None and unknown team ids are skipped.

    Raises:
        NotFoundError: If the client project does not exist.
    """
    project = _collection().get_or_404(id)

    linked_project = None
    if project.get('project_id'):
        linked_project = store.collection('projects').get(project['project_id'])

    invoices = [
        invoice for invoice in store.collection('client_invoices').list()
        if project.get('project_id') and invoice.get('project_id') == project['project_id']
    ]

    members = {m['id']: m for m in store.collection('team').list()}
    team_members = [members[m] for m in project['team'] if m in members]

    return {
        'project': project,
        'derived': resolve_status(project, today),
        'linked_project': linked_project,
        'invoices': invoices,
        'team_members': team_members,
        'task_counts': count_tasks_by_status(project['tasks']),
    }
