"""Client project delivery records.

A client project is stored as a plain dict (one JSON object per record)
with nested, display-ordered lists of tasks, timeline milestones, update
log entries and resource links. This module defines the status
vocabularies and the builders that fill type-appropriate defaults and
validate enumerated fields.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from studio_portal.errors import ValidationError


def new_id(prefix: str) -> str:
    """Return a fresh record id such as ``task_3f9c0a1b2d4e``."""
    return f'{prefix}_{uuid.uuid4().hex[:12]}'


def today_iso() -> str:
    """Return today's UTC date as ``YYYY-MM-DD``."""
    return datetime.now(timezone.utc).date().isoformat()


class ClientProjectStatus:
    """Enumeration of client project status labels.

    Stored as the display strings so the JSON snapshot stays readable.
    """
    ON_TRACK = 'On Track'
    AT_RISK = 'At Risk'
    BEHIND = 'Behind'

    ALL = [ON_TRACK, AT_RISK, BEHIND]


class ProjectHealth:
    """Traffic-light risk indicator, independent of the status label."""
    GREEN = 'green'
    AMBER = 'amber'
    RED = 'red'

    ALL = [GREEN, AMBER, RED]


class TaskStatus:
    """Task board columns. Any status may move to any other status."""
    TODO = 'todo'
    IN_PROGRESS = 'in_progress'
    DONE = 'done'
    CANCELLED = 'cancelled'

    ALL = [TODO, IN_PROGRESS, DONE, CANCELLED]


class TimelineStatus:
    COMPLETE = 'complete'
    ACTIVE = 'active'
    UPCOMING = 'upcoming'
    PAUSED = 'paused'

    ALL = [COMPLETE, ACTIVE, UPCOMING, PAUSED]


class UpdateType:
    NOTE = 'note'
    RISK = 'risk'
    DECISION = 'decision'
    WIN = 'win'

    ALL = [NOTE, RISK, DECISION, WIN]


class ResourceType:
    DOC = 'doc'
    DESIGN = 'design'
    REPO = 'repo'
    PROTOTYPE = 'prototype'
    ANALYTICS = 'analytics'
    TICKET = 'ticket'
    STORAGE = 'storage'
    MEETING = 'meeting'

    ALL = [DOC, DESIGN, REPO, PROTOTYPE, ANALYTICS, TICKET, STORAGE, MEETING]


def check_choice(
    field: str,
    value: Optional[str],
    choices: list[str],
    allow_none: bool = False,
) -> None:
    """Raise ValidationError unless value is one of choices.

    None is only accepted when allow_none is set.
    """
    if value is None and allow_none:
        return
    if value not in choices:
        raise ValidationError(
            f"Invalid {field}: {value}. Must be one of: {choices}"
        )


def _require(kind: str, data: dict, fields: list[str]) -> None:
    if not isinstance(data, dict):
        raise ValidationError(f"Each {kind} must be an object")
    missing = [f for f in fields if not data.get(f)]
    if missing:
        raise ValidationError(f"Missing required {kind} fields: {missing}")


# ============================================================================
# Sub-record builders
# ============================================================================

def build_task(data: dict) -> dict:
    """Build a task from caller-supplied fields.

    Idempotent: passing an already-built task returns an equal task with
    the same id.

    Args:
        data: Task fields. Required: title. Optional: id, status (defaults
              to todo), owner, due_date, highlight, notes.

    Returns:
        New task dict.

    Raises:
        ValidationError: If title is missing or status is invalid.
    """
    _require('task', data, ['title'])
    task = {
        'id': new_id('task'),
        'title': '',
        'status': TaskStatus.TODO,
        'owner': '',
        'due_date': None,
        'highlight': '',
    }
    task.update(data)
    if not task['id']:
        task['id'] = new_id('task')
    check_choice('task status', task['status'], TaskStatus.ALL)
    return task


def build_timeline_item(data: dict) -> dict:
    """Build a timeline milestone. Requires label and date."""
    _require('timeline', data, ['label', 'date'])
    item = {
        'id': new_id('tl'),
        'label': '',
        'date': '',
        'status': TimelineStatus.ACTIVE,
        'description': '',
    }
    item.update(data)
    if not item['id']:
        item['id'] = new_id('tl')
    check_choice('timeline status', item['status'], TimelineStatus.ALL)
    return item


def build_update(data: dict) -> dict:
    """Build an update log entry. Requires title; date defaults to today."""
    _require('update', data, ['title'])
    entry = {
        'id': new_id('upd'),
        'title': '',
        'summary': '',
        'author': '',
        'date': today_iso(),
        'type': UpdateType.NOTE,
    }
    entry.update(data)
    if not entry['id']:
        entry['id'] = new_id('upd')
    check_choice('update type', entry['type'], UpdateType.ALL)
    return entry


def build_link(data: dict) -> dict:
    """Build a resource link. Requires label and url."""
    _require('link', data, ['label', 'url'])
    link = {
        'id': new_id('link'),
        'label': '',
        'url': '',
        'type': ResourceType.DOC,
        'description': '',
    }
    link.update(data)
    if not link['id']:
        link['id'] = new_id('link')
    check_choice('link type', link['type'], ResourceType.ALL)
    return link


# ============================================================================
# Client project
# ============================================================================

def build_client_project(data: dict) -> dict:
    """Merge supplied fields onto client project defaults.

    client_name falls back to name. Nested lists are not validated here;
    that happens when the record is normalized for writing.
    """
    record = {
        'id': None,
        'project_id': None,
        'client_name': data.get('name', ''),
        'name': '',
        'summary': '',
        'status': ClientProjectStatus.ON_TRACK,
        'health': ProjectHealth.GREEN,
        'status_override': None,
        'progress': 0,
        'budget_used': 0,
        'start_date': today_iso(),
        'end_date': None,
        'next_milestone': '',
        'team': [],
        'resources': [],
        'tasks': [],
        'timeline': [],
        'updates': [],
        'links': [],
    }
    record.update(data)
    if not record['client_name']:
        record['client_name'] = record['name']
    return record


def validate_client_project(record: dict) -> dict:
    """Validate enumerated fields and rebuild nested sub-records.

    Called on every write. Missing status and health take the defaults but
    an explicit null is rejected. Sub-records without an id get one, team
    ids are de-duplicated keeping first-seen order.

    Returns:
        The same record, modified in place.

    Raises:
        ValidationError: On any invalid enumerated value or sub-record.
    """
    record.setdefault('status', ClientProjectStatus.ON_TRACK)
    record.setdefault('health', ProjectHealth.GREEN)
    check_choice('status', record['status'], ClientProjectStatus.ALL)
    check_choice('health', record['health'], ProjectHealth.ALL)
    record['status_override'] = record.get('status_override') or None
    check_choice(
        'status_override', record['status_override'], ClientProjectStatus.ALL,
        allow_none=True,
    )

    for field in ('team', 'resources', 'tasks', 'timeline', 'updates', 'links'):
        value = record.get(field)
        if value is None:
            record[field] = []
        elif not isinstance(value, list):
            raise ValidationError(f"Field {field} must be a list")

    if not all(isinstance(member, str) for member in record['team']):
        raise ValidationError('Team entries must be member id strings')
    record['team'] = list(dict.fromkeys(record['team']))
    record['tasks'] = [build_task(t) for t in record['tasks']]
    record['timeline'] = [build_timeline_item(t) for t in record['timeline']]
    record['updates'] = [build_update(u) for u in record['updates']]
    record['resources'] = [build_link(r) for r in record['resources']]
    record['links'] = [build_link(link) for link in record['links']]

    try:
        record['budget_used'] = int(record.get('budget_used') or 0)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Invalid budget_used: {record.get('budget_used')}"
        ) from None
    return record
