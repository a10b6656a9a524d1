"""Progress derivation and deadline-aware status inference.

Pure functions over client project records: nothing here reads or writes
the entity store. The store's client project normalizer calls
calculate_progress on every write that touches tasks, so every consumer
sees the same derived value.
"""
from datetime import date, datetime, timezone
from typing import Optional

from studio_portal.models.client_project import (
    ClientProjectStatus,
    ProjectHealth,
    TaskStatus,
)


# Progress at or above this counts as on track whatever the deadline
ON_TRACK_PROGRESS = 95

# Days before the end date at which a project is flagged at risk
AT_RISK_DAYS = 3

HEALTH_BY_STATUS = {
    ClientProjectStatus.ON_TRACK: ProjectHealth.GREEN,
    ClientProjectStatus.AT_RISK: ProjectHealth.AMBER,
    ClientProjectStatus.BEHIND: ProjectHealth.RED,
}


def round_half_up(numerator: int, denominator: int) -> int:
    """Round numerator / denominator to the nearest int, halves up.

    Uses integer arithmetic so 12.5 always rounds to 13, unlike round().
    The denominator must be positive.
    """
    return (2 * numerator + denominator) // (2 * denominator)


def calculate_progress(tasks: Optional[list[dict]]) -> int:
    """Compute the completion percentage of a task list.

    Cancelled tasks are excluded from the denominator and never count as
    done. An empty or fully cancelled list is 0% complete.

    Args:
        tasks: Task dicts with a 'status' key. None is treated as empty.

    Returns:
        Integer percentage 0-100.
    """
    actionable = [t for t in tasks or [] if t.get('status') != TaskStatus.CANCELLED]
    if not actionable:
        return 0
    done = sum(1 for t in actionable if t.get('status') == TaskStatus.DONE)
    return round_half_up(100 * done, len(actionable))


def parse_date(value) -> Optional[date]:
    """Parse an ISO date or datetime string into a date.

    Returns None for empty or unparseable values rather than raising, so
    a malformed end date behaves like an open-ended engagement.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _today() -> date:
    return datetime.now(timezone.utc).date()


def days_remaining(project: dict, today: Optional[date] = None) -> Optional[int]:
    """Whole days from today until the project's end date.

    Negative when overdue, None when there is no usable end date.
    """
    end = parse_date(project.get('end_date'))
    if end is None:
        return None
    return (end - (today or _today())).days


def derive_status(
    project: dict,
    today: Optional[date] = None,
    progress: Optional[int] = None,
) -> str:
    """Infer a status label from progress and deadline proximity.

    Rules, in order:
    - no end date: the stored status is returned unchanged
    - progress >= 95: On Track
    - past the end date: Behind
    - 3 or fewer days left: At Risk
    - otherwise: On Track

    Args:
        project: Client project record.
        today: Reference date (defaults to today, UTC).
        progress: Progress to use; derived from the tasks when omitted.

    Returns:
        One of ClientProjectStatus.ALL.
    """
    remaining = days_remaining(project, today)
    if remaining is None:
        return project.get('status') or ClientProjectStatus.ON_TRACK

    if progress is None:
        progress = calculate_progress(project.get('tasks'))

    if progress >= ON_TRACK_PROGRESS:
        return ClientProjectStatus.ON_TRACK
    if remaining < 0:
        return ClientProjectStatus.BEHIND
    if remaining <= AT_RISK_DAYS:
        return ClientProjectStatus.AT_RISK
    return ClientProjectStatus.ON_TRACK


def derive_health(status: str) -> str:
    """Map a status label to its traffic-light health."""
    return HEALTH_BY_STATUS.get(status, ProjectHealth.GREEN)


def resolve_status(project: dict, today: Optional[date] = None) -> dict:
    """Resolve the status every per-project view should display.

    An explicit status_override wins; otherwise the deadline-aware
    derivation applies. Health always follows the resolved status. The
    stored status and health fields are never modified.

    Returns:
        Dictionary with status, health, days_remaining, progress and
        source ('override' or 'derived').
    """
    progress = calculate_progress(project.get('tasks'))
    override = project.get('status_override')
    if override:
        status = override
        source = 'override'
    else:
        status = derive_status(project, today=today, progress=progress)
        source = 'derived'

    return {
        'status': status,
        'health': derive_health(status),
        'days_remaining': days_remaining(project, today),
        'progress': progress,
        'source': source,
    }


def count_tasks_by_status(tasks: Optional[list[dict]]) -> dict[str, int]:
    """Count tasks per status. Every status key is always present."""
    counts = {status: 0 for status in TaskStatus.ALL}
    for task in tasks or []:
        status = task.get('status')
        if status in counts:
            counts[status] += 1
    return counts
