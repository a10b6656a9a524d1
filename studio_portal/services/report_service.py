"""Report service for portfolio statistics and CSV exports.

This module aggregates the client project collection into the figures the
admin dashboard shows: task totals, average progress, the health split,
task status counts, completion rate and the progress distribution.

All functions are pure over a list of client project dicts (only
get_portfolio_stats and export_client_projects_csv read the store) and
none of them raise on empty input.
"""
import csv
import io
from typing import Optional

from studio_portal.models.client_project import ProjectHealth, TaskStatus
from studio_portal.services.progress_service import (
    calculate_progress,
    count_tasks_by_status,
    resolve_status,
    round_half_up,
)
from studio_portal.store import store


# Number of projects shown in the progress distribution chart
PROGRESS_DISTRIBUTION_LIMIT = 10

# CSV export column headers (order matters)
CSV_FIELDNAMES = [
    'ID',
    'Name',
    'Client',
    'Linked Project',
    'Status',
    'Health',
    'Derived Status',
    'Progress',
    'Budget Used',
    'Start Date',
    'End Date',
    'Open Tasks',
    'Next Milestone',
]


def _tasks(project: dict) -> list[dict]:
    return project.get('tasks') or []


def count_tasks(projects: list[dict]) -> int:
    """Total number of tasks across all projects, cancelled included."""
    return sum(len(_tasks(p)) for p in projects)


def count_cancelled_tasks(projects: list[dict]) -> int:
    return sum(
        1 for p in projects for t in _tasks(p) if t.get('status') == TaskStatus.CANCELLED
    )


def project_progress(project: dict) -> int:
    """Progress derived from tasks when there are any, else the stored value."""
    if _tasks(project):
        return calculate_progress(_tasks(project))
    try:
        return int(project.get('progress') or 0)
    except (TypeError, ValueError):
        return 0


def average_progress(projects: list[dict]) -> int:
    """Mean project progress, rounded half up. 0 for no projects."""
    if not projects:
        return 0
    return round_half_up(sum(project_progress(p) for p in projects), len(projects))


def health_distribution(projects: list[dict]) -> dict:
    """Count and percentage of projects per stored health value.

    Returns:
        Dictionary of health -> {'count': int, 'percent': int}. Every
        health key is present; percentages are 0 for no projects.
    """
    total = len(projects)
    distribution = {}
    for health in ProjectHealth.ALL:
        count = sum(1 for p in projects if p.get('health') == health)
        percent = round_half_up(100 * count, total) if total else 0
        distribution[health] = {'count': count, 'percent': percent}
    return distribution


def task_status_counts(projects: list[dict]) -> dict[str, int]:
    """Tasks per status across all projects. All four keys always present."""
    counts = {status: 0 for status in TaskStatus.ALL}
    for project in projects:
        for status, count in count_tasks_by_status(_tasks(project)).items():
            counts[status] += count
    return counts


def completion_rate(counts: dict[str, int]) -> int:
    """Done tasks as a percentage of actionable (non-cancelled) tasks.

    Args:
        counts: Output of task_status_counts.

    Returns:
        Integer percentage; 0 when there are no actionable tasks.
    """
    actionable = sum(counts.values()) - counts.get(TaskStatus.CANCELLED, 0)
    if actionable <= 0:
        return 0
    return round_half_up(100 * counts.get(TaskStatus.DONE, 0), actionable)


def average_tasks_per_project(projects: list[dict]) -> int:
    if not projects:
        return 0
    return round_half_up(count_tasks(projects), len(projects))


def project_status_counts(projects: list[dict]) -> dict[str, int]:
    """Number of projects per stored status label."""
    counts = {}
    for project in projects:
        status = project.get('status')
        if status:
            counts[status] = counts.get(status, 0) + 1
    return counts


def progress_distribution(
    projects: list[dict],
    limit: int = PROGRESS_DISTRIBUTION_LIMIT,
) -> list[dict]:
    """Progress of the first `limit` projects, in stored order."""
    return [
        {'id': p.get('id'), 'name': p.get('name'), 'progress': project_progress(p)}
        for p in projects[:limit]
    ]


def get_portfolio_stats(projects: Optional[list[dict]] = None) -> dict:
    """Compute every dashboard statistic in one pass.

    Stored status and health are used verbatim here; per-project views
    show the resolved status instead.

    Args:
        projects: Client projects to aggregate. Loads the current
                  collection when None.

    Returns:
        Dictionary with:
            - total_projects, total_tasks, total_cancelled
            - average_progress: Rounded mean progress
            - health: Health distribution with counts and percentages
            - task_status_counts: Tasks per status
            - completion_rate: Done / actionable tasks, as a percentage
            - average_tasks_per_project
            - project_status_counts: Projects per stored status
            - progress_distribution: First ten projects' progress
    """
    if projects is None:
        projects = store.collection('client_projects').list()

    counts = task_status_counts(projects)
    return {
        'total_projects': len(projects),
        'total_tasks': count_tasks(projects),
        'total_cancelled': count_cancelled_tasks(projects),
        'average_progress': average_progress(projects),
        'health': health_distribution(projects),
        'task_status_counts': counts,
        'completion_rate': completion_rate(counts),
        'average_tasks_per_project': average_tasks_per_project(projects),
        'project_status_counts': project_status_counts(projects),
        'progress_distribution': progress_distribution(projects),
    }


def export_client_projects_csv(projects: Optional[list[dict]] = None) -> str:
    """Export client projects to CSV format.

    Args:
        projects: Client projects to export. Loads the current collection
                  when None.

    Returns:
        CSV-formatted string with a header row and one row per project.
    """
    if projects is None:
        projects = store.collection('client_projects').list()

    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=CSV_FIELDNAMES)
    writer.writeheader()

    for project in projects:
        counts = count_tasks_by_status(_tasks(project))
        writer.writerow({
            'ID': project.get('id'),
            'Name': project.get('name'),
            'Client': project.get('client_name') or '',
            'Linked Project': project.get('project_id') or '',
            'Status': project.get('status') or '',
            'Health': project.get('health') or '',
            'Derived Status': resolve_status(project)['status'],
            'Progress': project_progress(project),
            'Budget Used': project.get('budget_used') or 0,
            'Start Date': project.get('start_date') or '',
            'End Date': project.get('end_date') or '',
            'Open Tasks': counts[TaskStatus.TODO] + counts[TaskStatus.IN_PROGRESS],
            'Next Milestone': project.get('next_milestone') or '',
        })

    return output.getvalue()
