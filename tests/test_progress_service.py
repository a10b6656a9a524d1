"""Tests for progress derivation and deadline-aware status inference."""
from datetime import date, timedelta

import pytest

from studio_portal.models import ClientProjectStatus, ProjectHealth, TaskStatus
from studio_portal.services.progress_service import (
    calculate_progress,
    count_tasks_by_status,
    days_remaining,
    derive_health,
    derive_status,
    parse_date,
    resolve_status,
    round_half_up,
)


TODAY = date(2026, 3, 10)


def _tasks(*statuses):
    return [{'id': f't{i}', 'title': f'Task {i}', 'status': s} for i, s in enumerate(statuses)]


def _project(end_offset=None, status=ClientProjectStatus.ON_TRACK, tasks=None, **extra):
    end_date = None
    if end_offset is not None:
        end_date = (TODAY + timedelta(days=end_offset)).isoformat()
    project = {'status': status, 'end_date': end_date, 'tasks': tasks or []}
    project.update(extra)
    return project


class TestCalculateProgress:
    """Tests for calculate_progress."""

    @pytest.mark.parametrize('statuses, expected', [
        ((), 0),
        ((TaskStatus.CANCELLED, TaskStatus.CANCELLED), 0),
        ((TaskStatus.DONE, TaskStatus.DONE), 100),
        ((TaskStatus.DONE, TaskStatus.TODO, TaskStatus.IN_PROGRESS), 33),
        ((TaskStatus.DONE, TaskStatus.CANCELLED), 100),
        ((TaskStatus.DONE, TaskStatus.DONE, TaskStatus.TODO), 67),
    ])
    def test_known_values(self, statuses, expected):
        """Matches the expected percentage for common task mixes."""
        assert calculate_progress(_tasks(*statuses)) == expected

    def test_none_is_empty(self):
        """None is treated as an empty task list."""
        assert calculate_progress(None) == 0

    def test_halves_round_up(self):
        """1 of 8 done is 12.5%, which rounds to 13."""
        statuses = [TaskStatus.DONE] + [TaskStatus.TODO] * 7
        assert calculate_progress(_tasks(*statuses)) == 13

    def test_cancelling_open_task_never_decreases_progress(self):
        """Cancelling any non-done task keeps or raises progress."""
        statuses = [TaskStatus.DONE, TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.TODO]
        before = calculate_progress(_tasks(*statuses))
        for index, status in enumerate(statuses):
            if status == TaskStatus.DONE:
                continue
            changed = list(statuses)
            changed[index] = TaskStatus.CANCELLED
            assert calculate_progress(_tasks(*changed)) >= before

    def test_round_half_up(self):
        """Integer rounding sends exact halves upward."""
        assert round_half_up(25, 2) == 13
        assert round_half_up(1, 3) == 0
        assert round_half_up(2, 3) == 1


class TestDeriveStatus:
    """Tests for derive_status and derive_health."""

    def test_far_deadline_is_on_track(self):
        """Ten days out at 50% is On Track."""
        project = _project(10, tasks=_tasks(TaskStatus.DONE, TaskStatus.TODO))
        assert derive_status(project, today=TODAY) == ClientProjectStatus.ON_TRACK

    def test_overdue_is_behind(self):
        """Past the end date is Behind."""
        project = _project(-1, tasks=_tasks(TaskStatus.TODO))
        assert derive_status(project, today=TODAY) == ClientProjectStatus.BEHIND

    def test_overdue_but_nearly_done_is_on_track(self):
        """Progress of 95 or more overrides an overdue deadline."""
        project = _project(-1)
        assert derive_status(project, today=TODAY, progress=95) == ClientProjectStatus.ON_TRACK

    def test_close_deadline_is_at_risk(self):
        """Two days left is At Risk."""
        project = _project(2, tasks=_tasks(TaskStatus.TODO))
        assert derive_status(project, today=TODAY) == ClientProjectStatus.AT_RISK

    def test_three_days_is_still_at_risk(self):
        """The at-risk window includes the third day."""
        assert derive_status(_project(3), today=TODAY, progress=10) == ClientProjectStatus.AT_RISK
        assert derive_status(_project(4), today=TODAY, progress=10) == ClientProjectStatus.ON_TRACK

    def test_close_deadline_nearly_done_is_on_track(self):
        """Progress of 95 or more overrides a close deadline."""
        assert derive_status(_project(2), today=TODAY, progress=100) == ClientProjectStatus.ON_TRACK

    def test_no_end_date_keeps_stored_status(self):
        """Without an end date the stored status is returned."""
        project = _project(None, status=ClientProjectStatus.BEHIND)
        assert derive_status(project, today=TODAY) == ClientProjectStatus.BEHIND

    def test_unparseable_end_date_keeps_stored_status(self):
        """A malformed end date behaves like no end date."""
        project = {'status': ClientProjectStatus.AT_RISK, 'end_date': 'next week'}
        assert derive_status(project, today=TODAY) == ClientProjectStatus.AT_RISK

    def test_health_follows_status(self):
        """Behind is red, At Risk amber, On Track green."""
        assert derive_health(ClientProjectStatus.BEHIND) == ProjectHealth.RED
        assert derive_health(ClientProjectStatus.AT_RISK) == ProjectHealth.AMBER
        assert derive_health(ClientProjectStatus.ON_TRACK) == ProjectHealth.GREEN


class TestResolveStatus:
    """Tests for resolve_status."""

    def test_derived_when_no_override(self):
        """Without an override the derivation applies."""
        result = resolve_status(_project(-2, tasks=_tasks(TaskStatus.TODO)), today=TODAY)
        assert result['status'] == ClientProjectStatus.BEHIND
        assert result['health'] == ProjectHealth.RED
        assert result['source'] == 'derived'
        assert result['days_remaining'] == -2
        assert result['progress'] == 0

    def test_override_wins(self):
        """An explicit override replaces the derived status."""
        project = _project(-2, status_override=ClientProjectStatus.ON_TRACK)
        result = resolve_status(project, today=TODAY)
        assert result['status'] == ClientProjectStatus.ON_TRACK
        assert result['health'] == ProjectHealth.GREEN
        assert result['source'] == 'override'

    def test_does_not_modify_record(self):
        """Stored status and health are left alone."""
        project = _project(-2, health=ProjectHealth.GREEN)
        resolve_status(project, today=TODAY)
        assert project['status'] == ClientProjectStatus.ON_TRACK
        assert project['health'] == ProjectHealth.GREEN


class TestHelpers:
    """Tests for date parsing and task counting helpers."""

    def test_parse_date(self):
        """Accepts dates, ISO dates and ISO datetimes."""
        assert parse_date('2026-03-10') == TODAY
        assert parse_date('2026-03-10T08:30:00Z') == TODAY
        assert parse_date(TODAY) == TODAY
        assert parse_date('') is None
        assert parse_date('soon') is None

    def test_days_remaining_without_end_date(self):
        """No end date gives None."""
        assert days_remaining({'end_date': None}, TODAY) is None

    def test_count_tasks_by_status(self):
        """Every status key is present, unknown statuses ignored."""
        counts = count_tasks_by_status(_tasks(TaskStatus.DONE, TaskStatus.DONE, 'blocked'))
        assert counts == {
            TaskStatus.TODO: 0,
            TaskStatus.IN_PROGRESS: 0,
            TaskStatus.DONE: 2,
            TaskStatus.CANCELLED: 0,
        }
