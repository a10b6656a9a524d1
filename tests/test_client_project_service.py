"""Tests for the client project service layer.

Covers CRUD, the inline task board, timeline/update/link editors, team
toggling, meeting scheduling and the assembled detail view.
"""
from datetime import date
from unittest import mock

import pytest

from studio_portal.errors import NotFoundError, ValidationError
from studio_portal.models import (
    ClientProjectStatus,
    ProjectHealth,
    ResourceType,
    TaskStatus,
    UpdateType,
)
from studio_portal.services import client_project_service as service
from studio_portal.store import store


class TestClientProjectCrud:
    """Tests for create, get, update and delete."""

    def test_create_with_defaults(self, app):
        """Only name and project_id are needed."""
        project = service.create_client_project({'name': 'Museum Tour', 'project_id': 'p3'})

        assert project['id'].startswith('client_proj_')
        assert project['client_name'] == 'Museum Tour'
        assert project['status'] == ClientProjectStatus.ON_TRACK
        assert project['health'] == ProjectHealth.GREEN
        assert project['status_override'] is None
        assert project['progress'] == 0
        assert project['tasks'] == []

    def test_create_missing_name(self, app):
        """Missing name raises ValidationError."""
        with pytest.raises(ValidationError):
            service.create_client_project({'project_id': 'p1'})

    def test_create_invalid_status(self, app):
        """An unknown status label is rejected."""
        with pytest.raises(ValidationError):
            service.create_client_project({'name': 'X', 'project_id': 'p1', 'status': 'Done'})

    def test_get_missing_returns_none(self, app):
        assert service.get_client_project('nope') is None

    def test_update_merges(self, app, create_client_project):
        """Fields outside the patch are kept."""
        project = create_client_project(summary='Old', budget_used=10)
        updated = service.update_client_project(project['id'], {'summary': 'New'})
        assert updated['summary'] == 'New'
        assert updated['budget_used'] == 10

    def test_update_status_override(self, app, create_client_project):
        """Setting and clearing the status override."""
        project = create_client_project()
        updated = service.update_client_project(
            project['id'], {'status_override': ClientProjectStatus.BEHIND}
        )
        assert updated['status_override'] == ClientProjectStatus.BEHIND

        cleared = service.update_client_project(project['id'], {'status_override': ''})
        assert cleared['status_override'] is None

    def test_update_missing(self, app):
        with pytest.raises(NotFoundError):
            service.update_client_project('nope', {'summary': 'x'})

    def test_delete_twice(self, app, create_client_project):
        """The second delete is a no-op."""
        project = create_client_project()
        service.delete_client_project(project['id'])
        service.delete_client_project(project['id'])
        assert service.get_all_client_projects() == []

    def test_serialize_adds_derived_block(self, app, create_client_project):
        """The derived block carries the resolved status."""
        project = create_client_project(end_date='2026-01-10')
        data = service.serialize_client_project(project, today=date(2026, 1, 20))
        assert data['derived']['status'] == ClientProjectStatus.BEHIND
        assert data['status'] == ClientProjectStatus.ON_TRACK


class TestTaskBoard:
    """Tests for the inline task operations."""

    def test_add_task_recomputes_progress(self, app, create_client_project):
        """Adding an open task to a finished project lowers progress."""
        project = create_client_project(tasks=[{'title': 'A', 'status': TaskStatus.DONE}])
        assert project['progress'] == 100

        updated = service.add_task(project['id'], {'title': 'B'})

        assert updated['progress'] == 50
        assert updated['tasks'][-1]['status'] == TaskStatus.TODO
        assert updated['tasks'][-1]['id'].startswith('task_')

    def test_add_task_requires_title(self, app, create_client_project):
        project = create_client_project()
        with pytest.raises(ValidationError):
            service.add_task(project['id'], {'owner': 'Sam'})

    def test_add_task_missing_project(self, app):
        with pytest.raises(NotFoundError):
            service.add_task('nope', {'title': 'A'})

    def test_update_task_edits_fields(self, app, create_client_project, sample_tasks):
        """Only the patched fields change."""
        project = create_client_project(tasks=sample_tasks)
        updated = service.update_task(project['id'], 'task-4', {'owner': 'Sam', 'id': 'x'})
        task = updated['tasks'][3]
        assert task['id'] == 'task-4'
        assert task['owner'] == 'Sam'
        assert task['title'] == 'Load testing'

    def test_move_task(self, app, create_client_project, sample_tasks):
        """Moving a task between columns recomputes progress."""
        project = create_client_project(tasks=sample_tasks)
        updated = service.move_task(project['id'], 'task-3', TaskStatus.DONE)
        assert updated['progress'] == 75

    def test_move_task_invalid_status(self, app, create_client_project, sample_tasks):
        project = create_client_project(tasks=sample_tasks)
        with pytest.raises(ValidationError):
            service.move_task(project['id'], 'task-3', 'blocked')
        with pytest.raises(ValidationError):
            service.move_task(project['id'], 'task-3', None)

    def test_move_unknown_task(self, app, create_client_project, sample_tasks):
        project = create_client_project(tasks=sample_tasks)
        with pytest.raises(NotFoundError):
            service.move_task(project['id'], 'task-99', TaskStatus.DONE)

    def test_remove_task(self, app, create_client_project, sample_tasks):
        """Removing the last open tasks completes the project."""
        project = create_client_project(tasks=sample_tasks)
        service.remove_task(project['id'], 'task-3')
        updated = service.remove_task(project['id'], 'task-4')
        assert [t['id'] for t in updated['tasks']] == ['task-1', 'task-2']
        assert updated['progress'] == 100

    def test_remove_unknown_task(self, app, create_client_project):
        project = create_client_project()
        with pytest.raises(NotFoundError):
            service.remove_task(project['id'], 'task-99')

    def test_replace_tasks(self, app, create_client_project, sample_tasks):
        """The bulk editor replaces the list and recomputes progress."""
        project = create_client_project(tasks=sample_tasks)
        updated = service.replace_tasks(project['id'], [
            {'title': 'Only task', 'status': TaskStatus.DONE},
        ])
        assert len(updated['tasks']) == 1
        assert updated['progress'] == 100

    def test_task_writes_leave_progress_to_the_store(self, app, create_client_project):
        """Task edits write only the task list; the store derives progress."""
        project = create_client_project()
        spec = store.collection('client_projects').spec
        with mock.patch.object(spec, 'sync', wraps=spec.sync) as sync:
            updated = service.add_task(project['id'], {'title': 'Ship'})

        written = [call.args[1] for call in sync.call_args_list if call.args[1] is not None]
        assert written == [{'tasks'}]
        assert updated['progress'] == 0

    def test_replace_tasks_rejects_non_objects(self, app, create_client_project):
        project = create_client_project()
        with pytest.raises(ValidationError):
            service.replace_tasks(project['id'], ['oops'])

    def test_replace_tasks_rejects_non_list(self, app, create_client_project):
        project = create_client_project()
        with pytest.raises(ValidationError):
            service.replace_tasks(project['id'], {'title': 'A'})

    def test_task_board_columns(self, app, create_client_project, sample_tasks):
        """Tasks are grouped by status in stored order."""
        project = create_client_project(tasks=sample_tasks)
        board = service.get_task_board(project['id'])

        assert [t['id'] for t in board['columns'][TaskStatus.DONE]] == ['task-1', 'task-2']
        assert board['columns'][TaskStatus.CANCELLED] == []
        assert board['counts'][TaskStatus.TODO] == 1
        assert board['progress'] == 50


class TestSubRecords:
    """Tests for timeline, updates, links and team."""

    def test_timeline_add_update_remove(self, app, create_client_project):
        project = create_client_project()
        updated = service.add_timeline_item(project['id'], {'label': 'Beta', 'date': '2026-05-01'})
        item = updated['timeline'][0]
        assert item['status'] == 'active'

        updated = service.update_timeline_item(project['id'], item['id'], {'status': 'complete'})
        assert updated['timeline'][0]['status'] == 'complete'
        assert updated['timeline'][0]['label'] == 'Beta'

        updated = service.remove_timeline_item(project['id'], item['id'])
        assert updated['timeline'] == []

    def test_timeline_requires_label_and_date(self, app, create_client_project):
        project = create_client_project()
        with pytest.raises(ValidationError):
            service.add_timeline_item(project['id'], {'label': 'Beta'})

    def test_timeline_invalid_status(self, app, create_client_project):
        project = create_client_project()
        with pytest.raises(ValidationError):
            service.add_timeline_item(
                project['id'], {'label': 'Beta', 'date': '2026-05-01', 'status': 'late'}
            )

    def test_add_update_defaults(self, app, create_client_project):
        """Date defaults to today and type to note."""
        project = create_client_project()
        updated = service.add_update(project['id'], {'title': 'Kickoff done'})
        entry = updated['updates'][0]
        assert entry['type'] == UpdateType.NOTE
        assert len(entry['date']) == 10

        updated = service.remove_update(project['id'], entry['id'])
        assert updated['updates'] == []

    def test_add_link_requires_url(self, app, create_client_project):
        project = create_client_project()
        with pytest.raises(ValidationError):
            service.add_link(project['id'], {'label': 'Board'})

    def test_add_and_remove_link(self, app, create_client_project):
        project = create_client_project()
        updated = service.add_link(project['id'], {'label': 'Board', 'url': 'https://x.io'})
        link = updated['links'][0]
        assert link['type'] == ResourceType.DOC

        updated = service.remove_link(project['id'], link['id'])
        assert updated['links'] == []

    def test_remove_unknown_link(self, app, create_client_project):
        project = create_client_project()
        with pytest.raises(NotFoundError):
            service.remove_link(project['id'], 'link-99')

    def test_toggle_team_member(self, app, create_client_project):
        """Toggling adds then removes the member."""
        project = create_client_project(team=['t1'])
        updated = service.toggle_team_member(project['id'], 't2')
        assert updated['team'] == ['t1', 't2']
        updated = service.toggle_team_member(project['id'], 't1')
        assert updated['team'] == ['t2']

    def test_team_is_deduplicated(self, app, create_client_project):
        project = create_client_project(team=['t1', 't1', 't2'])
        assert project['team'] == ['t1', 't2']


class TestScheduleMeeting:
    """Tests for schedule_meeting."""

    def test_adds_update_and_link(self, app, create_client_project):
        """A meeting adds a note update and a meeting link in one write."""
        project = create_client_project()
        updated = service.schedule_meeting(
            project['id'], 'Sprint review', '2026-04-02', '14:30', note='Demo the beta'
        )

        update = updated['updates'][-1]
        assert update['type'] == UpdateType.NOTE
        assert update['date'] == '2026-04-02'
        assert 'Sprint review' in update['title']
        assert update['summary'] == 'Demo the beta'

        link = updated['links'][-1]
        assert link['type'] == ResourceType.MEETING
        assert link['url'] == service.DEFAULT_MEETING_URL
        assert '14:30' in link['label']

    def test_custom_meeting_url(self, app, create_client_project):
        project = create_client_project()
        updated = service.schedule_meeting(
            project['id'], 'Sync', '2026-04-02', '09:00', meeting_url='https://zoom.example/j/1'
        )
        assert updated['links'][-1]['url'] == 'https://zoom.example/j/1'

    def test_requires_date_and_time(self, app, create_client_project):
        project = create_client_project()
        with pytest.raises(ValidationError):
            service.schedule_meeting(project['id'], 'Sync', '', '09:00')
        assert service.get_client_project(project['id'])['updates'] == []


class TestProjectDetail:
    """Tests for get_project_detail."""

    def test_resolves_references(self, app, create_client_project, sample_tasks):
        """Linked project, invoices and team members are resolved."""
        store.collection('projects').create({'id': 'p1', 'title': 'Forecasting', 'division_id': 'd1'})
        store.collection('team').create({'id': 't1', 'name': 'Sarah', 'role': 'Lead'})
        store.collection('client_invoices').create({
            'project_id': 'p1', 'amount': 100, 'currency': 'USD',
            'issued_on': '2026-01-01', 'due_on': '2026-02-01',
        })
        store.collection('client_invoices').create({
            'project_id': 'p9', 'amount': 50, 'currency': 'USD',
            'issued_on': '2026-01-01', 'due_on': '2026-02-01',
        })
        project = create_client_project(
            project_id='p1', team=['t1', 'ghost'], tasks=sample_tasks, end_date='2026-01-12'
        )

        detail = service.get_project_detail(project['id'], today=date(2026, 1, 10))

        assert detail['linked_project']['title'] == 'Forecasting'
        assert len(detail['invoices']) == 1
        assert [m['id'] for m in detail['team_members']] == ['t1']
        assert detail['task_counts'][TaskStatus.DONE] == 2
        assert detail['derived']['status'] == ClientProjectStatus.AT_RISK
        assert detail['derived']['health'] == ProjectHealth.AMBER

    def test_missing_linked_project(self, app, create_client_project):
        """A dangling project_id gives None, not an error."""
        project = create_client_project(project_id='gone')
        detail = service.get_project_detail(project['id'])
        assert detail['linked_project'] is None
        assert detail['invoices'] == []

    def test_missing_project(self, app):
        with pytest.raises(NotFoundError):
            service.get_project_detail('nope')


class TestEndToEnd:
    """The full task board lifecycle against the memory store."""

    def test_progress_through_lifecycle(self, app, create_client_project, sample_tasks):
        """50 -> 75 -> 100 -> deleted -> delete again is a no-op."""
        project = create_client_project(tasks=sample_tasks)
        assert project['progress'] == 50

        project = service.move_task(project['id'], 'task-3', TaskStatus.DONE)
        assert project['progress'] == 75

        project = service.move_task(project['id'], 'task-4', TaskStatus.CANCELLED)
        assert project['progress'] == 100

        service.delete_client_project(project['id'])
        assert all(p['id'] != project['id'] for p in service.get_all_client_projects())

        service.delete_client_project(project['id'])
        assert service.get_all_client_projects() == []
