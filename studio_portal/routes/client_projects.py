"""Client project routes for the admin workspace.

This module provides the RESTful endpoints for client project CRUD and
the inline editors (task board, timeline, updates, links, team and
meetings). All routes require an admin token.
Routes call the service layer; they handle HTTP concerns only.
"""
from typing import Callable

from flask import Blueprint, current_app, jsonify, request

from studio_portal.errors import NotFoundError, ValidationError
from studio_portal.routes.auth import require_auth
from studio_portal.services import client_project_service

client_projects_bp = Blueprint('client_projects', __name__, url_prefix='/api/client-projects')


def _json_body():
    """Return the request JSON object, or None if the body is not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _bad_body():
    return jsonify({'error': 'Request body must be JSON'}), 400


def _apply(operation: Callable[..., dict], *args, status: int = 200):
    """Run a project-returning service call and build the response.

    NotFoundError becomes 404 and ValidationError becomes 400.
    """
    try:
        project = operation(*args)
    except NotFoundError as e:
        return jsonify({'error': str(e)}), 404
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'data': client_project_service.serialize_client_project(project)}), status


# ============================================================================
# Client Project CRUD Routes
# ============================================================================

@client_projects_bp.route('', methods=['GET'])
@require_auth
def get_client_projects():
    """Get all client projects.

    Progress is recomputed from tasks on read; each project carries a
    'derived' block with the resolved status and health.

    Returns:
        JSON array of client projects with count.
    """
    projects = client_project_service.get_all_client_projects()
    return jsonify({
        'data': [client_project_service.serialize_client_project(p) for p in projects],
        'count': len(projects)
    })


@client_projects_bp.route('/<id>', methods=['GET'])
@require_auth
def get_client_project(id: str):
    project = client_project_service.get_client_project(id)
    if not project:
        return jsonify({'error': 'Client project not found'}), 404
    return jsonify({'data': client_project_service.serialize_client_project(project)})


@client_projects_bp.route('', methods=['POST'])
@require_auth
def create_client_project():
    """Create a new client project.

    Request Body (JSON):
        Required: name, project_id
        Optional: any other client project field

    Returns:
        201 with created project data, or 400 on validation error.
    """
    data = _json_body()
    if data is None:
        return _bad_body()
    return _apply(client_project_service.create_client_project, data, status=201)


@client_projects_bp.route('/<id>', methods=['PUT'])
@require_auth
def update_client_project(id: str):
    """Shallow-merge fields onto a client project.

    Returns:
        200 with updated project data, 404 if not found, or 400 on error.
    """
    data = _json_body()
    if data is None:
        return _bad_body()
    return _apply(client_project_service.update_client_project, id, data)


@client_projects_bp.route('/<id>', methods=['DELETE'])
@require_auth
def delete_client_project(id: str):
    """Delete a client project. Deleting a missing id still returns 204."""
    client_project_service.delete_client_project(id)
    return '', 204


@client_projects_bp.route('/<id>/detail', methods=['GET'])
@require_auth
def get_client_project_detail(id: str):
    """Project plus resolved status, linked project, invoices and team."""
    try:
        detail = client_project_service.get_project_detail(id)
    except NotFoundError as e:
        return jsonify({'error': str(e)}), 404
    return jsonify({'data': detail})


# ============================================================================
# Task Board Routes
# ============================================================================

@client_projects_bp.route('/<id>/board', methods=['GET'])
@require_auth
def get_task_board(id: str):
    try:
        board = client_project_service.get_task_board(id)
    except NotFoundError as e:
        return jsonify({'error': str(e)}), 404
    return jsonify({'data': board})


@client_projects_bp.route('/<id>/tasks', methods=['POST'])
@require_auth
def add_task(id: str):
    """Add a task (title required, status defaults to todo)."""
    data = _json_body()
    if data is None:
        return _bad_body()
    return _apply(client_project_service.add_task, id, data, status=201)


@client_projects_bp.route('/<id>/tasks', methods=['PUT'])
@require_auth
def replace_tasks(id: str):
    """Replace the whole task list.

    Request Body (JSON):
        tasks: Full list of tasks.
    """
    data = _json_body()
    if data is None:
        return _bad_body()
    return _apply(client_project_service.replace_tasks, id, data.get('tasks'))


@client_projects_bp.route('/<id>/tasks/<task_id>', methods=['PUT'])
@require_auth
def update_task(id: str, task_id: str):
    data = _json_body()
    if data is None:
        return _bad_body()
    return _apply(client_project_service.update_task, id, task_id, data)


@client_projects_bp.route('/<id>/tasks/<task_id>/move', methods=['POST'])
@require_auth
def move_task(id: str, task_id: str):
    """Move a task to another column.

    Request Body (JSON):
        status: todo, in_progress, done or cancelled.
    """
    data = _json_body()
    if data is None:
        return _bad_body()
    return _apply(client_project_service.move_task, id, task_id, data.get('status'))


@client_projects_bp.route('/<id>/tasks/<task_id>', methods=['DELETE'])
@require_auth
def remove_task(id: str, task_id: str):
    return _apply(client_project_service.remove_task, id, task_id)


# ============================================================================
# Timeline, Update Log and Link Routes
# ============================================================================

@client_projects_bp.route('/<id>/timeline', methods=['POST'])
@require_auth
def add_timeline_item(id: str):
    data = _json_body()
    if data is None:
        return _bad_body()
    return _apply(client_project_service.add_timeline_item, id, data, status=201)


@client_projects_bp.route('/<id>/timeline/<item_id>', methods=['PUT'])
@require_auth
def update_timeline_item(id: str, item_id: str):
    data = _json_body()
    if data is None:
        return _bad_body()
    return _apply(client_project_service.update_timeline_item, id, item_id, data)


@client_projects_bp.route('/<id>/timeline/<item_id>', methods=['DELETE'])
@require_auth
def remove_timeline_item(id: str, item_id: str):
    return _apply(client_project_service.remove_timeline_item, id, item_id)


@client_projects_bp.route('/<id>/updates', methods=['POST'])
@require_auth
def add_update(id: str):
    data = _json_body()
    if data is None:
        return _bad_body()
    return _apply(client_project_service.add_update, id, data, status=201)


@client_projects_bp.route('/<id>/updates/<update_id>', methods=['DELETE'])
@require_auth
def remove_update(id: str, update_id: str):
    return _apply(client_project_service.remove_update, id, update_id)


@client_projects_bp.route('/<id>/links', methods=['POST'])
@require_auth
def add_link(id: str):
    data = _json_body()
    if data is None:
        return _bad_body()
    return _apply(client_project_service.add_link, id, data, status=201)


@client_projects_bp.route('/<id>/links/<link_id>', methods=['DELETE'])
@require_auth
def remove_link(id: str, link_id: str):
    return _apply(client_project_service.remove_link, id, link_id)


# ============================================================================
# Team and Meeting Routes
# ============================================================================

@client_projects_bp.route('/<id>/team/<member_id>', methods=['POST'])
@require_auth
def toggle_team_member(id: str, member_id: str):
    """Assign the team member, or unassign them if already on the team."""
    return _apply(client_project_service.toggle_team_member, id, member_id)


@client_projects_bp.route('/<id>/meetings', methods=['POST'])
@require_auth
def schedule_meeting(id: str):
    """Schedule a meeting.

    Request Body (JSON):
        Required: title, date (YYYY-MM-DD), time
        Optional: note

    Returns:
        201 with the project, now holding a note update and a meeting link.
    """
    data = _json_body()
    if data is None:
        return _bad_body()
    return _apply(
        client_project_service.schedule_meeting,
        id,
        data.get('title'),
        data.get('date'),
        data.get('time'),
        data.get('note'),
        current_app.config.get('MEETING_URL') or client_project_service.DEFAULT_MEETING_URL,
        status=201,
    )
