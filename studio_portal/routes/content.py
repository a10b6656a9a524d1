"""Content routes: generic CRUD for the plain collections and the contact form.

Divisions, projects, team, initiatives and client invoices can be read
without a token (the public site renders them); client users are admin
only. Every write requires an admin token.
"""
from flask import Blueprint, jsonify, request

from studio_portal.errors import NotFoundError, ValidationError
from studio_portal.routes.auth import require_auth
from studio_portal.services import auth_service, content_service

content_bp = Blueprint('content', __name__)

# URL segment -> (collection name, readable without a token)
RESOURCES = {
    'divisions': ('divisions', True),
    'projects': ('projects', True),
    'team': ('team', True),
    'initiatives': ('initiatives', True),
    'client-invoices': ('client_invoices', True),
    'client-users': ('client_users', False),
}


def _collection_for(resource: str) -> str:
    name, public_read = RESOURCES[resource]
    if not public_read:
        auth_service.check_token(request.headers.get('Authorization'))
    return name


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


# ============================================================================
# Generic CRUD Routes
# ============================================================================

def list_records(resource: str):
    records = content_service.list_records(_collection_for(resource))
    return jsonify({'data': records, 'count': len(records)})


def get_record(resource: str, id: str):
    record = content_service.get_record(_collection_for(resource), id)
    if not record:
        return jsonify({'error': 'Record not found'}), 404
    return jsonify({'data': record})


@require_auth
def create_record(resource: str):
    data = _json_body()
    if data is None:
        return jsonify({'error': 'Request body must be JSON'}), 400
    try:
        record = content_service.create_record(RESOURCES[resource][0], data)
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'data': record}), 201


@require_auth
def update_record(resource: str, id: str):
    data = _json_body()
    if data is None:
        return jsonify({'error': 'Request body must be JSON'}), 400
    try:
        record = content_service.update_record(RESOURCES[resource][0], id, data)
    except NotFoundError as e:
        return jsonify({'error': str(e)}), 404
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'data': record})


@require_auth
def delete_record(resource: str, id: str):
    content_service.delete_record(RESOURCES[resource][0], id)
    return '', 204


for _resource in RESOURCES:
    _slug = _resource.replace('-', '_')
    content_bp.add_url_rule(
        f'/api/{_resource}', endpoint=f'list_{_slug}', view_func=list_records,
        methods=['GET'], defaults={'resource': _resource},
    )
    content_bp.add_url_rule(
        f'/api/{_resource}', endpoint=f'create_{_slug}', view_func=create_record,
        methods=['POST'], defaults={'resource': _resource},
    )
    content_bp.add_url_rule(
        f'/api/{_resource}/<id>', endpoint=f'get_{_slug}', view_func=get_record,
        methods=['GET'], defaults={'resource': _resource},
    )
    content_bp.add_url_rule(
        f'/api/{_resource}/<id>', endpoint=f'update_{_slug}', view_func=update_record,
        methods=['PUT'], defaults={'resource': _resource},
    )
    content_bp.add_url_rule(
        f'/api/{_resource}/<id>', endpoint=f'delete_{_slug}', view_func=delete_record,
        methods=['DELETE'], defaults={'resource': _resource},
    )


# ============================================================================
# Contact Form Routes
# ============================================================================

@content_bp.route('/api/contact', methods=['POST'])
def submit_contact():
    """Accept a public contact form submission.

    Request Body (JSON):
        Required: first_name, email, message
        Optional: last_name, subject (defaults to General Inquiry)

    Returns:
        201 with the stored submission, or 400 on validation error.
    """
    data = _json_body()
    if data is None:
        return jsonify({'error': 'Request body must be JSON'}), 400
    try:
        submission = content_service.submit_contact_form(data)
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'success': True, 'data': submission}), 201


@content_bp.route('/api/contact-submissions', methods=['GET'])
@require_auth
def get_contact_submissions():
    """List contact submissions, newest first."""
    submissions = content_service.list_records('contact_submissions')
    return jsonify({'data': submissions, 'count': len(submissions)})


@content_bp.route('/api/contact-submissions/<id>', methods=['PUT'])
@require_auth
def update_contact_submission(id: str):
    """Change a submission's status.

    Request Body (JSON):
        status: new, in_progress or responded.
    """
    data = _json_body()
    if data is None:
        return jsonify({'error': 'Request body must be JSON'}), 400
    try:
        submission = content_service.update_submission_status(id, data.get('status'))
    except NotFoundError as e:
        return jsonify({'error': str(e)}), 404
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'data': submission})


@content_bp.route('/api/contact-submissions/<id>', methods=['DELETE'])
@require_auth
def delete_contact_submission(id: str):
    content_service.delete_record('contact_submissions', id)
    return '', 204
