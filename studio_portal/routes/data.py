"""Data management routes: export, import, reset and raw collection access.

The collection endpoints are also what the remote store backend talks to
when another instance uses this one as its storage.
"""
from flask import Blueprint, jsonify, request

from studio_portal.errors import NotFoundError, ValidationError
from studio_portal.routes.auth import require_auth
from studio_portal.services import data_service

data_bp = Blueprint('data', __name__, url_prefix='/api/data')


@data_bp.route('/export', methods=['GET'])
@require_auth
def export_data():
    """Every collection keyed by name."""
    return jsonify(data_service.export_data())


@data_bp.route('/import', methods=['POST'])
@require_auth
def import_data():
    """Replace all collections with an export document.

    Returns:
        200 with the stored data, or 400 if the document is invalid.
    """
    payload = request.get_json(silent=True)
    try:
        data = data_service.import_data(payload)
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'success': True, 'data': data})


@data_bp.route('/reset', methods=['POST'])
@require_auth
def reset_data():
    """Reset every collection to the bundled seed data."""
    data = data_service.reset_data()
    return jsonify({'success': True, 'data': data})


@data_bp.route('/collections/<name>', methods=['GET'])
@require_auth
def get_collection(name: str):
    """A collection exactly as persisted.

    Returns:
        {'data': records, 'persisted': bool}; persisted is false (and data
        empty) when the collection has never been saved.
    """
    try:
        records = data_service.get_collection_snapshot(name)
    except NotFoundError as e:
        return jsonify({'error': str(e)}), 404
    return jsonify({'data': records or [], 'persisted': records is not None})


@data_bp.route('/collections/<name>', methods=['PUT'])
@require_auth
def put_collection(name: str):
    """Replace a collection wholesale.

    Request Body (JSON):
        data: Full list of records.
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Request body must be JSON'}), 400
    try:
        records = data_service.put_collection_snapshot(name, body.get('data'))
    except NotFoundError as e:
        return jsonify({'error': str(e)}), 404
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'data': records, 'persisted': True})
