"""Client portal routes."""
from flask import Blueprint, jsonify, request

from studio_portal.errors import NotFoundError
from studio_portal.routes.auth import require_auth
from studio_portal.services import portal_service

portal_bp = Blueprint('portal', __name__)


@portal_bp.route('/api/portal', methods=['GET'])
@require_auth
def portal_summary():
    """Client portal landing data.

    Query Parameters:
        client_user_id: Scope to the projects this client user may see.
                        Omit for an unscoped preview of every project.

    Returns:
        JSON object with client views, open task count, the upcoming
        milestone and invoices, or 404 for an unknown client user.
    """
    try:
        summary = portal_service.get_portal_summary(request.args.get('client_user_id'))
    except NotFoundError as e:
        return jsonify({'error': str(e)}), 404
    return jsonify({'data': summary})
