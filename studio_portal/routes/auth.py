"""Authentication routes and the require_auth decorator."""
from functools import wraps

from flask import Blueprint, g, jsonify, request

from studio_portal.errors import ValidationError
from studio_portal.services import auth_service

auth_bp = Blueprint('auth', __name__)


def require_auth(view):
    """Reject the request with 401 unless it carries a valid bearer token.

    The UnauthorizedError raised here is turned into a 401 response by the
    application's error handler, before the view runs.
    """
    @wraps(view)
    def wrapped(*args, **kwargs):
        g.auth_token = auth_service.check_token(request.headers.get('Authorization'))
        return view(*args, **kwargs)

    return wrapped


@auth_bp.route('/api/login', methods=['POST'])
def login():
    """Exchange the admin password for a bearer token.

    Request Body (JSON):
        password: The admin password.

    Returns:
        200 with {'token': ...}, 400 if no password, 401 if wrong.
    """
    data = request.get_json(silent=True) or {}
    try:
        token = auth_service.login(data.get('password'))
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'token': token})


@auth_bp.route('/api/logout', methods=['POST'])
@require_auth
def logout():
    """Revoke the caller's token."""
    auth_service.logout(g.auth_token)
    return jsonify({'success': True})
