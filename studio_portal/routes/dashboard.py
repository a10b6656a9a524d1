"""Dashboard routes for the admin portfolio view.

Provides the client project statistics and the CSV export.
"""
from flask import Blueprint, Response, jsonify

from studio_portal.routes.auth import require_auth
from studio_portal.services import report_service

dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('/api/dashboard/client-projects')
@require_auth
def client_project_stats():
    """Portfolio statistics across all client projects (JSON).

    Returns:
        JSON object with task totals, average progress, health split,
        task status counts, completion rate and progress distribution.
    """
    return jsonify({'data': report_service.get_portfolio_stats()})


@dashboard_bp.route('/api/dashboard/client-projects/export')
@require_auth
def export_client_projects():
    """Export client projects to a CSV file."""
    csv_content = report_service.export_client_projects_csv()

    response = Response(
        csv_content,
        mimetype='text/csv; charset=utf-8',
    )
    response.headers['Content-Disposition'] = 'attachment; filename=client_projects.csv'

    return response
