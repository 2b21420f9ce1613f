from flask import Blueprint, jsonify

from shop_admin.middleware.auth import require_editor
from shop_admin.services.report_service import ReportService

reports_bp = Blueprint("reports", __name__)


@reports_bp.route("/dashboard-summary", methods=["GET"])
def dashboard_summary():
    """Headline counts and total sales."""
    return jsonify(ReportService.dashboard_summary())


@reports_bp.route("/sales-charts", methods=["GET"])
@require_editor
def sales_charts():
    """Units sold per product."""
    return jsonify(ReportService.sales_by_product())
