from flask import Blueprint, jsonify

from shop_admin.middleware.auth import require_auth
from shop_admin.models.database import User

users_bp = Blueprint("users", __name__, url_prefix="/users")


@users_bp.route("", methods=["GET"])
@require_auth
def list_users():
    """List all users without their password hashes."""
    return jsonify([u.to_dict() for u in User.query.order_by(User.id).all()])
