from flask import Blueprint, request, jsonify
from marshmallow import Schema, fields, validate

from shop_admin.middleware.auth import require_auth, require_editor
from shop_admin.services.order_service import OrderService

orders_bp = Blueprint("orders", __name__, url_prefix="/orders")


class CreateOrderSchema(Schema):
    product_id = fields.Integer(required=True, strict=True)
    quantity = fields.Integer(required=True, strict=True, validate=validate.Range(min=1))
    customer_name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    customer_email = fields.Email(required=True)


@orders_bp.route("", methods=["GET"])
@require_editor
def list_orders():
    """List all orders with their product name."""
    return jsonify([o.to_dict() for o in OrderService.list_orders()])


@orders_bp.route("", methods=["POST"])
@require_editor
def create_order():
    """Create a new order and reserve its stock."""
    data = CreateOrderSchema().load(request.get_json(silent=True) or {})
    order = OrderService.create_order(**data)
    return jsonify(order.to_dict()), 201


@orders_bp.route("/<int:order_id>", methods=["DELETE"])
@require_auth
def delete_order(order_id):
    """Delete an order and restore its stock."""
    restored = OrderService.delete_order(order_id)
    return jsonify({"deleted": True, "restored_stock": restored})
