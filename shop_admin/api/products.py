from flask import Blueprint, request, jsonify
from marshmallow import Schema, fields, validate

from shop_admin.middleware.auth import require_admin, require_editor
from shop_admin.services.product_service import ProductService

products_bp = Blueprint("products", __name__, url_prefix="/products")


class ProductSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=255))
    price = fields.Decimal(required=True, places=2, validate=validate.Range(min=0))
    stock = fields.Integer(required=True, strict=True, validate=validate.Range(min=0, max=100))
    category = fields.String(required=True, validate=validate.Length(min=1, max=120))


class ProductUpdateSchema(ProductSchema):
    # Restocking past the creation cap is allowed; negative stock is not.
    stock = fields.Integer(required=True, strict=True, validate=validate.Range(min=0))


@products_bp.route("", methods=["GET"])
def list_products():
    """List all products."""
    return jsonify([p.to_dict() for p in ProductService.list_products()])


@products_bp.route("", methods=["POST"])
@require_editor
def create_product():
    """Create a product (editor or admin)."""
    data = ProductSchema().load(request.get_json(silent=True) or {})
    product = ProductService.create_product(**data)
    return jsonify(product.to_dict()), 201


@products_bp.route("/<int:product_id>", methods=["PUT"])
@require_editor
def update_product(product_id):
    """Replace a product's fields (editor or admin)."""
    data = ProductUpdateSchema().load(request.get_json(silent=True) or {})
    product = ProductService.update_product(product_id, **data)
    return jsonify(product.to_dict())


@products_bp.route("/<int:product_id>", methods=["DELETE"])
@require_admin
def delete_product(product_id):
    """Delete a product (admin only)."""
    ProductService.delete_product(product_id)
    return jsonify({"success": True})
