from flask import Blueprint, request, jsonify
from marshmallow import Schema, fields, validate, validates_schema, ValidationError

from shop_admin.services.auth_service import AuthService

auth_bp = Blueprint("auth", __name__)


class RegisterSchema(Schema):
    username = fields.String(required=True, validate=validate.Length(min=1, max=80))
    email = fields.Email(required=True)
    password = fields.String(required=True, validate=validate.Length(min=6, max=128))
    confirm_password = fields.String(required=True)

    @validates_schema
    def passwords_match(self, data, **kwargs):
        if data.get("password") != data.get("confirm_password"):
            raise ValidationError("Passwords do not match", "confirm_password")


class LoginSchema(Schema):
    username = fields.String(required=True)
    password = fields.String(required=True)


def _auth_response(user, status=200):
    return jsonify({
        "token": AuthService.generate_token(user),
        "user": {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "role": user.role,
        },
    }), status


@auth_bp.route("/register", methods=["POST"])
def register():
    """Register a new user account and sign it in."""
    data = RegisterSchema().load(request.get_json(silent=True) or {})
    user = AuthService.register_user(data["username"], data["email"], data["password"])
    return _auth_response(user, 201)


@auth_bp.route("/login", methods=["POST"])
def login():
    """Authenticate and receive a JWT token."""
    data = LoginSchema().load(request.get_json(silent=True) or {})
    user = AuthService.authenticate(data["username"], data["password"])
    return _auth_response(user)
