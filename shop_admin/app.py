import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from shop_admin.config.settings import Config
from shop_admin.models.database import db, Role
from shop_admin.api import auth_bp, orders_bp, products_bp, reports_bp, users_bp
from shop_admin.middleware.error_handler import register_error_handlers
from shop_admin.services.auth_service import AuthService

logger = logging.getLogger(__name__)


def seed_default_users(app: Flask) -> None:
    """Create the default admin and editor accounts if they are missing."""
    AuthService.ensure_user(
        "admin", "admin@example.com", app.config["DEFAULT_ADMIN_PASSWORD"], Role.ADMIN
    )
    AuthService.ensure_user(
        "editor", "editor@example.com", app.config["DEFAULT_EDITOR_PASSWORD"], Role.EDITOR
    )


def create_app(config_object=Config) -> Flask:
    """Application factory."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not app.config.get("JWT_SECRET"):
        raise RuntimeError("Missing required configuration: JWT_SECRET")

    # Initialize extensions
    db.init_app(app)

    CORS(app, origins=app.config["CORS_ORIGINS"])

    Limiter(
        app=app,
        key_func=get_remote_address,
        default_limits=[app.config["RATE_LIMIT_DEFAULT"]],
    )

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(users_bp)

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "OK", "message": "Server is running"})

    # Register error handlers
    register_error_handlers(app)

    with app.app_context():
        db.create_all()
        if app.config["SEED_DEFAULT_USERS"]:
            seed_default_users(app)
    logger.info("Database ready")

    return app
