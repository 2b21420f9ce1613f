import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from flask import current_app

from shop_admin.errors import Forbidden, Unauthorized, ValidationError
from shop_admin.models.database import db, Role, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    """Identity carried by a verified token for the duration of one request."""

    user_id: int
    username: str
    role: Role

    def allows(self, required: Role) -> bool:
        return self.role.allows(required)


class AuthService:
    """Handles authentication and password management."""

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt(rounds=current_app.config.get("BCRYPT_ROUNDS", 12))
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        """Verify a password against its hash."""
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))

    @staticmethod
    def generate_token(user: User) -> str:
        """Generate a JWT token for a user."""
        now = datetime.now(timezone.utc)
        payload = {
            "user_id": user.id,
            "username": user.username,
            "role": user.role,
            "exp": now + timedelta(minutes=current_app.config["JWT_EXPIRY_MINUTES"]),
            "iat": now,
        }
        return jwt.encode(payload, current_app.config["JWT_SECRET"], algorithm="HS256")

    @staticmethod
    def decode_token(token: str) -> Session:
        """Decode and validate a JWT token.

        Raises Unauthorized when no token is given and Forbidden when the
        token is malformed, tampered with, expired or names an unknown role.
        """
        if not token:
            raise Unauthorized()

        try:
            payload = jwt.decode(
                token,
                current_app.config["JWT_SECRET"],
                algorithms=["HS256"],
                options={"require": ["exp", "user_id", "role"]},
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Rejected expired token")
            raise Forbidden("Invalid or expired token")
        except jwt.InvalidTokenError as e:
            logger.warning("Rejected invalid token: %s", e)
            raise Forbidden("Invalid or expired token")

        try:
            role = Role(payload["role"])
        except ValueError:
            raise Forbidden("Invalid or expired token")

        return Session(
            user_id=payload["user_id"],
            username=payload.get("username", ""),
            role=role,
        )

    @staticmethod
    def register_user(username: str, email: str, password: str) -> User:
        """Register a new user with the default role."""
        existing = User.query.filter(
            (User.username == username) | (User.email == email)
        ).first()
        if existing:
            raise ValidationError("Username or email already in use")

        user = User(
            username=username,
            email=email,
            password_hash=AuthService.hash_password(password),
            role=Role.USER.value,
        )
        db.session.add(user)
        db.session.commit()
        logger.info("Registered user %s", username)
        return user

    @staticmethod
    def authenticate(username: str, password: str) -> User:
        """Check credentials and return the matching user."""
        user = User.query.filter_by(username=username).first()
        if not user or not AuthService.verify_password(password, user.password_hash):
            logger.warning("Failed login for %s", username)
            raise Unauthorized("Invalid credentials")

        logger.info("User %s logged in", username)
        return user

    @staticmethod
    def ensure_user(username: str, email: str, password: str, role: Role) -> bool:
        """Create a user unless one with that username exists.

        Returns True when a user was created.
        """
        if User.query.filter_by(username=username).first():
            return False

        db.session.add(User(
            username=username,
            email=email,
            password_hash=AuthService.hash_password(password),
            role=role.value,
        ))
        db.session.commit()
        logger.info("Created default %s user %s", role.value, username)
        return True
