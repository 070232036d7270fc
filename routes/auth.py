"""Authentication blueprint: registration, sessions, avatars and email verification."""

from __future__ import annotations

import secrets
from http import HTTPStatus
from pathlib import Path

from flask import Blueprint, current_app, jsonify, request, url_for
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required
from sqlalchemy.exc import IntegrityError

from errors import AuthError, ConflictError, NotFoundError, ValidationError
from models import db
from models.user import User
from storage.local_storage import LocalStorage
from utils.avatars import gravatar_url, resize_image
from utils.mail import get_mail_sender
from utils.request_validation import parse_json_request
from utils.uploads import stage_upload, temp_storage

auth_bp = Blueprint("auth", __name__)

VERIFICATION_SUBJECT = "Email verification"


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    _, _, token = header.partition(" ")
    return token.strip()


def _require_session_user() -> User:
    """Return the user owning the presented token.

    The JWT must still be the one stored on the user; logging out or
    logging in again invalidates earlier tokens.
    """
    identity = get_jwt_identity()
    try:
        user_id = int(identity)
    except (TypeError, ValueError):
        raise AuthError("Not authorized")

    user = db.session.get(User, user_id)
    if user is None or not user.token or user.token != _bearer_token():
        raise AuthError("Not authorized")
    return user


def _send_verification_email(user: User) -> None:
    link = current_app.config["BASE_URL"].rstrip("/") + url_for(
        "auth.verify_email", verification_token=user.verification_token
    )
    get_mail_sender().send(
        to=user.email,
        subject=VERIFICATION_SUBJECT,
        html=f"<a href='{link}'>Verify user</a>",
    )


def _avatar_storage() -> LocalStorage:
    return LocalStorage(Path(current_app.config["PUBLIC_DIR"]) / "avatars")


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Create an account and email its verification link."""
    payload = parse_json_request(request, required_keys=("name", "password", "email"))
    email = payload["email"]

    if User.query.filter_by(email=email).first() is not None:
        raise ConflictError("Email in use")

    user = User(
        email=email,
        name=payload["name"],
        avatar_url=gravatar_url(email),
        verification_token=secrets.token_urlsafe(16),
    )
    user.set_password(payload["password"])

    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("Email in use")

    _send_verification_email(user)
    current_app.logger.info("Registered user %s", user.id)

    return jsonify({"user": user.to_public_dict()}), HTTPStatus.CREATED


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Check credentials and issue a one-hour session token."""
    payload = parse_json_request(request, required_keys=("password", "email"))

    user = User.query.filter_by(email=payload["email"]).first()
    if user is None:
        raise AuthError("Credentials not found")

    if not user.check_password(payload["password"]):
        raise AuthError("Credentials do not match")

    token = create_access_token(identity=str(user.id))
    user.token = token
    db.session.commit()
    current_app.logger.info("User %s logged in", user.id)

    return jsonify({"token": token}), HTTPStatus.OK


@auth_bp.route("/logout", methods=["GET"])
@jwt_required()
def logout():
    user = _require_session_user()
    user.token = ""
    db.session.commit()
    current_app.logger.info("User %s logged out", user.id)
    return jsonify({"message": "Logout successfully"})


@auth_bp.route("/current", methods=["GET"])
@jwt_required()
def current():
    user = _require_session_user()
    return jsonify(user.to_public_dict())


@auth_bp.route("/avatars", methods=["PATCH"])
@jwt_required()
def update_avatar() -> tuple:
    """Resize the uploaded image and publish it as the user's avatar.

    The staged temp file is removed on any failure before the error
    propagates.
    """
    user = _require_session_user()
    upload = stage_upload(request, "avatar")
    new_name = f"{user.id}.{upload.extension}"

    try:
        resize_image(upload.path, current_app.config["AVATAR_SIZE"])
        destination = _avatar_storage().move_in(upload.path, new_name)
        avatar_url = f"/avatars/{destination.name}"
        user.avatar_url = avatar_url
        db.session.commit()
    except Exception:
        db.session.rollback()
        temp_storage().remove(upload.path)
        current_app.logger.exception("Avatar update failed for user %s", user.id)
        raise

    current_app.logger.info("User %s avatar set to %s", user.id, avatar_url)
    return jsonify(avatar_url), HTTPStatus.CREATED


@auth_bp.route("/verify/<verification_token>", methods=["GET"])
def verify_email(verification_token: str):
    user = None
    if verification_token:
        user = User.query.filter_by(verification_token=verification_token).first()
    if user is None:
        raise NotFoundError("User not found")

    user.mark_verified()
    db.session.commit()
    current_app.logger.info("User %s verified", user.id)
    return jsonify({"message": "Verification successful"})


@auth_bp.route("/verify", methods=["POST"])
def resend_verification():
    """Send the verification link again to an unverified user."""
    payload = parse_json_request(request, required_keys=("email",))

    user = User.query.filter_by(email=payload["email"]).first()
    if user is None:
        raise NotFoundError("User not found")
    if user.verify:
        raise ValidationError("Verification has already been passed")

    _send_verification_email(user)
    return jsonify({"message": "Verification email sent"})
