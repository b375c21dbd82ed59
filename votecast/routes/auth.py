from flask import current_app, jsonify, redirect, request, url_for
from flask_login import current_user, login_required, login_user, logout_user
from sqlalchemy.exc import IntegrityError

from votecast.errors import ValidationError
from votecast.extensions import db
from votecast.models import User, UserRole
from votecast.routes.helpers import request_data
from votecast.services.security import hash_password, verify_password
from votecast.services.validation import clean_text


def register_auth_routes(app):
    @app.route("/signup", methods=["POST"])
    def signup():
        data = request_data()
        full_name = clean_text(data.get("full_name"), "Full name") or "User"
        email = clean_text(data.get("email"), "Email").lower()
        password = clean_text(data.get("password"), "Password", strip=False)

        if not email:
            raise ValidationError("Email is required.")
        if len(password) < 8:
            raise ValidationError("Password must be at least 8 characters long.")

        new_user = User(
            full_name=full_name,
            email=email,
            password_hash=hash_password(password),
        )
        new_user.roles.append(UserRole(role="user"))

        try:
            db.session.add(new_user)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ValidationError("An account with this email already exists.")

        current_app.logger.info("Account created for user %s", new_user.id)
        return jsonify({"ok": True, "user_id": new_user.id}), 201

    @app.route("/login", methods=["GET", "POST"])
    def login():
        if request.method == "GET":
            if current_user.is_authenticated:
                return redirect(url_for("dashboard"))
            return jsonify({"ok": False, "error": "Please sign in to continue."}), 401

        data = request_data()
        email = clean_text(data.get("email"), "Email").lower()
        password = clean_text(data.get("password"), "Password", strip=False)
        remember = bool(data.get("remember"))

        user = User.query.filter_by(email=email).first()
        if not user or not verify_password(user.password_hash, password):
            current_app.logger.warning("Failed sign-in for %s", email)
            return jsonify({"ok": False, "error": "Invalid email or password."}), 401

        login_user(user, remember=remember)
        return jsonify(
            {
                "ok": True,
                "user_id": user.id,
                "is_admin": user.is_admin,
                "face_registered": user.face_registered,
            }
        )

    @app.route("/logout")
    @login_required
    def logout():
        logout_user()
        return jsonify({"ok": True})
