from flask import Flask, jsonify, redirect, request, url_for
from werkzeug.exceptions import HTTPException

from votecast.cli import register_cli
from votecast.config import Config
from votecast.errors import VotecastError
from votecast.extensions import db, login_manager, migrate
from votecast.models import User
from votecast.routes import register_routes


def wants_json():
    return (
        request.is_json
        or request.headers.get("X-Requested-With") == "XMLHttpRequest"
        or request.accept_mimetypes.best == "application/json"
    )


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    login_manager.login_view = "login"

    @login_manager.user_loader
    def load_user(user_id):
        return User.query.get(int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        if wants_json():
            return jsonify({"ok": False, "error": "Please sign in to continue."}), 401
        return redirect(url_for("login", next=request.path))

    @app.errorhandler(VotecastError)
    def handle_votecast_error(error):
        return jsonify({"ok": False, "error": error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"ok": False, "error": error.description}), error.code

    register_routes(app)
    register_cli(app)
    return app


__all__ = ["db", "migrate", "create_app"]
