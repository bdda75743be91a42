import logging
import os

from flask import Flask, jsonify, request, send_from_directory
from flask_cors import CORS
from flask_jwt_extended import JWTManager

from todo_backend.errors import register_error_handlers
from todo_backend.services import AUTH_SERVICE_KEY, TASK_SERVICE_KEY
from todo_backend.services.auth_service import AuthService
from todo_backend.services.task_service import TaskService
from todo_backend.stores.task_store import TaskStore
from todo_backend.stores.user_store import UserStore
from todo_backend.utils.db import db, init_app as init_db


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object("todo_backend.config.Config")
    if test_config is not None:
        app.config.update(test_config)
    app.json.sort_keys = False

    logging.basicConfig(
        level=getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if app.config["BCRYPT_ROUNDS"] < 10 and not app.config["TESTING"]:
        app.logger.warning("BCRYPT_ROUNDS=%s is below 10; use this only for tests", app.config["BCRYPT_ROUNDS"])

    # Core extensions
    CORS(app, resources={r"/api/*": {"origins": "*"}})
    JWTManager(app)

    init_db(app)

    # Services are built once per app with explicit collaborators
    app.extensions[AUTH_SERVICE_KEY] = AuthService(
        UserStore(db),
        bcrypt_rounds=app.config["BCRYPT_ROUNDS"],
        token_ttl=app.config["JWT_ACCESS_TOKEN_EXPIRES"],
    )
    app.extensions[TASK_SERVICE_KEY] = TaskService(TaskStore(db))

    # Register blueprints
    from todo_backend.routes.auth_routes import auth_bp
    from todo_backend.routes.task_routes import tasks_bp

    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")

    register_error_handlers(app)

    @app.get("/api/health")
    def health():
        return jsonify(status="ok", service="To-Do API"), 200

    @app.route("/api/<path:path>", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    def api_not_found(path):
        return jsonify(error="API route not found"), 404

    # Client shell for every non-API path
    @app.get("/")
    @app.get("/<path:path>")
    def client_shell(path=""):
        if request.path.startswith("/api"):
            return jsonify(error="API route not found"), 404
        frontend_dir = app.config["FRONTEND_DIR"]
        if not os.path.exists(os.path.join(frontend_dir, "index.html")):
            return jsonify(error="Not Found"), 404
        return send_from_directory(frontend_dir, "index.html")

    return app
