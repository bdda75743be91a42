from flask import Blueprint, jsonify, request

from todo_backend.services import get_auth_service

auth_bp = Blueprint("auth", __name__)


def _credentials():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    return payload.get("email"), payload.get("password")


@auth_bp.post("/register")
def register():
    email, password = _credentials()
    result = get_auth_service().register(email, password)
    return jsonify(token=result.token, email=result.email), 200


@auth_bp.post("/login")
def login():
    email, password = _credentials()
    result = get_auth_service().login(email, password)
    return jsonify(token=result.token, email=result.email), 200
