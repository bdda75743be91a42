from flask import Blueprint, jsonify, request

from todo_backend.services import get_task_service
from todo_backend.utils.auth import auth_required, current_identity
from todo_backend.utils.db import serialize_task

tasks_bp = Blueprint("tasks", __name__)


def _payload():
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


@tasks_bp.get("")
@auth_required
def list_tasks():
    user_id = current_identity().user_id
    tasks = get_task_service().list_tasks(user_id)
    return jsonify([serialize_task(t) for t in tasks]), 200


@tasks_bp.post("")
@auth_required
def create_task():
    user_id = current_identity().user_id
    payload = _payload()
    task = get_task_service().create_task(user_id, payload.get("title"), payload.get("priority"))
    return jsonify(serialize_task(task)), 200


@tasks_bp.put("/<int:task_id>")
@auth_required
def update_task(task_id):
    user_id = current_identity().user_id
    task = get_task_service().update_task(user_id, task_id, _payload())
    return jsonify(serialize_task(task)), 200


@tasks_bp.delete("/<int:task_id>")
@auth_required
def delete_task(task_id):
    user_id = current_identity().user_id
    get_task_service().delete_task(user_id, task_id)
    return jsonify(success=True), 200
