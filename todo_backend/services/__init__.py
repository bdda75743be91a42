from flask import current_app

AUTH_SERVICE_KEY = "todo.auth_service"
TASK_SERVICE_KEY = "todo.task_service"


def get_auth_service():
    return current_app.extensions[AUTH_SERVICE_KEY]


def get_task_service():
    return current_app.extensions[TASK_SERVICE_KEY]
