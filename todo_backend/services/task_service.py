import logging

from todo_backend.errors import NotFound, ValidationError
from todo_backend.models.priority import priority_rank

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "priority", "completed")


def ordering_key(task):
    # sorted() is stable, so equal ranks keep the store's creation order
    return -priority_rank(task.priority)


def _clean_text(value, message):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value.strip()


class TaskService:
    """Task operations on behalf of one owner at a time.

    A task that exists but belongs to someone else is reported as NotFound,
    exactly like a task that does not exist.
    """

    def __init__(self, task_store):
        self.task_store = task_store

    def list_tasks(self, owner_id):
        return sorted(self.task_store.list_for_owner(owner_id), key=ordering_key)

    def create_task(self, owner_id, title, priority):
        title = _clean_text(title, "title and priority are required")
        priority = _clean_text(priority, "title and priority are required")
        task = self.task_store.add(owner_id, title, priority)
        logger.debug("Task %s created for user %s", task.id, owner_id)
        return task

    def update_task(self, owner_id, task_id, fields):
        changes = {}
        for name in UPDATABLE_FIELDS:
            value = fields.get(name)
            if value is None:
                continue
            if name == "completed":
                if not isinstance(value, bool):
                    raise ValidationError("completed must be a boolean")
                changes[name] = value
            else:
                changes[name] = _clean_text(value, f"{name} must be a non-empty string")

        task = self.task_store.update_for_owner(owner_id, task_id, changes)
        if task is None:
            raise NotFound()
        logger.debug("Task %s updated for user %s: %s", task_id, owner_id, sorted(changes))
        return task

    def delete_task(self, owner_id, task_id):
        if not self.task_store.delete_for_owner(owner_id, task_id):
            raise NotFound()
        logger.debug("Task %s deleted for user %s", task_id, owner_id)
