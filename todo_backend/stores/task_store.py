from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError

from todo_backend.errors import Unauthenticated
from todo_backend.models.task_model import Task
from todo_backend.stores import store_errors


class TaskStore:
    """Tasks table access. Every query is scoped by ``owner_id``."""

    def __init__(self, db):
        self.db = db

    @property
    def session(self):
        return self.db.session

    def add(self, owner_id, title, priority):
        with store_errors(self.session, "creating task"):
            task = Task(owner_id=owner_id, title=title, priority=priority, completed=False)
            self.session.add(task)
            try:
                self.session.commit()
            except IntegrityError:
                # tasks.owner_id references users.id; the owner was deleted
                self.session.rollback()
                raise Unauthenticated("User no longer exists") from None
            return task

    def list_for_owner(self, owner_id):
        """Owner's tasks in creation order (id breaks timestamp ties)."""
        with store_errors(self.session, "listing tasks"):
            return list(
                self.session.execute(
                    self.db.select(Task)
                    .where(Task.owner_id == owner_id)
                    .order_by(Task.created_at.asc(), Task.id.asc())
                ).scalars()
            )

    def get_for_owner(self, owner_id, task_id):
        with store_errors(self.session, "loading task"):
            return self.session.execute(
                self.db.select(Task).where(Task.id == task_id, Task.owner_id == owner_id)
            ).scalar_one_or_none()

    def update_for_owner(self, owner_id, task_id, changes):
        """Apply ``changes`` in a single UPDATE; returns the task or None."""
        if not changes:
            return self.get_for_owner(owner_id, task_id)

        with store_errors(self.session, "updating task"):
            result = self.session.execute(
                update(Task)
                .where(Task.id == task_id, Task.owner_id == owner_id)
                .values(**changes)
            )
            self.session.commit()
            if result.rowcount == 0:
                return None
        # A concurrent delete between the two statements yields None here
        return self.get_for_owner(owner_id, task_id)

    def delete_for_owner(self, owner_id, task_id):
        """Delete in a single statement; False when nothing matched."""
        with store_errors(self.session, "deleting task"):
            result = self.session.execute(
                delete(Task).where(Task.id == task_id, Task.owner_id == owner_id)
            )
            self.session.commit()
            return result.rowcount > 0
