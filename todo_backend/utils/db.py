import sqlite3

import click
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

db = SQLAlchemy()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES / ON DELETE CASCADE unless enabled per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_app(app):
    """Bind the SQLAlchemy extension and create the schema if it is missing."""
    db.init_app(app)

    # Model classes must be imported before create_all sees their tables.
    from todo_backend.models import task_model, user_model  # noqa: F401

    with app.app_context():
        init_schema()
        app.logger.info("Database schema ready at %s", db.engine.url.render_as_string(hide_password=True))

    @app.cli.command("init-db")
    def init_db_command():
        """Create the users and tasks tables if they do not exist."""
        init_schema()
        click.echo("Initialized the database.")


def init_schema():
    # CREATE TABLE IF NOT EXISTS semantics
    db.create_all()


def serialize_task(task):
    return {
        "id": task.id,
        "title": task.title,
        "priority": task.priority,
        "completed": bool(task.completed),
        "created_at": task.created_at.isoformat() if task.created_at else None,
    }
