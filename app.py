import os

from todo_backend.app import create_app

# Expose a module-level `app` for WSGI servers (gunicorn expects `app:app`).
# This calls the factory at import time so `gunicorn app:app` works.
app = create_app()


if __name__ == "__main__":
    # Local development only: run the built-in server.
    port = int(os.environ.get("PORT", 3000))
    app.run(
        host=os.environ.get("HOST", "127.0.0.1"),
        port=port,
        debug=app.config["DEBUG"],
    )
