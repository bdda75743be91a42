import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from todo_backend.errors import StoreFailure

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(session, action):
    """Roll back and re-raise any persistence error as StoreFailure."""
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Store failure while %s", action)
        raise StoreFailure() from exc
