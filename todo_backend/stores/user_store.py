from sqlalchemy.exc import IntegrityError

from todo_backend.errors import DuplicateEmail
from todo_backend.models.user_model import User
from todo_backend.stores import store_errors


class UserStore:
    """Credential store: users keyed by a unique email."""

    def __init__(self, db):
        self.db = db

    @property
    def session(self):
        return self.db.session

    def add(self, email, password_hash):
        with store_errors(self.session, "creating user"):
            user = User(email=email, password_hash=password_hash)
            self.session.add(user)
            try:
                self.session.commit()
            except IntegrityError:
                # users.email is UNIQUE; the constraint is the source of truth
                self.session.rollback()
                raise DuplicateEmail() from None
            return user

    def find_by_email(self, email):
        with store_errors(self.session, "looking up user"):
            return self.session.execute(
                self.db.select(User).where(User.email == email)
            ).scalar_one_or_none()
