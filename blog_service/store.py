"""
Credential store backed by the ``users`` table.

Uniqueness of usernames is enforced by the table's unique constraint,
not by a read-before-write check: concurrent registrations of one name
produce exactly one row and the rest surface as Conflict.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import Conflict, NotFound, StorageFailure
from .models import User, UserRecord

logger = logging.getLogger(__name__)


class CredentialStore:
    def __init__(self, db: Session):
        self.db = db

    def create(self, username: str, password_hash: str) -> User:
        record = UserRecord(username=username, password_hash=password_hash)
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except IntegrityError as exc:
            self.db.rollback()
            raise Conflict(f"username {username!r} already exists") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to create user %s: %s", username, exc)
            raise StorageFailure("could not create user") from exc
        return User.from_record(record)

    def find_by_username(self, username: str) -> User:
        return self._find_one(UserRecord.username == username)

    def find_by_id(self, user_id: str) -> User:
        return self._find_one(UserRecord.id == user_id)

    def _find_one(self, criterion) -> User:
        try:
            record = self.db.query(UserRecord).filter(criterion).first()
        except SQLAlchemyError as exc:
            logger.error("User lookup failed: %s", exc)
            raise StorageFailure("user lookup failed") from exc
        if record is None:
            raise NotFound("user not found")
        return User.from_record(record)
