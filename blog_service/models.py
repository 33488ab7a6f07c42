from dataclasses import dataclass
from datetime import datetime
import uuid

from sqlalchemy import JSON, Column, DateTime, String, Text

from .db import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class UserRecord(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=_new_id)
    # The unique constraint is what makes concurrent registration safe.
    username = Column(String(20), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)


class PostRecord(Base):
    __tablename__ = "posts"
    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(String, nullable=False)
    body = Column(Text, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    published_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    # Owner reference, written once at creation.
    owner_id = Column(String(36), nullable=False, index=True)
    owner_username = Column(String(20), nullable=False)


@dataclass(frozen=True)
class User:
    """Plain user record handed out by the credential store."""
    id: str
    username: str
    password_hash: str

    @classmethod
    def from_record(cls, record: UserRecord) -> "User":
        return cls(id=record.id, username=record.username, password_hash=record.password_hash)
