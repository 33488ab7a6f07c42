"""
Process-wide identity services, built once from settings.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from .config import settings
from .db import get_db
from .ownership import OwnershipGuard
from .passwords import PasswordHasher
from .session import SessionResolver
from .store import CredentialStore
from .tokens import TokenCodec

password_hasher = PasswordHasher(rounds=settings.HASH_ROUNDS, max_workers=settings.HASH_WORKERS)
token_codec = TokenCodec(settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
session_resolver = SessionResolver(token_codec)
ownership_guard = OwnershipGuard()


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)

# Verified against on unknown usernames so both login failures cost one hash.
DUMMY_PASSWORD_HASH = password_hasher.hash("no-such-user-placeholder")
