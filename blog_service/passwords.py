"""
Password hashing and verification.

Hashing is CPU bound on purpose, so every call is dispatched to a small
bounded thread pool owned by the hasher. At most ``max_workers`` hashes
run at once no matter how many requests are in flight.
"""
from concurrent.futures import ThreadPoolExecutor
import logging
import threading

from passlib.context import CryptContext

from .errors import HashingFailure

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 29000


class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_ROUNDS, max_workers: int = 4):
        # pbkdf2_sha256 avoids the external bcrypt backend; rounds is the work factor
        self._context = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__rounds=rounds,
        )
        self._max_workers = max_workers
        self._pool = None
        self._lock = threading.Lock()

    def _executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._pool is None:
                self._pool = ThreadPoolExecutor(
                    max_workers=self._max_workers, thread_name_prefix="hasher"
                )
            return self._pool

    def hash(self, password: str) -> str:
        """Return a salted digest of ``password``."""
        try:
            return self._executor().submit(self._context.hash, password).result()
        except Exception as exc:
            logger.error("Password hashing failed: %s", type(exc).__name__)
            raise HashingFailure("password hashing failed") from exc

    def verify(self, password: str, stored: str) -> bool:
        """
        Check ``password`` against a stored digest.

        Returns False on mismatch. Raises HashingFailure when ``stored``
        is not a digest this hasher recognises.
        """
        try:
            return self._executor().submit(self._context.verify, password, stored).result()
        except (ValueError, TypeError) as exc:
            logger.error("Stored password hash is malformed: %s", exc)
            raise HashingFailure("stored hash is malformed") from exc

    def shutdown(self) -> None:
        """Stop the worker threads; the next call starts a fresh pool."""
        with self._lock:
            pool, self._pool = self._pool, None
        if pool is not None:
            pool.shutdown(wait=True)
