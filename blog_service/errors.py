"""
Error taxonomy for the identity layer.

Every error carries the HTTP status it maps to and a short public code.
Internal failures (hashing, storage) share a single opaque code so that
driver messages never reach the client.
"""
from http import HTTPStatus
from typing import Any, Dict


class IdentityError(Exception):
    code = "identity_error"
    status = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str = None):
        super().__init__(message or self.code)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.code}


class Conflict(IdentityError):
    code = "username_taken"
    status = HTTPStatus.CONFLICT


class InvalidCredentials(IdentityError):
    """Unknown username or wrong password; the two are never distinguished."""
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class NotAuthenticated(IdentityError):
    code = "not_authenticated"
    status = HTTPStatus.UNAUTHORIZED


class Forbidden(IdentityError):
    code = "forbidden"
    status = HTTPStatus.FORBIDDEN


class NotFound(IdentityError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND


class BadRequest(IdentityError):
    code = "invalid_id"
    status = HTTPStatus.BAD_REQUEST


class InvalidToken(IdentityError):
    code = "invalid_token"
    status = HTTPStatus.UNAUTHORIZED


class TokenExpired(InvalidToken):
    code = "token_expired"


class InternalFailure(IdentityError):
    code = "internal_error"
    status = HTTPStatus.INTERNAL_SERVER_ERROR


class HashingFailure(InternalFailure):
    pass


class StorageFailure(InternalFailure):
    pass


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing or unusable."""
