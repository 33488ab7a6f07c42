"""
Session token issuance and verification.

Tokens are compact HS256 JWTs (header.claims.signature, URL-safe base64)
carrying the subject id, username, issue time and expiry. The signing
secret is handed to the codec once at construction.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from .errors import ConfigurationError, InvalidToken, TokenExpired
from .models import User

SESSION_LIFETIME = timedelta(days=7)
REQUIRED_CLAIMS = ["sub", "username", "iat", "exp"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionClaims:
    subject_id: str
    username: str
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def for_user(cls, user: User, now: Optional[datetime] = None) -> "SessionClaims":
        issued_at = (now or utcnow()).replace(microsecond=0)
        return cls(
            subject_id=user.id,
            username=user.username,
            issued_at=issued_at,
            expires_at=issued_at + SESSION_LIFETIME,
        )

    def to_payload(self) -> dict:
        return {
            "sub": self.subject_id,
            "username": self.username,
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expires_at.timestamp()),
        }

    @classmethod
    def from_payload(cls, payload: dict) -> "SessionClaims":
        issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        if expires_at - issued_at != SESSION_LIFETIME:
            raise InvalidToken("token lifetime does not match session policy")
        return cls(
            subject_id=str(payload["sub"]),
            username=str(payload["username"]),
            issued_at=issued_at,
            expires_at=expires_at,
        )


class TokenCodec:
    def __init__(self, secret: str, algorithm: str = "HS256",
                 clock: Callable[[], datetime] = utcnow):
        if not secret:
            raise ConfigurationError("refusing to sign tokens without a secret")
        self._secret = secret
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, claims: SessionClaims) -> str:
        return jwt.encode(claims.to_payload(), self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> SessionClaims:
        """
        Return the claims of a correctly signed, unexpired token.

        Raises InvalidToken on a bad signature or malformed token and
        TokenExpired when a valid token is past its expiry.
        """
        try:
            # Expiry is checked below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
            )
            claims = SessionClaims.from_payload(payload)
        except jwt.InvalidTokenError as exc:
            raise InvalidToken(str(exc)) from exc
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise InvalidToken("malformed claims") from exc

        if self._clock() >= claims.expires_at:
            raise TokenExpired("token expired")
        return claims
