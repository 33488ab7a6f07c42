"""
Per-request session resolution.

Every request starts anonymous. ``session_middleware`` reads the token
from the ``access_token`` cookie and any Bearer header, asks the
resolver for an identity and stores it on ``request.state.identity``.
An invalid or expired token is treated exactly like a missing one;
whether anonymity is acceptable is left to the endpoint.
"""
from dataclasses import dataclass
import logging
from typing import List, Optional

from fastapi import Request

from .errors import InvalidToken, NotAuthenticated
from .tokens import TokenCodec

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "access_token"


@dataclass(frozen=True)
class Identity:
    id: Optional[str] = None
    username: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        return self.id is None


ANONYMOUS = Identity()


class SessionResolver:
    def __init__(self, codec: TokenCodec):
        self._codec = codec

    def resolve(self, token: Optional[str]) -> Identity:
        if not token:
            return ANONYMOUS
        try:
            claims = self._codec.verify(token)
        except InvalidToken as exc:
            # TokenExpired is an InvalidToken too
            logger.debug("Ignoring unusable session token: %s", exc.code)
            return ANONYMOUS
        return Identity(id=claims.subject_id, username=claims.username)

    def resolve_first(self, tokens: List[str]) -> Identity:
        """Resolve the first usable token, so a stale cookie does not mask a valid header."""
        for token in tokens:
            identity = self.resolve(token)
            if not identity.is_anonymous:
                return identity
        return ANONYMOUS


def tokens_from_request(request: Request) -> List[str]:
    tokens = []
    cookie = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if cookie:
        tokens.append(cookie)
    authorization = request.headers.get("authorization")
    if authorization and authorization.lower().startswith("bearer "):
        bearer = authorization.split(" ", 1)[1].strip()
        if bearer:
            tokens.append(bearer)
    return tokens


def build_session_middleware(resolver: SessionResolver):
    async def session_middleware(request: Request, call_next):
        request.state.identity = resolver.resolve_first(tokens_from_request(request))
        return await call_next(request)

    return session_middleware


def current_identity(request: Request) -> Identity:
    return getattr(request.state, "identity", ANONYMOUS)


def require_identity(request: Request) -> Identity:
    identity = current_identity(request)
    if identity.is_anonymous:
        raise NotAuthenticated()
    return identity
