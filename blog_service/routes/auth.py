"""
Auth Router - registration, login, session check and logout.

Sessions are stateless: logout only clears the client's cookie. A copied
token stays valid until it expires (7 days after issue); there is no
server-side revocation list.
"""
import logging

from fastapi import APIRouter, Depends, Request, Response, status

from ..config import settings
from ..errors import Conflict, InvalidCredentials, NotFound
from ..models import User
from ..schemas import UserCreate, UserLogin, UserOut
from ..security import DUMMY_PASSWORD_HASH, get_credential_store, password_hasher, token_codec
from ..session import ACCESS_TOKEN_COOKIE, Identity, current_identity, require_identity
from ..store import CredentialStore
from ..tokens import SESSION_LIFETIME, SessionClaims
from ..utils.event_logger import log_auth_event

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def attach_session(response: Response, user: User) -> None:
    token = token_codec.issue(SessionClaims.for_user(user))
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        token,
        max_age=int(SESSION_LIFETIME.total_seconds()),
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


@router.post("/register", response_model=UserOut)
def register(
    payload: UserCreate,
    request: Request,
    response: Response,
    store: CredentialStore = Depends(get_credential_store),
):
    hashed_pw = password_hasher.hash(payload.password)
    try:
        user = store.create(payload.username, hashed_pw)
    except Conflict:
        log_auth_event("register_conflict", payload.username, request)
        raise

    log_auth_event("register_success", user.username, request, user_id=user.id)
    attach_session(response, user)
    return UserOut(id=user.id, username=user.username)


@router.post("/login", response_model=UserOut)
def login(
    credentials: UserLogin,
    request: Request,
    response: Response,
    store: CredentialStore = Depends(get_credential_store),
):
    if not credentials.username or not credentials.password:
        raise InvalidCredentials()

    try:
        user = store.find_by_username(credentials.username)
    except NotFound:
        password_hasher.verify(credentials.password, DUMMY_PASSWORD_HASH)
        log_auth_event("login_failure", credentials.username, request)
        raise InvalidCredentials() from None

    if not password_hasher.verify(credentials.password, user.password_hash):
        log_auth_event("login_failure", user.username, request, user_id=user.id)
        raise InvalidCredentials()

    log_auth_event("login_success", user.username, request, user_id=user.id)
    attach_session(response, user)
    return UserOut(id=user.id, username=user.username)


@router.get("/check", response_model=UserOut)
def check(identity: Identity = Depends(require_identity)):
    return UserOut(id=identity.id, username=identity.username)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(request: Request, identity: Identity = Depends(current_identity)):
    log_auth_event("logout", identity.username, request, user_id=identity.id)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(
        ACCESS_TOKEN_COOKIE,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return response
