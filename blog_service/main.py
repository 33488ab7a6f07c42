"""
Blog service - identity layer and the content routes that depend on it.
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .db import init_db
from .errors import IdentityError, InternalFailure
from .routes import auth, posts
from .security import password_hasher, session_resolver
from .session import build_session_middleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Initialize database on startup, release the hashing pool on shutdown"""
    init_db()
    yield
    password_hasher.shutdown()


app = FastAPI(
    title="Blog Service",
    description="Registration, login and ownership checks for blog posts",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.middleware("http")(build_session_middleware(session_resolver))


@app.exception_handler(IdentityError)
async def identity_error_handler(request: Request, exc: IdentityError):
    if isinstance(exc, InternalFailure):
        logger.error(
            "Internal failure on %s %s: %r (cause: %r)",
            request.method, request.url.path, exc, exc.__cause__,
        )
    return JSONResponse(status_code=exc.status, content=exc.to_dict())


app.include_router(auth.router)
app.include_router(posts.router)
