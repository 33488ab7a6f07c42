"""
Posts Router - the content endpoints that need identity.

Posts themselves are plain storage; this router only records the owner
reference at creation and runs the ownership guard before mutations.
"""
import logging
import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import get_db
from ..errors import BadRequest, NotFound, StorageFailure
from ..models import PostRecord
from ..ownership import OwnerRef
from ..schemas import OwnerOut, PostCreate, PostOut, PostUpdate
from ..security import ownership_guard
from ..session import Identity, current_identity, require_identity

router = APIRouter(prefix="/api/posts", tags=["posts"])
logger = logging.getLogger(__name__)


def check_post_id(post_id: str) -> str:
    try:
        return str(uuid.UUID(post_id))
    except ValueError:
        raise BadRequest("invalid post id") from None


def get_post(post_id: str = Depends(check_post_id), db: Session = Depends(get_db)) -> PostRecord:
    post = db.query(PostRecord).filter(PostRecord.id == post_id).first()
    if post is None:
        raise NotFound("post not found")
    return post


def to_post_out(post: PostRecord) -> PostOut:
    return PostOut(
        id=post.id,
        title=post.title,
        body=post.body,
        tags=list(post.tags or []),
        published_date=post.published_date,
        owner=OwnerOut(id=post.owner_id, username=post.owner_username),
    )


def commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to %s post: %s", action, exc)
        raise StorageFailure(f"could not {action} post") from exc


@router.post("", response_model=PostOut)
def write(
    payload: PostCreate,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    post = PostRecord(
        title=payload.title,
        body=payload.body,
        tags=payload.tags,
        owner_id=identity.id,
        owner_username=identity.username,
    )
    db.add(post)
    commit(db, "create")
    db.refresh(post)
    return to_post_out(post)


@router.get("/{post_id}", response_model=PostOut)
def read(post: PostRecord = Depends(get_post)):
    return to_post_out(post)


@router.patch("/{post_id}", response_model=PostOut)
def update(
    payload: PostUpdate,
    post: PostRecord = Depends(get_post),
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
):
    ownership_guard.enforce(identity, OwnerRef(post.owner_id, post.owner_username))
    for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(post, field, value)
    commit(db, "update")
    db.refresh(post)
    return to_post_out(post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove(
    post: PostRecord = Depends(get_post),
    identity: Identity = Depends(current_identity),
    db: Session = Depends(get_db),
):
    ownership_guard.enforce(identity, OwnerRef(post.owner_id, post.owner_username))
    db.delete(post)
    commit(db, "delete")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
