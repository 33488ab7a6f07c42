"""
Ownership checks for content mutations.

Ownership is strict: only the identity whose id matches the owner id
recorded on the resource may mutate it. Ids are canonicalised before
comparison since they may arrive as UUID objects, upper-case hex, or
with surrounding whitespace depending on the layer they came from.
Ids that are not UUIDs are opaque: only whitespace is stripped.
"""
from dataclasses import dataclass
import enum
import logging
import uuid

from .errors import Forbidden
from .session import Identity

logger = logging.getLogger(__name__)


class Decision(enum.Enum):
    ALLOW = "allow"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class OwnerRef:
    owner_id: str
    owner_username: str


def canonical_id(value) -> str:
    text = str(value).strip()
    try:
        return str(uuid.UUID(text))
    except ValueError:
        return text


class OwnershipGuard:
    def check(self, identity: Identity, owner: OwnerRef) -> Decision:
        if identity.is_anonymous:
            return Decision.FORBIDDEN
        if canonical_id(identity.id) != canonical_id(owner.owner_id):
            return Decision.FORBIDDEN
        return Decision.ALLOW

    def enforce(self, identity: Identity, owner: OwnerRef) -> None:
        if self.check(identity, owner) is Decision.FORBIDDEN:
            logger.info(
                "Ownership denied: identity=%s owner=%s",
                identity.username or "<anonymous>", owner.owner_username,
            )
            raise Forbidden()
