"""Role/ownership authorization: a pure decision over a resolved Identity.

The access guard only authenticates. Every route that reads or mutates a
resource calls `enforce` (or `decide`) itself with the role it needs and,
for owned resources, the owner's user id.
"""

from dataclasses import dataclass
from enum import Enum

from todo_api.core.errors import AuthorizationError, InsufficientRoleError, NotOwnerError
from todo_api.schemas.auth import Identity


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class DenyReason(str, Enum):
    INSUFFICIENT_ROLE = "insufficient_role"
    NOT_OWNER = "not_owner"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: DenyReason | None = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(allowed=False, reason=reason)


def roles_of(identity: Identity) -> frozenset[Role]:
    """Admins hold both roles; everyone else holds USER."""
    if identity.is_admin:
        return frozenset({Role.USER, Role.ADMIN})
    return frozenset({Role.USER})


def decide(
    identity: Identity,
    required_role: Role | None = None,
    resource_owner_id: int | None = None,
) -> Decision:
    """
    Allow or deny. Role is checked first, then ownership; admins bypass ownership.
    With neither constraint any authenticated identity is allowed.
    """
    roles = roles_of(identity)
    if required_role is not None and required_role not in roles:
        return Decision.deny(DenyReason.INSUFFICIENT_ROLE)
    if (
        resource_owner_id is not None
        and identity.id != resource_owner_id
        and Role.ADMIN not in roles
    ):
        return Decision.deny(DenyReason.NOT_OWNER)
    return Decision.allow()


_DENY_ERRORS: dict[DenyReason, type[AuthorizationError]] = {
    DenyReason.INSUFFICIENT_ROLE: InsufficientRoleError,
    DenyReason.NOT_OWNER: NotOwnerError,
}


def enforce(
    identity: Identity,
    required_role: Role | None = None,
    resource_owner_id: int | None = None,
) -> None:
    """Raise InsufficientRoleError / NotOwnerError when `decide` denies."""
    decision = decide(identity, required_role, resource_owner_id)
    if decision.allowed:
        return
    error = _DENY_ERRORS.get(decision.reason, AuthorizationError)
    raise error("The user is not authorized to access this resource")
