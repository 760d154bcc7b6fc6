"""
Capability-based authorization.

Every mutating catalog operation is gated by one predicate: the actor's role
must grant the capability, and where the capability is ownership-scoped the
actor must own the resource unless they are an admin.
"""

from enum import StrEnum

from codepath.domain.common.exceptions import AuthorizationError
from codepath.domain.common.value_objects.ids import UserId
from codepath.domain.identity.entities.role import Role
from codepath.domain.identity.entities.user import User


class Capability(StrEnum):
    CREATE_CONTENT = "create-content"
    UPDATE_CONTENT = "update-content"
    DELETE_CONTENT = "delete-content"
    REVIEW_CONTENT = "review-content"
    VIEW_UNPUBLISHED = "view-unpublished"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.STUDENT: frozenset({Capability.REVIEW_CONTENT}),
    Role.INSTRUCTOR: frozenset(
        {
            Capability.CREATE_CONTENT,
            Capability.UPDATE_CONTENT,
            Capability.REVIEW_CONTENT,
        }
    ),
    Role.ADMIN: frozenset(Capability),
}

# Capabilities that only apply to resources the actor owns (admins bypass)
OWNERSHIP_SCOPED: frozenset[Capability] = frozenset({Capability.UPDATE_CONTENT})


def has_capability(role: Role, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


def is_permitted(actor: User, capability: Capability, owner_id: UserId | None = None) -> bool:
    """
    Check whether an actor may exercise a capability.

    Args:
        actor: The authenticated user
        capability: Capability being exercised
        owner_id: Owner of the target resource, when the check is resource-scoped

    Returns:
        True if permitted
    """
    if not has_capability(actor.role, capability):
        return False
    if owner_id is None or capability not in OWNERSHIP_SCOPED:
        return True
    return actor.is_admin() or actor.id == owner_id


def authorize(actor: User, capability: Capability, owner_id: UserId | None = None) -> None:
    """
    Raise unless the actor may exercise the capability.

    Raises:
        AuthorizationError: If the role lacks the capability or the actor
            does not own the resource
    """
    if not has_capability(actor.role, capability):
        raise AuthorizationError(f"Role '{actor.role}' is not allowed to {capability.value}")
    if not is_permitted(actor, capability, owner_id):
        raise AuthorizationError(f"Not authorized to {capability.value} owned by another user")
