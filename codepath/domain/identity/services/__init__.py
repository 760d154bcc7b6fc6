from .access_control import (
    ROLE_CAPABILITIES,
    Capability,
    authorize,
    has_capability,
    is_permitted,
)

__all__ = [
    "ROLE_CAPABILITIES",
    "Capability",
    "authorize",
    "has_capability",
    "is_permitted",
]
