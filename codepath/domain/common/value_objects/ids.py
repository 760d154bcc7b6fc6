from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""

    value: int


@dataclass(frozen=True)
class ContentId(EntityId):
    """Strongly-typed content identifier."""

    value: int


@dataclass(frozen=True)
class ReviewId(EntityId):
    """Strongly-typed review identifier."""

    value: int


@dataclass(frozen=True)
class ProgressRecordId(EntityId):
    """Strongly-typed learning progress record identifier."""

    value: int
