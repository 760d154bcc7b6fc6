from .content import Content, ContentMetadata, ContentStatus, ContentType, Difficulty
from .review import Review

__all__ = [
    "Content",
    "ContentMetadata",
    "ContentStatus",
    "ContentType",
    "Difficulty",
    "Review",
]
