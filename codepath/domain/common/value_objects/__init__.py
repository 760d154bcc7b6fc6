from .ids import ContentId, ProgressRecordId, ReviewId, UserId

__all__ = [
    "ContentId",
    "ProgressRecordId",
    "ReviewId",
    "UserId",
]
