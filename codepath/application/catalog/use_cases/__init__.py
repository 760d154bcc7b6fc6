from .content_management_use_case import ContentManagementUseCase
from .content_query_use_case import ContentQueryUseCase
from .review_use_case import ReviewUseCase

__all__ = [
    "ContentManagementUseCase",
    "ContentQueryUseCase",
    "ReviewUseCase",
]
