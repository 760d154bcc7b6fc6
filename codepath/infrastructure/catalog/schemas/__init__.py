"""Catalog context schemas."""

from codepath.infrastructure.catalog.schemas.content_schemas import (
    AuthorSummary,
    ContentCreateRequest,
    ContentMetadataResponse,
    ContentResponse,
    ContentUpdateRequest,
    ReviewCreateRequest,
    ReviewResponse,
    RoadmapResponse,
    RoadmapStageResponse,
)

__all__ = [
    "AuthorSummary",
    "ContentCreateRequest",
    "ContentMetadataResponse",
    "ContentResponse",
    "ContentUpdateRequest",
    "ReviewCreateRequest",
    "ReviewResponse",
    "RoadmapResponse",
    "RoadmapStageResponse",
]
