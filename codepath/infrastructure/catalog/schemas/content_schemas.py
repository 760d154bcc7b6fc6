"""Pydantic schemas for Content API request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from codepath.domain.catalog.entities.content import (
    Content,
    ContentStatus,
    ContentType,
    Difficulty,
)
from codepath.domain.catalog.entities.review import MAX_RATING, MIN_RATING, Review
from codepath.domain.catalog.services.roadmap import Roadmap


class AuthorSummary(BaseModel):
    id: int
    username: str | None = None


class ReviewResponse(BaseModel):
    """A single review as shown under a content item."""

    id: int
    user_id: int
    username: str | None = None
    rating: int
    comment: str
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, review: Review) -> "ReviewResponse":
        return cls(
            id=review.id.value,
            user_id=review.user_id.value,
            username=review.username,
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
        )


class ContentMetadataResponse(BaseModel):
    duration_label: str | None = None
    last_updated: datetime | None = None
    view_count: int = 0
    average_rating: float = 0.0
    reviews: list[ReviewResponse] = Field(default_factory=list)


class ContentResponse(BaseModel):
    """Schema for Content response."""

    id: int
    language: str
    type: ContentType
    title: str
    description: str
    body: str
    difficulty: Difficulty
    prerequisites: list[str]
    tags: list[str]
    author: AuthorSummary
    status: ContentStatus
    metadata: ContentMetadataResponse
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, content: Content) -> "ContentResponse":
        return cls(
            id=content.id.value,
            language=content.language,
            type=content.type,
            title=content.title,
            description=content.description,
            body=content.body,
            difficulty=content.difficulty,
            prerequisites=list(content.prerequisites),
            tags=list(content.tags),
            author=AuthorSummary(id=content.author_id.value, username=content.author_username),
            status=content.status,
            metadata=ContentMetadataResponse(
                duration_label=content.metadata.duration_label,
                last_updated=content.metadata.last_updated,
                view_count=content.metadata.view_count,
                average_rating=content.metadata.average_rating,
                reviews=[ReviewResponse.from_domain(r) for r in content.reviews],
            ),
            created_at=content.created_at,
            updated_at=content.updated_at,
        )


class ContentCreateRequest(BaseModel):
    """Schema for creating a content item."""

    language: str = Field(..., min_length=1, max_length=50, description="Programming language")
    type: ContentType = Field(..., description="Kind of learning unit")
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1, description="Main content body")
    difficulty: Difficulty
    prerequisites: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    status: ContentStatus = Field(ContentStatus.DRAFT, description="Publication status")
    duration_label: str | None = Field(None, max_length=50, description="e.g. '2 hours'")


class ContentUpdateRequest(BaseModel):
    """Schema for partially updating a content item. Omitted fields are left unchanged."""

    language: str | None = Field(None, min_length=1, max_length=50)
    type: ContentType | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    body: str | None = Field(None, min_length=1)
    difficulty: Difficulty | None = None
    prerequisites: list[str] | None = None
    tags: list[str] | None = None
    status: ContentStatus | None = None
    duration_label: str | None = Field(None, max_length=50)


class ReviewCreateRequest(BaseModel):
    """Schema for submitting a review."""

    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING, description="Whole stars, 1 to 5")
    comment: str | None = Field(None, max_length=2000)


class RoadmapStageResponse(BaseModel):
    id: int
    title: str
    description: str
    topics: list[str]
    content_id: int | None = None


class RoadmapResponse(BaseModel):
    """Roadmap for a language, with the caller's position when authenticated."""

    language: str
    stages: list[RoadmapStageResponse]
    progress_percent: int | None = None
    active_step: int | None = None
    completed_topics: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, roadmap: Roadmap) -> "RoadmapResponse":
        return cls(
            language=roadmap.language,
            stages=[
                RoadmapStageResponse(
                    id=stage.id,
                    title=stage.title,
                    description=stage.description,
                    topics=list(stage.topics),
                    content_id=stage.content_id,
                )
                for stage in roadmap.stages
            ],
            progress_percent=roadmap.progress_percent,
            active_step=roadmap.active_step,
            completed_topics=list(roadmap.completed_topics),
        )
