"""Content entity for the learning catalog."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from codepath.domain.catalog.entities.review import Review
from codepath.domain.common.entity import Entity
from codepath.domain.common.exceptions import ValidationError
from codepath.domain.common.value_objects.ids import ContentId, UserId
from codepath.domain.learning.entities.progress_record import normalize_language

MAX_TITLE_LENGTH = 255


class ContentType(StrEnum):
    DOCUMENTATION = "documentation"
    TUTORIAL = "tutorial"
    VIDEO = "video"
    PRACTICE = "practice"
    ROADMAP = "roadmap"


class Difficulty(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ContentStatus(StrEnum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


def _required_text(value: str, field_name: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field_name.capitalize()} cannot be empty", field=field_name)
    return text


def _unique_strings(values: list[str]) -> list[str]:
    """Strip, drop blanks and de-duplicate while keeping first occurrence order."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        item = value.strip()
        if item and item not in seen:
            seen.add(item)
            result.append(item)
    return result


@dataclass
class ContentMetadata:
    """Counters and review state attached to a content item."""

    duration_label: str | None = None
    last_updated: datetime | None = None
    view_count: int = 0
    average_rating: float = 0.0
    reviews: list[Review] = field(default_factory=list)


@dataclass
class Content(Entity[ContentId]):
    """
    Learning unit for one language.

    Business Rules:
    - language, title, description and body are required
    - author is required and never changes after creation
    - new content starts as a draft
    - tags behave as a set; prerequisites keep their order
    - average_rating is always the mean of all reviews
    """

    id: ContentId
    language: str
    type: ContentType
    title: str
    description: str
    body: str
    difficulty: Difficulty
    author_id: UserId
    prerequisites: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    status: ContentStatus = ContentStatus.DRAFT
    metadata: ContentMetadata = field(default_factory=ContentMetadata)
    author_username: str | None = None
    version: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.language = normalize_language(self.language)
        self.type = _coerce(ContentType, self.type, "type")
        self.difficulty = _coerce(Difficulty, self.difficulty, "difficulty")
        self.status = _coerce(ContentStatus, self.status, "status")
        self.title = _required_text(self.title, "title")
        if len(self.title) > MAX_TITLE_LENGTH:
            raise ValidationError(
                f"Title cannot exceed {MAX_TITLE_LENGTH} characters", field="title"
            )
        self.description = _required_text(self.description, "description")
        self.body = _required_text(self.body, "body")
        self.prerequisites = [p.strip() for p in self.prerequisites if p.strip()]
        self.tags = _unique_strings(self.tags)

    def is_published(self) -> bool:
        return self.status is ContentStatus.PUBLISHED

    @property
    def reviews(self) -> list[Review]:
        return self.metadata.reviews

    def apply_changes(self, changes: dict[str, object], now: datetime) -> None:
        """
        Apply a partial update, re-validating every touched field.

        Args:
            changes: Mapping of field name to new value; unknown keys are rejected
            now: Timestamp recorded as metadata.last_updated

        Raises:
            ValidationError: If a field is unknown or a value is invalid
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}", field="changes"
            )
        # duration_label is the only field that may be cleared
        nulled = sorted(
            name for name, value in changes.items() if value is None and name != "duration_label"
        )
        if nulled:
            raise ValidationError(
                f"Field(s) cannot be null: {', '.join(nulled)}", field=nulled[0]
            )
        for name, value in changes.items():
            if name == "duration_label":
                self.metadata.duration_label = value  # type: ignore[assignment]
            else:
                setattr(self, name, value)
        self.__post_init__()
        self.metadata.last_updated = now

    @classmethod
    def create(
        cls,
        author_id: UserId,
        language: str,
        type: ContentType | str,
        title: str,
        description: str,
        body: str,
        difficulty: Difficulty | str,
        now: datetime,
        prerequisites: list[str] | None = None,
        tags: list[str] | None = None,
        status: ContentStatus | str = ContentStatus.DRAFT,
        duration_label: str | None = None,
    ) -> "Content":
        """Create new content (ID will be 0 until persisted)."""
        return cls(
            id=ContentId.generate(),
            language=language,
            type=type,  # type: ignore[arg-type]
            title=title,
            description=description,
            body=body,
            difficulty=difficulty,  # type: ignore[arg-type]
            author_id=author_id,
            prerequisites=list(prerequisites or []),
            tags=list(tags or []),
            status=status,  # type: ignore[arg-type]
            metadata=ContentMetadata(duration_label=duration_label, last_updated=now),
        )


UPDATABLE_FIELDS = frozenset(
    {
        "language",
        "type",
        "title",
        "description",
        "body",
        "difficulty",
        "prerequisites",
        "tags",
        "status",
        "duration_label",
    }
)


def _coerce(enum_type: type, value: object, field_name: str):  # noqa: ANN202
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValidationError(
            f"Invalid {field_name} '{value}', expected one of: {allowed}",
            field=field_name,
            value=value,
        ) from None
