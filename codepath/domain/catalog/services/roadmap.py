"""Roadmap stages for a language."""

from dataclasses import dataclass, field

from codepath.domain.catalog.entities.content import Content
from codepath.domain.learning.entities.progress_record import ProgressRecord
from codepath.domain.learning.services.progress_engine import compute_step


@dataclass(frozen=True)
class RoadmapStage:
    id: int
    title: str
    description: str
    topics: tuple[str, ...] = ()
    content_id: int | None = None


@dataclass
class Roadmap:
    language: str
    stages: list[RoadmapStage]
    progress_percent: int | None = None
    active_step: int | None = None
    completed_topics: list[str] = field(default_factory=list)


DEFAULT_STAGES: tuple[RoadmapStage, ...] = (
    RoadmapStage(
        id=1,
        title="Getting Started",
        description="Learn the basics and set up your development environment.",
        topics=(
            "Introduction to programming",
            "Setting up your development environment",
            "Hello World program",
            "Basic syntax and data types",
        ),
    ),
    RoadmapStage(
        id=2,
        title="Core Concepts",
        description="Master the fundamental concepts of the language.",
        topics=(
            "Variables and constants",
            "Operators and expressions",
            "Control flow (if/else, loops)",
            "Functions and methods",
        ),
    ),
    RoadmapStage(
        id=3,
        title="Data Structures",
        description="Learn how to organize and manipulate data efficiently.",
        topics=(
            "Arrays and lists",
            "Objects and dictionaries",
            "Sets and maps",
            "Working with complex data structures",
        ),
    ),
    RoadmapStage(
        id=4,
        title="Advanced Topics",
        description="Dive deeper into more complex language features.",
        topics=(
            "Object-oriented programming",
            "Error handling",
            "Asynchronous programming",
            "Modules and packages",
        ),
    ),
    RoadmapStage(
        id=5,
        title="Projects and Practice",
        description="Apply your knowledge by building real projects.",
        topics=(
            "Small practice exercises",
            "Building a command-line application",
            "Creating a web application",
            "Contributing to open source",
        ),
    ),
)


def build_roadmap(
    language: str,
    roadmap_contents: list[Content],
    progress: ProgressRecord | None = None,
) -> Roadmap:
    """
    Assemble the roadmap for a language.

    Published roadmap content items become the stages, in creation order,
    with their tags as topics. When a language has none, the default
    five-stage path is used.
    """
    if roadmap_contents:
        ordered = sorted(
            roadmap_contents, key=lambda c: (c.created_at is None, c.created_at, c.id.value)
        )
        stages = [
            RoadmapStage(
                id=index,
                title=content.title,
                description=content.description,
                topics=tuple(content.tags),
                content_id=content.id.value,
            )
            for index, content in enumerate(ordered, start=1)
        ]
    else:
        stages = list(DEFAULT_STAGES)

    roadmap = Roadmap(language=language, stages=stages)
    if progress is not None:
        roadmap.progress_percent = progress.progress_percent
        roadmap.active_step = min(compute_step(progress.progress_percent), len(stages) - 1)
        roadmap.completed_topics = list(progress.completed_topics)
    return roadmap
