from .rating_engine import append_review, average_rating
from .roadmap import DEFAULT_STAGES, Roadmap, RoadmapStage, build_roadmap
from .search_ranking import rank, score, tokenize

__all__ = [
    "DEFAULT_STAGES",
    "Roadmap",
    "RoadmapStage",
    "append_review",
    "average_rating",
    "build_roadmap",
    "rank",
    "score",
    "tokenize",
]
