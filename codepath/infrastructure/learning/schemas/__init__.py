from .progress_schemas import LearningProgressResponse, ProgressUpdateRequest

__all__ = ["LearningProgressResponse", "ProgressUpdateRequest"]
