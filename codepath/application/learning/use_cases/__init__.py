from .progress_use_case import ProgressUseCase

__all__ = ["ProgressUseCase"]
