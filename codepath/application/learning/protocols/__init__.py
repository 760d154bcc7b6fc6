from .progress_repository import ProgressRepositoryProtocol

__all__ = ["ProgressRepositoryProtocol"]
