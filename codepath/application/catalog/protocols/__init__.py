from .content_repository import ContentRepositoryProtocol

__all__ = ["ContentRepositoryProtocol"]
