from .progress_mapper import ProgressMapper

__all__ = ["ProgressMapper"]
