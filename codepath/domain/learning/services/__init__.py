from .progress_engine import complete_topic, compute_percent, compute_step, recalculate

__all__ = [
    "complete_topic",
    "compute_percent",
    "compute_step",
    "recalculate",
]
