from bp_tracker.models.reading import Reading

__all__ = [
    "Reading",
]
