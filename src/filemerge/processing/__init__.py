"""Public API surface for filemerge.processing."""
__all__ = [
    "transformer",
    "visibility",
]
