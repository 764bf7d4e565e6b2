"""Public API surface for ghmustache.processing."""
__all__ = [
    "text_ops",
]
