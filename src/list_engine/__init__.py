"""UI-agnostic ordered list with a multi-range selection algebra."""

__all__ = [
    "adapters",
    "collection",
    "errors",
    "reindex",
    "runtime",
    "selection",
    "slots",
    "tree",
]

__version__ = "0.1.0"
