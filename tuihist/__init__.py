"""Terminal UI building blocks and shell-history search, formatting and statistics."""

__version__ = "0.1.0"

__all__ = [
    "backend",
    "buffer",
    "cursor",
    "duration",
    "fuzzy",
    "history",
    "history_list",
    "layout",
    "stats",
    "style",
]