"""Shared SQL filter helpers."""


def like_pattern(term: str) -> str:
    """Build a ``%term%`` pattern with LIKE wildcards escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
