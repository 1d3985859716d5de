"""Path filtering for envsetter.

This module provides pathspec-based ignore rules for scanning and
.gitignore checks for env files.
"""

from envsetter.filters.pathspec_filter import (
    PathspecFilter,
    DEFAULT_IGNORE_PATTERNS,
    IGNORE_DIRS,
    SELF_IGNORE_PATTERNS,
    is_gitignored,
)

__all__ = [
    "PathspecFilter",
    "DEFAULT_IGNORE_PATTERNS",
    "IGNORE_DIRS",
    "SELF_IGNORE_PATTERNS",
    "is_gitignored",
]
