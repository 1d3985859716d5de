"""Pathspec-based path filtering.

This module uses the pathspec library to decide which directories and files
the scanners skip, and to check whether an env file is covered by the
project's .gitignore.
"""

from pathlib import Path
from typing import Iterable, Optional

import pathspec


# Directories always skipped by scanning and folder discovery
IGNORE_DIRS: frozenset[str] = frozenset({
    "node_modules", ".git", "dist", "build", ".next", ".nuxt", ".output",
    "coverage", "__pycache__", "vendor", ".venv", "venv", "target",
    ".cache", ".turbo",
})

# Dependency caches, VCS metadata, build output and virtualenvs
DEFAULT_IGNORE_PATTERNS: list[str] = sorted(f"{name}/" for name in IGNORE_DIRS)

# envsetter's own sources, skipped when scanning this project itself
SELF_IGNORE_PATTERNS: list[str] = [
    "/envsetter/",
    "/tests/",
    "/README.md",
]


def _to_posix(path: Path) -> str:
    return str(path).replace("\\", "/")


class PathspecFilter:
    """Path filter built from gitwildmatch patterns."""

    def __init__(self, repo_path: Path, extra_patterns: Iterable[str] = ()):
        """
        Initialize the filter.

        Args:
            repo_path: Scan root; paths are matched relative to it
            extra_patterns: Additional gitwildmatch patterns to ignore
        """
        self.repo_path = repo_path
        self._patterns = DEFAULT_IGNORE_PATTERNS + [p for p in extra_patterns if p.strip()]
        self._spec = pathspec.PathSpec.from_lines("gitwildmatch", self._patterns)

    def _relative(self, path: Path) -> Optional[str]:
        if path.is_absolute():
            try:
                path = path.relative_to(self.repo_path)
            except ValueError:
                return None
        return _to_posix(path)

    def should_ignore(self, path: Path) -> bool:
        """Check if a file should be ignored."""
        relative = self._relative(path)
        if relative is None:
            return False
        return self._spec.match_file(relative)

    def should_ignore_dir(self, path: Path) -> bool:
        """Check if a directory should be pruned from the walk."""
        relative = self._relative(path)
        if relative is None:
            return False
        # directory patterns only match paths with a trailing slash
        return self._spec.match_file(relative.rstrip("/") + "/")

    def get_patterns(self) -> list[str]:
        """Get the active ignore patterns."""
        return list(self._patterns)


def load_gitignore(repo_path: Path) -> Optional[pathspec.PathSpec]:
    """Load the root .gitignore, or None when the project has none."""
    gitignore_path = repo_path / ".gitignore"
    if not gitignore_path.is_file():
        return None
    try:
        with open(gitignore_path, encoding="utf-8") as f:
            lines = f.readlines()
    except OSError:
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


def is_gitignored(repo_path: Path, env_file: Path) -> Optional[bool]:
    """
    Check whether ``env_file`` is ignored by the root .gitignore.

    Returns None when there is no .gitignore to consult.
    """
    spec = load_gitignore(repo_path)
    if spec is None:
        return None
    env_file = Path(env_file)
    if env_file.is_absolute():
        try:
            env_file = env_file.relative_to(repo_path)
        except ValueError:
            return False
    return spec.match_file(_to_posix(env_file))
