"""Path pattern resolution for cache path sets."""

from __future__ import annotations

from collections.abc import Iterable
import glob
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def split_patterns(raw: Iterable[str]) -> list[str]:
    """Split multi-line pattern inputs into individual, non-blank patterns.

    Example:
        >>> split_patterns(["dist\\n  ~/.npm\\n", "build"])
        ['dist', '~/.npm', 'build']
    """
    patterns: list[str] = []
    for value in raw:
        for line in value.splitlines():
            line = line.strip()
            if line:
                patterns.append(line)
    return patterns


def resolve_paths(patterns: Iterable[str], workspace: Path) -> list[str]:
    """Resolve glob patterns to existing, workspace-relative paths.

    Patterns support ``*``, ``**`` and ``~``; relative patterns are anchored
    at ``workspace``. A leading ``!`` excludes everything the pattern matches,
    including descendants. Lines starting with ``#`` are ignored. Paths nested
    under another matched path are dropped, since archiving a directory
    already includes its contents.

    Args:
        patterns: Glob patterns
        workspace: Directory results are made relative to

    Returns:
        Sorted list of workspace-relative paths (may contain ``..`` segments)
    """
    workspace = Path(workspace)
    includes: list[str] = []
    excludes: list[str] = []
    for pattern in split_patterns(patterns):
        if pattern.startswith("#"):
            continue
        if pattern.startswith("!"):
            excludes.append(_anchor(pattern[1:].strip(), workspace))
        else:
            includes.append(_anchor(pattern, workspace))

    excluded = {match for pattern in excludes for match in _glob(pattern)}
    matched: set[str] = set()
    for pattern in includes:
        for match in _glob(pattern):
            if not _is_under_any(match, excluded):
                matched.add(match)

    # Archiving a directory already archives everything below it
    roots = {path for path in matched if not _is_under_any(path, matched - {path})}
    expanded = {path for root in roots for path in _expand(root, excluded)}
    resolved = sorted(os.path.relpath(path, workspace) for path in expanded)
    logger.debug(f"Resolved {len(resolved)} path(s) from {len(includes)} pattern(s)")
    return resolved


def _anchor(pattern: str, workspace: Path) -> str:
    expanded = os.path.expanduser(pattern)
    if not os.path.isabs(expanded):
        expanded = os.path.join(workspace, expanded)
    return expanded


def _glob(pattern: str) -> list[str]:
    return [
        os.path.normpath(match)
        for match in glob.glob(pattern, recursive=True, include_hidden=True)
    ]


def _expand(path: str, excluded: set[str]) -> list[str]:
    """Split a directory into its children until no excluded path remains inside."""
    if not any(_is_under_any(item, {path}) for item in excluded):
        return [path]
    if not os.path.isdir(path) or os.path.islink(path):
        return []
    children: list[str] = []
    for name in sorted(os.listdir(path)):
        child = os.path.join(path, name)
        if child not in excluded:
            children.extend(_expand(child, excluded))
    return children


def _is_under_any(path: str, candidates: set[str]) -> bool:
    for candidate in candidates:
        if path == candidate or path.startswith(candidate.rstrip(os.sep) + os.sep):
            return True
    return False
