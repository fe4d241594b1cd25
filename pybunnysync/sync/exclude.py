"""Exclusion pattern matching for sync operations."""

import re
from fnmatch import fnmatchcase
from typing import Iterable

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives into plain glob patterns.

    Nested groups are expanded innermost first.

    Examples:
        >>> expand_braces("*.{log,tmp}")
        ['*.log', '*.tmp']
        >>> expand_braces("{a,b}-{1,2}")
        ['a-1', 'a-2', 'b-1', 'b-2']
        >>> expand_braces("*.log")
        ['*.log']
    """
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]

    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def is_excluded(file_name: str, patterns: Iterable[str]) -> bool:
    """Check if a file name matches any exclusion pattern.

    Only the leaf name is matched, never the relative path. Patterns use
    shell-style wildcards (``*``, ``?``, ``[seq]``) plus ``{a,b}``
    alternatives, and are case-sensitive.

    Args:
        file_name: Base name of the file
        patterns: Glob patterns, e.g. ``["*.log", ".DS_Store"]``

    Returns:
        True if any pattern matches

    Examples:
        >>> is_excluded("debug.log", ["*.log"])
        True
        >>> is_excluded("cache.tmp", ["*.{log,tmp}"])
        True
        >>> is_excluded("debug.log", [])
        False
    """
    return any(
        fnmatchcase(file_name, expanded)
        for pattern in patterns
        for expanded in expand_braces(pattern)
    )
