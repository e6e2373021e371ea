"""``.nomonicignore`` support: gitignore-style globs compiled to regexes."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

IGNORE_FILE = ".nomonicignore"

_REGEX_SPECIALS = set(".+^${}()|[]\\")


def load_ignore_patterns(root: str | Path = ".") -> list[str]:
    """Read patterns from ``<root>/.nomonicignore``, dropping blanks and comments."""
    try:
        text = (Path(root) / IGNORE_FILE).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    patterns = [line.strip() for line in text.split("\n")]
    return [p for p in patterns if p and not p.startswith("#")]


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate one glob into a regex matched against ``/``-separated paths.

    A leading ``/`` anchors the pattern at the repository root, a trailing ``/``
    matches everything below the directory, ``**/`` spans zero or more
    directories and ``*``/``?`` never cross a ``/``.
    """
    anchored = pattern.startswith("/")
    p = pattern[1:] if anchored else pattern
    if p.endswith("/"):
        p += "**"

    parts: list[str] = []
    i = 0
    while i < len(p):
        ch = p[i]
        if p.startswith("**/", i):
            parts.append("(?:.+/)?")
            i += 3
            continue
        if p.startswith("**", i):
            parts.append(".*")
            i += 2
            continue
        if ch == "*":
            parts.append("[^/]*")
        elif ch == "?":
            parts.append("[^/]")
        elif ch in _REGEX_SPECIALS:
            parts.append("\\" + ch)
        else:
            parts.append(ch)
        i += 1

    regex = "".join(parts)
    if anchored:
        return re.compile("^" + regex + "$")
    return re.compile("(?:^|/)" + regex + "$")


def compile_patterns(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    return [compile_pattern(p) for p in patterns]


def is_ignored(path: str, patterns: Iterable[re.Pattern[str]]) -> bool:
    normalized = path[2:] if path.startswith("./") else path
    return any(pat.search(normalized) for pat in patterns)
