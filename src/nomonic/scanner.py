from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from nomonic.config import LOCK_FILES, ScanConfig
from nomonic.core import DEFAULT_THRESHOLD, Violation, detect
from nomonic.diff import build_content_block, extract_added_lines
from nomonic.ignore import compile_patterns, is_ignored

logger = logging.getLogger(__name__)

_SKIPPED_DIRS = frozenset({".git", "node_modules"})


@dataclass(frozen=True)
class FileViolation:
    """A detected sequence tied to the file and file line where it starts."""

    file: str
    line_number: int
    matched_words: tuple[str, ...]
    line: str

    @classmethod
    def from_violation(cls, file: str, violation: Violation, line_number: int | None = None) -> FileViolation:
        return cls(
            file=file,
            line_number=violation.line_number if line_number is None else line_number,
            matched_words=violation.matched_words,
            line=violation.line,
        )

    def to_payload(self) -> dict[str, object]:
        return {
            "file": self.file,
            "lineNumber": self.line_number,
            "matchedWords": list(self.matched_words),
            "line": self.line,
        }


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


def get_basename(path: str) -> str:
    return path.split("/")[-1]


def is_lockfile(path: str) -> bool:
    return get_basename(path) in LOCK_FILES


def is_binary(content: str) -> bool:
    return "\0" in content


def get_files_recursive(directory: str | Path) -> list[Path]:
    """All files below ``directory``, skipping ``.git`` and ``node_modules``."""
    results: list[Path] = []
    for entry in sorted(Path(directory).iterdir()):
        if entry.name in _SKIPPED_DIRS:
            continue
        if entry.is_dir():
            results.extend(get_files_recursive(entry))
        else:
            results.append(entry)
    return results


def _git(args: list[str], cwd: str | Path | None = None) -> str | None:
    """Run git and return its stdout, or ``None`` when git fails.

    Output is decoded without newline translation so a lone ``\\r`` stays inside
    its line; bytes that are not UTF-8 are replaced.
    """
    try:
        result = subprocess.run(["git", *args], cwd=cwd, capture_output=True, check=True)
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug(f"git {' '.join(args)} failed: {e}")
        return None
    return result.stdout.decode("utf-8", errors="replace")


def _split_paths(output: str) -> list[str]:
    return [line for line in output.strip().split("\n") if line]


def list_files(root: str | Path | None = None) -> list[str]:
    """Files to scan, relative to ``root`` (or the working directory).

    Tracked files come from ``git ls-files``. A directory outside any git work
    tree is walked instead.
    """
    output = _git(["ls-files"], cwd=root)
    if output is not None:
        return _split_paths(output)
    if root is None:
        logger.warning("Not inside a git repository; nothing to scan")
        return []
    logger.debug(f"{root} is not tracked by git, walking the directory")
    base = Path(root)
    return [p.relative_to(base).as_posix() for p in get_files_recursive(base)]


def filter_files(files: Iterable[str], config: ScanConfig) -> list[str]:
    """Drop lockfiles (unless configured otherwise) and ignored paths."""
    patterns = compile_patterns(config.ignore_patterns)
    kept = []
    for f in files:
        if not config.include_lockfiles and is_lockfile(f):
            continue
        if is_ignored(f, patterns):
            logger.debug(f"Ignoring {f}")
            continue
        kept.append(f)
    return kept


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def _read_text(path: Path) -> str | None:
    try:
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Skipping unreadable file {path}: {e}")
        return None


def scan_files(
    files: Iterable[str],
    threshold: int = DEFAULT_THRESHOLD,
    root: str | Path | None = None,
) -> list[FileViolation]:
    """Scan files for BIP39 sequences; unreadable and binary files are skipped.

    Relative paths are resolved against ``root`` but reported as given.
    """
    violations: list[FileViolation] = []
    for file in files:
        path = Path(root) / file if root is not None else Path(file)
        content = _read_text(path)
        if content is None:
            continue
        if is_binary(content):
            logger.debug(f"Skipping binary file {file}")
            continue
        for v in detect(content, threshold):
            violations.append(FileViolation.from_violation(file, v))
    return violations


def scan_repository(config: ScanConfig, root: str | Path | None = None) -> list[FileViolation]:
    files = filter_files(list_files(root), config)
    logger.info(f"Scanning {len(files)} files (threshold {config.threshold})")
    return scan_files(files, config.threshold, root)


def list_staged_files() -> list[str]:
    output = _git(["diff", "--cached", "--name-only", "--diff-filter=d"])
    if output is None:
        logger.warning("Could not list staged files; is this a git repository?")
        return []
    return _split_paths(output)


def get_staged_diff(file: str) -> str:
    return _git(["diff", "--cached", "--", file]) or ""


def scan_diff(file: str, diff: str, threshold: int = DEFAULT_THRESHOLD) -> list[FileViolation]:
    """Scan the added lines of one file's diff, reporting file line numbers."""
    block = build_content_block(extract_added_lines(diff))
    return [
        FileViolation.from_violation(file, v, block.source_line(v.line_number))
        for v in detect(block.content, threshold)
    ]


def scan_staged(config: ScanConfig) -> list[FileViolation]:
    files = filter_files(list_staged_files(), config)
    logger.info(f"Checking {len(files)} staged files (threshold {config.threshold})")
    violations: list[FileViolation] = []
    for file in files:
        diff = get_staged_diff(file)
        if not diff:
            continue
        violations.extend(scan_diff(file, diff, config.threshold))
    return violations
