# Seed phrase detector: finds runs of consecutive BIP39 mnemonic words in text.
#
# Two passes share one token classifier. The single-line pass flags runs of
# vocabulary words on one line; the cross-line pass accumulates words across
# "pure" lines (every substantive token is a vocabulary word), with blank
# lines transparent, so one-word-per-line and numbered-list layouts are caught.

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import AbstractSet, Iterable

from nomonic.wordlist import load_wordlist

DEFAULT_THRESHOLD = 5

ANNOTATION_WORDS = frozenset({
    "word", "words", "mnemonic", "seed", "phrase",
    "key", "backup", "recovery", "secret", "passphrase",
})

_ALPHA_RE = re.compile(r"[A-Za-z]")
_NON_ALPHA_RE = re.compile(r"[^A-Za-z]")
_DIGIT_RE = re.compile(r"[0-9]")


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


class TokenKind(enum.Enum):
    SKIP = "skip"
    BROKEN = "broken"
    ANNOTATION = "annotation"
    WORD = "word"


@dataclass(frozen=True)
class ClassifiedToken:
    kind: TokenKind
    word: str | None = None
    in_vocabulary: bool = False

    @property
    def is_vocabulary_word(self) -> bool:
        return self.kind is TokenKind.WORD and self.in_vocabulary

    @property
    def is_substantive(self) -> bool:
        """Broken tokens and words count as content; skips and annotations do not."""
        return self.kind in (TokenKind.BROKEN, TokenKind.WORD)


SKIP = ClassifiedToken(TokenKind.SKIP)
BROKEN = ClassifiedToken(TokenKind.BROKEN)
ANNOTATION = ClassifiedToken(TokenKind.ANNOTATION)


@dataclass(frozen=True)
class Violation:
    line_number: int
    matched_words: tuple[str, ...]
    line: str

    def to_payload(self) -> dict[str, object]:
        return {
            "lineNumber": self.line_number,
            "matchedWords": list(self.matched_words),
            "line": self.line,
        }


# ---------------------------------------------------------------------------
# Tokenizer / classifier
# ---------------------------------------------------------------------------


def classify_token(token: str, vocabulary: AbstractSet[str]) -> ClassifiedToken:
    """Classify one whitespace-delimited token.

    Non-letters at either end are trimmed off. A token with no letters is
    skipped; a trimmed core with any non-letter inside, or trims holding a
    digit (``board[0]``, ``abandon123``), is broken. Annotation labels win
    over vocabulary membership.
    """
    first = _ALPHA_RE.search(token)
    if first is None:
        return SKIP
    last = len(token) - _ALPHA_RE.search(token[::-1]).start()
    leading, core, trailing = token[: first.start()], token[first.start() : last], token[last:]

    if _NON_ALPHA_RE.search(core):
        return BROKEN
    if _DIGIT_RE.search(leading) or _DIGIT_RE.search(trailing):
        return BROKEN

    word = core.lower()
    if word in ANNOTATION_WORDS:
        return ANNOTATION
    return ClassifiedToken(TokenKind.WORD, word, word in vocabulary)


def classify_line(line: str, vocabulary: AbstractSet[str]) -> list[ClassifiedToken]:
    return [classify_token(t, vocabulary) for t in line.split()]


# ---------------------------------------------------------------------------
# Single-line pass
# ---------------------------------------------------------------------------


def scan_line(line: str, line_index: int, threshold: int, vocabulary: AbstractSet[str]) -> list[Violation]:
    """Flag runs of ``threshold`` or more vocabulary words on a single line.

    ``line_index`` is 0-based; emitted violations carry the 1-based number.
    A non-empty result marks the line as claimed for the cross-line pass.
    """
    violations: list[Violation] = []
    run: list[str] = []

    def _close_run() -> None:
        if len(run) >= threshold:
            violations.append(Violation(line_index + 1, tuple(run), line))
        run.clear()

    for token in classify_line(line, vocabulary):
        if token.kind in (TokenKind.SKIP, TokenKind.ANNOTATION):
            continue
        if token.is_vocabulary_word:
            run.append(token.word)
        else:
            _close_run()
    _close_run()
    return violations


# ---------------------------------------------------------------------------
# Cross-line pass
# ---------------------------------------------------------------------------


def _pure_line_words(line: str, vocabulary: AbstractSet[str]) -> list[str] | None:
    """Vocabulary words of a pure line, or ``None`` when the line is not pure."""
    tokens = classify_line(line, vocabulary)
    substantive = [t for t in tokens if t.is_substantive]
    if not substantive or not all(t.is_vocabulary_word for t in substantive):
        return None
    return [t.word for t in substantive]


def scan_cross_line(
    lines: list[str],
    claimed: AbstractSet[int],
    threshold: int,
    vocabulary: AbstractSet[str],
) -> list[Violation]:
    """Accumulate vocabulary words across consecutive pure lines.

    Blank lines neither extend nor break a run. Claimed lines, non-pure lines
    and lines holding only annotations or punctuation end the run.
    """
    violations: list[Violation] = []
    words: list[str] = []
    start: int | None = None

    def _flush() -> None:
        nonlocal start
        if start is not None and len(words) >= threshold:
            violations.append(Violation(start + 1, tuple(words), lines[start]))
        words.clear()
        start = None

    for i, line in enumerate(lines):
        if i in claimed:
            _flush()
            continue
        if not line.strip():
            continue
        found = _pure_line_words(line, vocabulary)
        if not found:
            _flush()
            continue
        if start is None:
            start = i
        words.extend(found)
    _flush()
    return violations


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def detect(
    content: str,
    threshold: int = DEFAULT_THRESHOLD,
    vocabulary: AbstractSet[str] | None = None,
) -> list[Violation]:
    """Detect sequences of consecutive BIP39 words in text content.

    Args:
        content: Text to scan. Lines are split on ``"\\n"`` only.
        threshold: Minimum run length that is reported (inclusive).
        vocabulary: Word set to match against. Defaults to the BIP39 English list.

    Returns:
        Single-line violations in line order, followed by cross-line
        violations in line order.
    """
    if not content:
        return []
    vocab = load_wordlist() if vocabulary is None else vocabulary
    lines = content.split("\n")

    violations: list[Violation] = []
    claimed: set[int] = set()
    for i, line in enumerate(lines):
        found = scan_line(line, i, threshold, vocab)
        if found:
            claimed.add(i)
            violations.extend(found)

    violations.extend(scan_cross_line(lines, claimed, threshold, vocab))
    return violations


class Detector:
    """A vocabulary and threshold bound together for repeated scans."""

    def __init__(self, vocabulary: Iterable[str] | None = None, threshold: int = DEFAULT_THRESHOLD) -> None:
        self.vocabulary = load_wordlist() if vocabulary is None else frozenset(vocabulary)
        self.threshold = threshold

    def detect(self, content: str) -> list[Violation]:
        return detect(content, self.threshold, self.vocabulary)
