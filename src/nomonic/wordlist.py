"""BIP39 English wordlist, loaded once from package data."""

from __future__ import annotations

import re
from functools import lru_cache
from importlib import resources

WORDLIST_FILE = "bip39_english.txt"
WORDLIST_SIZE = 2048

_WORD_RE = re.compile(r"[a-z]+")


@lru_cache(maxsize=1)
def load_wordlist() -> frozenset[str]:
    """Return the 2048-word BIP39 English vocabulary as an immutable set."""
    text = resources.files("nomonic").joinpath(WORDLIST_FILE).read_text(encoding="utf-8")
    words = [w.strip() for w in text.splitlines() if w.strip()]
    bad = [w for w in words if not _WORD_RE.fullmatch(w)]
    if bad:
        raise ValueError(f"{WORDLIST_FILE} holds non-lowercase entries: {bad[:5]}")
    vocabulary = frozenset(words)
    if len(vocabulary) != WORDLIST_SIZE or len(words) != WORDLIST_SIZE:
        raise ValueError(f"{WORDLIST_FILE} must hold {WORDLIST_SIZE} distinct words, found {len(vocabulary)}")
    return vocabulary


def is_bip39_word(word: str) -> bool:
    return word.lower() in load_wordlist()
