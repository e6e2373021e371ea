# SPDX-License-Identifier: Apache-2.0
"""nomonic: catch BIP39 seed phrases before they reach a git repository.

Scans text for runs of consecutive words from the 2048-word BIP39 English
wordlist, tolerating numbering, labels and blank lines, without flagging
ordinary prose. No network calls, no dependencies beyond pydantic.

Usage::

    from nomonic import detect

    for v in detect(text, threshold=5):
        print(v.line_number, " ".join(v.matched_words))
"""

from nomonic.core import DEFAULT_THRESHOLD, Detector, Violation, classify_token, detect
from nomonic.wordlist import load_wordlist

__all__ = ["detect", "Detector", "Violation", "classify_token", "load_wordlist", "DEFAULT_THRESHOLD"]
