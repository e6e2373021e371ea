"""Console and JSON rendering of scan results."""

from __future__ import annotations

import json
import sys
from typing import Sequence, TextIO

from nomonic.scanner import FileViolation

_BOX_WIDTH = 62


class Palette:
    """ANSI colour codes, blank when the target stream is not a terminal."""

    def __init__(self, stream: TextIO) -> None:
        enabled = hasattr(stream, "isatty") and stream.isatty()
        self.enabled = enabled
        self.red = "\033[0;31m" if enabled else ""
        self.green = "\033[0;32m" if enabled else ""
        self.yellow = "\033[0;33m" if enabled else ""
        self.bold = "\033[1m" if enabled else ""
        self.reset = "\033[0m" if enabled else ""


def _banner(title: str, c: Palette) -> list[str]:
    if not c.enabled:
        return [f"=== {title} ==="]
    return [
        f"{c.red}{c.bold}╔{'═' * _BOX_WIDTH}╗{c.reset}",
        f"{c.red}{c.bold}║  {title.ljust(_BOX_WIDTH - 2)}║{c.reset}",
        f"{c.red}{c.bold}╚{'═' * _BOX_WIDTH}╝{c.reset}",
    ]


def render_violations(violations: Sequence[FileViolation], *, blocked: bool = False, stream: TextIO | None = None) -> str:
    c = Palette(stream or sys.stderr)
    title = "BIP39 SEED PHRASE DETECTED"
    if blocked:
        title += " — COMMIT BLOCKED"

    out = [""] + _banner(title, c)
    for v in violations:
        out.append("")
        out.append(f"  {c.yellow}File: {v.file}:{v.line_number}{c.reset}")
        out.append(f"  {c.red}Found {len(v.matched_words)} consecutive BIP39 words:{c.reset}")
        out.append(f"  {c.red}  → {' '.join(v.matched_words)}{c.reset}")
    out.append("")
    if blocked:
        out.append(f"{c.red}{c.bold}Commit blocked.{c.reset} {c.red}Remove seed phrases before committing.{c.reset}")
        out.append(f"{c.red}Use {c.bold}git commit --no-verify{c.reset} {c.red}to bypass (not recommended).{c.reset}")
        out.append("")
    return "\n".join(out) + "\n"


def render_clean(*, staged: bool = False, stream: TextIO | None = None) -> str:
    c = Palette(stream or sys.stderr)
    where = " in staged files" if staged else ""
    return f"{c.green}✓ No BIP39 seed phrases detected{where}{c.reset}\n"


def render_json(violations: Sequence[FileViolation]) -> str:
    return json.dumps([v.to_payload() for v in violations], indent=2) + "\n"
