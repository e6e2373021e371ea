"""Turn a unified diff into scannable content plus a map back to file lines.

Only added lines are scanned. Non-contiguous groups of added lines are
separated by a sentinel line so the cross-line pass cannot join words that
are far apart in the file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

GAP_SENTINEL = "---bip39-guard-sentinel---"
SENTINEL_LINE = -1

_HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")


@dataclass(frozen=True)
class AddedLine:
    file_line_number: int
    text: str


@dataclass(frozen=True)
class ContentBlock:
    content: str
    line_map: tuple[int, ...]

    def source_line(self, line_number: int) -> int:
        """Map a 1-based content line number to its line in the file (-1 for sentinels)."""
        return self.line_map[line_number - 1]


def extract_added_lines(diff: str) -> list[AddedLine]:
    added: list[AddedLine] = []
    current = 0
    in_hunk = False

    for line in diff.split("\n"):
        header = _HUNK_HEADER_RE.match(line)
        if header:
            current = int(header.group(1))
            in_hunk = True
            continue
        if line.startswith("diff --git"):
            in_hunk = False
            continue
        if not in_hunk or line.startswith("\\"):
            continue
        if line.startswith("+"):
            added.append(AddedLine(current, line[1:]))
            current += 1
        elif line.startswith("-"):
            continue
        else:
            current += 1
    return added


def build_content_block(added_lines: list[AddedLine]) -> ContentBlock:
    lines: list[str] = []
    line_map: list[int] = []
    previous: int | None = None

    for added in added_lines:
        if previous is not None and added.file_line_number != previous + 1:
            lines.append(GAP_SENTINEL)
            line_map.append(SENTINEL_LINE)
        lines.append(added.text)
        line_map.append(added.file_line_number)
        previous = added.file_line_number

    return ContentBlock("\n".join(lines), tuple(line_map))
