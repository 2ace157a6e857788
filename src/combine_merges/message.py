"""Commit message parsing and consolidation.

git appends a block like this to merge messages when conflicts were
resolved by hand:

    Merge branch 'topic'

    # Conflicts:
    #	src/a.c
    #	src/b.c

Collapsing a chain of merges keeps the tip's message and the union of
all these blocks.
"""

from dataclasses import dataclass, field
from enum import Enum

CONFLICTS_MARKER = "# Conflicts:"
CONFLICT_ENTRY_PREFIX = "#\t"


class _ScanState(Enum):
    NORMAL = "normal"
    IN_CONFLICTS = "in_conflicts"


@dataclass
class ParsedMessage:
    """A message split into the kept body and its conflict entries."""

    saved_lines: list[str] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)


def _trim_trailing_blanks(lines: list[str]) -> None:
    while lines and lines[-1] == "":
        lines.pop()


def parse_message(raw: str) -> ParsedMessage:
    """Split a raw message into saved lines and conflict entries.

    Conflict entries are kept verbatim, including the "#\\t" prefix.
    Everything after the first line that ends the conflict block is
    dropped. Trailing blank lines of the saved portion are removed.
    """
    parsed = ParsedMessage()
    state = _ScanState.NORMAL

    for line in raw.split("\n"):
        if state is _ScanState.NORMAL:
            if line == CONFLICTS_MARKER:
                _trim_trailing_blanks(parsed.saved_lines)
                state = _ScanState.IN_CONFLICTS
            else:
                parsed.saved_lines.append(line)
        elif line.startswith(CONFLICT_ENTRY_PREFIX):
            parsed.conflicts.append(line)
        else:
            break

    _trim_trailing_blanks(parsed.saved_lines)
    return parsed


def render_message(
    saved_lines: list[str], conflicts: set[str] | list[str]
) -> str:
    """Join saved lines, appending a sorted conflict block if needed."""
    lines = list(saved_lines)
    if conflicts:
        lines.append("")
        lines.append(CONFLICTS_MARKER)
        lines.extend(sorted(set(conflicts)))
        lines.append("")
    return "\n".join(lines)


def consolidate_messages(tip_message: str, messages: list[str]) -> str:
    """Build the combined message for a collapsed chain.

    Args:
        tip_message: Raw message of the chain's tip
        messages: Raw messages of every chain commit; the tip may be
            included again, duplicates are harmless

    Returns:
        The tip's saved message followed by the union of all
        conflict entries
    """
    tip = parse_message(tip_message)
    conflicts = set(tip.conflicts)
    for raw in messages:
        conflicts.update(parse_message(raw).conflicts)
    return render_message(tip.saved_lines, conflicts)
