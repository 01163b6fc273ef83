"""Parser for markdown daily logs."""

import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from .models import Section

HEADING_RE = re.compile(r"^###\s+(.+)")

INTRO_TITLE = "intro"


def format_log_date(day: date) -> str:
    """Format a date the way daily log files are named (YYYY-MM-DD)."""
    return day.strftime("%Y-%m-%d")


def daily_log_path(memory_dir: Path, day: date) -> Path:
    """Path of the daily log for a given day."""
    return memory_dir / f"{format_log_date(day)}.md"


@dataclass(frozen=True)
class SplitState:
    """Cursor of the section splitter.

    `inside` is False until the first heading is seen; until then lines
    accumulate under the implicit intro title.
    """

    title: str = INTRO_TITLE
    lines: tuple[str, ...] = field(default_factory=tuple)
    inside: bool = False


def flush(state: SplitState) -> Section | None:
    """Emit the accumulated section, if it has any lines."""
    if not state.lines:
        return None
    return Section(title=state.title, body="\n".join(state.lines))


def step(state: SplitState, line: str) -> tuple[SplitState, Section | None]:
    """Advance the splitter by one line.

    Returns the new state and the section completed by this line, if any.
    Heading lines are consumed and never stored in a body.
    """
    match = HEADING_RE.match(line)
    if match:
        return SplitState(title=match.group(1).strip(), inside=True), flush(state)
    return SplitState(title=state.title, lines=state.lines + (line,), inside=state.inside), None


def split_sections(content: str) -> dict[str, str]:
    """Split a daily log into a mapping of section title to body.

    Text before the first heading lands under "intro". Sections with no
    lines at all are dropped. A repeated title replaces the earlier body.
    """
    sections: dict[str, str] = {}
    state = SplitState()

    for line in content.split("\n"):
        state, emitted = step(state, line)
        if emitted is not None:
            sections[emitted.title] = emitted.body

    last = flush(state)
    if last is not None:
        sections[last.title] = last.body

    return sections


def read_daily_log(memory_dir: Path, day: date) -> str | None:
    """Read the daily log for a day, or None if there isn't one."""
    path = daily_log_path(memory_dir, day)
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")
