"""Data models for memory consolidation."""

from dataclasses import asdict, dataclass, field
from typing import Literal

RunMode = Literal["NIGHTLY", "CONTEXT_TRIGGER"]

NIGHTLY: RunMode = "NIGHTLY"
CONTEXT_TRIGGER: RunMode = "CONTEXT_TRIGGER"


@dataclass
class Section:
    """A block of the daily log introduced by a ### heading."""

    title: str
    body: str


@dataclass
class ExtractedItem:
    """A decision, lesson or insight pulled out of a section."""

    section: str
    text: str


@dataclass
class ConsolidationSummary:
    """Per-day record written to memory/consolidations/<date>.json."""

    date: str
    mode: RunMode
    decisions: list[str] = field(default_factory=list)
    lessons: list[str] = field(default_factory=list)
    insights: list[str] = field(default_factory=list)
    sections: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
