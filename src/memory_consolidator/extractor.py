"""Pattern-based extraction of decisions, lessons and insights."""

import re

from .config import INSIGHT_WINDOW
from .models import ExtractedItem

# Only the first alternative is anchored and requires the bold prefix; the
# others match anywhere in a line. Existing logs depend on this.
DECISION_RE = re.compile(r"^\*\*Decision:|Decided:|Decision made:", re.IGNORECASE)
LESSON_RE = re.compile(r"^\*\*Lesson:|Learned:|Discovery:", re.IGNORECASE)

# Window widths count code points, so astral characters such as emoji take one slot each.
INSIGHT_KEYWORDS = ("breakthrough", "insight", "realized", "discovered")
INSIGHT_RE = re.compile(
    r"(.{0,%d}(%s).{0,%d})" % (INSIGHT_WINDOW, "|".join(INSIGHT_KEYWORDS), INSIGHT_WINDOW),
    re.IGNORECASE,
)


def extract_marked_lines(sections: dict[str, str], pattern: re.Pattern) -> list[ExtractedItem]:
    """One item per line matching `pattern`, with the first match removed."""
    items = []
    for section, content in sections.items():
        for line in content.split("\n"):
            if pattern.search(line):
                items.append(ExtractedItem(section=section, text=pattern.sub("", line, count=1).strip()))
    return items


def extract_decisions(sections: dict[str, str]) -> list[ExtractedItem]:
    """Extract lines marked as decisions."""
    return extract_marked_lines(sections, DECISION_RE)


def extract_lessons(sections: dict[str, str]) -> list[ExtractedItem]:
    """Extract lines marked as lessons."""
    return extract_marked_lines(sections, LESSON_RE)


def extract_insights(sections: dict[str, str]) -> list[ExtractedItem]:
    """At most one insight per section: the text around the first keyword.

    The window is up to INSIGHT_WINDOW characters either side and does not
    cross line breaks.
    """
    insights = []
    for section, content in sections.items():
        match = INSIGHT_RE.search(content)
        if match:
            insights.append(ExtractedItem(section=section, text=match.group(1).strip()))
    return insights
