"""Daily log consolidation: extract, forward to DashClaw, persist."""

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from loguru import logger
from rich.console import Console
from rich.markup import escape

from .client import DashClawClient
from .config import (
    DECISION_CONFIDENCE,
    DECISION_OUTCOME,
    DECISION_RECORD_CAP,
    HANDOFF_DECISION_CAP,
    INSIGHT_CATEGORY,
    INSIGHT_IMPORTANCE,
    KEY_POINT_CAP,
    Settings,
)
from .errors import StateFileError
from .extractor import extract_decisions, extract_insights, extract_lessons
from .models import ConsolidationSummary, ExtractedItem, RunMode
from .parser import format_log_date, read_daily_log, split_sections

console = Console()


@dataclass
class Extraction:
    """Everything pulled out of one daily log."""

    sections: dict[str, str]
    decisions: list[ExtractedItem] = field(default_factory=list)
    lessons: list[ExtractedItem] = field(default_factory=list)
    insights: list[ExtractedItem] = field(default_factory=list)


@dataclass
class ConsolidationResult:
    """Outcome of a consolidation run that found a daily log."""

    summary: ConsolidationSummary
    handoff: dict[str, Any]
    summary_path: Path
    state: dict[str, Any]

    @property
    def handoff_id(self) -> str | None:
        return self.handoff.get("handoff_id")


def extract_all(content: str) -> Extraction:
    """Split a daily log into sections and run every extraction pass."""
    sections = split_sections(content)
    return Extraction(
        sections=sections,
        decisions=extract_decisions(sections),
        lessons=extract_lessons(sections),
        insights=extract_insights(sections),
    )


def build_summary(extraction: Extraction, log_date: str, mode: RunMode) -> ConsolidationSummary:
    return ConsolidationSummary(
        date=log_date,
        mode=mode,
        decisions=[decision.text for decision in extraction.decisions],
        lessons=[lesson.text for lesson in extraction.lessons],
        insights=[insight.text for insight in extraction.insights],
        sections=list(extraction.sections),
    )


def submit_to_dashclaw(client: DashClawClient, extraction: Extraction, log_date: str, mode: RunMode) -> dict[str, Any]:
    """Send the handoff, key points and decisions, in that order.

    Each batch is truncated to its cap. Returns the handoff response.
    """
    console.print("[cyan]Creating DashClaw handoff...[/cyan]")
    handoff = client.create_handoff(
        summary=f"Memory consolidation for {log_date} ({mode})",
        session_date=log_date,
        key_decisions=[decision.text for decision in extraction.decisions[:HANDOFF_DECISION_CAP]],
        open_tasks=[],
        next_priorities=[],
    )
    console.print(f"Handoff created: [green]{escape(str(handoff.get('handoff_id')))}[/green]")

    if extraction.insights:
        console.print("[cyan]Capturing key insights...[/cyan]")
        for insight in extraction.insights[:KEY_POINT_CAP]:
            client.capture_key_point(
                content=f"[{insight.section}] {insight.text}",
                category=INSIGHT_CATEGORY,
                importance=INSIGHT_IMPORTANCE,
                session_date=log_date,
            )

    if extraction.decisions:
        console.print("[cyan]Recording decisions...[/cyan]")
        for decision in extraction.decisions[:DECISION_RECORD_CAP]:
            client.record_decision(
                decision=decision.text,
                context=f"From daily log section: {decision.section}",
                outcome=DECISION_OUTCOME,
                confidence=DECISION_CONFIDENCE,
            )

    return handoff


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_summary(path: Path, summary: ConsolidationSummary) -> None:
    """Write the per-day summary, replacing any earlier one for that date."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(summary.to_dict()), encoding="utf-8")
    logger.debug(f"Wrote consolidation log {path}")


def load_state(path: Path) -> dict[str, Any]:
    """Load the consolidation state, or {} when there is no file yet.

    A file that exists but isn't a JSON object raises StateFileError
    rather than being replaced.
    """
    if not path.exists():
        return {}
    try:
        state = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise StateFileError(f"Can't parse {path}: {e}") from e
    if not isinstance(state, dict):
        raise StateFileError(f"{path} does not contain a JSON object")
    return state


def utc_timestamp(now: datetime) -> str:
    """ISO-8601 in UTC with milliseconds and a Z suffix."""
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def update_state(state: dict[str, Any], summary: ConsolidationSummary, now: datetime) -> dict[str, Any]:
    """Return a copy of `state` with this run's fields overwritten."""
    return {
        **state,
        "lastConsolidation": utc_timestamp(now),
        "lastDate": summary.date,
        "mode": summary.mode,
        "decisionsExtracted": len(summary.decisions),
        "lessonsExtracted": len(summary.lessons),
        "insightsExtracted": len(summary.insights),
    }


def save_state(path: Path, state: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(state), encoding="utf-8")
    logger.debug(f"Wrote consolidation state {path}")


def default_client_factory(settings: Settings) -> DashClawClient:
    base_url, api_key = settings.dashclaw_credentials()
    return DashClawClient(base_url=base_url, api_key=api_key)


def run_consolidation(
    settings: Settings,
    mode: RunMode,
    today: date | None = None,
    now: Callable[[], datetime] = datetime.now,
    client_factory: Callable[[Settings], DashClawClient] = default_client_factory,
) -> ConsolidationResult | None:
    """Consolidate today's daily log.

    Returns None when there is no log for the day. Any other failure
    propagates; files already written are left in place.
    """
    today = today or date.today()
    log_date = format_log_date(today)

    content = read_daily_log(settings.memory_dir, today)
    if content is None:
        console.print(f"[yellow]No daily log found for {log_date}, skipping consolidation.[/yellow]")
        return None

    extraction = extract_all(content)
    console.print(f"Found [green]{len(extraction.sections)}[/green] sections in daily log")
    console.print(
        f"Extracted: {len(extraction.decisions)} decisions, "
        f"{len(extraction.lessons)} lessons, {len(extraction.insights)} insights"
    )

    summary = build_summary(extraction, log_date, mode)

    with client_factory(settings) as client:
        handoff = submit_to_dashclaw(client, extraction, log_date, mode)

    summary_path = settings.consolidation_log(today)
    write_summary(summary_path, summary)
    console.print(f"Consolidation log saved: {escape(str(summary_path))}")

    state = update_state(load_state(settings.state_file), summary, now())
    save_state(settings.state_file, state)

    return ConsolidationResult(summary=summary, handoff=handoff, summary_path=summary_path, state=state)
