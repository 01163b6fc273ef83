"""Tests for daily log section splitting."""

from datetime import date
from pathlib import Path

from memory_consolidator.parser import (
    INTRO_TITLE,
    SplitState,
    daily_log_path,
    read_daily_log,
    split_sections,
    step,
)

from conftest import SAMPLE_LOG


def test_daily_log_path_uses_iso_date():
    assert daily_log_path(Path("memory"), date(2026, 3, 7)) == Path("memory/2026-03-07.md")


def test_read_daily_log_missing_returns_none(tmp_path):
    assert read_daily_log(tmp_path, date(2026, 3, 7)) is None


def test_read_daily_log(daily_log):
    assert read_daily_log(daily_log.parent, date(2026, 10, 18)) == SAMPLE_LOG


def test_split_sample_log():
    sections = split_sections(SAMPLE_LOG)

    assert list(sections) == ["intro", "Infra", "Notes"]
    assert sections["intro"] == "# 2026-10-18\n\nMorning notes.\n"
    assert sections["Infra"] == (
        "**Decision: Use service X\n"
        "Decided: we refactored\n"
        "Had a breakthrough on caching today.\n"
    )
    # Trailing newline leaves an empty last line in the final section
    assert sections["Notes"].endswith("- Discovery: regex quirks\n")


def test_no_intro_when_log_starts_with_heading():
    sections = split_sections("### First\nbody")
    assert sections == {"First": "body"}


def test_heading_without_body_is_dropped():
    sections = split_sections("### Empty\n### Full\ntext")
    assert sections == {"Full": "text"}


def test_only_level_three_headings_split():
    content = "## Two\n#### Four\n###NoSpace\n### Three  \nx"
    sections = split_sections(content)
    assert list(sections) == [INTRO_TITLE, "Three"]
    assert sections[INTRO_TITLE] == "## Two\n#### Four\n###NoSpace"


def test_duplicate_title_replaces_body_keeps_position():
    sections = split_sections("### A\none\n### B\ntwo\n### A\nthree")
    assert list(sections) == ["A", "B"]
    assert sections["A"] == "three"


def test_split_is_lossless():
    content = "intro line\n\n### One\na\n\nb\n### Two\nc\n"
    sections = split_sections(content)

    rebuilt = [sections[INTRO_TITLE]]
    for title in ("One", "Two"):
        rebuilt.append(f"### {title}")
        rebuilt.append(sections[title])
    assert "\n".join(rebuilt) == content


def test_step_consumes_heading_and_emits_previous():
    state = SplitState()
    state, emitted = step(state, "hello")
    assert emitted is None
    assert state.lines == ("hello",)
    assert not state.inside

    state, emitted = step(state, "### Next")
    assert emitted.title == INTRO_TITLE
    assert emitted.body == "hello"
    assert state.title == "Next"
    assert state.lines == ()
    assert state.inside
