"""Shared fixtures for consolidation tests."""

import pytest

SAMPLE_LOG = """# 2026-10-18

Morning notes.

### Infra
**Decision: Use service X
Decided: we refactored
Had a breakthrough on caching today.

### Notes
**Lesson: keep it small
Learned: read the logs
- Discovery: regex quirks
"""


class FakeDashClaw:
    """Records DashClaw calls instead of sending them."""

    def __init__(self, handoff_id="ho_123"):
        self.handoff_id = handoff_id
        self.calls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True

    def create_handoff(self, **kwargs):
        self.calls.append(("handoff", kwargs))
        return {"handoff_id": self.handoff_id}

    def capture_key_point(self, **kwargs):
        self.calls.append(("key_point", kwargs))
        return {}

    def record_decision(self, **kwargs):
        self.calls.append(("decision", kwargs))
        return {}

    def calls_of(self, kind):
        return [kwargs for name, kwargs in self.calls if name == kind]


@pytest.fixture
def workspace(tmp_path):
    """Workspace with memory/ and a DashClaw secrets file."""
    (tmp_path / "memory").mkdir()
    secrets = tmp_path / "secrets"
    secrets.mkdir()
    (secrets / "dashclaw.env").write_text(
        "# DashClaw\n"
        'DASHCLAW_BASE_URL="https://dashclaw.example"\n'
        "DASHCLAW_API_KEY='secret-key'\n"
    )
    return tmp_path


@pytest.fixture
def daily_log(workspace):
    """Write SAMPLE_LOG as the daily log for 2026-10-18."""
    path = workspace / "memory" / "2026-10-18.md"
    path.write_text(SAMPLE_LOG, encoding="utf-8")
    return path


@pytest.fixture
def fake_dashclaw():
    return FakeDashClaw()
