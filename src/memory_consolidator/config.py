"""Workspace paths, secrets and fixed limits."""

import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .errors import SecretsError
from .parser import format_log_date

CONTEXT_THRESHOLD = 90000
CONTEXT_BUDGET = 200000

# Hard caps on what gets sent to DashClaw per run; the rest is dropped.
HANDOFF_DECISION_CAP = 10
KEY_POINT_CAP = 5
DECISION_RECORD_CAP = 5

INSIGHT_IMPORTANCE = 7
INSIGHT_CATEGORY = "insight"
DECISION_OUTCOME = "success"
DECISION_CONFIDENCE = 80

INSIGHT_WINDOW = 200

AGENT_ID = "moltfire"
AGENT_NAME = "MoltFire"

SECRET_LINE_RE = re.compile(r"^([^#][^=]+)=(.*)$")
QUOTES_RE = re.compile(r"^[\"']|[\"']$")


def parse_secrets(text: str) -> dict[str, str]:
    """Parse KEY=value lines. Comments and malformed lines are ignored."""
    env = {}
    for line in text.split("\n"):
        match = SECRET_LINE_RE.match(line)
        if match:
            env[match.group(1).strip()] = QUOTES_RE.sub("", match.group(2).strip())
    return env


def load_secrets(path: Path) -> dict[str, str]:
    """Load a secrets env file. A missing file raises FileNotFoundError."""
    return parse_secrets(path.read_text(encoding="utf-8"))


@dataclass
class Settings:
    """Locations of everything the tools read and write, rooted at a workspace."""

    workspace: Path

    @classmethod
    def from_workspace(cls, workspace: str | Path | None = None) -> "Settings":
        return cls(workspace=Path(workspace) if workspace else Path.cwd())

    @property
    def memory_dir(self) -> Path:
        return self.workspace / "memory"

    @property
    def consolidations_dir(self) -> Path:
        return self.memory_dir / "consolidations"

    @property
    def state_file(self) -> Path:
        return self.memory_dir / "consolidation-state.json"

    @property
    def secrets_file(self) -> Path:
        return self.workspace / "secrets" / "dashclaw.env"

    def consolidation_log(self, day: date) -> Path:
        return self.consolidations_dir / f"{format_log_date(day)}.json"

    def dashclaw_credentials(self) -> tuple[str, str]:
        """Return (base_url, api_key) from the secrets file."""
        env = load_secrets(self.secrets_file)
        missing = [key for key in ("DASHCLAW_BASE_URL", "DASHCLAW_API_KEY") if not env.get(key)]
        if missing:
            raise SecretsError(f"{self.secrets_file} is missing {', '.join(missing)}")
        return env["DASHCLAW_BASE_URL"], env["DASHCLAW_API_KEY"]
