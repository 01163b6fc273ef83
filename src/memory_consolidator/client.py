"""DashClaw HTTP client: handoffs, key points and decisions."""

from typing import Any

import httpx
from loguru import logger

from .config import AGENT_ID, AGENT_NAME
from .errors import DashClawError


class DashClawClient:
    """
    Minimal synchronous client for the DashClaw agent service.

    Only the three calls consolidation needs are implemented. There is no
    retry and no timeout; a hung request blocks the caller.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        agent_id: str = AGENT_ID,
        agent_name: str = AGENT_NAME,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Args:
            base_url: DashClaw server URL.
            api_key: API key sent as the x-api-key header.
            agent_id: Agent identifier attached to every record.
            agent_name: Display name attached to every record.
            transport: Optional httpx transport, used by tests.
        """
        self.base_url = base_url.rstrip("/")
        self.agent_id = agent_id
        self.agent_name = agent_name
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"x-api-key": api_key},
            timeout=None,
            transport=transport,
        )

    def __enter__(self) -> "DashClawClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        body = {"agent_id": self.agent_id, "agent_name": self.agent_name, **payload}
        logger.debug(f"POST {path}: {body}")
        response = self._client.post(path, json=body)
        if not response.is_success:
            raise DashClawError(response.status_code, response.text)
        return response.json() if response.content else {}

    def create_handoff(
        self,
        summary: str,
        session_date: str,
        key_decisions: list[str],
        open_tasks: list[str] | None = None,
        next_priorities: list[str] | None = None,
    ) -> dict[str, Any]:
        """Create a session handoff. The response carries `handoff_id`."""
        return self._post(
            "/api/handoffs",
            {
                "summary": summary,
                "session_date": session_date,
                "key_decisions": key_decisions,
                "open_tasks": open_tasks or [],
                "next_priorities": next_priorities or [],
            },
        )

    def capture_key_point(self, content: str, category: str, importance: int, session_date: str) -> dict[str, Any]:
        """Capture a single key point."""
        return self._post(
            "/api/handoffs/key-points",
            {
                "content": content,
                "category": category,
                "importance": importance,
                "session_date": session_date,
            },
        )

    def record_decision(self, decision: str, context: str, outcome: str, confidence: int) -> dict[str, Any]:
        """Record a decision and its outcome."""
        return self._post(
            "/api/learning/decisions",
            {
                "decision": decision,
                "context": context,
                "outcome": outcome,
                "confidence": confidence,
            },
        )
