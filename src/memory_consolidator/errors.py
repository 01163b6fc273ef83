"""Shared error types for memory consolidation."""


class MemoryConsolidatorError(Exception):
    """Base error for memory consolidation."""


class SecretsError(MemoryConsolidatorError):
    """Secrets file is missing a required key."""


class StateFileError(MemoryConsolidatorError):
    """Existing consolidation state file can't be used."""


class DashClawError(MemoryConsolidatorError):
    """DashClaw answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"DashClaw request failed: {status_code} - {body}")
        self.status_code = status_code
        self.body = body
