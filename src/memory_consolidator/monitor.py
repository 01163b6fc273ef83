"""Context usage check that triggers consolidation past a token threshold."""

import re
import subprocess
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .config import CONTEXT_BUDGET, CONTEXT_THRESHOLD

# ASCII digits only; hex prefixes such as "0x10" read as 0.
LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def parse_token_count(raw: str | None) -> int:
    """Parse the leading integer of `raw` ("1234abc" -> 1234). Anything else is 0."""
    if raw is None:
        return 0
    match = LEADING_INT_RE.match(raw)
    return int(match.group(1)) if match else 0


def consolidation_command() -> list[str]:
    """Command line for a threshold-triggered consolidation run."""
    return [sys.executable, "-m", "memory_consolidator.cli", "consolidate", "--context-trigger"]


@dataclass
class CheckResult:
    """Outcome of one context check."""

    tokens: int
    threshold: int = CONTEXT_THRESHOLD
    triggered: bool = False
    succeeded: bool | None = None
    error: str | None = None

    @property
    def remaining(self) -> int:
        return self.threshold - self.tokens

    @property
    def percent_used(self) -> float:
        return self.tokens / CONTEXT_BUDGET * 100


def check_context(
    tokens: int,
    threshold: int = CONTEXT_THRESHOLD,
    run: Callable[..., subprocess.CompletedProcess] | None = None,
    cwd: Path | None = None,
) -> CheckResult:
    """Compare `tokens` to the threshold and consolidate if it has been reached.

    The child inherits stdio. Its failure is recorded on the result and
    never raised.
    """
    result = CheckResult(tokens=tokens, threshold=threshold)
    if tokens < threshold:
        return result

    run = run or subprocess.run
    result.triggered = True
    command = consolidation_command()
    logger.debug(f"Spawning {' '.join(command)}")
    try:
        run(command, check=True, cwd=cwd or Path.cwd())
        result.succeeded = True
    except (subprocess.CalledProcessError, OSError) as e:
        result.succeeded = False
        result.error = str(e)
    return result
