"""
Receipt model — the backend execution contract.

A Receipt is what every backend hands back from a command: the
resolver sends identifiers, backends return Receipts. Never exceptions.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Result of one backend command.

    Exit status is the only success signal. Captured stderr lives in
    ``error``/``metadata`` for diagnostics and is never used to decide
    success or failure.
    """

    backend: str
    target: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the command succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command failed."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        backend: str,
        target: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(backend=backend, target=target, status="ok", output=output, **kwargs)

    @classmethod
    def failure(
        cls,
        backend: str,
        target: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(backend=backend, target=target, status="failed", error=error, **kwargs)

    @classmethod
    def skip(
        cls,
        backend: str,
        target: str,
        reason: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a skip receipt."""
        return cls(backend=backend, target=target, status="skipped", output=reason, **kwargs)
