from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class RunContext(BaseModel):
    """Per-turn context for tracing, attribution, and timeouts."""

    run_id: str = Field(default_factory=lambda: str(uuid4()))
    session_id: Optional[str] = None
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    deadline_seconds: Optional[float] = None

    @classmethod
    def create(
        cls,
        session_id: Any | None = None,
        deadline_seconds: float | None = None,
    ) -> "RunContext":
        return cls(
            session_id=str(session_id) if session_id is not None else None,
            deadline_seconds=deadline_seconds,
        )


__all__ = ["RunContext"]
