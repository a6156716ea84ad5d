"""Configuration for pipeline tracing."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TraceConfig(BaseModel):
    """Settings used to build a Trace.

    Attributes:
        enabled: Record events at all.
        max_events: Retain at most this many events, dropping the oldest.
            None keeps everything, which is unbounded for infinite pipelines.
        record_values: Include repr() of each stage input in stage_begin.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    max_events: int | None = Field(default=10_000, gt=0)
    record_values: bool = False
