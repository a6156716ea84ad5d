"""Runtime trace infrastructure - separate from the produced values.

Trace captures stage invocations of a composed pipeline for profiling and
debugging. It never participates in what a pipeline yields. Tree
relationships are reconstructed only on demand via as_tree().
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from yieldflow.config import TraceConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Evidence:
    """A single recorded execution event."""

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)
    duration_ms: float | None = None

    def matches(self, **criteria: Any) -> bool:
        return all(
            self.info.get(k) == v or getattr(self, k, None) == v
            for k, v in criteria.items()
        )


class Trace:
    """Runtime trace for capturing pipeline events.

    Events are appended in pull order. Parent links are explicit because
    suspended stage sequences interleave, so there is no call stack to
    infer them from.

    Performance guarantees:
    - Trace disabled -> single flag check per event
    - Evidence append is O(1)
    - With max_events set, the oldest events are dropped first
    """

    def __init__(
        self,
        enabled: bool = True,
        max_events: int | None = None,
        record_values: bool = False,
    ) -> None:
        self.enabled = enabled
        self.max_events = max_events
        self.record_values = record_values
        self._events: deque[Evidence] = deque(maxlen=max_events)
        self._next_id: int = 0
        self._dropped: int = 0

    @classmethod
    def from_config(cls, config: TraceConfig) -> Trace:
        return cls(
            enabled=config.enabled,
            max_events=config.max_events,
            record_values=config.record_values,
        )

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        duration_ms: float | None = None,
    ) -> int | None:
        """Record an evidence event.

        Args:
            action: What happened (e.g., "stage_begin", "pipeline_end")
            info: Additional context
            parent_id: Explicit parent event ID for tree relationships
            duration_ms: Execution duration

        Returns:
            Event ID for linking child events, or None if tracing disabled
        """
        if not self.enabled:
            return None

        event_id = self._next_id
        self._next_id += 1

        if self.max_events is not None and len(self._events) == self.max_events:
            self._dropped += 1
            if self._dropped == 1:
                logger.debug("Trace buffer full at %d events, dropping oldest", self.max_events)

        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=parent_id,
                timestamp=datetime.now(UTC),
                info=info or {},
                duration_ms=duration_ms,
            )
        )

        return event_id

    @property
    def dropped(self) -> int:
        """Number of events evicted because the buffer was full."""
        return self._dropped

    def get_events(self) -> list[Evidence]:
        """Get all retained events in recording order."""
        return list(self._events)

    def find_all(self, **criteria: Any) -> list[Evidence]:
        """Find retained events matching the given criteria.

        Criteria match either an Evidence attribute or a key of its info
        dict, e.g. find_all(action="stage_error") or find_all(stage="square").
        """
        return [ev for ev in self._events if ev.matches(**criteria)]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Reconstruct parent-child relationships for visualization.

        Returns:
            Dict mapping parent_id to list of child_ids
        """
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Clear all events (for reuse)."""
        self._events.clear()
        self._next_id = 0
        self._dropped = 0
