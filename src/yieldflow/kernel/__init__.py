"""Kernel layer - stage types, Pipeline and runtime trace."""

from yieldflow.kernel.stage import (
    Pipeline,
    Stage,
    flat_map,
    fold_stages,
    identity,
    stage_name,
    traced,
)
from yieldflow.kernel.trace import Evidence, Trace

__all__ = [
    "Pipeline",
    "Stage",
    "flat_map",
    "fold_stages",
    "identity",
    "stage_name",
    "traced",
    # Tracing
    "Evidence",
    "Trace",
]
