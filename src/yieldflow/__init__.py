from .combinators import bind, compose, constant, guard, lift, unit
from .config import TraceConfig
from .kernel import Evidence, Pipeline, Stage, Trace

__all__ = [
    # Combinators
    "compose",
    "unit",
    "lift",
    "guard",
    "bind",
    "constant",
    # Primitives
    "Pipeline",
    "Stage",
    # Tracing
    "Trace",
    "TraceConfig",
    "Evidence",
]
