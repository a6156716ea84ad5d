"""Combinator primitives: compose, unit, lift, guard, bind, constant."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any, TypeVar

from yieldflow.kernel.stage import Pipeline, Stage, fold_stages, identity, traced
from yieldflow.kernel.trace import Trace

A = TypeVar("A")
B = TypeVar("B")

logger = logging.getLogger(__name__)


def compose(*stages: Stage[Any, Any], trace: Trace | None = None) -> Pipeline[Any, Any]:
    """Compose stage functions right to left into one lazy pipeline.

    compose(f, g) behaves as f after g: g is applied to the input, and f is
    applied to each of g's outputs. Outputs come out depth-first, so the
    last-listed stage is the outermost loop and the first-listed stage the
    innermost one.

    Semantics:
        - compose() yields its input once
        - compose(s) yields exactly what s yields
        - Associative: compose(a, b, c) == compose(compose(a, b), c)
          == compose(a, compose(b, c))
        - Nothing runs until the caller pulls from the returned iterator
        - Stage count is not limited by the recursion limit; each nested
          Pipeline used as a stage still adds one generator frame
        - Stages are not validated; stage errors surface on the pull
          that reaches them, unchanged

    Args:
        *stages: Callables taking one value and returning an iterable.
        trace: Optional trace receiving pipeline and stage events.

    Returns:
        Pipeline: call it with an input to get a lazy iterator.
    """
    logger.debug("Composing pipeline of %d stage(s)", len(stages))

    if trace is None:
        return Pipeline(_run=fold_stages(stages), stages=stages)

    def _run(value: Any) -> Iterator[Any]:
        begin_id = trace.record("pipeline_begin", info={"stages": len(stages)})
        wrapped = [
            traced(stage, trace, index, parent_id=begin_id)
            for index, stage in enumerate(stages)
        ]

        produced = 0
        for item in fold_stages(wrapped)(value):
            produced += 1
            yield item

        trace.record("pipeline_end", info={"count": produced}, parent_id=begin_id)

    return Pipeline(_run=_run, stages=stages, trace=trace)


def unit(value: A) -> Iterator[A]:
    """Yield ``value`` once. Identity for compose on both sides."""
    return identity(value)


def lift(func: Callable[[A], B]) -> Stage[A, B]:
    """Turn a plain function into a stage yielding its single result."""

    def _run(value: A) -> Iterator[B]:
        yield func(value)

    _run.__name__ = _run.__qualname__ = f"lift({_name(func)})"
    return _run


def guard(predicate: Callable[[A], bool]) -> Stage[A, A]:
    """Stage that passes values satisfying ``predicate`` and drops the rest.

    A dropped value contributes nothing downstream, pruning its branch.
    """

    def _run(value: A) -> Iterator[A]:
        if predicate(value):
            yield value

    _run.__name__ = _run.__qualname__ = f"guard({_name(predicate)})"
    return _run


def bind(stage: Callable[..., Any], *args: Any, **kwargs: Any) -> Stage[Any, Any]:
    """Partially apply a stage's leading arguments.

    bind(stage, *args)(x) calls stage(*args, x, **kwargs): the value flowing
    through the pipeline becomes the last positional argument.
    """
    return functools.partial(stage, *args, **kwargs)


def constant(stage: Callable[..., Iterable[B]], *args: Any, **kwargs: Any) -> Stage[Any, B]:
    """Stage that ignores its input and yields from stage(*args, **kwargs).

    Each input gets a fresh call, so compose(constant(range_, 3), range_)(2)
    repeats range_(3) once per output of range_(2).
    """

    def _run(_: Any) -> Iterator[B]:
        yield from stage(*args, **kwargs)

    _run.__name__ = _run.__qualname__ = f"constant({_name(stage)})"
    return _run


def _name(func: Callable[..., Any]) -> str:
    return getattr(func, "__name__", None) or repr(func)
