"""Stage functions and the Pipeline wrapper - list monad over lazy iterators."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from yieldflow.kernel.trace import Trace

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")


Stage = Callable[[A], Iterable[B]]


def identity(value: A) -> Iterator[A]:
    """Yield the input exactly once (the monadic return)."""
    yield value


def flat_map(source: Stage[A, B], stage: Stage[B, C]) -> Callable[[A], Iterator[C]]:
    """Kleisli-compose two stages: run ``source``, then ``stage`` on each output.

    Every output of ``stage(v)`` is yielded before the next ``v`` is pulled
    from ``source``, which gives depth-first order. Nothing is called until
    the first pull.
    """

    def _run(value: A) -> Iterator[C]:
        for item in source(value):
            yield from stage(item)

    return _run


def fold_stages(stages: Sequence[Stage[Any, Any]]) -> Callable[[Any], Iterator[Any]]:
    """Right fold of flat_map over ``stages`` starting from identity.

    The last stage is applied to the raw input first, the first stage last.
    The chain is walked with an explicit stack of open stage iterators, one
    per level, so pipeline length is not bounded by the recursion limit.
    """
    ordered = tuple(reversed(stages))
    if not ordered:
        return identity

    def _run(value: Any) -> Iterator[Any]:
        stack = [iter(ordered[0](value))]
        while stack:
            try:
                item = next(stack[-1])
            except StopIteration:
                stack.pop()
                continue
            if len(stack) == len(ordered):
                yield item
            else:
                stack.append(iter(ordered[len(stack)](item)))

    return _run


def stage_name(stage: Any) -> str:
    """Readable name for a stage, used in traces and reprs."""
    if isinstance(stage, Pipeline):
        return repr(stage)
    if isinstance(stage, functools.partial):
        bound = [repr(a) for a in stage.args]
        bound += [f"{k}={v!r}" for k, v in stage.keywords.items()]
        name = stage_name(stage.func)
        return f"{name}({', '.join(bound)}, ...)" if bound else name
    name = getattr(stage, "__name__", None) or getattr(stage, "__qualname__", None)
    return name if isinstance(name, str) else repr(stage)


def traced(
    stage: Stage[A, B],
    trace: Trace,
    index: int,
    parent_id: int | None = None,
) -> Callable[[A], Iterator[B]]:
    """Wrap a stage so each invocation records begin/end/error evidence.

    Values and their order pass through untouched. Errors are recorded
    and re-raised as-is. A traced pipeline used as a stage of another
    pipeline sharing the same trace is itself wrapped, so one failure is
    recorded once per nesting level: first for the failing stage, then for
    each enclosing pipeline stage.
    """
    name = stage_name(stage)

    def _run(value: A) -> Iterator[B]:
        info: dict[str, Any] = {"stage": name, "index": index}
        begin_info = {**info, "input": repr(value)} if trace.record_values else info
        event_id = trace.record("stage_begin", info=begin_info, parent_id=parent_id)

        start_time = time.perf_counter()
        count = 0
        try:
            for item in stage(value):
                count += 1
                yield item
        except Exception as exc:
            trace.record(
                "stage_error",
                info={**info, "error": str(exc)},
                parent_id=event_id,
            )
            raise
        duration_ms = (time.perf_counter() - start_time) * 1000

        trace.record(
            "stage_end",
            info={**info, "count": count},
            parent_id=event_id,
            duration_ms=duration_ms,
        )

    return _run


@dataclass(frozen=True)
class Pipeline(Generic[A, B]):
    """A composed stage function.

    Calling a pipeline returns a fresh lazy iterator for that input, so one
    pipeline can be reused across any number of inputs. A pipeline is itself
    a stage and can be passed back to compose().
    """

    _run: Callable[[A], Iterator[B]]
    stages: tuple[Stage[Any, Any], ...] = ()
    trace: Trace | None = None

    def __call__(self, value: A) -> Iterator[B]:
        return self._run(value)

    def __len__(self) -> int:
        return len(self.stages)

    def __bool__(self) -> bool:
        # compose() has no stages but is still a valid identity pipeline
        return True

    def __repr__(self) -> str:
        return f"compose({', '.join(stage_name(s) for s in self.stages)})"

    def then(self, stage: Stage[B, C]) -> Pipeline[A, C]:
        """Apply ``stage`` to every output of this pipeline.

        Equivalent to compose(stage, *self.stages) with the same trace.
        """
        from yieldflow.combinators.ops import compose

        return compose(stage, *self.stages, trace=self.trace)

    def map(self, func: Callable[[B], C]) -> Pipeline[A, C]:
        from yieldflow.combinators.ops import lift

        return self.then(lift(func))

    def filter(self, predicate: Callable[[B], bool]) -> Pipeline[A, B]:
        from yieldflow.combinators.ops import guard

        return self.then(guard(predicate))
