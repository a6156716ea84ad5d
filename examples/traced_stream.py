"""
Tracing an infinite pipeline.

A pipeline over itertools.count never ends on its own; the consumer decides
how much to pull. A bounded trace keeps the last events only.
"""

import itertools
import logging
from collections.abc import Iterator

from yieldflow import Trace, TraceConfig, compose

logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def naturals(start: int) -> Iterator[int]:
    yield from itertools.count(start)


def divisors(n: int) -> Iterator[tuple[int, int]]:
    for d in range(1, n + 1):
        if n % d == 0:
            yield n, d


def main() -> None:
    trace = Trace.from_config(TraceConfig(max_events=8, record_values=True))
    pipeline = compose(divisors, naturals, trace=trace)

    first = list(itertools.islice(pipeline(1), 10))
    print(f"First pairs: {first}")

    print(f"Events retained: {len(trace)} (dropped {trace.dropped})")
    for event in trace.get_events():
        print(f"  - #{event.id} {event.action}: {event.info}")


if __name__ == "__main__":
    main()
