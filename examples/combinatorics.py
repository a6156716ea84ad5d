"""
Combinatorial enumeration with composed stages.

This example shows:
1. Cartesian products built from "pick", "extend" and "emit" stages
2. Triangular expansion by composing a stage with itself
3. Branch pruning with guard()
"""

from collections.abc import Iterator
from typing import Any

from yieldflow import compose, guard


def pick(n: int) -> Iterator[dict[str, Any]]:
    for i in range(1, n + 1):
        yield {"n": n, "arr": [i]}


def extend(obj: dict[str, Any]) -> Iterator[dict[str, Any]]:
    for i in range(1, obj["n"] + 1):
        yield {"n": obj["n"], "arr": [*obj["arr"], i]}


def emit(obj: dict[str, Any]) -> Iterator[list[int]]:
    yield obj["arr"]


def count_to(n: int) -> Iterator[int]:
    yield from range(n)


# =============================================================================
# Example 1: Cartesian products
# =============================================================================
def example_cartesian() -> None:
    print("\n--- Example 1: [1, 2, 3] x [1, 2, 3] ---")
    for pair in compose(emit, extend, pick)(3):
        print(f"  {pair}")

    print("\n--- Example 1b: [1, 2] x [1, 2] x [1, 2] ---")
    for triple in compose(emit, extend, extend, pick)(2):
        print(f"  {triple}")


# =============================================================================
# Example 2: Triangular expansion
# =============================================================================
def example_triangular() -> None:
    print("\n--- Example 2: compose(count_to, count_to)(5) ---")
    print(f"  {list(compose(count_to, count_to)(5))}")


# =============================================================================
# Example 3: Pruning branches
# =============================================================================
def example_pruning() -> None:
    # Strictly increasing pairs only
    increasing = guard(lambda obj: obj["arr"] == sorted(set(obj["arr"])))
    pipeline = compose(emit, increasing, extend, pick)

    print("\n--- Example 3: increasing pairs from 1..4 ---")
    print(f"  {list(pipeline(4))}")


def main() -> None:
    print("=" * 60)
    print("yieldflow - combinatorics")
    print("=" * 60)

    example_cartesian()
    example_triangular()
    example_pruning()


if __name__ == "__main__":
    main()
