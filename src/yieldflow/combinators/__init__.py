"""Combinators - lazy Kleisli composition of stage functions."""

# compose satisfies the monad laws of the list monad over lazy iterators:
#
# 1. Left identity: compose(unit, f) == f
#
# 2. Right identity: compose(f, unit) == f
#
# 3. Associativity: compose(compose(a, b), c) == compose(a, compose(b, c)) == compose(a, b, c)
#    Nesting never changes the produced sequence or its order
#
# 4. Empty composition is unit: compose()(x) yields x once
#
# Equality here means element-for-element equality of the produced
# sequences for pure, deterministic stages.

from yieldflow.combinators.ops import bind, compose, constant, guard, lift, unit

__all__ = [
    "compose",
    "unit",
    "lift",
    "guard",
    "bind",
    "constant",
]
