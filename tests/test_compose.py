from yieldflow import compose, constant, unit
from fakes import add1, end, middle, naturals, nothing, range_, square, start


def test_compose_add1_square() -> None:
    iterator = compose(add1, square)(3)
    assert next(iterator) == 10


def test_compose_square_add1() -> None:
    iterator = compose(square, add1)(3)
    assert next(iterator) == 16


def test_empty_compose_is_identity() -> None:
    assert list(compose()("x")) == ["x"]
    assert list(compose()(None)) == [None]


def test_single_stage_behaves_like_stage() -> None:
    for n in (0, 1, 4):
        assert list(compose(range_)(n)) == list(range_(n))


def test_order_law() -> None:
    def pair(x: int):
        yield (x, "a")
        yield (x, "b")

    expected = [item for v in range_(3) for item in pair(v)]
    assert list(compose(pair, range_)(3)) == expected


def test_repetition() -> None:
    pipeline = compose(constant(range_, 3), range_)
    assert list(pipeline(2)) == [0, 1, 2, 0, 1, 2]


def test_repetition_many() -> None:
    pipeline = compose(constant(range_, 2), range_)
    assert list(pipeline(5)) == [0, 1, 0, 1, 0, 1, 0, 1, 0, 1]


def test_triangular_replication() -> None:
    pipeline = compose(range_, range_)
    assert list(pipeline(5)) == [0, 0, 1, 0, 1, 2, 0, 1, 2, 3]


def test_cartesian_product_two_dimensions() -> None:
    pipeline = compose(end, middle, start)
    assert list(pipeline(3)) == [
        [1, 1],
        [1, 2],
        [1, 3],
        [2, 1],
        [2, 2],
        [2, 3],
        [3, 1],
        [3, 2],
        [3, 3],
    ]


def test_cartesian_product_three_dimensions() -> None:
    pipeline = compose(end, middle, middle, start)
    assert list(pipeline(2)) == [
        [1, 1, 1],
        [1, 1, 2],
        [1, 2, 1],
        [1, 2, 2],
        [2, 1, 1],
        [2, 1, 2],
        [2, 2, 1],
        [2, 2, 2],
    ]


def test_associativity() -> None:
    a, b, c = range_, add1, range_
    flat = list(compose(a, b, c)(4))
    assert list(compose(compose(a, b), c)(4)) == flat
    assert list(compose(a, compose(b, c))(4)) == flat


def test_associativity_with_cartesian_stages() -> None:
    flat = list(compose(end, middle, start)(3))
    assert list(compose(compose(end, middle), start)(3)) == flat
    assert list(compose(end, compose(middle, start))(3)) == flat


def test_unit_is_left_and_right_identity() -> None:
    assert list(compose(unit, range_)(4)) == list(range_(4))
    assert list(compose(range_, unit)(4)) == list(range_(4))


def test_empty_stage_prunes_branch() -> None:
    def evens_only(x: int):
        if x % 2 == 0:
            yield x

    assert list(compose(range_, evens_only, range_)(5)) == [0, 1, 0, 1, 2, 3]
    assert list(compose(range_, nothing)(5)) == []


def test_stage_may_return_plain_iterable() -> None:
    def listed(x: int) -> list[int]:
        return [x, x]

    assert list(compose(listed, range_)(2)) == [0, 0, 1, 1]


def test_pipeline_reused_across_inputs() -> None:
    pipeline = compose(range_, range_)
    assert list(pipeline(3)) == [0, 0, 1]
    assert list(pipeline(2)) == [0]
    assert list(pipeline(3)) == [0, 0, 1]


def test_pipeline_accepts_infinite_stage() -> None:
    iterator = compose(square, naturals)(0)
    assert [next(iterator) for _ in range(5)] == [0, 1, 4, 9, 16]


def test_long_pipeline_does_not_hit_recursion_limit() -> None:
    pipeline = compose(*[add1] * 5000)
    assert list(pipeline(0)) == [5000]


def test_long_pipeline_depth_first_order() -> None:
    pipeline = compose(*[range_] * 3)
    assert list(pipeline(4)) == list(compose(range_, compose(range_, range_))(4))
