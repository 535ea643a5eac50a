from chartdata.functional import Left, Maybe, Nothing, Right, Some


def test_maybe_map_and_bind():
    assert Some(5).map(lambda x: x * 2).get_or_else(0) == 10
    assert Nothing().map(lambda x: x * 2).get_or_else(0) == 0

    def half(x: int) -> Maybe[int]:
        return Nothing() if x % 2 else Some(x // 2)

    assert Some(4).bind(half) == Some(2)
    assert Some(3).bind(half).is_none()
    assert Nothing().bind(half).is_none()


def test_either_map_and_error():
    assert Right(5).map(lambda x: x + 1).get_or_else(0) == 6
    left = Left({"error": "invalid_date"}).map(lambda x: x + 1)
    assert left.is_left()
    assert left.get_or_else(0) == 0
    assert left.get_error() == {"error": "invalid_date"}

