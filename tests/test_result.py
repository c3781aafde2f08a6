"""Tests for the Result helpers."""

from tasktrack.domain.shared import Err, Ok, flat_map, map_result


def test_map_result():
    assert map_result(Ok(2), lambda v: v * 10) == Ok(20)
    assert map_result(Err("boom"), lambda v: v * 10) == Err("boom")


def test_flat_map_chains_until_first_error():
    def half(v: int):
        return Ok(v // 2) if v % 2 == 0 else Err(f"{v} is odd")

    assert flat_map(Ok(8), half) == Ok(4)
    assert flat_map(flat_map(Ok(6), half), half) == Err("3 is odd")
    assert flat_map(Err("early"), half) == Err("early")
