from __future__ import annotations

import pytest

from synthcity.dashboard.buffer import IngestBuffer


@pytest.mark.parametrize("pushes", [0, 1, 999, 1000, 1001, 2500])
def test_buffer_keeps_most_recent_records_in_order(pushes: int) -> None:
    buffer = IngestBuffer()
    for i in range(pushes):
        buffer.push({"seq": i})

    assert len(buffer) == min(pushes, 1000)
    expected = list(range(max(0, pushes - 1000), pushes))
    assert [r["seq"] for r in buffer] == expected


def test_recent_returns_tail_in_arrival_order() -> None:
    buffer = IngestBuffer(capacity=10)
    buffer.extend({"seq": i} for i in range(15))

    assert [r["seq"] for r in buffer.recent(3)] == [12, 13, 14]
    assert len(buffer.recent(50)) == 10
    assert buffer.recent(0) == []
    assert buffer.latest() == {"seq": 14}


def test_replace_and_clear() -> None:
    buffer = IngestBuffer(capacity=3)
    buffer.push({"seq": "old"})
    buffer.replace({"seq": i} for i in range(5))

    assert [r["seq"] for r in buffer.snapshot()] == [2, 3, 4]

    buffer.clear()
    assert not buffer
    assert buffer.latest() is None


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        IngestBuffer(capacity=0)
