import pytest

from handmark.utils import RingBuffer, ScreenPoint


def test_ring_buffer_partial():
    buffer = RingBuffer(4)
    assert buffer.mean() is None

    buffer.add(1.0)
    buffer.add(3.0)

    assert len(buffer) == 2
    assert buffer.mean() == pytest.approx(2.0)


def test_ring_buffer_capacity_must_be_positive():
    with pytest.raises(ValueError):
        RingBuffer(0)


def test_ring_buffer_mean_over_window():
    buffer = RingBuffer(30)
    for ms in range(1, 41):
        buffer.add(float(ms))

    # Only the last 30 values (11..40) count
    assert len(buffer) == 30
    assert buffer.mean() == pytest.approx(25.5)


def test_screen_point_pixel():
    p = ScreenPoint(10.6, 19.4, 0.5)

    assert p.pixel == (11, 19)
    assert p.coords == (10.6, 19.4, 0.5)
