"""Unit tests for the frame gate."""

from napping.detection.frame_gate import FrameGate


def test_first_frame_is_admitted():
    gate = FrameGate(0.18)

    assert gate.last_processed_at is None
    assert gate.try_acquire(0.0)
    assert gate.in_flight
    assert gate.last_processed_at == 0.0


def test_frames_dropped_while_in_flight():
    gate = FrameGate(0.18)
    assert gate.try_acquire(0.0)

    assert not gate.try_acquire(5.0)
    # A dropped frame does not move the throttle window
    assert gate.last_processed_at == 0.0

    gate.release()
    assert gate.try_acquire(5.0)


def test_frames_throttled_to_processing_interval():
    gate = FrameGate(0.25)
    assert gate.try_acquire(1.0)
    gate.release()

    assert not gate.try_acquire(1.1)
    assert not gate.try_acquire(1.2)
    assert gate.try_acquire(1.25)
    assert gate.last_processed_at == 1.25


def test_burst_admits_one_frame():
    gate = FrameGate(0.18)

    admitted = [gate.try_acquire(10.0 + i * 0.001) for i in range(50)]

    assert admitted.count(True) == 1


def test_zero_interval_only_limited_by_in_flight():
    gate = FrameGate(0.0)

    assert gate.try_acquire(1.0)
    gate.release()
    assert gate.try_acquire(1.0)
    assert not gate.try_acquire(1.0)
