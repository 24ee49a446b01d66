"""Unit tests for the sleep state machine."""

from napping.detection.sleep_state import SleepStateMachine
from napping.models.detection import DetectorConfig


def make_machine(**overrides) -> SleepStateMachine:
    return SleepStateMachine(DetectorConfig(**overrides))


def feed(machine, closed, times):
    """Feed the same eye state at each time; return the observations."""
    return [machine.observe(closed, t) for t in times]


def test_fires_once_when_closure_reaches_minimum():
    machine = make_machine()
    times = [i * 0.1 for i in range(21)]

    observations = feed(machine, True, times)

    fired_at = [t for t, obs in zip(times, observations) if obs.fired]
    assert fired_at == [2.0]
    assert not any(obs.is_sleeping for obs in observations[:20])
    assert observations[20].is_sleeping


def test_no_second_event_while_eyes_stay_closed():
    machine = make_machine()
    times = [i * 0.1 for i in range(101)]

    observations = feed(machine, True, times)

    assert sum(obs.fired for obs in observations) == 1
    assert all(obs.is_sleeping for obs in observations[20:])


def test_open_sample_restarts_episode():
    machine = make_machine()

    feed(machine, True, [0.0, 0.5, 1.0])
    machine.observe(False, 1.5)
    assert machine.closed_eyes_since is None

    assert not machine.observe(True, 1.6).is_sleeping
    assert machine.closed_eyes_since == 1.6
    assert not machine.observe(True, 2.0).is_sleeping
    assert not machine.observe(True, 3.5).is_sleeping

    observation = machine.observe(True, 3.6)
    assert observation.is_sleeping
    assert observation.fired


def test_open_sample_ends_sleep_immediately():
    machine = make_machine()
    feed(machine, True, [0.0, 1.0, 2.0, 3.0])
    assert machine.is_sleeping
    assert machine.has_fired_for_current_episode

    observation = machine.observe(False, 3.1)

    assert not observation.is_sleeping
    assert not observation.fired
    assert not machine.has_fired_for_current_episode


def test_cooldown_suppresses_then_fires_same_episode():
    machine = make_machine(minimum_closed_seconds=2.0, cooldown_seconds=12.0)

    assert feed(machine, True, [0.0, 2.0])[-1].fired
    machine.observe(False, 3.0)

    # New qualifying episode inside the cooldown: sleeping but no event
    observations = feed(machine, True, [4.0, 6.0, 10.0, 13.5])
    assert [obs.is_sleeping for obs in observations] == [False, True, True, True]
    assert not any(obs.fired for obs in observations)
    assert not machine.has_fired_for_current_episode

    # Cooldown elapses while still asleep: the suppressed episode fires once
    observation = machine.observe(True, 14.0)
    assert observation.fired
    assert machine.last_event_at == 14.0
    assert not machine.observe(True, 20.0).fired


def test_suppressed_event_is_not_queued_past_episode_end():
    machine = make_machine(minimum_closed_seconds=1.0, cooldown_seconds=10.0)

    assert feed(machine, True, [0.0, 1.0])[-1].fired
    machine.observe(False, 2.0)
    assert not feed(machine, True, [3.0, 4.0])[-1].fired
    machine.observe(False, 5.0)

    # Cooldown passes with eyes open; nothing fires until a new episode qualifies
    assert not machine.observe(False, 12.0).fired
    assert not machine.observe(True, 12.5).fired
    assert machine.observe(True, 13.5).fired


def test_first_event_ignores_cooldown():
    machine = make_machine(minimum_closed_seconds=0.5, cooldown_seconds=1000.0)

    assert feed(machine, True, [0.0, 0.5])[-1].fired


def test_zero_minimum_fires_on_first_closed_sample():
    machine = make_machine(minimum_closed_seconds=0.0)

    observation = machine.observe(True, 5.0)

    assert observation.is_sleeping
    assert observation.fired


def test_reset_clears_episode_but_keeps_cooldown():
    machine = make_machine()
    assert feed(machine, True, [0.0, 2.0])[-1].fired

    machine.reset()
    assert not machine.is_sleeping
    assert machine.closed_eyes_since is None
    assert not machine.has_fired_for_current_episode
    assert machine.last_event_at == 2.0

    # New episode qualifies at 5.0 but is still within the 12s cooldown
    observations = feed(machine, True, [3.0, 5.0])
    assert observations[-1].is_sleeping
    assert not observations[-1].fired


def test_reset_restarts_closed_duration():
    machine = make_machine()
    feed(machine, True, [0.0, 1.5])

    machine.reset()

    assert not machine.observe(True, 2.0).is_sleeping
    assert machine.closed_seconds(3.0) == 1.0
    assert machine.observe(True, 4.0).is_sleeping


def test_closed_seconds_none_when_open():
    machine = make_machine()

    assert machine.closed_seconds(1.0) is None
    machine.observe(True, 1.0)
    assert machine.closed_seconds(2.5) == 1.5
