import pytest

from proximity_ranker.geocoding.throttling import FixedDelayPacer, NoOpRateLimiter


def test_pacer_sleeps_full_delay_every_call():
    sleeps = []
    pacer = FixedDelayPacer(1.1, sleep=sleeps.append)

    for _ in range(3):
        pacer.wait()

    assert sleeps == [1.1, 1.1, 1.1]
    assert pacer.calls == 3


def test_zero_delay_does_not_sleep():
    sleeps = []
    pacer = FixedDelayPacer(0, sleep=sleeps.append)
    pacer.wait()
    assert sleeps == []
    assert pacer.calls == 1


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        FixedDelayPacer(-0.5)


def test_noop_limiter():
    assert NoOpRateLimiter().wait() is None
