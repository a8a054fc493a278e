from lifekiller.sleeper import Sleeper


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def make(target):
    clock = FakeClock()
    slept = []
    return Sleeper(target, clock=clock, sleep=slept.append), clock, slept


def test_not_in_time_before_first_sleep():
    sleeper, _, _ = make(0.5)
    assert sleeper.in_time() is False


def test_sleep_waits_target_time():
    sleeper, clock, slept = make(0.5)
    assert sleeper.sleep() is True
    assert slept == [0.5]
    assert sleeper.last_instant == clock.now


def test_in_time_after_sleep_until_target_passes():
    sleeper, clock, _ = make(0.5)
    sleeper.sleep()
    assert sleeper.in_time() is True
    clock.now += 1.0
    assert sleeper.in_time() is False


def test_zero_target_never_sleeps():
    sleeper, _, slept = make(0.0)
    assert sleeper.sleep() is False
    assert slept == []