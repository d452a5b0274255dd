from types import SimpleNamespace

from sessionwire.core import delay as delay_mod
from sessionwire.core.delay import DelayGate


class FakeClock:
	def __init__(self, now=1000.0):
		self.now = now
		self.sleeps = []

	def monotonic(self):
		return self.now

	def sleep(self, seconds):
		self.sleeps.append(seconds)
		self.now += seconds


def patch_clock(monkeypatch, clock):
	monkeypatch.setattr(delay_mod, "time", SimpleNamespace(monotonic=clock.monotonic, sleep=clock.sleep))


def test_unconfigured_gate_never_sleeps(monkeypatch):
	clock = FakeClock()
	patch_clock(monkeypatch, clock)
	gate = DelayGate()
	assert gate.enforce() == 0.0
	assert gate.enforce() == 0.0
	assert clock.sleeps == []


def test_first_request_not_delayed_then_remainder(monkeypatch):
	clock = FakeClock()
	patch_clock(monkeypatch, clock)
	gate = DelayGate()
	gate.configure(1.5)
	gate.enforce()
	assert clock.sleeps == []
	clock.now += 0.25
	gate.enforce()
	assert clock.sleeps == [1.25]


def test_no_sleep_when_interval_elapsed(monkeypatch):
	clock = FakeClock()
	patch_clock(monkeypatch, clock)
	gate = DelayGate()
	gate.configure(0.5)
	gate.enforce()
	clock.now += 2
	assert gate.enforce() == 0.0
	assert clock.sleeps == []


def test_sub_second_interval(monkeypatch):
	clock = FakeClock()
	patch_clock(monkeypatch, clock)
	gate = DelayGate()
	gate.configure(0.000250)
	gate.enforce()
	clock.now += 0.000100
	gate.enforce()
	assert abs(clock.sleeps[0] - 0.000150) < 1e-9
