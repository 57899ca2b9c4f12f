"""Tests for fixed-interval tasks."""

import pytest

from chord_light.ticker import PeriodicTask


class TestPeriodicTask:

    @pytest.fixture
    def calls(self):
        return []

    @pytest.fixture
    def task(self, calls):
        return PeriodicTask(0.025, calls.append, "test")

    def test_stopped_task_never_runs(self, task, calls):
        assert not task.running
        assert not task.poll(10.0)
        assert calls == []

    def test_first_run_after_one_interval(self, task, calls):
        task.start(0.0)
        assert not task.poll(0.01)
        assert task.poll(0.025)
        assert calls == [0.025]

    def test_runs_once_per_period(self, task, calls):
        task.start(0.0)
        for i in range(1, 111):
            task.poll(i * 0.001)
        # 0.025, 0.050, 0.075, 0.100
        assert len(calls) == 4

    def test_missed_periods_not_replayed(self, task, calls):
        task.start(0.0)
        assert task.poll(1.0)
        assert not task.poll(1.0)
        assert task.next_due == pytest.approx(1.025)
        assert calls == [1.0]

    def test_stop_and_restart(self, task, calls):
        task.start(0.0)
        task.poll(0.03)
        task.stop()
        assert not task.poll(0.06)
        task.start(1.0)
        assert task.poll(1.03)
        assert len(calls) == 2

    def test_stop_from_callback(self):
        holder = {}

        def callback(now):
            holder["task"].stop()

        task = PeriodicTask(0.04, callback)
        holder["task"] = task
        task.start(0.0)
        assert task.poll(0.05)
        assert not task.running

    def test_interval_must_be_positive(self):
        with pytest.raises(ValueError):
            PeriodicTask(0, lambda now: None)
