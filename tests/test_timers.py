import pytest

from spacecadet.timers import TimerQueue


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


def make_queue(capacity=10):
    clock = FakeClock()
    return TimerQueue(capacity, clock), clock


def test_ids_start_at_one_and_increase():
    queue, _ = make_queue()
    first = queue.set(1.0, None)
    second = queue.set(1.0, None)
    assert first == 1
    assert second == first + 1


def test_full_queue_returns_zero():
    queue, _ = make_queue(capacity=2)
    assert queue.set(1.0, None) != 0 and queue.set(1.0, None) != 0
    assert queue.set(1.0, None) == 0
    assert len(queue) == 2


def test_kill_frees_slot():
    queue, _ = make_queue(capacity=1)
    timer_id = queue.set(1.0, None)
    assert queue.kill(timer_id) == timer_id
    assert queue.kill(timer_id) == 0
    assert len(queue) == 0
    assert queue.set(1.0, None) != 0


def test_invalid_capacity():
    with pytest.raises(ValueError):
        TimerQueue(0, lambda: 0)


def test_callback_receives_id_and_caller():
    queue, clock = make_queue()
    calls = []
    timer_id = queue.set(0.5, lambda tid, caller: calls.append((tid, caller)), "owner")
    clock.now = 499
    assert queue.check() == 0
    clock.now = 500
    assert queue.check() == 1
    assert calls == [(timer_id, "owner")]
    assert len(queue) == 0


def test_fires_in_due_order_and_fifo_for_ties():
    queue, clock = make_queue()
    order = []
    late = queue.set(0.05, lambda tid, c: order.append(tid))
    early = queue.set(0.01, lambda tid, c: order.append(tid))
    tie = queue.set(0.01, lambda tid, c: order.append(tid))
    clock.now = 1000
    queue.check()
    assert order == [early, tie, late]


def test_at_most_two_due_timers_per_check():
    queue, clock = make_queue()
    for _ in range(3):
        queue.set(0.01, None)
    clock.now = 10
    assert queue.check() == 2
    assert len(queue) == 1
    assert queue.check() == 1
    assert len(queue) == 0


def test_overdue_timers_all_fire():
    queue, clock = make_queue()
    for _ in range(3):
        queue.set(0.01, None)
    clock.now = 200
    assert queue.check() == 3


def test_callback_may_schedule_again():
    queue, clock = make_queue()
    fired = []

    def again(tid, caller):
        fired.append(tid)
        if len(fired) < 2:
            queue.set(1.0, again)

    queue.set(0.0, again)
    assert queue.check() == 1
    assert len(queue) == 1
    clock.now = 1000
    assert queue.check() == 1
    assert len(fired) == 2