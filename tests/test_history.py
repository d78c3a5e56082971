"""
Tests for history reconstruction.
"""

from datetime import date, datetime, time, timedelta

import numpy as np
import pytest

from bakery_orders.generation.constants import MSG_PROBLEM
from bakery_orders.generation.history import reconstruct_history
from bakery_orders.models import Order, OrderState
from bakery_orders.state_machine import ORDER_PLACED

DUE = date(2024, 3, 20)

EXPECTED_STATES = {
    OrderState.NEW: [OrderState.NEW],
    OrderState.CANCELLED: [OrderState.NEW, OrderState.CANCELLED],
    OrderState.CONFIRMED: [OrderState.NEW, OrderState.CONFIRMED],
    OrderState.PROBLEM: [OrderState.NEW, OrderState.CONFIRMED, OrderState.PROBLEM],
    OrderState.READY: [OrderState.NEW, OrderState.CONFIRMED, OrderState.READY],
    OrderState.DELIVERED: [
        OrderState.NEW,
        OrderState.CONFIRMED,
        OrderState.READY,
        OrderState.DELIVERED,
    ],
}


def make_order(state, due_hour=12):
    return Order(state=state, due_date=DUE, due_time=time(due_hour, 0))


def histories(state, barista, baker, seeds=range(50), due_hour=12):
    for seed in seeds:
        yield reconstruct_history(make_order(state, due_hour), barista, baker, np.random.default_rng(seed))


class TestBranches:
    """Tests for the shape of each state's history."""

    @pytest.mark.parametrize("state", list(EXPECTED_STATES))
    def test_states_follow_path(self, state, barista, baker):
        for history in histories(state, barista, baker):
            assert [h.new_state for h in history] == EXPECTED_STATES[state]
            assert history[-1].new_state == state

    @pytest.mark.parametrize("state", list(EXPECTED_STATES))
    def test_chronological(self, state, barista, baker):
        for due_hour in (8, 12, 16):
            for history in histories(state, barista, baker, due_hour=due_hour):
                stamps = [h.timestamp for h in history]
                assert stamps == sorted(stamps)

    def test_authors(self, barista, baker):
        for history in histories(OrderState.CANCELLED, barista, baker, seeds=range(10)):
            assert all(h.created_by is barista for h in history)
        for history in histories(OrderState.DELIVERED, barista, baker, seeds=range(10)):
            assert history[0].created_by is barista
            assert all(h.created_by is baker for h in history[1:])

    def test_problem_message(self, barista, baker):
        history = reconstruct_history(
            make_order(OrderState.PROBLEM), barista, baker, np.random.default_rng(1)
        )
        assert history[0].message == ORDER_PLACED
        assert history[-1].message == MSG_PROBLEM


class TestTimestamps:
    """Tests for the timestamp windows of each entry."""

    def test_placed_window(self, barista, baker):
        for history in histories(OrderState.NEW, barista, baker, seeds=range(200)):
            placed = history[0].timestamp
            assert 2 <= (DUE - placed.date()).days <= 6
            assert 7 <= placed.hour <= 16
            assert placed.minute == 0

    def test_cancelled_before_due(self, barista, baker):
        due_at = datetime.combine(DUE, time(8, 0))
        for history in histories(OrderState.CANCELLED, barista, baker, seeds=range(200), due_hour=8):
            placed, cancelled = history
            assert placed.timestamp <= cancelled.timestamp < due_at
            assert cancelled.timestamp.time() == placed.timestamp.time()

    def test_confirmed_window(self, barista, baker):
        for history in histories(OrderState.CONFIRMED, barista, baker, seeds=range(200)):
            delta = history[1].timestamp - history[0].timestamp
            assert timedelta(0) <= delta <= timedelta(days=1, hours=4)

    def test_problem_window(self, barista, baker):
        for history in histories(OrderState.PROBLEM, barista, baker, seeds=range(100)):
            problem = history[-1].timestamp
            assert problem.date() == DUE
            assert 4 <= problem.hour <= 7
            assert problem.minute == 0

    def test_ready_slots(self, barista, baker):
        slots = {
            history[-1].timestamp.time()
            for history in histories(OrderState.READY, barista, baker, seeds=range(200))
        }
        assert slots == {time(8, 0), time(8, 30), time(9, 0), time(9, 30)}

    def test_delivered_window(self, barista, baker):
        due_at = datetime.combine(DUE, time(16, 0))
        for history in histories(OrderState.DELIVERED, barista, baker, seeds=range(200), due_hour=16):
            delivered = history[-1].timestamp
            assert due_at - timedelta(minutes=119) <= delivered <= due_at

    def test_early_delivery_not_before_ready(self, barista, baker):
        """An 08:00 due slot clamps delivery to the ready time."""
        for history in histories(OrderState.DELIVERED, barista, baker, seeds=range(200), due_hour=8):
            assert history[-1].timestamp >= history[-2].timestamp


class TestDeterminism:
    def test_same_seed_same_history(self, barista, baker):
        first = reconstruct_history(make_order(OrderState.DELIVERED), barista, baker, np.random.default_rng(9))
        second = reconstruct_history(make_order(OrderState.DELIVERED), barista, baker, np.random.default_rng(9))
        assert first == second
