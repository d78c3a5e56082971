"""
Tests for the order state machine and history ledger.
"""

from datetime import datetime

import pytest

from bakery_orders.models import Order, OrderState
from bakery_orders.state_machine import (
    ORDER_PLACED,
    TRANSITION_GRAPH,
    IllegalTransitionError,
    allowed_targets,
    append_history,
    is_allowed,
    new_order,
    reachable_states,
    transition,
    transition_message,
    transition_strict,
)


class TestNewOrder:
    """Tests for order creation."""

    def test_starts_new_with_placed_entry(self, barista, noon):
        order = new_order(barista, noon)
        assert order.state == OrderState.NEW
        assert len(order.history) == 1
        entry = order.history[0]
        assert entry.message == ORDER_PLACED
        assert entry.new_state == OrderState.NEW
        assert entry.created_by is barista
        assert entry.timestamp == noon

    def test_default_timestamp_is_now(self, barista):
        before = datetime.now()
        order = new_order(barista)
        after = datetime.now()
        assert before <= order.history[0].timestamp <= after


class TestTransition:
    """Tests for the permissive transition()."""

    def test_change_appends_one_entry(self, barista, baker, noon):
        order = new_order(barista, noon)
        assert transition(order, baker, OrderState.CONFIRMED, noon) is True
        assert order.state == OrderState.CONFIRMED
        assert len(order.history) == 2
        assert order.history[-1].message == "Order CONFIRMED"
        assert order.history[-1].new_state == OrderState.CONFIRMED
        assert order.history[-1].created_by is baker

    def test_same_state_is_silent(self, barista, noon):
        order = new_order(barista, noon)
        assert transition(order, barista, OrderState.NEW) is False
        assert len(order.history) == 1

    def test_any_pair_is_accepted(self, barista, baker, noon):
        """NEW -> PROBLEM skips CONFIRMED; still recorded."""
        order = new_order(barista, noon)
        transition(order, baker, OrderState.PROBLEM, noon)
        transition(order, baker, OrderState.NEW, noon)
        assert [h.new_state for h in order.history] == [
            OrderState.NEW,
            OrderState.PROBLEM,
            OrderState.NEW,
        ]

    def test_missing_state_assigns_without_history(self, barista, baker, noon):
        order = new_order(barista, noon)
        assert transition(order, baker, None) is False
        assert order.state is None
        assert transition(order, baker, OrderState.READY) is False
        assert order.state == OrderState.READY
        assert len(order.history) == 1

    def test_message_format(self):
        assert transition_message(OrderState.DELIVERED) == "Order DELIVERED"


class TestAppendHistory:
    """Tests for append_history()."""

    def test_stamps_current_state(self, baker, noon):
        order = Order(state=OrderState.READY)
        item = append_history(order, baker, "Boxed and labelled", noon)
        assert order.history == [item]
        assert item.new_state == OrderState.READY
        assert item.message == "Boxed and labelled"

    def test_entries_are_immutable(self, baker, noon):
        item = append_history(Order(), baker, "note", noon)
        with pytest.raises(AttributeError):
            item.message = "changed"


class TestStrictTransition:
    """Tests for the graph-validated transition."""

    def test_graph_covers_all_states(self):
        assert set(TRANSITION_GRAPH.nodes) == set(OrderState)

    def test_allowed_edge(self, barista, baker, noon):
        order = new_order(barista, noon)
        assert transition_strict(order, baker, OrderState.CONFIRMED, noon) is True
        assert transition_strict(order, baker, OrderState.READY, noon) is True
        assert transition_strict(order, baker, OrderState.DELIVERED, noon) is True
        assert order.state == OrderState.DELIVERED
        assert len(order.history) == 4

    def test_skipping_ready_is_rejected(self, barista, baker, noon):
        order = new_order(barista, noon)
        with pytest.raises(IllegalTransitionError) as exc_info:
            transition_strict(order, baker, OrderState.DELIVERED, noon)
        assert exc_info.value.current == OrderState.NEW
        assert exc_info.value.target == OrderState.DELIVERED
        assert order.state == OrderState.NEW
        assert len(order.history) == 1

    @pytest.mark.parametrize("terminal", [OrderState.DELIVERED, OrderState.CANCELLED])
    def test_terminal_states_have_no_exit(self, baker, terminal):
        order = Order(state=terminal)
        assert allowed_targets(terminal) == set()
        with pytest.raises(IllegalTransitionError):
            transition_strict(order, baker, OrderState.NEW)

    def test_same_state_is_allowed(self, baker):
        order = Order(state=OrderState.DELIVERED)
        assert is_allowed(OrderState.DELIVERED, OrderState.DELIVERED)
        assert transition_strict(order, baker, OrderState.DELIVERED) is False

    def test_missing_state_rejected(self, baker):
        with pytest.raises(IllegalTransitionError):
            transition_strict(Order(state=None), baker, OrderState.NEW)

    def test_problem_can_recover(self):
        assert allowed_targets(OrderState.PROBLEM) == {
            OrderState.CONFIRMED,
            OrderState.READY,
            OrderState.CANCELLED,
        }

    def test_reachable_states(self):
        assert reachable_states(OrderState.NEW) == set(OrderState) - {OrderState.NEW}
        assert reachable_states(OrderState.CANCELLED) == set()
