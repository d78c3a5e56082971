"""
Order state machine and history ledger.

Two flavours of state change are provided:

- transition(): permissive. Any state may follow any other; a change
  appends one history entry, a same-state call is a silent no-op. The
  demo generator depends on this (e.g. NEW -> PROBLEM in one step).
- transition_strict(): validates the move against TRANSITION_GRAPH and
  raises IllegalTransitionError for an edge the graph does not contain.

Usage:
    order = new_order(barista)
    transition(order, baker, OrderState.CONFIRMED)
    transition_strict(order, baker, OrderState.READY)
"""

from __future__ import annotations

from datetime import datetime

import networkx as nx

from .models import HistoryItem, Order, OrderState, User

ORDER_PLACED = "Order placed"

# Lifecycle edges accepted by transition_strict()
TRANSITION_GRAPH = nx.DiGraph()
TRANSITION_GRAPH.add_nodes_from(OrderState)
TRANSITION_GRAPH.add_edges_from(
    [
        (OrderState.NEW, OrderState.CONFIRMED),
        (OrderState.NEW, OrderState.PROBLEM),
        (OrderState.NEW, OrderState.CANCELLED),
        (OrderState.CONFIRMED, OrderState.READY),
        (OrderState.CONFIRMED, OrderState.PROBLEM),
        (OrderState.CONFIRMED, OrderState.CANCELLED),
        (OrderState.PROBLEM, OrderState.CONFIRMED),
        (OrderState.PROBLEM, OrderState.READY),
        (OrderState.PROBLEM, OrderState.CANCELLED),
        (OrderState.READY, OrderState.DELIVERED),
        (OrderState.READY, OrderState.PROBLEM),
        (OrderState.READY, OrderState.CANCELLED),
    ]
)


class IllegalTransitionError(Exception):
    """Raised when a strict transition is not an edge of TRANSITION_GRAPH."""

    def __init__(self, current: OrderState | None, target: OrderState | None) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Illegal order transition {current} -> {target}")


def transition_message(state: OrderState) -> str:
    """Human-readable history message for a state change."""
    return f"Order {state}"


def append_history(
    order: Order,
    author: User,
    comment: str,
    timestamp: datetime | None = None,
) -> HistoryItem:
    """
    Append a history entry stamped with the order's current state.

    Args:
        order: Order to annotate
        author: User making the entry
        comment: Free-text message
        timestamp: When the entry happened (defaults to now)

    Returns:
        The appended HistoryItem
    """
    item = HistoryItem(
        created_by=author,
        message=comment,
        new_state=order.state,
        timestamp=timestamp if timestamp is not None else datetime.now(),
    )
    order.history.append(item)
    return item


def new_order(created_by: User, timestamp: datetime | None = None) -> Order:
    """Create an order in state NEW with a single "Order placed" entry."""
    order = Order(state=OrderState.NEW)
    append_history(order, created_by, ORDER_PLACED, timestamp)
    return order


def transition(
    order: Order,
    user: User,
    new_state: OrderState | None,
    timestamp: datetime | None = None,
) -> bool:
    """
    Move an order to new_state without adjacency checks.

    A history entry is appended only when both the current and target
    states are present and differ. The state field is assigned either way.

    Returns:
        True if a history entry was appended
    """
    create_history = (
        order.state is not None and new_state is not None and order.state != new_state
    )
    order.state = new_state
    if create_history:
        append_history(order, user, transition_message(new_state), timestamp)
    return create_history


def is_allowed(current: OrderState, target: OrderState) -> bool:
    """True if current -> target is a lifecycle edge (same state always allowed)."""
    return current == target or TRANSITION_GRAPH.has_edge(current, target)


def allowed_targets(current: OrderState) -> set[OrderState]:
    return set(TRANSITION_GRAPH.successors(current))


def reachable_states(current: OrderState) -> set[OrderState]:
    """All states reachable from current through one or more strict transitions."""
    return set(nx.descendants(TRANSITION_GRAPH, current))


def transition_strict(
    order: Order,
    user: User,
    new_state: OrderState,
    timestamp: datetime | None = None,
) -> bool:
    """
    Validated variant of transition() for callers outside the generator.

    Raises:
        IllegalTransitionError: If either state is missing, or the edge is
            not in TRANSITION_GRAPH (this includes leaving a terminal state)
    """
    if order.state is None or new_state is None:
        raise IllegalTransitionError(order.state, new_state)
    if not is_allowed(order.state, new_state):
        raise IllegalTransitionError(order.state, new_state)
    return transition(order, user, new_state, timestamp)
