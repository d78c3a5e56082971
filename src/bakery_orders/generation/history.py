"""
History reconstruction for generated orders.

Given an order whose state and due date/time are already decided, build
a backdated, chronologically ordered ledger that explains how it got
there:

    placed -> cancelled
    placed -> confirmed [-> problem | -> ready [-> delivered]]

The result replaces the order's history in full.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta

import numpy as np

from ..models import HistoryItem, Order, OrderState, User
from ..state_machine import ORDER_PLACED
from .constants import MSG_CANCELLED, MSG_CONFIRMED, MSG_DELIVERED, MSG_PROBLEM, MSG_READY

CONFIRMED_PATH = frozenset(
    {OrderState.CONFIRMED, OrderState.DELIVERED, OrderState.PROBLEM, OrderState.READY}
)


def reconstruct_history(
    order: Order,
    barista: User,
    baker: User,
    rng: np.random.Generator,
) -> list[HistoryItem]:
    """
    Fabricate a plausible history for order's current state.

    Timestamps:
    - placed: 2-6 days before due, at a whole hour in [07:00, 16:00]
    - cancelled: placed + [0, span) days, span = whole days from placed
      to due date/time; omitted when span is not positive
    - confirmed: placed + 0-1 days + 0-4 hours
    - problem: due date at a whole hour in [04:00, 07:00]
    - ready: due date at 08:00/08:30/09:00/09:30
    - delivered: due date/time minus 0-119 minutes, never before ready

    Args:
        order: Order with state, due_date and due_time set
        barista: Author of placed/cancelled entries
        baker: Author of the remaining entries
        rng: Shared NumPy generator

    Returns:
        New history list, oldest first
    """
    due_date = order.due_date
    due_at = datetime.combine(due_date, order.due_time)
    state = order.state

    placed_day = due_date - timedelta(days=int(rng.integers(5)) + 2)
    placed = datetime.combine(placed_day, time(int(rng.integers(10)) + 7, 0))
    history = [HistoryItem(barista, ORDER_PLACED, OrderState.NEW, placed)]

    if state == OrderState.CANCELLED:
        span_days = (due_at - placed).days
        if span_days > 0:
            cancelled = placed + timedelta(days=int(rng.integers(span_days)))
            history.append(HistoryItem(barista, MSG_CANCELLED, OrderState.CANCELLED, cancelled))

    elif state in CONFIRMED_PATH:
        confirmed = placed + timedelta(days=int(rng.integers(2)), hours=int(rng.integers(5)))
        history.append(HistoryItem(baker, MSG_CONFIRMED, OrderState.CONFIRMED, confirmed))

        if state == OrderState.PROBLEM:
            problem = datetime.combine(due_date, time(int(rng.integers(4)) + 4, 0))
            history.append(HistoryItem(baker, MSG_PROBLEM, OrderState.PROBLEM, problem))

        elif state in (OrderState.READY, OrderState.DELIVERED):
            hour = int(rng.integers(2)) + 8
            minute = 0 if rng.integers(2) == 1 else 30
            ready = datetime.combine(due_date, time(hour, minute))
            history.append(HistoryItem(baker, MSG_READY, OrderState.READY, ready))

            if state == OrderState.DELIVERED:
                delivered = due_at - timedelta(minutes=int(rng.integers(120)))
                # Early due slots would otherwise put delivery before ready
                delivered = max(delivered, ready)
                history.append(
                    HistoryItem(baker, MSG_DELIVERED, OrderState.DELIVERED, delivered)
                )

    return history
