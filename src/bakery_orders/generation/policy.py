"""
Due-Date State Policy.

Maps an order's due date, relative to the generation date, to a random
lifecycle state:

| Due date                     | Outcome                                      |
|------------------------------|----------------------------------------------|
| before today                 | DELIVERED 90%, CANCELLED 10%                 |
| after today + 2              | NEW 100%                                     |
| after today + 1, up to +2    | NEW 80%, PROBLEM 10%, CANCELLED 10%          |
| up to today + 1              | READY 60%, DELIVERED 20%, PROBLEM 10%,       |
|                              | CANCELLED 10%                                |

Each decision consumes a single uniform [0, 1) draw, compared against
cumulative thresholds in table order. The "after today + 2" band makes
no draw at all.
"""

from __future__ import annotations

from datetime import date, timedelta

import numpy as np

from ..models import OrderState

# (cumulative upper bound, state), evaluated in order
PAST_DUE = [(0.9, OrderState.DELIVERED), (1.0, OrderState.CANCELLED)]
DAY_AFTER_TOMORROW = [
    (0.8, OrderState.NEW),
    (0.9, OrderState.PROBLEM),
    (1.0, OrderState.CANCELLED),
]
TODAY_OR_TOMORROW = [
    (0.6, OrderState.READY),
    (0.8, OrderState.DELIVERED),
    (0.9, OrderState.PROBLEM),
    (1.0, OrderState.CANCELLED),
]


def _resolve(draw: float, table: list[tuple[float, OrderState]]) -> OrderState:
    for threshold, state in table:
        if draw < threshold:
            return state
    return table[-1][1]


def distribution_for(due: date, today: date) -> list[tuple[float, OrderState]] | None:
    """Cumulative outcome table for due, or None when the outcome is always NEW."""
    if due < today:
        return PAST_DUE
    if due > today + timedelta(days=2):
        return None
    if due > today + timedelta(days=1):
        return DAY_AFTER_TOMORROW
    return TODAY_OR_TOMORROW


def random_state(due: date, today: date, rng: np.random.Generator) -> OrderState:
    """
    Draw a lifecycle state for an order due on due.

    Args:
        due: Order due date
        today: Generation date
        rng: Shared NumPy generator

    Returns:
        The drawn OrderState
    """
    table = distribution_for(due, today)
    if table is None:
        return OrderState.NEW
    return _resolve(float(rng.random()), table)
