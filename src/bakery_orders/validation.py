"""
Validation checks for a generated demo dataset.

Contains:
- State/history consistency (current state equals the last entry's state)
- Item checks (non-empty, distinct products)
- History ordering (timestamps non-decreasing)
- Pinned "today" order shape
- Due-date policy outcome mix for past and far-future orders

Each check returns a (passed, message) tuple; validate_all() runs them all.
"""

from __future__ import annotations

from collections import Counter
from datetime import timedelta

from .generation import Dataset
from .generation.constants import PINNED_DUE_HOUR
from .models import OrderState

# Past-due orders must land in this DELIVERED share (nominal 90%)
DELIVERED_SHARE_RANGE = (0.85, 0.95)

# Below this many past-due orders the share is not checked
MIN_PAST_DUE_SAMPLE = 100


class DatasetValidationError(Exception):
    """Raised when a generated dataset fails validation."""

    def __init__(self, failures: dict[str, str]) -> None:
        self.failures = failures
        message = f"Dataset validation failed with {len(failures)} failure(s):\n"
        message += "\n".join(f"  - {name}: {msg}" for name, msg in failures.items())
        super().__init__(message)


class DatasetValidator:
    """Validator for a generated Dataset."""

    def __init__(self, dataset: Dataset) -> None:
        self.dataset = dataset

    @property
    def orders(self):
        return self.dataset.orders

    def validate_state_matches_history(self) -> tuple[bool, str]:
        bad = [
            i for i, o in enumerate(self.orders)
            if not o.history or o.history[-1].new_state != o.state
        ]
        if bad:
            return False, f"{len(bad)} orders whose state differs from last history entry (first: #{bad[0]})"
        return True, f"{len(self.orders):,} orders consistent"

    def validate_items(self) -> tuple[bool, str]:
        empty = 0
        duplicated = 0
        for order in self.orders:
            if not order.items:
                empty += 1
            ids = {id(item.product) for item in order.items}
            if len(ids) != len(order.items):
                duplicated += 1
        if empty or duplicated:
            return False, f"{empty} orders without items, {duplicated} with duplicate products"
        total = sum(len(o.items) for o in self.orders)
        return True, f"{total:,} items, all distinct per order"

    def validate_history_order(self) -> tuple[bool, str]:
        bad = 0
        for order in self.orders:
            stamps = [h.timestamp for h in order.history]
            if any(later < earlier for earlier, later in zip(stamps, stamps[1:])):
                bad += 1
        if bad:
            return False, f"{bad} orders with out-of-order history"
        return True, "all histories chronological"

    def validate_pinned_order(self) -> tuple[bool, str]:
        pinned = self.dataset.pinned_order
        today = self.dataset.today
        if pinned is None:
            return False, "no pinned order"
        problems = []
        if pinned.due_date != today:
            problems.append(f"due {pinned.due_date}")
        if pinned.due_time is None or (pinned.due_time.hour, pinned.due_time.minute) != (PINNED_DUE_HOUR, 0):
            problems.append(f"due time {pinned.due_time}")
        if len(pinned.history) != 1:
            problems.append(f"{len(pinned.history)} history entries")
        if len(pinned.items) != 1:
            problems.append(f"{len(pinned.items)} items")
        if problems:
            return False, "pinned order: " + ", ".join(problems)
        return True, f"pinned order due {today.isoformat()} 08:00"

    def validate_past_due_split(self) -> tuple[bool, str]:
        today = self.dataset.today
        # orders[0] is the pinned order, due today
        states = Counter(o.state for o in self.orders[1:] if o.due_date < today)
        total = sum(states.values())
        if total < MIN_PAST_DUE_SAMPLE:
            return True, f"only {total} past-due orders, split not checked"
        share = states[OrderState.DELIVERED] / total
        low, high = DELIVERED_SHARE_RANGE
        other = total - states[OrderState.DELIVERED] - states[OrderState.CANCELLED]
        if other:
            return False, f"{other} past-due orders neither DELIVERED nor CANCELLED"
        if low <= share <= high:
            return True, f"DELIVERED {share:.1%} of {total:,} past-due orders"
        return False, f"DELIVERED {share:.1%} of {total:,} past-due orders, expected {low:.0%}-{high:.0%}"

    def validate_future_orders_new(self) -> tuple[bool, str]:
        horizon = self.dataset.today + timedelta(days=2)
        future = [o for o in self.orders if o.due_date > horizon]
        not_new = sum(1 for o in future if o.state != OrderState.NEW)
        if not_new:
            return False, f"{not_new} of {len(future)} orders beyond {horizon} are not NEW"
        return True, f"{len(future):,} future orders all NEW"

    def validate_all(self) -> dict[str, tuple[bool, str]]:
        return {
            "state_matches_history": self.validate_state_matches_history(),
            "items": self.validate_items(),
            "history_order": self.validate_history_order(),
            "pinned_order": self.validate_pinned_order(),
            "past_due_split": self.validate_past_due_split(),
            "future_orders_new": self.validate_future_orders_new(),
        }

    def failures(self) -> dict[str, str]:
        return {name: msg for name, (passed, msg) in self.validate_all().items() if not passed}

    def raise_for_failures(self) -> None:
        failures = self.failures()
        if failures:
            raise DatasetValidationError(failures)
