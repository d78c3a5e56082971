"""
Dataset driver: orchestrates a full demo data generation run.

Phases:
1. Catalog: users, products, pickup locations (CatalogGenerator)
2. Orders (OrderGenerator):
   - one pinned "today" order, trimmed to its first history entry and
     first item, due at 08:00
   - every day from Jan 1 of (today.year - years_to_include) up to, but
     excluding, today + months_ahead, with a slowly rising daily volume

Usage:
    ctx = GeneratorContext.create(today=date(2024, 6, 15), hasher=Sha256PasswordHasher())
    dataset = DatasetDriver(ctx).generate_all()
"""

from __future__ import annotations

import calendar
import time as timer
from datetime import date, time, timedelta
from typing import Iterator

import numpy as np

from ..config import GeneratorConfig
from ..models import Order
from .base import BaseGenerator, Dataset, GeneratorContext
from .catalog import CatalogGenerator
from .constants import PINNED_DUE_HOUR
from .synthesizer import OrderSynthesizer


def add_months(day: date, months: int) -> date:
    """Calendar month arithmetic, clamping to the last day of the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def date_range(start: date, end: date) -> Iterator[date]:
    """Days from start (inclusive) to end (exclusive)."""
    day = start
    while day < end:
        yield day
        day += timedelta(days=1)


def generation_window(today: date, config: GeneratorConfig) -> tuple[date, date]:
    """(oldest due date, exclusive newest due date) for a run on today."""
    oldest = date(today.year - config.years_to_include, 1, 1)
    newest = add_months(today, config.months_ahead)
    return oldest, newest


def volume_multiplier(due: date, today: date, config: GeneratorConfig) -> float:
    relative_year = due.year - today.year + config.years_to_include
    relative_month = relative_year * 12 + due.month
    return 1.0 + config.trend_per_month * relative_month


def orders_for_day(
    due: date,
    today: date,
    rng: np.random.Generator,
    config: GeneratorConfig,
) -> int:
    """
    Number of orders due on a day.

    The base draw is added to 1 * multiplier, i.e. the trend only lifts
    the floor by whole orders once the multiplier passes an integer.
    """
    multiplier = volume_multiplier(due, today, config)
    return int(int(rng.integers(config.max_daily_base)) + 1 * multiplier)


def trim_to_pinned(order: Order) -> Order:
    """
    Reduce an order to a minimal fixture: first history entry, first item,
    due at 08:00, state matching the remaining history entry.
    """
    order.due_time = time(PINNED_DUE_HOUR, 0)
    order.set_history(order.history[:1])
    order.set_items(order.items[:1])
    order.state = order.history[0].new_state
    return order


class OrderGenerator(BaseGenerator):
    """Generate the pinned order followed by the dated order stream."""

    def generate(self) -> None:
        print("... generating orders")
        synthesizer = OrderSynthesizer(self.ctx)
        today = self.ctx.today

        self.ctx.orders.append(trim_to_pinned(synthesizer.synthesize(today)))

        oldest, newest = generation_window(today, self.config)
        for due in date_range(oldest, newest):
            for _ in range(orders_for_day(due, today, self.rng, self.config)):
                self.ctx.orders.append(synthesizer.synthesize(due))


class DatasetDriver:
    """
    Runs the generators in dependency order and reports progress.

    The driver only builds the dataset in memory; persisting it is left
    to bakery_orders.seeding so the whole run can be written in one
    transaction.
    """

    def __init__(self, ctx: GeneratorContext) -> None:
        self.ctx = ctx
        self._phases: list[tuple[str, BaseGenerator]] = [
            ("catalog", CatalogGenerator(ctx)),
            ("orders", OrderGenerator(ctx)),
        ]

    def generate_all(self) -> Dataset:
        """Generate reference data and orders; returns the Dataset."""
        oldest, newest = generation_window(self.ctx.today, self.ctx.config)
        print("=" * 60)
        print("Bakery demo data generation")
        print("=" * 60)
        print(f"Seed: {self.ctx.config.seed}")
        print(f"Today: {self.ctx.today.isoformat()}")
        print(f"Due dates: {oldest.isoformat()} .. {newest.isoformat()} (exclusive)")
        print()

        gen_start = timer.time()
        for name, generator in self._phases:
            phase_start = timer.time()
            rows_before = self._row_count()
            generator.generate()
            self.ctx.record_phase(name, timer.time() - phase_start, self._row_count() - rows_before)
        gen_elapsed = timer.time() - gen_start

        dataset = self.ctx.to_dataset()
        print()
        print(
            f"Generated {len(dataset.reference.users)} users, "
            f"{len(dataset.reference.all_products)} products, "
            f"{len(dataset.reference.pickup_locations)} pickup locations, "
            f"{len(dataset.orders):,} orders in {gen_elapsed:.2f}s"
        )
        return dataset

    def _row_count(self) -> int:
        reference = self.ctx.reference
        rows = len(self.ctx.orders)
        if reference is not None:
            rows += (
                len(reference.users)
                + len(reference.all_products)
                + len(reference.pickup_locations)
            )
        return rows
