"""
Order synthesizer: builds one fully populated demo order.

Draw order for a single order (all from the shared generator):
1. customer first name, last name, phone digits, VIP flag
2. pickup location
3. due time slot
4. lifecycle state (Due-Date State Policy)
5. item count, then per item: product (rejecting duplicates), quantity,
   comment flag and comment text
6. reconstructed history
"""

from __future__ import annotations

from datetime import date, time
from typing import Callable, Sequence

import numpy as np

from ..config import GeneratorConfig
from ..models import Customer, Order, OrderItem, PickupLocation, Product, User
from ..state_machine import new_order, transition
from .base import GeneratorContext
from .constants import (
    DUE_HOURS,
    FIRST_NAMES,
    ITEM_COMMENTS,
    LAST_NAMES,
    PHONE_PREFIX,
    VIP_DETAILS,
)
from .history import reconstruct_history
from .pickers import PopularityPicker, UniformPicker, pick_distinct, pick_uniform
from .policy import random_state


def random_phone(rng: np.random.Generator) -> str:
    return f"{PHONE_PREFIX}{int(rng.integers(10_000)):04d}"


def fill_customer(customer: Customer, rng: np.random.Generator, vip_probability: float = 0.1) -> None:
    """Give customer a random name and phone, occasionally marking them VIP."""
    first = pick_uniform(rng, FIRST_NAMES, "first_names")
    last = pick_uniform(rng, LAST_NAMES, "last_names")
    customer.full_name = f"{first} {last}"
    customer.phone_number = random_phone(rng)
    if rng.random() < vip_probability:
        customer.details = VIP_DETAILS


def random_due_time(rng: np.random.Generator) -> time:
    return time(pick_uniform(rng, DUE_HOURS, "due_hours"), 0)


def random_items(
    pick_product: Callable[[], Product],
    products: Sequence[Product],
    rng: np.random.Generator,
    config: GeneratorConfig,
) -> list[OrderItem]:
    """
    Draw 1..config.max_items items with distinct products.

    pick_product is the preferred draw; products is the pool it draws
    from, used for the uniform fallback when rejections run long.

    Raises:
        PoolExhaustedError: If the product pool cannot supply enough
            distinct products
    """
    count = int(rng.integers(config.max_items)) + 1
    items: list[OrderItem] = []
    for _ in range(count):
        product = pick_distinct(
            pick_product,
            [i.product for i in items],
            len(products),
            "products",
            pool=products,
            rng=rng,
        )
        quantity = int(rng.integers(config.max_quantity)) + 1
        comment = None
        if rng.random() < config.comment_probability:
            comment = pick_uniform(rng, ITEM_COMMENTS, "item_comments")
        items.append(OrderItem(product=product, quantity=quantity, comment=comment))
    return items


def synthesize_order(
    pick_product: Callable[[], Product],
    products: Sequence[Product],
    pick_location: Callable[[], PickupLocation],
    barista: User,
    baker: User,
    due_date: date,
    today: date,
    rng: np.random.Generator,
    config: GeneratorConfig | None = None,
) -> Order:
    """
    Build one populated order due on due_date.

    Args:
        pick_product: Draws a product (popularity-biased in the demo)
        products: Pool pick_product draws from
        pick_location: Draws a pickup location
        barista: Order creator
        baker: Author of kitchen-side history entries
        due_date: Due date of the order
        today: Generation date for the Due-Date State Policy
        rng: Shared NumPy generator
        config: Generation tunables (defaults when None)

    Returns:
        Order with customer, location, due date/time, items, state and a
        reconstructed history consistent with that state
    """
    config = config or GeneratorConfig()

    order = new_order(barista)
    fill_customer(order.customer, rng, config.vip_probability)
    order.pickup_location = pick_location()
    order.due_date = due_date
    order.due_time = random_due_time(rng)
    transition(order, barista, random_state(due_date, today, rng))

    order.set_items(random_items(pick_product, products, rng, config))
    order.set_history(reconstruct_history(order, barista, baker, rng))
    return order


class OrderSynthesizer:
    """
    Context-bound synthesizer.

    Products are drawn with the Gaussian popularity bias and pickup
    locations uniformly, both from the context's reference data.
    """

    def __init__(self, ctx: GeneratorContext) -> None:
        self.ctx = ctx
        reference = ctx.require_reference()
        self.pick_product = PopularityPicker(
            reference.products, ctx.rng, cutoff=ctx.config.popularity_cutoff, name="products"
        )
        self.pick_location = UniformPicker(reference.pickup_locations, ctx.rng, name="pickup_locations")

    def synthesize(self, due_date: date) -> Order:
        reference = self.ctx.require_reference()
        return synthesize_order(
            self.pick_product,
            self.pick_product.pool,
            self.pick_location,
            reference.barista,
            reference.baker,
            due_date,
            self.ctx.today,
            self.ctx.rng,
            self.ctx.config,
        )
