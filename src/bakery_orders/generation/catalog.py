"""
Catalog generator: identities, products and pickup locations.

Entities created:
- users: baker, barista, admin plus two deletable users
- products: linked products (used by orders) and unlinked products
  (never referenced, for deletion scenarios)
- pickup_locations: "Store" and "Bakery"

This runs first; the order generators depend on its ReferenceData.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from ..models import PickupLocation, Product, User
from .base import BaseGenerator, ReferenceData
from .constants import DELETABLE_USERS, DEMO_USERS, FILLINGS, PICKUP_LOCATIONS, PRODUCT_TYPES
from .pickers import pick_uniform


def random_product_name(rng: np.random.Generator) -> str:
    """
    Build a product name from one or two distinct fillings and a type.

    e.g. "Chocolate Cake", "Strawberry Vanilla Muffin"
    """
    first = pick_uniform(rng, FILLINGS, "fillings")
    if rng.integers(2) == 1:
        second = pick_uniform(rng, FILLINGS, "fillings")
        while second == first:
            second = pick_uniform(rng, FILLINGS, "fillings")
        name = f"{first} {second}"
    else:
        name = first
    return f"{name} {pick_uniform(rng, PRODUCT_TYPES, 'product_types')}"


def random_price(rng: np.random.Generator) -> int:
    """Unit price in minor currency units, in [200, 10200)."""
    return int((2.0 + rng.random() * 100.0) * 100.0)


class CatalogGenerator(BaseGenerator):
    """
    Generate identity and catalog reference data.

    Users do not consume randomness. Products draw their names and prices
    from the shared generator: linked products first, then unlinked ones.
    """

    def generate(self) -> None:
        print("... generating users")
        users = {key: self._create_user(profile) for key, profile in DEMO_USERS.items()}
        deletable = [self._create_user(profile) for profile in DELETABLE_USERS]

        print("... generating products")
        products = self._create_products(self.config.linked_products)
        unlinked = self._create_products(self.config.unlinked_products)

        print("... generating pickup locations")
        locations = [PickupLocation(name=name) for name in PICKUP_LOCATIONS]

        self.ctx.reference = ReferenceData(
            baker=users["baker"],
            barista=users["barista"],
            admin=users["admin"],
            deletable_users=deletable,
            products=products,
            unlinked_products=unlinked,
            pickup_locations=locations,
        )

    def _create_user(self, profile: dict[str, Any]) -> User:
        plaintext = profile["email"].split("@", 1)[0]
        return User(
            email=profile["email"],
            first_name=profile["first_name"],
            last_name=profile["last_name"],
            password_hash=self.ctx.hasher.hash(plaintext),
            role=profile["role"],
            locked=profile["locked"],
        )

    def _create_products(self, count: int) -> list[Product]:
        products = []
        for _ in range(count):
            name = random_product_name(self.rng)
            products.append(Product(name=name, price=random_price(self.rng)))
        return products
