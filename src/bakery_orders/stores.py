"""
Collaborator contracts used by demo data seeding, plus in-memory doubles.

The seeding run only needs CRUD-style saves, a user count for the
idempotency gate, a password hasher and a clock. Protocols describe
those seams; InMemoryStore implements all three stores for tests and
dry runs. See bakery_orders.postgres for the PostgreSQL implementation.
"""

from __future__ import annotations

import copy
import hashlib
from contextlib import contextmanager
from datetime import date
from typing import Iterator, Protocol

from .models import Order, PickupLocation, Product, User


class IdentityStore(Protocol):
    def count_users(self) -> int: ...

    def save_user(self, user: User) -> User: ...


class CatalogStore(Protocol):
    def save_product(self, product: Product) -> Product: ...

    def save_pickup_location(self, location: PickupLocation) -> PickupLocation: ...


class OrderStore(Protocol):
    def save_order(self, order: Order) -> Order: ...


class DemoDataStore(IdentityStore, CatalogStore, OrderStore, Protocol):
    """A store that can persist a whole demo dataset in one transaction."""

    def transaction(self): ...


class PasswordHasher(Protocol):
    def hash(self, plaintext: str) -> str: ...


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock:
    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to one date, for deterministic runs."""

    def __init__(self, fixed: date) -> None:
        self._today = fixed

    def today(self) -> date:
        return self._today


class Sha256PasswordHasher:
    """
    Salted PBKDF2-SHA256 hasher.

    Output format: ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``.
    The salt is fixed per hasher instance so demo output is reproducible.
    """

    def __init__(self, salt: str = "bakery-demo", iterations: int = 1_000) -> None:
        self.salt = salt
        self.iterations = iterations

    def hash(self, plaintext: str) -> str:
        digest = hashlib.pbkdf2_hmac(
            "sha256", plaintext.encode(), self.salt.encode(), self.iterations
        ).hex()
        return f"pbkdf2_sha256${self.iterations}${self.salt}${digest}"

    def verify(self, plaintext: str, hashed: str) -> bool:
        return self.hash(plaintext) == hashed


class InMemoryStore:
    """
    Dict-backed implementation of the identity, catalog and order stores.

    Saving assigns a sequential id per entity type when the entity has none.
    transaction() snapshots the contents and restores them if the block
    raises, so a failed seeding run leaves the store untouched.
    """

    def __init__(self) -> None:
        self.users: list[User] = []
        self.products: list[Product] = []
        self.pickup_locations: list[PickupLocation] = []
        self.orders: list[Order] = []
        self._next_ids: dict[str, int] = {}

    def _assign_id(self, kind: str, entity) -> None:
        if entity.id is None:
            next_id = self._next_ids.get(kind, 1)
            entity.id = next_id
            self._next_ids[kind] = next_id + 1

    def count_users(self) -> int:
        return len(self.users)

    def save_user(self, user: User) -> User:
        self._assign_id("user", user)
        self.users.append(user)
        return user

    def save_product(self, product: Product) -> Product:
        self._assign_id("product", product)
        self.products.append(product)
        return product

    def save_pickup_location(self, location: PickupLocation) -> PickupLocation:
        self._assign_id("pickup_location", location)
        self.pickup_locations.append(location)
        return location

    def save_order(self, order: Order) -> Order:
        self._assign_id("order", order)
        self.orders.append(order)
        return order

    @contextmanager
    def transaction(self) -> Iterator[InMemoryStore]:
        snapshot = (
            list(self.users),
            list(self.products),
            list(self.pickup_locations),
            list(self.orders),
            copy.copy(self._next_ids),
        )
        try:
            yield self
        except BaseException:
            (
                self.users,
                self.products,
                self.pickup_locations,
                self.orders,
                self._next_ids,
            ) = snapshot
            raise
