"""
Domain model for bakery orders.

Order is the aggregate root. It owns its Customer, OrderItems and
HistoryItems; Product, PickupLocation and User are catalog/identity
entities referenced by the order and persisted independently.

Entities that a store persists carry an optional ``id`` which the store
assigns on save. Products and pickup locations compare by identity, so
two products sharing a generated name are still distinct catalog entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Protocol, Sequence


class OrderState(Enum):
    """Lifecycle state of an order."""

    NEW = "NEW"
    CONFIRMED = "CONFIRMED"
    READY = "READY"
    PROBLEM = "PROBLEM"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    def __str__(self) -> str:
        return self.value

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset({OrderState.DELIVERED, OrderState.CANCELLED})


class Role(Enum):
    BAKER = "baker"
    BARISTA = "barista"
    ADMIN = "admin"

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class User:
    """
    Application user.

    Equality uses (email, first_name, last_name, role). The password hash
    and locked flag do not take part, so a re-hashed password still
    identifies the same user.
    """

    email: str
    first_name: str
    last_name: str
    password_hash: str
    role: Role
    locked: bool = False
    id: int | None = None

    def _key(self) -> tuple:
        return (self.email, self.first_name, self.last_name, self.role)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(eq=False)
class Product:
    """Catalog product. Price is an integer amount in minor currency units."""

    name: str
    price: int
    id: int | None = None


@dataclass(eq=False)
class PickupLocation:
    name: str
    id: int | None = None


@dataclass
class Customer:
    full_name: str = ""
    phone_number: str = ""
    details: str | None = None

    @property
    def is_vip(self) -> bool:
        return self.details is not None


@dataclass
class OrderItem:
    product: Product
    quantity: int
    comment: str | None = None

    @property
    def total_price(self) -> int:
        """Subtotal in minor currency units."""
        return self.quantity * self.product.price


@dataclass(frozen=True)
class HistoryItem:
    """Immutable audit record of a change to an order."""

    created_by: User
    message: str
    new_state: OrderState | None
    timestamp: datetime


@dataclass
class Order:
    """
    Aggregate root for a single customer order.

    ``items`` and ``history`` are replaced wholesale by their setters;
    there is no incremental merge. Use ``bakery_orders.state_machine`` to
    create orders and change their state so the history ledger stays in
    step with ``state``.

    Attributes:
        due_date: Calendar date the order is due
        due_time: Time-of-day slot the order is due
        pickup_location: Where the customer collects the order
        customer: Embedded customer details
        items: Ordered line items, distinct products
        state: Current lifecycle state
        history: Append-only audit ledger, oldest first
    """

    state: OrderState | None = OrderState.NEW
    customer: Customer = field(default_factory=Customer)
    due_date: date | None = None
    due_time: time | None = None
    pickup_location: PickupLocation | None = None
    items: list[OrderItem] = field(default_factory=list)
    history: list[HistoryItem] = field(default_factory=list)
    id: int | None = None

    def set_items(self, items: Sequence[OrderItem]) -> None:
        self.items = list(items)

    def set_history(self, history: Sequence[HistoryItem]) -> None:
        self.history = list(history)

    @property
    def total_price(self) -> int:
        return sum(item.total_price for item in self.items)

    def contains_product(self, product: Product) -> bool:
        return any(item.product is product for item in self.items)


class OrderSummary(Protocol):
    """Read-only view shared by full orders and summary projections."""

    @property
    def due_date(self) -> date | None: ...

    @property
    def due_time(self) -> time | None: ...

    @property
    def pickup_location(self) -> PickupLocation | None: ...

    @property
    def customer(self) -> Customer: ...

    @property
    def items(self) -> list[OrderItem]: ...

    @property
    def state(self) -> OrderState | None: ...

    @property
    def total_price(self) -> int: ...
