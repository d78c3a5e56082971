"""
Base classes for the demo data generators.

This module provides:
- ReferenceData: users, products and pickup locations created up front
- Dataset: everything one generation run produces
- GeneratorContext: shared state passed to every generator
- BaseGenerator: abstract base class for the individual generators

Design Principles:
- Context owns all mutable state (random generator, produced data)
- Generators hold no state of their own; they read and write the context
- The single NumPy generator in the context is the only source of
  randomness, so a run is reproducible from (seed, today)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any

import numpy as np

from ..config import GeneratorConfig
from ..models import Order, PickupLocation, Product, User
from ..stores import PasswordHasher


@dataclass
class ReferenceData:
    """
    Identity and catalog entities consumed by the order synthesizer.

    Attributes:
        baker: Author of confirm/problem/ready/delivered history entries
        barista: Creator of every order, author of placed/cancelled entries
        admin: Administrator account
        deletable_users: Users with no references, for deletion scenarios
        products: Products referenced by generated orders
        unlinked_products: Products never referenced by orders
        pickup_locations: Locations orders are collected from
    """

    baker: User
    barista: User
    admin: User
    deletable_users: list[User] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)
    unlinked_products: list[Product] = field(default_factory=list)
    pickup_locations: list[PickupLocation] = field(default_factory=list)

    @property
    def users(self) -> list[User]:
        return [self.baker, self.barista, self.admin, *self.deletable_users]

    @property
    def all_products(self) -> list[Product]:
        return [*self.products, *self.unlinked_products]


@dataclass
class Dataset:
    """Result of one generation run. The pinned order is also orders[0]."""

    today: date
    reference: ReferenceData
    orders: list[Order] = field(default_factory=list)

    @property
    def pinned_order(self) -> Order | None:
        return self.orders[0] if self.orders else None


@dataclass
class GeneratorContext:
    """
    Shared state for all generators.

    Attributes:
        config: Generation tunables
        rng: NumPy random generator seeded from config.seed
        today: Reference date for the due-date policy and the date range
        hasher: Password hasher for demo identities
        reference: Identity/catalog data, set by the catalog generator
        orders: Generated orders in emission order
    """

    config: GeneratorConfig
    rng: np.random.Generator
    today: date
    hasher: PasswordHasher
    reference: ReferenceData | None = None
    orders: list[Order] = field(default_factory=list)

    # Performance tracking
    _phase_times: dict[str, float] = field(default_factory=dict, repr=False)
    _phase_rows: dict[str, int] = field(default_factory=dict, repr=False)

    @classmethod
    def create(
        cls,
        today: date,
        hasher: PasswordHasher,
        config: GeneratorConfig | None = None,
    ) -> GeneratorContext:
        """Build a context with a fresh generator seeded from config.seed."""
        config = config or GeneratorConfig()
        return cls(
            config=config,
            rng=np.random.default_rng(config.seed),
            today=today,
            hasher=hasher,
        )

    def require_reference(self) -> ReferenceData:
        if self.reference is None:
            raise RuntimeError("Reference data not generated yet; run CatalogGenerator first")
        return self.reference

    def to_dataset(self) -> Dataset:
        return Dataset(today=self.today, reference=self.require_reference(), orders=list(self.orders))

    def record_phase(self, name: str, elapsed: float, rows: int) -> None:
        self._phase_times[name] = elapsed
        self._phase_rows[name] = rows

    def phase_stats(self) -> dict[str, dict[str, Any]]:
        return {
            name: {"seconds": self._phase_times[name], "rows": self._phase_rows.get(name, 0)}
            for name in self._phase_times
        }


class BaseGenerator(ABC):
    """
    Abstract base class for generators.

    Each generator implements generate(), reading from and writing to
    the shared GeneratorContext.
    """

    def __init__(self, ctx: GeneratorContext) -> None:
        self.ctx = ctx

    @abstractmethod
    def generate(self) -> None:
        """Generate this generator's share of the dataset into the context."""

    @property
    def rng(self) -> np.random.Generator:
        """Convenience accessor for the shared NumPy generator."""
        return self.ctx.rng

    @property
    def config(self) -> GeneratorConfig:
        return self.ctx.config
