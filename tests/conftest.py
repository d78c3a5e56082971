"""
Pytest fixtures for bakery order tests.

Provides:
- A fixed reference date (2024-06-15) and seeded NumPy generators
- Generator contexts with reference data already created
- Full demo datasets (session-scoped default run, small per-test run)
"""

from datetime import date, datetime

import numpy as np
import pytest

from bakery_orders.config import GeneratorConfig
from bakery_orders.generation import CatalogGenerator, DatasetDriver, GeneratorContext
from bakery_orders.models import Role, User
from bakery_orders.stores import Sha256PasswordHasher

TODAY = date(2024, 6, 15)

# One year of history keeps per-test runs quick
SMALL_CONFIG = GeneratorConfig(years_to_include=0)


@pytest.fixture
def today() -> date:
    """Reference generation date."""
    return TODAY


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded NumPy generator."""
    return np.random.default_rng(1)


@pytest.fixture
def hasher() -> Sha256PasswordHasher:
    return Sha256PasswordHasher()


@pytest.fixture
def small_config() -> GeneratorConfig:
    return SMALL_CONFIG


@pytest.fixture
def ctx(today, hasher) -> GeneratorContext:
    """Context with reference data generated, no orders yet."""
    context = GeneratorContext.create(today=today, hasher=hasher)
    CatalogGenerator(context).generate()
    return context


@pytest.fixture
def reference(ctx):
    return ctx.reference


@pytest.fixture
def baker() -> User:
    return User("baker@vaadin.com", "Heidi", "Carter", "hash", Role.BAKER)


@pytest.fixture
def barista() -> User:
    return User("barista@vaadin.com", "Malin", "Castro", "hash", Role.BARISTA, locked=True)


@pytest.fixture
def noon() -> datetime:
    return datetime(2024, 6, 10, 12, 0)


@pytest.fixture(scope="session")
def dataset():
    """Full default run for today = 2024-06-15 (shared, do not mutate)."""
    context = GeneratorContext.create(today=TODAY, hasher=Sha256PasswordHasher())
    return DatasetDriver(context).generate_all()


@pytest.fixture
def small_dataset(hasher):
    """Fresh reduced run, safe to mutate."""
    context = GeneratorContext.create(today=TODAY, hasher=hasher, config=SMALL_CONFIG)
    return DatasetDriver(context).generate_all()
