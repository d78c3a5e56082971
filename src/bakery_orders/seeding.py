"""
Startup hook: seed an empty store with the demo dataset.

The run is gated on the identity store being empty and is written in a
single transaction, so a failure part-way leaves the store exactly as
it was and the next start simply tries again.
"""

from __future__ import annotations

from .config import GeneratorConfig
from .generation import Dataset, DatasetDriver, GeneratorContext
from .stores import Clock, DemoDataStore, PasswordHasher


def persist_dataset(store: DemoDataStore, dataset: Dataset) -> None:
    """Save every entity of dataset; references are saved before their users."""
    reference = dataset.reference
    for user in reference.users:
        store.save_user(user)
    for product in reference.all_products:
        store.save_product(product)
    for location in reference.pickup_locations:
        store.save_pickup_location(location)
    for order in dataset.orders:
        store.save_order(order)


def seed_demo_data(
    store: DemoDataStore,
    hasher: PasswordHasher,
    clock: Clock,
    config: GeneratorConfig | None = None,
) -> Dataset | None:
    """
    Generate and persist the demo dataset unless users already exist.

    Args:
        store: Identity, catalog and order store with transaction support
        hasher: Password hasher for demo identities
        clock: Source of "today"
        config: Generation tunables (defaults when None)

    Returns:
        The persisted Dataset, or None if the store was already populated

    Raises:
        Any storage error; the transaction is rolled back first
    """
    if store.count_users() != 0:
        print("Using existing database")
        return None

    print("Generating demo data")
    ctx = GeneratorContext.create(today=clock.today(), hasher=hasher, config=config)
    dataset = DatasetDriver(ctx).generate_all()

    with store.transaction():
        persist_dataset(store, dataset)

    print("Generated demo data")
    return dataset
