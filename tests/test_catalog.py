"""
Tests for the catalog generator.
"""

import numpy as np

from bakery_orders.generation import CatalogGenerator, GeneratorContext
from bakery_orders.generation.catalog import random_price, random_product_name
from bakery_orders.generation.constants import FILLINGS, PRODUCT_TYPES
from bakery_orders.models import Role


def split_product_name(name):
    """Split a generated name into (fillings, type), longest type first."""
    for product_type in sorted(PRODUCT_TYPES, key=len, reverse=True):
        if name.endswith(" " + product_type):
            return name[: -len(product_type) - 1].split(" "), product_type
    raise AssertionError(f"No product type in {name!r}")


class TestProductNames:
    """Tests for random product names and prices."""

    def test_split_prefers_longest_type(self):
        assert split_product_name("Vanilla Cheese Cake") == (["Vanilla"], "Cheese Cake")

    def test_names_are_well_formed(self):
        rng = np.random.default_rng(4)
        filling_counts = set()
        for _ in range(500):
            fillings, _ = split_product_name(random_product_name(rng))
            assert set(fillings) <= set(FILLINGS)
            assert len(set(fillings)) == len(fillings)
            filling_counts.add(len(fillings))
        assert filling_counts == {1, 2}

    def test_price_range(self):
        rng = np.random.default_rng(4)
        prices = [random_price(rng) for _ in range(1_000)]
        assert all(isinstance(p, int) for p in prices)
        assert min(prices) >= 200
        assert max(prices) < 10_200


class TestCatalogGenerator:
    """Tests for reference data creation."""

    def test_users(self, reference):
        assert reference.baker.role == Role.BAKER
        assert reference.barista.role == Role.BARISTA
        assert reference.admin.role == Role.ADMIN
        assert not reference.baker.locked
        assert reference.barista.locked
        assert [u.email for u in reference.deletable_users] == [
            "peter@vaadin.com",
            "mary@vaadin.com",
        ]
        assert len(reference.users) == 5

    def test_password_is_email_local_part(self, reference, hasher):
        for user in reference.users:
            local_part = user.email.split("@")[0]
            assert hasher.verify(local_part, user.password_hash)
            assert local_part not in user.password_hash.split("$")[-1]

    def test_products(self, reference):
        assert len(reference.products) == 8
        assert len(reference.unlinked_products) == 4
        assert reference.all_products == reference.products + reference.unlinked_products
        assert all(p.id is None for p in reference.all_products)

    def test_pickup_locations(self, reference):
        assert [loc.name for loc in reference.pickup_locations] == ["Store", "Bakery"]

    def test_same_seed_same_catalog(self, today, hasher):
        catalogs = []
        for _ in range(2):
            ctx = GeneratorContext.create(today=today, hasher=hasher)
            CatalogGenerator(ctx).generate()
            catalogs.append([(p.name, p.price) for p in ctx.reference.all_products])
        assert catalogs[0] == catalogs[1]

    def test_config_controls_product_counts(self, today, hasher, small_config):
        config = small_config.with_overrides(linked_products=3, unlinked_products=0)
        ctx = GeneratorContext.create(today=today, hasher=hasher, config=config)
        CatalogGenerator(ctx).generate()
        assert len(ctx.reference.products) == 3
        assert ctx.reference.unlinked_products == []
