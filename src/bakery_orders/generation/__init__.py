"""
Generation Package - Reproducible demo data for the bakery.

Base Classes:
- GeneratorContext: Shared state (config, rng, today) passed to all generators
- BaseGenerator: Abstract base class for generators
- ReferenceData / Dataset: Generated entities

Generators:
- CatalogGenerator: Users, products, pickup locations
- OrderGenerator: Pinned "today" order plus the dated order stream
- DatasetDriver: Runs the generators in order and reports progress

Building blocks:
- synthesize_order / OrderSynthesizer: One populated order
- reconstruct_history: Backdated history consistent with an order's state
- random_state: Due-Date State Policy
- PopularityPicker / UniformPicker: Pool pickers over the shared generator
"""

from .base import BaseGenerator, Dataset, GeneratorContext, ReferenceData
from .catalog import CatalogGenerator, random_price, random_product_name
from .driver import (
    DatasetDriver,
    OrderGenerator,
    add_months,
    generation_window,
    orders_for_day,
    trim_to_pinned,
    volume_multiplier,
)
from .history import reconstruct_history
from .pickers import (
    EmptyPoolError,
    PoolExhaustedError,
    PopularityPicker,
    UniformPicker,
    pick_distinct,
    pick_uniform,
    popularity_index,
    popularity_indices,
)
from .policy import distribution_for, random_state
from .synthesizer import OrderSynthesizer, synthesize_order

__all__ = [
    # Base classes
    "GeneratorContext",
    "BaseGenerator",
    "ReferenceData",
    "Dataset",
    # Generators
    "CatalogGenerator",
    "OrderGenerator",
    "DatasetDriver",
    # Orders
    "OrderSynthesizer",
    "synthesize_order",
    "reconstruct_history",
    "random_state",
    "distribution_for",
    # Pickers
    "UniformPicker",
    "PopularityPicker",
    "pick_uniform",
    "pick_distinct",
    "popularity_index",
    "popularity_indices",
    "EmptyPoolError",
    "PoolExhaustedError",
    # Helpers
    "random_product_name",
    "random_price",
    "add_months",
    "generation_window",
    "orders_for_day",
    "volume_multiplier",
    "trim_to_pinned",
]
