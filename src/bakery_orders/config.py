"""
Generator configuration.

All tunables of the demo dataset live in GeneratorConfig. Defaults
reproduce the reference dataset; a YAML file may override any subset:

    seed: 7
    years_to_include: 1
    linked_products: 12
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

DEFAULT_SEED = 1


@dataclass(frozen=True)
class GeneratorConfig:
    """Configuration for demo data generation."""

    # Random state
    seed: int = DEFAULT_SEED

    # Date range: Jan 1 of (today.year - years_to_include) up to today + months_ahead
    years_to_include: int = 2
    months_ahead: int = 1

    # Catalog
    linked_products: int = 8  # Referenced by generated orders
    unlinked_products: int = 4  # Kept free of references for deletion scenarios

    # Volume trend
    max_daily_base: int = 10  # Base daily volume drawn from [0, max_daily_base)
    trend_per_month: float = 0.03

    # Order contents
    popularity_cutoff: float = 2.5
    max_items: int = 3
    max_quantity: int = 10
    vip_probability: float = 0.1
    comment_probability: float = 0.2

    def __post_init__(self) -> None:
        for name in ("max_items", "max_quantity", "max_daily_base"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        for name in ("years_to_include", "months_ahead", "unlinked_products"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)}")
        # Every order may need max_items distinct linked products
        if self.linked_products < self.max_items:
            raise ValueError(
                f"linked_products ({self.linked_products}) must be at least "
                f"max_items ({self.max_items})"
            )

    def with_overrides(self, **overrides: Any) -> GeneratorConfig:
        """Copy with the non-None overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(path: Path | str | None = None) -> GeneratorConfig:
    """
    Load a GeneratorConfig from a YAML mapping.

    Args:
        path: YAML file; None returns the defaults

    Returns:
        GeneratorConfig with file values applied over defaults

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the file is not a mapping, names unknown keys or
            holds out-of-range values
    """
    if path is None:
        return GeneratorConfig()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {unknown}")

    return GeneratorConfig(**data)
