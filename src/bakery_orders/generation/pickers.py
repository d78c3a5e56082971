"""
Random pickers over reference pools.

Two draw styles feed the order synthesizer:

- UniformPicker: every entry equally likely (pickup locations, names)
- PopularityPicker: Gaussian-biased draw that favours the middle of the
  pool's insertion order, giving some products a "popular" skew

Both take the shared NumPy generator explicitly so the whole dataset is
reproducible from one seed.

Usage:
    rng = np.random.default_rng(1)
    pick_product = PopularityPicker(products, rng)
    product = pick_product()
"""

from __future__ import annotations

from typing import Callable, Generic, Sequence, TypeVar

import numpy as np

T = TypeVar("T")

DEFAULT_CUTOFF = 2.5

# Rejected draws allowed per distinct pick before the uniform fallback
MAX_ATTEMPTS_PER_PICK = 1_000


class EmptyPoolError(Exception):
    """Raised when a draw is requested from an empty pool."""

    def __init__(self, pool_name: str) -> None:
        self.pool_name = pool_name
        super().__init__(f"Cannot draw from empty pool '{pool_name}'")


class PoolExhaustedError(Exception):
    """Raised when more distinct entries are requested than a pool can supply."""

    def __init__(self, pool_name: str, pool_size: int, requested: int) -> None:
        self.pool_name = pool_name
        self.pool_size = pool_size
        self.requested = requested
        super().__init__(
            f"Pool '{pool_name}' cannot supply {requested} distinct entries "
            f"(size {pool_size})"
        )


def pick_uniform(rng: np.random.Generator, pool: Sequence[T], pool_name: str = "pool") -> T:
    """Draw one entry uniformly from pool."""
    if not pool:
        raise EmptyPoolError(pool_name)
    return pool[int(rng.integers(len(pool)))]


def popularity_index(sample: float, pool_size: int, cutoff: float = DEFAULT_CUTOFF) -> int:
    """
    Map a standard-normal sample to a pool index.

    The sample is clamped to [-cutoff, cutoff], shifted and scaled onto
    [0, 1], then scaled by (pool_size - 1) and truncated. The last index
    is only hit when the sample reaches the upper clamp.

    Args:
        sample: Standard-normal draw
        pool_size: Number of entries in the pool
        cutoff: Clamp bound in standard deviations

    Returns:
        Index in [0, pool_size - 1]
    """
    g = min(cutoff, sample)
    g = max(-cutoff, g)
    g += cutoff
    g /= cutoff * 2.0
    return int(g * (pool_size - 1))


def popularity_indices(
    samples: np.ndarray | Sequence[float],
    pool_size: int,
    cutoff: float = DEFAULT_CUTOFF,
) -> np.ndarray:
    """Vectorized popularity_index() over an array of normal samples."""
    g = np.clip(np.asarray(samples, dtype=np.float64), -cutoff, cutoff)
    g = (g + cutoff) / (cutoff * 2.0)
    return (g * (pool_size - 1)).astype(np.int64)


class UniformPicker(Generic[T]):
    """Callable that draws uniformly from a fixed pool."""

    def __init__(self, pool: Sequence[T], rng: np.random.Generator, name: str = "pool") -> None:
        if not pool:
            raise EmptyPoolError(name)
        self.pool = list(pool)
        self.name = name
        self._rng = rng

    def __len__(self) -> int:
        return len(self.pool)

    def __call__(self) -> T:
        return pick_uniform(self._rng, self.pool, self.name)


class PopularityPicker(Generic[T]):
    """Callable that draws from a fixed pool with a Gaussian popularity bias."""

    def __init__(
        self,
        pool: Sequence[T],
        rng: np.random.Generator,
        cutoff: float = DEFAULT_CUTOFF,
        name: str = "pool",
    ) -> None:
        if not pool:
            raise EmptyPoolError(name)
        self.pool = list(pool)
        self.cutoff = cutoff
        self.name = name
        self._rng = rng

    def __len__(self) -> int:
        return len(self.pool)

    def __call__(self) -> T:
        index = popularity_index(float(self._rng.standard_normal()), len(self.pool), self.cutoff)
        return self.pool[index]


def pick_distinct(
    picker: Callable[[], T],
    taken: Sequence[T],
    pool_size: int,
    pool_name: str = "pool",
    pool: Sequence[T] | None = None,
    rng: np.random.Generator | None = None,
) -> T:
    """
    Draw one entry not already in taken, by rejection sampling.

    Duplicates (by identity) are redrawn. When taken already covers the
    pool it fails immediately. After MAX_ATTEMPTS_PER_PICK rejected draws
    it falls back to a uniform draw over the entries of pool not yet
    taken, so a pool large enough for the request always supplies one.
    Without pool and rng there is no fallback.

    Args:
        picker: Preferred draw (e.g. a PopularityPicker)
        taken: Entries already chosen
        pool_size: Number of distinct entries picker can return
        pool_name: Name used in errors
        pool: Entries picker draws from, for the fallback draw
        rng: Generator for the fallback draw

    Raises:
        EmptyPoolError: If pool_size is zero
        PoolExhaustedError: If no new entry can be obtained
    """
    if pool_size == 0:
        raise EmptyPoolError(pool_name)
    if len(taken) >= pool_size:
        raise PoolExhaustedError(pool_name, pool_size, len(taken) + 1)

    for _ in range(MAX_ATTEMPTS_PER_PICK):
        candidate = picker()
        if not any(candidate is t for t in taken):
            return candidate

    if pool is not None and rng is not None:
        remaining = [entry for entry in pool if not any(entry is t for t in taken)]
        if remaining:
            return pick_uniform(rng, remaining, pool_name)
    raise PoolExhaustedError(pool_name, pool_size, len(taken) + 1)
