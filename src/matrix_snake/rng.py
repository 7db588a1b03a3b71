"""Random-bit sources for food placement."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

_U32_LIMIT = 1 << 32


@runtime_checkable
class RandomSource(Protocol):
    """Anything that produces independent unsigned 32-bit integers."""

    def next_u32(self) -> int: ...


class NumpyRandomSource:
    """``RandomSource`` backed by a NumPy ``Generator``.

    Pass a seed for reproducible games, or an existing generator to share
    its stream.
    """

    def __init__(self, seed: int | np.random.Generator | None = None) -> None:
        if isinstance(seed, np.random.Generator):
            self.generator = seed
        else:
            self.generator = np.random.default_rng(seed)

    def next_u32(self) -> int:
        return int(self.generator.integers(0, _U32_LIMIT, dtype=np.uint64))
