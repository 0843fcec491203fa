"""Seeded random streams, one per generation stage.

A settlement is reproducible from its master seed only if every stage draws
from a stream of its own: placement trying a few more candidates must not
move the roads of the next settlement. ``RNGProvider`` hands out one
``RNGStream`` per stage name, seeded from ``crc32("{master_seed}:{stage}")``.
crc32 keeps derived seeds stable between processes, unlike ``hash()``.

Stage names used by the generators:
    - "layout.water", "layout.roads", "layout.districts", "layout.placement"
    - "settlement.content", "settlement.names", "settlement.sizing"

Modules that need a default stream take it from the process-wide provider
at import time:

    from burgh.util import rng
    _rng = rng.get("settlement.names")

``rng.init(seed)`` reseeds those streams in place, so module-level
references stay valid.
"""

from __future__ import annotations

import zlib
from random import Random
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from burgh.types import RandomSeed

# Anything the generators draw from: a stage stream or a plain Random
RNG: TypeAlias = Random


def derive_seed(master_seed: RandomSeed, stage: str) -> int | None:
    """Seed of one stage's stream, or None (system entropy) when unseeded."""
    if master_seed is None:
        return None
    return zlib.crc32(f"{master_seed}:{stage}".encode())


class RNGStream(Random):
    """A Random whose seed is derived from a master seed and a stage name."""

    def __init__(self, stage: str, master_seed: RandomSeed = None) -> None:
        self.stage = stage
        super().__init__(derive_seed(master_seed, stage))

    def reseed(self, master_seed: RandomSeed) -> None:
        self.seed(derive_seed(master_seed, self.stage))


class RNGProvider:
    """Stage streams sharing one master seed.

    A stream's sequence depends only on the master seed and its stage name,
    never on which other stages were used first or how much they consumed.
    """

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, RNGStream] = {}

    def get(self, stage: str) -> RNGStream:
        """The stream for ``stage``, created on first use."""
        stream = self._streams.get(stage)
        if stream is None:
            stream = RNGStream(stage, self._master_seed)
            self._streams[stage] = stream
        return stream

    def reseed(self, master_seed: RandomSeed) -> None:
        """Restart every stream from a new master seed, keeping the objects."""
        self._master_seed = master_seed
        for stream in self._streams.values():
            stream.reseed(master_seed)


_provider = RNGProvider()


def init(master_seed: RandomSeed = None) -> None:
    """Reseed the process-wide streams, e.g. ``rng.init(config.RANDOM_SEED)``."""
    _provider.reseed(master_seed)


def get(stage: str) -> RNGStream:
    return _provider.get(stage)
