# sim/rng.py
from __future__ import annotations

from dataclasses import dataclass
from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _crc32_u32(s: str) -> int:
    return _u32(crc32(s.encode("utf-8")))


@dataclass(frozen=True)
class RNGKey:
    """Stream name plus optional ints/strings for substreams (e.g. per follower)."""

    stream: str
    parts: tuple[int, ...]  # normalized to u32, stream crc first

    @classmethod
    def from_parts(cls, stream: str, *parts: object) -> RNGKey:
        norm: list[int] = [_crc32_u32(stream)]
        for p in parts:
            if isinstance(p, (int, np.integer)):
                norm.append(_u32(int(p)))
            elif isinstance(p, str):
                norm.append(_crc32_u32(p))
            else:
                norm.append(_crc32_u32(repr(p)))
        return cls(stream=stream, parts=tuple(norm))


class RNGRegistry:
    """
    Deterministic registry of numpy.random.Generator streams.
    Entropy path: [master_seed, scenario, *key.parts]

    Asking for the same key twice returns the same (stateful) generator, so the
    topology stream is consumed once per build and never shared with anything else.
    """

    def __init__(self, master_seed: int, *, scenario: str | int = 0):
        self.master_seed = _u32(master_seed)
        self.scenario_tag = _crc32_u32(str(scenario))
        self._generators: dict[tuple[RNGKey, str], np.random.Generator] = {}

    def generator(self, key: RNGKey, *, bitgen: str = "PCG64") -> np.random.Generator:
        cached = self._generators.get((key, bitgen))
        if cached is not None:
            return cached
        ss = np.random.SeedSequence(entropy=[self.master_seed, self.scenario_tag, *key.parts])
        if bitgen == "PCG64":
            bg = np.random.PCG64(ss)
        elif bitgen == "Philox":
            bg = np.random.Philox(ss)
        else:
            raise ValueError("Unknown bitgen: " + bitgen)
        gen = self._generators[(key, bitgen)] = np.random.Generator(bg)
        return gen

    def stream(self, name: str) -> np.random.Generator:
        return self.generator(RNGKey.from_parts(name))

    def substream(self, name: str, *parts: object) -> np.random.Generator:
        return self.generator(RNGKey.from_parts(name, *parts))
