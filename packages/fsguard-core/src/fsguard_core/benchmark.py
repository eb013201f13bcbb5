"""Throughput harness for the SHA-256 engines."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass

from fsguard_core.hashing import get_engine

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 1024


@dataclass(frozen=True)
class BenchResult:
    """Timing of one engine on one input size."""

    engine: str
    size: int
    iterations: int
    seconds: float

    @property
    def per_call_us(self) -> float:
        return self.seconds / self.iterations * 1_000_000

    @property
    def throughput_mib_s(self) -> float:
        if self.seconds <= 0:
            return float("inf")
        return self.size * self.iterations / self.seconds / (1024 * 1024)


def run_benchmark(
    sizes: Iterable[int] = (DEFAULT_SIZE,),
    iterations: int = 200,
    engines: Iterable[str] = ("reference", "fast"),
) -> list[BenchResult]:
    """Hash a zero-filled buffer of each size *iterations* times per engine."""
    if iterations <= 0:
        raise ValueError(f"iterations must be positive, got {iterations}")

    engine_fns = [(name, get_engine(name)) for name in engines]
    results: list[BenchResult] = []
    for size in sizes:
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        data = bytes(size)
        for name, fn in engine_fns:
            start = time.perf_counter()
            for _ in range(iterations):
                fn(data)
            elapsed = time.perf_counter() - start
            result = BenchResult(engine=name, size=size, iterations=iterations, seconds=elapsed)
            logger.debug("bench %s size=%d: %.1f us/call", name, size, result.per_call_us)
            results.append(result)
    return results
