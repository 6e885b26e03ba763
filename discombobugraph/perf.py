"""Performance helpers for benchmarking and profiling the battery."""

from __future__ import annotations

import cProfile
import io
import pstats
import statistics
import timeit
from contextlib import contextmanager
from typing import Callable, Iterator, Mapping

from .battery import Analyzer
from .bits import BufferLike, as_buffer, expand_bits


def benchmark_expansion(data: BufferLike, *, repeat: int = 5) -> Mapping[str, float]:
    """Benchmark :func:`~discombobugraph.bits.expand_bits` on ``data``."""

    buffer = as_buffer(data)
    return _summarise(timeit.Timer(lambda: expand_bits(buffer)), repeat)


def benchmark_battery(
    data: BufferLike, *, repeat: int = 5, analyzer: Analyzer | None = None
) -> Mapping[str, float]:
    """Benchmark a full battery run on ``data``."""

    buffer = as_buffer(data)
    target = analyzer or Analyzer()
    return _summarise(timeit.Timer(lambda: target.analyze(buffer)), repeat)


@contextmanager
def capture_profile(
    analyzer: Analyzer | None = None,
) -> Iterator[tuple[Analyzer, Callable[..., str]]]:
    """Context manager capturing profiling data for manual inspection.

    The yielded tuple contains the :class:`Analyzer` to use for the profiled
    operations and a callable returning a formatted profile summary.
    """

    profiler = cProfile.Profile()
    target = analyzer or Analyzer()
    profiler.enable()

    def exporter(limit: int = 25) -> str:
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.strip_dirs().sort_stats("cumulative").print_stats(limit)
        return stream.getvalue()

    try:
        yield target, exporter
    finally:
        profiler.disable()


def _summarise(timer: timeit.Timer, repeat: int) -> Mapping[str, float]:
    runs = timer.repeat(repeat=repeat, number=1)
    return {
        "min": min(runs),
        "max": max(runs),
        "mean": statistics.fmean(runs),
    }


__all__ = ["benchmark_battery", "benchmark_expansion", "capture_profile"]
