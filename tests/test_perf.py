from __future__ import annotations

from discombobugraph.perf import benchmark_battery, benchmark_expansion, capture_profile

SAMPLE = bytes(range(256)) * 4


def test_benchmark_expansion_returns_statistics() -> None:
    stats = benchmark_expansion(SAMPLE, repeat=2)

    assert set(stats) == {"min", "max", "mean"}
    assert stats["max"] >= stats["min"]


def test_benchmark_battery_returns_statistics() -> None:
    stats = benchmark_battery(SAMPLE, repeat=2)

    assert set(stats) == {"min", "max", "mean"}
    assert stats["mean"] >= 0.0


def test_capture_profile_returns_profile_output() -> None:
    with capture_profile() as (analyzer, exporter):
        analyzer.run(SAMPLE)

    profile_output = exporter()

    assert "function calls" in profile_output
