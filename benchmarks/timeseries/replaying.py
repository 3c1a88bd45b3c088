# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Benchmark replaying short raw series."""

from datetime import datetime, timedelta, timezone
from timeit import timeit

from frequenz.sos.timeseries import RetrievalSettings, replay


def _benchmark_replay(raw_samples: int, cycles: int) -> None:
    """Benchmark filling a window from a short series."""
    step = timedelta(minutes=1)
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    raw = [(start + step * n, float(n)) for n in range(raw_samples)]
    window = RetrievalSettings(
        step, start, start + step * (cycles - 1), maximum_cycle_count=cycles
    ).window()

    def _do_work() -> None:
        replay(raw, window, step)

    print(timeit(_do_work, number=5))


def _benchmark() -> None:
    for raw_samples in [1, 24, 288]:
        for cycles in [577, 5770]:
            print(f"{raw_samples=} {cycles=}")
            _benchmark_replay(raw_samples, cycles)


if __name__ == "__main__":
    _benchmark()
