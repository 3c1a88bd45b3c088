# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Benchmark splitting and merging observations."""

from datetime import datetime, timedelta, timezone
from timeit import timeit

from frequenz.sos.observation import (
    PHENOMENON_TIME,
    ArrayObservationValue,
    DataBlock,
    ElementType,
    Field,
    FieldKind,
    Observation,
    ObservationConstellation,
    ObservationType,
    TimeInstant,
    merge_observations,
    split_observations,
)


def _arrays(sensors: int, rows: int) -> list[Observation]:
    element_type = ElementType(
        (
            Field("time", FieldKind.TIME, definition=PHENOMENON_TIME),
            Field("level", FieldKind.QUANTITY, definition="urn:level", uom="m"),
        )
    )
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    block = DataBlock(
        element_type,
        [[(start + timedelta(minutes=n)).isoformat(), str(n)] for n in range(rows)],
    )
    return [
        Observation(
            constellation=ObservationConstellation(
                procedure=f"urn:sensor:{sensor}",
                observed_property="urn:level",
                feature_of_interest="urn:tank",
                observation_type=ObservationType.SWE_ARRAY.value,
            ),
            value=ArrayObservationValue(TimeInstant(start), block),
        )
        for sensor in range(sensors)
    ]


def _benchmark_split_merge(sensors: int, rows: int) -> None:
    """Benchmark a split followed by a merge."""
    arrays = _arrays(sensors, rows)

    def _do_work() -> None:
        merge_observations(split_observations(arrays))

    print(timeit(_do_work, number=5))


def _benchmark() -> None:
    for sensors in [1, 10, 100]:
        for rows in [10, 100, 1000]:
            print(f"{sensors=} {rows=}")
            _benchmark_split_merge(sensors, rows)


if __name__ == "__main__":
    _benchmark()
