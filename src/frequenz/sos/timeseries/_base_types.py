# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Timeseries basic types."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import TypeAlias

UNIX_EPOCH = datetime.fromtimestamp(0.0, tz=timezone.utc)
"""The UNIX epoch (in UTC)."""

MeasureValue: TypeAlias = float | int | bool | str
"""The value of a measure, numeric for most attributes."""


@dataclass(frozen=True, order=True)
class Measure:
    """A value of an attribute at a particular point in time.

    Measures produced by replaying the raw data of a short series are flagged
    as `synthesized`, so they can be told apart from genuine data. The flag
    doesn't take part in comparisons.
    """

    timestamp: datetime
    """The time the value applies to."""

    value: MeasureValue
    """The value of this measure."""

    synthesized: bool = field(default=False, compare=False)
    """Whether the measure was extrapolated instead of read."""


@dataclass(frozen=True)
class ObservableObject:
    """An object whose attributes are observed, like a pipe or a tank."""

    object_type: str
    """The type of the object."""

    object_name: str
    """The name of the object, unique within its type."""

    description: str = ""
    """A human readable description."""


@dataclass(frozen=True)
class ObservableAttribute:
    """An observed attribute of an object, and the window it was read for."""

    name: str
    """The name of the attribute."""

    description: str = ""
    """A human readable description."""

    time_from: datetime | None = None
    """The timestamp of the first measure."""

    time_to: datetime | None = None
    """The timestamp of the last measure."""

    step_time: timedelta | None = None
    """The nominal distance between measures."""

    units: str | None = None
    """The unit of measure of the values."""


@dataclass(frozen=True)
class MeasureSet:
    """The measures of one attribute of one object."""

    owner: ObservableObject
    """The object the attribute belongs to."""

    attribute: ObservableAttribute
    """The attribute the measures are for."""

    measures: tuple[Measure, ...] = ()
    """The measures, in time order."""

    def __iter__(self) -> Iterator[Measure]:
        """Iterate over the measures.

        Returns:
            An iterator over the measures.
        """
        return iter(self.measures)

    def __len__(self) -> int:
        """Get the number of measures.

        Returns:
            The number of measures.
        """
        return len(self.measures)
