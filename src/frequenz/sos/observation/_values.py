# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Typed measurement values and the observation value containers holding them."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TypeAlias

from ._block import DataBlock
from ._time import Time, TimePeriod


@dataclass(frozen=True)
class BooleanValue:
    """A truth value."""

    value: bool


@dataclass(frozen=True)
class CountValue:
    """An integer count."""

    value: int


@dataclass(frozen=True)
class QuantityValue:
    """A floating point quantity."""

    value: float
    """The magnitude of the quantity."""

    unit: str | None = None
    """The unit of measure, if known."""


@dataclass(frozen=True)
class CategoryValue:
    """A category code."""

    value: str
    """The category code."""

    unit: str | None = None
    """The code space of the category, if known."""


@dataclass(frozen=True)
class TextValue:
    """A free text value."""

    value: str


Value: TypeAlias = BooleanValue | CountValue | QuantityValue | CategoryValue | TextValue
"""A single typed measurement value."""


@dataclass(frozen=True)
class SingleObservationValue:
    """One value observed at one phenomenon time."""

    phenomenon_time: Time
    """When the value was observed."""

    value: Value
    """The observed value."""


@dataclass(frozen=True)
class ArrayObservationValue:
    """A block of rows, each row being one observation in disguise."""

    phenomenon_time: Time
    """The phenomenon time of the whole array, used by rows without their own."""

    block: DataBlock
    """The rows and their schema."""


@dataclass(frozen=True)
class TimeValuePair:
    """One entry of a merged observation."""

    time: Time
    """When the value was observed."""

    value: Value
    """The observed value."""


@dataclass
class MultiObservationValue:
    """Values of several observations folded together, in fold order."""

    entries: list[TimeValuePair] = field(default_factory=list)
    """The folded values."""

    @property
    def phenomenon_time(self) -> TimePeriod:
        """Get the period spanning all the entries.

        Returns:
            The smallest period containing the time of every entry.
        """
        period = TimePeriod()
        for entry in self.entries:
            period = period.extend_to_contain(entry.time)
        return period

    def __iter__(self) -> Iterator[TimeValuePair]:
        """Iterate over the entries.

        Returns:
            An iterator over the folded entries.
        """
        return iter(self.entries)

    def __len__(self) -> int:
        """Get the number of entries.

        Returns:
            The number of folded entries.
        """
        return len(self.entries)


ObservationValue: TypeAlias = (
    SingleObservationValue | ArrayObservationValue | MultiObservationValue
)
"""The value carried by an observation."""


def as_time_value_pairs(value: ObservationValue) -> Sequence[TimeValuePair]:
    """Flatten an observation value into time/value pairs.

    Args:
        value: The value to flatten.

    Returns:
        The pairs held by the value.

    Raises:
        TypeError: If the value is an array, which has to be split instead.
    """
    match value:
        case SingleObservationValue(phenomenon_time=time, value=single):
            return [TimeValuePair(time, single)]
        case MultiObservationValue():
            return list(value.entries)
        case ArrayObservationValue():
            raise TypeError("Array values must be split before they can be merged")

