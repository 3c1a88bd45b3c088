# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Time primitives attached to observations."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TypeAlias

from ._exceptions import MalformedTimestampError
from ._vocabulary import TEMPLATE_INDETERMINATE_VALUE


class IndeterminateTime(enum.Enum):
    """Request modifiers that select a boundary sample instead of a time."""

    FIRST = "first"
    """The earliest available sample."""

    LATEST = "latest"
    """The most recent available sample."""


@dataclass(frozen=True)
class TimeInstant:
    """A single point in time.

    An instant can also carry an indeterminate value instead of (or in addition
    to) a concrete time, like `template` for result times that are to be filled
    in by the service, or `first`/`latest` in temporal filters.
    """

    value: datetime | None = None
    """The point in time, always timezone aware when set."""

    indeterminate_value: str | None = None
    """An indeterminate value, see `TEMPLATE_INDETERMINATE_VALUE`."""

    @property
    def is_template(self) -> bool:
        """Whether this instant is marked as a template.

        Returns:
            `True` if the indeterminate value is `template`.
        """
        return (
            self.indeterminate_value is not None
            and self.indeterminate_value.lower() == TEMPLATE_INDETERMINATE_VALUE
        )

    @property
    def indeterminate_time(self) -> IndeterminateTime | None:
        """Get the indeterminate value as a boundary selector.

        Returns:
            The boundary selector, or `None` if the indeterminate value is not
                `first` or `latest`.
        """
        if self.indeterminate_value is None:
            return None
        try:
            return IndeterminateTime(self.indeterminate_value.lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class TimePeriod:
    """A time span, possibly open on any side."""

    start: datetime | None = None
    """The beginning of the period."""

    end: datetime | None = None
    """The end of the period."""

    def extend_to_contain(self, time: Time) -> TimePeriod:
        """Create a period covering this one and the given time.

        Args:
            time: The instant or period that must be covered.

        Returns:
            The smallest period containing both this period and `time`.
        """
        if isinstance(time, TimeInstant):
            points = [time.value]
        else:
            points = [time.start, time.end]
        start, end = self.start, self.end
        for point in points:
            if point is None:
                continue
            start = point if start is None else min(start, point)
            end = point if end is None else max(end, point)
        return TimePeriod(start, end)


Time: TypeAlias = TimeInstant | TimePeriod
"""The phenomenon or result time of an observation."""


def parse_datetime(text: str) -> datetime:
    """Parse an ISO 8601 date-time into a UTC datetime.

    Times without an offset are assumed to be in UTC.

    Args:
        text: The text to parse.

    Returns:
        The parsed, timezone aware datetime.

    Raises:
        MalformedTimestampError: If the text is not a valid ISO 8601 time.
    """
    try:
        parsed = datetime.fromisoformat(text.strip())
    except ValueError as err:
        raise MalformedTimestampError(text) from err
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_time(text: str) -> Time:
    """Parse an ISO 8601 instant or `start/end` interval.

    Args:
        text: The text to parse.

    Returns:
        A `TimeInstant` or, for intervals, a `TimePeriod`.

    Raises:
        MalformedTimestampError: If the text is not a valid ISO 8601 time.
    """
    if "/" in text:
        start, _, end = text.partition("/")
        if not start or not end:
            raise MalformedTimestampError(text)
        return TimePeriod(parse_datetime(start), parse_datetime(end))
    return TimeInstant(parse_datetime(text))
