# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Reduction of request temporal filters to a measure query."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from ..observation import IndeterminateTime, Time, TimeInstant, TimePeriod


@dataclass(frozen=True)
class MeasureQuery:
    """The time bounds of a read, and whether only a boundary sample is wanted."""

    time_from: datetime | None = None
    """The start of the requested period, if bounded."""

    time_to: datetime | None = None
    """The end of the requested period, if bounded."""

    first: bool = False
    """Whether only the first sample is wanted."""

    latest: bool = False
    """Whether only the latest sample is wanted."""

    @classmethod
    def from_temporal_filters(cls, filters: Iterable[Time]) -> MeasureQuery:
        """Reduce the times of temporal filters to a single query.

        The query covers every instant and period of the filters. Instants with
        the `first` or `latest` indeterminate value set the matching flag.

        Args:
            filters: The times of the temporal filters of a request.

        Returns:
            The query covering all the filters.
        """
        period = TimePeriod()
        first = latest = False
        for time in filters:
            period = period.extend_to_contain(time)
            if isinstance(time, TimeInstant):
                match time.indeterminate_time:
                    case IndeterminateTime.FIRST:
                        first = True
                    case IndeterminateTime.LATEST:
                        latest = True
        return cls(period.start, period.end, first=first, latest=latest)
