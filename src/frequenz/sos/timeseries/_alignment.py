# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Retrieval window of a raw series."""

from __future__ import annotations

import dataclasses
import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from ._query import MeasureQuery

_logger = logging.getLogger(__name__)


DEFAULT_MAXIMUM_CYCLE_COUNT = 577
"""Default maximum number of samples read for an attribute.

It is used when the maximum cycle count is not set or not positive.
"""

DEFAULT_MAXIMUM_CYCLE_COUNT_WARN = 10_000
"""Default maximum cycle count above which a warning is logged.

Very big cycle counts make every read of the attribute scan a lot of rows.
"""


class RetrievalAlignment(enum.Enum):
    """How a window longer than the maximum cycle count is shortened."""

    FULL = "Full"
    """Never shorten the window."""

    START_DATE_ALIGNED = "StartDateAligned"
    """Keep the start of the window, move its end."""

    END_DATE_ALIGNED = "EndDateAligned"
    """Keep the end of the window, move its start."""

    CLAMP_MAXIMUM = "ClampMaximum"
    """Keep both bounds, cap the number of samples produced."""


@dataclass(frozen=True)
class RetrievalWindow:
    """The bounds and the number of samples of a read."""

    start: datetime
    """The time of the first sample."""

    end: datetime
    """The time of the last sample."""

    cycle_count: int
    """The number of samples to produce."""


@dataclass(frozen=True)
class RetrievalSettings:
    """How the samples of an attribute are read."""

    step_time: timedelta
    """The nominal distance between samples.

    It must be a positive time span.
    """

    time_from: datetime
    """The requested start of the window."""

    time_to: datetime | None = None
    """The requested end of the window, or `None` for the current time."""

    maximum_cycle_count: int = DEFAULT_MAXIMUM_CYCLE_COUNT
    """The maximum number of samples to produce.

    If not positive, `DEFAULT_MAXIMUM_CYCLE_COUNT` is used.
    """

    alignment: RetrievalAlignment = RetrievalAlignment.END_DATE_ALIGNED
    """How the window is shortened when it has too many samples."""

    warn_cycle_count: int = DEFAULT_MAXIMUM_CYCLE_COUNT_WARN
    """The maximum cycle count above which a warning is logged."""

    def __post_init__(self) -> None:
        """Check that the settings are valid.

        Raises:
            ValueError: If any value is out of range.
        """
        if self.step_time <= timedelta(0):
            raise ValueError(f"step_time ({self.step_time}) must be positive")
        if self.time_to is not None and self.time_to < self.time_from:
            raise ValueError(
                f"time_to ({self.time_to}) must not be before "
                f"time_from ({self.time_from})"
            )
        if self.maximum_cycle_count > self.warn_cycle_count:
            _logger.warning(
                "maximum_cycle_count (%s) is bigger than warn_cycle_count (%s)",
                self.maximum_cycle_count,
                self.warn_cycle_count,
            )

    @property
    def effective_maximum_cycle_count(self) -> int:
        """Get the maximum cycle count, falling back to the default.

        Returns:
            The maximum cycle count, or `DEFAULT_MAXIMUM_CYCLE_COUNT` if it is not
                positive.
        """
        if self.maximum_cycle_count > 0:
            return self.maximum_cycle_count
        return DEFAULT_MAXIMUM_CYCLE_COUNT

    def window(self, now: datetime | None = None) -> RetrievalWindow:
        """Compute the window to read.

        Args:
            now: The current time, used when `time_to` is not set. Defaults to
                the current UTC time.

        Returns:
            The window to read.

        Raises:
            ValueError: If the resolved end is before the start.
        """
        start = self.time_from
        end = self.time_to
        if end is None:
            end = now if now is not None else datetime.now(timezone.utc)
        if end < start:
            raise ValueError(f"time_to ({end}) must not be before time_from ({start})")

        cycles = 1 + (end - start) // self.step_time
        maximum = self.effective_maximum_cycle_count
        if self.alignment is RetrievalAlignment.FULL or cycles <= maximum:
            return RetrievalWindow(start, end, cycles)

        _logger.debug(
            "Window of %s cycles capped to %s (%s)",
            cycles,
            maximum,
            self.alignment.value,
        )
        match self.alignment:
            case RetrievalAlignment.CLAMP_MAXIMUM:
                pass
            case RetrievalAlignment.START_DATE_ALIGNED:
                end = start + self.step_time * (maximum - 1)
            case RetrievalAlignment.END_DATE_ALIGNED:
                start = end - self.step_time * (maximum - 1)
        return RetrievalWindow(start, end, maximum)

    def for_query(self, query: MeasureQuery) -> RetrievalSettings:
        """Create the settings answering a query.

        The query bounds replace the configured ones. A query for the first
        sample keeps the start of the window, a query for the latest sample
        keeps its end.

        Args:
            query: The query to answer.

        Returns:
            The settings to read the attribute with.
        """
        changes: dict[str, object] = {}
        if query.time_from is not None:
            changes["time_from"] = query.time_from
        if query.time_to is not None:
            changes["time_to"] = query.time_to
        if query.first:
            changes["alignment"] = RetrievalAlignment.START_DATE_ALIGNED
        elif query.latest:
            changes["alignment"] = RetrievalAlignment.END_DATE_ALIGNED
        if not changes:
            return self
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]
