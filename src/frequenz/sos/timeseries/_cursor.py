# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Lazy reading of evenly spaced measures from a row store.

The raw series kept by a row store are sparse and irregular. A
[`MeasureCursor`][frequenz.sos.timeseries.MeasureCursor] reads them one object
at a time and produces, for every tracked attribute, the measures falling in a
retrieval window. When a raw series is too short to fill the window, its
pattern is replayed forward and the replayed measures are flagged as
`synthesized`.
"""

from __future__ import annotations

import enum
import logging
from collections import deque
from collections.abc import Generator, Iterable, Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from types import TracebackType
from typing import Self

from ._alignment import RetrievalSettings, RetrievalWindow
from ._base_types import (
    Measure,
    MeasureSet,
    MeasureValue,
    ObservableAttribute,
    ObservableObject,
)
from ._query import MeasureQuery
from ._store import Row, RowStore, RowStoreHandle, SeriesKey, StoreReadError

_logger = logging.getLogger(__name__)


class CursorState(enum.Enum):
    """The life cycle of a cursor."""

    IDLE = "idle"
    """Created, nothing read yet."""

    COMPUTING_WINDOW = "computing-window"
    """Computing the retrieval window and opening the store."""

    STREAMING = "streaming"
    """Producing measure sets."""

    EXHAUSTED = "exhausted"
    """Done, either because all objects were read, or closed, or failed."""


@dataclass(frozen=True)
class TrackedAttribute:
    """An attribute read from a column of the row store."""

    name: str
    """The name of the attribute."""

    column: str
    """The column of the row store holding the values."""

    description: str = ""
    """A human readable description."""

    units: str | None = None
    """The unit of measure of the values."""


class MeasureCursor(Iterator[MeasureSet]):
    """Iterate over the measure sets of a collection of objects.

    The store is opened when the first measure set is requested and closed when
    the cursor is exhausted, fails, is closed or is used as a context manager
    and exited. The cursor can't be restarted.

    Example:
        ```python
        from frequenz.sos.timeseries import MeasureCursor

        def print_measures(cursor: MeasureCursor) -> None:
            with cursor:
                for measure_set in cursor:
                    for measure in measure_set:
                        print(measure_set.attribute.name, measure.value)
        ```
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        store: RowStore,
        objects: Iterable[ObservableObject],
        attributes: Sequence[TrackedAttribute],
        settings: RetrievalSettings,
        *,
        query: MeasureQuery | None = None,
        now: datetime | None = None,
    ) -> None:
        """Create a cursor.

        Args:
            store: The store to read the raw series from.
            objects: The objects to read, in order.
            attributes: The attributes to read for every object.
            settings: How the attributes are read.
            query: The query to answer, overriding the bounds and alignment of
                `settings`.
            now: The current time, used when the window has no end. Defaults
                to the current UTC time when the window is computed.
        """
        self._store = store
        self._objects = iter(objects)
        self._attributes = tuple(attributes)
        self._query = query if query is not None else MeasureQuery()
        self._settings = settings.for_query(self._query)
        self._now = now
        self._state = CursorState.IDLE
        self._queue: deque[MeasureSet] = deque()
        self._handle: RowStoreHandle | None = None
        self._measure_sets = self._generate()

    @property
    def state(self) -> CursorState:
        """Get the state of the cursor.

        Returns:
            The current state.
        """
        return self._state

    def __iter__(self) -> Self:
        """Get the cursor itself.

        Returns:
            This cursor.
        """
        return self

    def __next__(self) -> MeasureSet:
        """Get the next measure set.

        Returns:
            The next measure set.

        Raises:
            StoreReadError: If the store fails.
        """
        return next(self._measure_sets)

    def close(self) -> None:
        """Stop iterating and release the store."""
        self._measure_sets.close()
        self._release()

    def __enter__(self) -> Self:
        """Enter the runtime context.

        Returns:
            This cursor.
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the runtime context, closing the cursor.

        Args:
            exc_type: The type of the exception raised, if any.
            exc_val: The exception raised, if any.
            exc_tb: The traceback of the exception raised, if any.
        """
        self.close()

    def _generate(self) -> Generator[MeasureSet, None, None]:
        try:
            self._state = CursorState.COMPUTING_WINDOW
            window = self._settings.window(self._now)
            _logger.debug("Reading measures in %s", window)
            self._handle = self._open()
            self._state = CursorState.STREAMING

            for obj in self._objects:
                self._queue.extend(self._read_object(self._handle, obj, window))
                while self._queue:
                    yield self._queue.popleft()
        finally:
            self._release()

    def _open(self) -> RowStoreHandle:
        try:
            return self._store.open()
        except Exception as err:
            _logger.error("Could not open the row store: %s", err)
            raise StoreReadError(None, f"Could not open the row store: {err}") from err

    def _release(self) -> None:
        self._state = CursorState.EXHAUSTED
        self._queue.clear()
        if self._handle is not None:
            handle, self._handle = self._handle, None
            handle.close()

    def _read_object(
        self, handle: RowStoreHandle, obj: ObservableObject, window: RetrievalWindow
    ) -> list[MeasureSet]:
        key = SeriesKey(
            obj.object_type,
            obj.object_name,
            tuple(attribute.column for attribute in self._attributes),
        )
        try:
            rows = handle.read_rows(key, window)
        except Exception as err:
            _logger.error("Could not read the rows of %s: %s", key, err)
            raise StoreReadError(
                key, f"Could not read the rows of {key}: {err}"
            ) from err

        measure_sets: list[MeasureSet] = []
        for index, attribute in enumerate(self._attributes):
            measures = self._measures(_column_samples(rows, index), window)
            if not measures:
                continue
            measure_sets.append(
                MeasureSet(
                    owner=obj,
                    attribute=ObservableAttribute(
                        name=attribute.name,
                        description=attribute.description,
                        time_from=min(m.timestamp for m in measures),
                        time_to=max(m.timestamp for m in measures),
                        step_time=self._settings.step_time,
                        units=attribute.units,
                    ),
                    measures=tuple(measures),
                )
            )
        _logger.debug(
            "Read %s rows of %s into %s measure sets",
            len(rows),
            key,
            len(measure_sets),
        )
        return measure_sets

    def _measures(
        self, raw: list[tuple[datetime, MeasureValue]], window: RetrievalWindow
    ) -> list[Measure]:
        if not raw:
            return []
        if self._query.first:
            return [Measure(*raw[0])]
        if self._query.latest:
            return [Measure(*raw[-1])]
        if len(raw) < window.cycle_count:
            return replay(raw, window, self._settings.step_time)
        return [
            Measure(timestamp, value)
            for timestamp, value in raw
            if window.start <= timestamp <= window.end
        ][: window.cycle_count]


def _column_samples(
    rows: Sequence[Row], index: int
) -> list[tuple[datetime, MeasureValue]]:
    return [
        (row.timestamp, row.values[index])
        for row in rows
        if row.values[index] is not None
    ]


def replay(
    raw: Sequence[tuple[datetime, MeasureValue]],
    window: RetrievalWindow,
    step_time: timedelta,
) -> list[Measure]:
    """Fill a window by repeating a raw series forward in time.

    The raw series is repeated with offsets growing by `step_time * (n - 1)`
    (or `step_time` for a single sample), so the last sample of a repetition
    lines up with the first sample of the next one. Samples outside the window
    are skipped, and a sample at the same time as an earlier one is dropped.

    Irregular series can make repetitions overlap, so the result is sorted by
    time before it is cut to the cycle count.

    Args:
        raw: The raw samples, in time order.
        window: The window to fill.
        step_time: The nominal distance between samples.

    Returns:
        At most `window.cycle_count` measures inside the window, in time order.
            Measures from repetitions after the first one are flagged as
            `synthesized`.
    """
    if not raw:
        return []
    increment = step_time * (len(raw) - 1) if len(raw) > 1 else step_time
    earliest = min(timestamp for timestamp, _ in raw)
    offset = timedelta(0)
    replayed: dict[datetime, Measure] = {}
    while earliest + offset <= window.end:
        for timestamp, value in raw:
            shifted = timestamp + offset
            if window.start <= shifted <= window.end and shifted not in replayed:
                replayed[shifted] = Measure(
                    shifted, value, synthesized=offset > timedelta(0)
                )
        offset += increment
    return sorted(replayed.values(), key=lambda m: m.timestamp)[
        : window.cycle_count
    ]
