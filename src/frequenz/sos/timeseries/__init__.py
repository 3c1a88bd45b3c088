# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Evenly spaced measures read from sparse raw series.

A [`MeasureCursor`][frequenz.sos.timeseries.MeasureCursor] reads the raw
series of a collection of objects from a
[`RowStore`][frequenz.sos.timeseries.RowStore] and turns them into
[`MeasureSet`][frequenz.sos.timeseries.MeasureSet]s covering a retrieval
window, computed from
[`RetrievalSettings`][frequenz.sos.timeseries.RetrievalSettings].
"""

from ._alignment import (
    DEFAULT_MAXIMUM_CYCLE_COUNT,
    DEFAULT_MAXIMUM_CYCLE_COUNT_WARN,
    RetrievalAlignment,
    RetrievalSettings,
    RetrievalWindow,
)
from ._base_types import (
    UNIX_EPOCH,
    Measure,
    MeasureSet,
    MeasureValue,
    ObservableAttribute,
    ObservableObject,
)
from ._cursor import CursorState, MeasureCursor, TrackedAttribute, replay
from ._filters import filter_measures
from ._query import MeasureQuery
from ._store import Row, RowStore, RowStoreHandle, SeriesKey, StoreReadError

__all__ = [
    "CursorState",
    "DEFAULT_MAXIMUM_CYCLE_COUNT",
    "DEFAULT_MAXIMUM_CYCLE_COUNT_WARN",
    "Measure",
    "MeasureCursor",
    "MeasureQuery",
    "MeasureSet",
    "MeasureValue",
    "ObservableAttribute",
    "ObservableObject",
    "RetrievalAlignment",
    "RetrievalSettings",
    "RetrievalWindow",
    "Row",
    "RowStore",
    "RowStoreHandle",
    "SeriesKey",
    "StoreReadError",
    "TrackedAttribute",
    "UNIX_EPOCH",
    "filter_measures",
    "replay",
]
