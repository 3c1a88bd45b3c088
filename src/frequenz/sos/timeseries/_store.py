# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""The row store the raw series are read from."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple, Protocol

from ._alignment import RetrievalWindow
from ._base_types import MeasureValue


@dataclass(frozen=True)
class SeriesKey:
    """Identifies the raw series of an object."""

    object_type: str
    """The type of the object."""

    object_name: str
    """The name of the object."""

    columns: tuple[str, ...]
    """The tracked columns to read, in row order."""


class Row(NamedTuple):
    """One raw row: a timestamp and one value per tracked column."""

    timestamp: datetime
    """The time the values were recorded at."""

    values: Sequence[MeasureValue | None]
    """The values, `None` where a column has no value."""


class RowStoreHandle(Protocol):
    """An open connection to a row store."""

    def read_rows(self, key: SeriesKey, window: RetrievalWindow) -> Sequence[Row]:
        """Read the rows of a series inside a window.

        Args:
            key: The series to read.
            window: The bounds of the read.

        Returns:
            The rows, in time order.
        """
        ...  # pylint: disable=unnecessary-ellipsis

    def close(self) -> None:
        """Release the connection."""
        ...  # pylint: disable=unnecessary-ellipsis


class RowStore(Protocol):
    """A source of raw series."""

    def open(self) -> RowStoreHandle:
        """Open a connection.

        Returns:
            The open connection, to be closed by the caller.
        """
        ...  # pylint: disable=unnecessary-ellipsis


class StoreReadError(RuntimeError):
    """Error raised when a raw series can't be read from the store.

    The original error is available as `__cause__`.
    """

    def __init__(self, key: SeriesKey | None, message: str) -> None:
        """Create an instance.

        Args:
            key: The series being read, or `None` if the store couldn't be
                opened.
            message: A description of the failure.
        """
        super().__init__(message)
        self.key = key
        """The series being read, if any."""

    def __repr__(self) -> str:
        """Return the representation of the instance.

        Returns:
            The representation of the instance.
        """
        return f"{self.__class__.__name__}({self.key!r}, {str(self)!r})"
