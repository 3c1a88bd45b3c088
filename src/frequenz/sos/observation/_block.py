# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Array values: a schema of fields and rows of string encoded cells."""

from __future__ import annotations

import enum
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from ._vocabulary import ObservationType


class FieldKind(enum.Enum):
    """Semantic kind of the values held by a column."""

    BOOLEAN = "Boolean"
    COUNT = "Count"
    QUANTITY = "Quantity"
    CATEGORY = "Category"
    TEXT = "Text"
    TIME = "Time"

    @property
    def observation_type(self) -> ObservationType | None:
        """Get the observation type of observations carrying values of this kind.

        Returns:
            The observation type, or `None` for kinds that can't be observed on
                their own (like time columns).
        """
        return _OBSERVATION_TYPES.get(self)


_OBSERVATION_TYPES = {
    FieldKind.BOOLEAN: ObservationType.TRUTH,
    FieldKind.COUNT: ObservationType.COUNT,
    FieldKind.QUANTITY: ObservationType.MEASUREMENT,
    FieldKind.CATEGORY: ObservationType.CATEGORY,
    FieldKind.TEXT: ObservationType.TEXT,
}


@dataclass(frozen=True)
class Field:
    """A column descriptor."""

    name: str
    """The identifier of the column."""

    kind: FieldKind
    """The kind of values held by the column."""

    definition: str | None = None
    """The URI of the property the column holds, if any."""

    uom: str | None = None
    """The unit of measure of the values, for quantities and categories."""

    def matches(self, identifier: str) -> bool:
        """Check whether this field is identified by `identifier`.

        Both the name and the definition are compared, ignoring case.

        Args:
            identifier: The identifier to compare.

        Returns:
            Whether the name or the definition equals `identifier`.
        """
        wanted = identifier.lower()
        if self.name.lower() == wanted:
            return True
        return self.definition is not None and self.definition.lower() == wanted


@dataclass(frozen=True)
class ElementType:
    """An ordered sequence of column descriptors."""

    fields: tuple[Field, ...]

    def index_of(self, identifier: str) -> int | None:
        """Find the first column identified by `identifier`.

        Args:
            identifier: The name or definition of the column.

        Returns:
            The index of the column, or `None` if there is no such column.
        """
        for index, candidate in enumerate(self.fields):
            if candidate.matches(identifier):
                return index
        return None

    @property
    def names(self) -> list[str]:
        """Get the names of all the columns.

        Returns:
            The column names, in order.
        """
        return [f.name for f in self.fields]

    def __len__(self) -> int:
        """Get the number of columns.

        Returns:
            The number of columns.
        """
        return len(self.fields)

    def __getitem__(self, index: int) -> Field:
        """Get a column descriptor by position.

        Args:
            index: The column position.

        Returns:
            The column descriptor.
        """
        return self.fields[index]


@dataclass(frozen=True)
class DataBlock:
    """Rows of string encoded cells described by an element type."""

    element_type: ElementType
    """The schema of every row."""

    rows: Sequence[Sequence[str]] = field(default_factory=tuple)
    """The rows, in stored order."""

    def __post_init__(self) -> None:
        """Check that all rows match the element type.

        Raises:
            ValueError: If a row doesn't have one cell per field.
        """
        width = len(self.element_type)
        for number, row in enumerate(self.rows, start=1):
            if len(row) != width:
                raise ValueError(
                    f"Row {number} has {len(row)} cells, expected {width}"
                )

    def __iter__(self) -> Iterator[Sequence[str]]:
        """Iterate over the rows.

        Returns:
            An iterator over the rows.
        """
        return iter(self.rows)

    def __len__(self) -> int:
        """Get the number of rows.

        Returns:
            The number of rows.
        """
        return len(self.rows)
