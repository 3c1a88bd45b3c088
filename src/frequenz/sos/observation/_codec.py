# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Decoding of string cells into typed values."""

from __future__ import annotations

from typing import assert_never

from ._block import Field
from ._exceptions import MalformedValueError, UnsupportedObservationTypeError
from ._time import Time
from ._values import (
    BooleanValue,
    CategoryValue,
    CountValue,
    QuantityValue,
    SingleObservationValue,
    TextValue,
    Value,
)
from ._vocabulary import ObservationType


def decode_value(
    observation_type: str, cell: str, phenomenon_time: Time, field: Field
) -> SingleObservationValue:
    """Convert a cell into a typed value of the given observation type.

    Truth cells are `True` only when they read `true`, ignoring case and
    surrounding whitespace. Anything else is `False`.

    Example:
        ```python
        from datetime import datetime, timezone

        from frequenz.sos.observation import (
            Field,
            FieldKind,
            QuantityValue,
            TimeInstant,
            decode_value,
        )

        now = TimeInstant(datetime.now(timezone.utc))
        level = Field("level", FieldKind.QUANTITY, uom="m")
        decoded = decode_value("Measurement", "3.5", now, level)
        assert decoded.value == QuantityValue(3.5, "m")
        ```

    Args:
        observation_type: The observation type selecting the kind of value,
            see `ObservationType.from_string` for the accepted spellings.
        cell: The string encoded value.
        phenomenon_time: The time the value is tagged with.
        field: The descriptor of the column the cell comes from, used for the
            unit of measure of quantities and categories.

    Returns:
        The decoded value, tagged with `phenomenon_time`.

    Raises:
        UnsupportedObservationTypeError: If `observation_type` is not one of the
            scalar observation types.
        MalformedValueError: If a count or measurement cell is not a number.
    """
    obs_type = ObservationType.from_string(observation_type)
    if obs_type is None or not obs_type.is_scalar:
        raise UnsupportedObservationTypeError(observation_type)
    return SingleObservationValue(
        phenomenon_time, _decode(obs_type, cell, field, observation_type)
    )


def _decode(
    obs_type: ObservationType, cell: str, field: Field, type_name: str
) -> Value:
    match obs_type:
        case ObservationType.TRUTH:
            return BooleanValue(cell.strip().lower() == "true")
        case ObservationType.COUNT:
            try:
                return CountValue(int(cell))
            except ValueError as err:
                raise MalformedValueError(cell, type_name) from err
        case ObservationType.MEASUREMENT:
            try:
                return QuantityValue(float(cell), field.uom)
            except ValueError as err:
                raise MalformedValueError(cell, type_name) from err
        case ObservationType.CATEGORY:
            return CategoryValue(cell, field.uom)
        case ObservationType.TEXT:
            return TextValue(cell)
        case ObservationType.SWE_ARRAY:
            raise UnsupportedObservationTypeError(type_name)
        case unexpected:
            assert_never(unexpected)
