# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Tests for decoding cells into typed values."""

from datetime import datetime, timezone

import pytest

from frequenz.sos.observation import (
    OBSERVATION_TYPE_PREFIX,
    BooleanValue,
    CategoryValue,
    CountValue,
    Field,
    FieldKind,
    MalformedValueError,
    ObservationType,
    QuantityValue,
    TextValue,
    TimeInstant,
    UnsupportedObservationTypeError,
    decode_value,
)

_NOW = TimeInstant(datetime(2024, 1, 1, tzinfo=timezone.utc))


@pytest.mark.parametrize(
    "observation_type, cell, field, expected",
    [
        (
            "OM_TruthObservation",
            "TRUE",
            Field("f", FieldKind.BOOLEAN),
            BooleanValue(True),
        ),
        ("truth", "yes", Field("f", FieldKind.BOOLEAN), BooleanValue(False)),
        ("truth", " true\n", Field("f", FieldKind.BOOLEAN), BooleanValue(True)),
        ("CountObservation", "42", Field("f", FieldKind.COUNT), CountValue(42)),
        (
            OBSERVATION_TYPE_PREFIX + "OM_Measurement",
            "3.5",
            Field("f", FieldKind.QUANTITY, uom="m"),
            QuantityValue(3.5, "m"),
        ),
        ("measurement", "-1", Field("f", FieldKind.QUANTITY), QuantityValue(-1.0)),
        (
            "OM_CategoryObservation",
            "open",
            Field("f", FieldKind.CATEGORY, uom="valve-state"),
            CategoryValue("open", "valve-state"),
        ),
        ("text", "some note", Field("f", FieldKind.TEXT), TextValue("some note")),
    ],
)
def test_decode_value(
    observation_type: str,
    cell: str,
    field: Field,
    expected: BooleanValue | CountValue | QuantityValue | CategoryValue | TextValue,
) -> None:
    """Test cells are decoded according to the observation type."""
    decoded = decode_value(observation_type, cell, _NOW, field)

    assert decoded.value == expected
    assert decoded.phenomenon_time is _NOW


def test_decode_unknown_type() -> None:
    """Test unknown and array types are rejected, keeping the type string."""
    with pytest.raises(UnsupportedObservationTypeError) as exc_info:
        decode_value("OM_Complex", "1", _NOW, Field("f", FieldKind.TEXT))
    assert exc_info.value.observation_type == "OM_Complex"

    with pytest.raises(UnsupportedObservationTypeError):
        decode_value(
            ObservationType.SWE_ARRAY.value, "1", _NOW, Field("f", FieldKind.TEXT)
        )


@pytest.mark.parametrize("observation_type", ["count", "measurement"])
def test_decode_malformed_number(observation_type: str) -> None:
    """Test cells that are not numbers are reported for numeric types."""
    with pytest.raises(MalformedValueError) as exc_info:
        decode_value(observation_type, "n/a", _NOW, Field("f", FieldKind.COUNT))

    assert exc_info.value.text == "n/a"
    assert exc_info.value.observation_type == observation_type
    assert isinstance(exc_info.value, ValueError)


def test_observation_type_lookup() -> None:
    """Test the accepted spellings of the observation types."""
    for spelling in (
        OBSERVATION_TYPE_PREFIX + "OM_CountObservation",
        "OM_CountObservation",
        "om_countobservation",
        "CountObservation",
        "Count",
    ):
        assert ObservationType.from_string(spelling) is ObservationType.COUNT

    assert ObservationType.from_string("OM_Measurement") is ObservationType.MEASUREMENT
    assert ObservationType.from_string("nothing") is None
    assert not ObservationType.SWE_ARRAY.is_scalar
    assert ObservationType.TEXT.is_scalar
