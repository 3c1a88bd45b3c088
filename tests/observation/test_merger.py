# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Tests for merging observations sharing a constellation."""

from datetime import datetime, timedelta, timezone

import pytest

from frequenz.sos.observation import (
    PHENOMENON_TIME,
    ArrayObservationValue,
    CountValue,
    DataBlock,
    ElementType,
    Field,
    FieldKind,
    MultiObservationValue,
    Observation,
    ObservationConstellation,
    ObservationType,
    SingleObservationValue,
    TimeInstant,
    TimePeriod,
    TimeValuePair,
    merge_observations,
    should_merge,
    split_observation,
)

_T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _constellation(
    procedure: str = "urn:sensor:1", offering: str | None = None
) -> ObservationConstellation:
    return ObservationConstellation(
        procedure=procedure,
        observed_property="urn:property:pulses",
        feature_of_interest="urn:meter:1",
        observation_type=ObservationType.COUNT.value,
        offering=offering,
    )


def _observation(
    minute: int, value: int, constellation: ObservationConstellation
) -> Observation:
    time = TimeInstant(_T0 + timedelta(minutes=minute))
    return Observation(
        constellation=constellation,
        value=SingleObservationValue(time, CountValue(value)),
        result_time=time,
    )


@pytest.mark.parametrize(
    "profile_merge, request_merge, encoder_merge, expected",
    [
        (False, False, False, False),
        (True, False, False, True),
        (False, True, False, True),
        (False, False, True, True),
        (True, True, True, True),
    ],
)
def test_should_merge(
    profile_merge: bool, request_merge: bool, encoder_merge: bool, expected: bool
) -> None:
    """Test any party can ask for merged observations."""
    assert (
        should_merge(
            profile_merge=profile_merge,
            request_merge=request_merge,
            encoder_merge=encoder_merge,
        )
        is expected
    )


def test_merge_groups_in_encounter_order() -> None:
    """Test observations are folded into the first matching group."""
    sensor_1 = _constellation()
    sensor_2 = _constellation("urn:sensor:2")
    observations = [
        _observation(0, 1, sensor_1),
        _observation(0, 10, sensor_2),
        _observation(1, 2, _constellation()),
        _observation(1, 20, sensor_2),
        _observation(2, 3, sensor_1),
    ]

    merged = merge_observations(observations)

    assert len(merged) == 2
    assert merged[0] is observations[0]
    assert merged[1] is observations[1]
    assert merged[0].observation_id == "1"
    assert merged[1].observation_id is None
    assert merged[0].result_time is None
    assert merged[1].result_time is None
    assert merged[0].value == MultiObservationValue(
        [
            TimeValuePair(TimeInstant(_T0 + timedelta(minutes=m)), CountValue(v))
            for m, v in ((0, 1), (1, 2), (2, 3))
        ]
    )
    assert [entry.value for entry in merged[1].value] == [
        CountValue(10),
        CountValue(20),
    ]
    assert merged[0].phenomenon_time == TimePeriod(_T0, _T0 + timedelta(minutes=2))


def test_merge_keeps_scalar_type() -> None:
    """Test the merged observation keeps the declared scalar type."""
    sensor = _constellation()
    merged = merge_observations(
        [_observation(0, 1, sensor), _observation(1, 2, sensor)]
    )

    assert merged[0].constellation.observation_type == ObservationType.COUNT.value
    assert isinstance(merged[0].value, MultiObservationValue)


def test_merge_single_observation_untouched() -> None:
    """Test a group of one keeps its value and result time."""
    observation = _observation(0, 1, _constellation())
    value = observation.value

    (merged,) = merge_observations([observation])

    assert merged.value is value
    assert merged.result_time == TimeInstant(_T0)


def test_merge_compare_offering() -> None:
    """Test offerings only keep observations apart when asked to."""
    observations = [
        _observation(0, 1, _constellation(offering="a")),
        _observation(1, 2, _constellation(offering="b")),
    ]
    assert len(merge_observations(observations)) == 1

    observations = [
        _observation(0, 1, _constellation(offering="a")),
        _observation(1, 2, _constellation(offering="b")),
    ]
    assert len(merge_observations(observations, compare_offering=True)) == 2


def test_merge_is_idempotent() -> None:
    """Test merging merged observations doesn't change them."""
    sensor = _constellation()
    merged = merge_observations([_observation(m, m, sensor) for m in range(3)])
    entries = list(merged[0].value)

    remerged = merge_observations(merged)

    assert remerged == merged
    assert list(remerged[0].value) == entries


def test_merge_empty() -> None:
    """Test merging nothing gives nothing."""
    assert not merge_observations([])


def test_merge_array_rejected() -> None:
    """Test array observations must be split before merging."""
    element_type = ElementType((Field("n", FieldKind.COUNT),))
    sensor = _constellation()
    observations = [
        _observation(0, 1, sensor),
        Observation(
            constellation=sensor,
            value=ArrayObservationValue(
                TimeInstant(_T0), DataBlock(element_type, [["1"]])
            ),
        ),
    ]

    with pytest.raises(TypeError):
        merge_observations(observations)


def test_split_then_merge() -> None:
    """Test merging the split rows of an array gives back all its values."""
    element_type = ElementType(
        (
            Field("time", FieldKind.TIME, definition=PHENOMENON_TIME),
            Field("pulses", FieldKind.COUNT, definition="urn:property:pulses"),
        )
    )
    rows = [[f"2024-01-01T00:0{m}:00Z", str(m * 10)] for m in range(5)]
    array = Observation(
        constellation=ObservationConstellation(
            procedure="urn:sensor:1",
            observed_property="urn:property:pulses",
            feature_of_interest="urn:meter:1",
            observation_type=ObservationType.SWE_ARRAY.value,
        ),
        value=ArrayObservationValue(TimeInstant(_T0), DataBlock(element_type, rows)),
    )

    (merged,) = merge_observations(split_observation(array))

    assert merged.constellation.observation_type == ObservationType.COUNT.value
    assert [(e.time, e.value) for e in merged.value] == [
        (TimeInstant(_T0 + timedelta(minutes=m)), CountValue(m * 10))
        for m in range(5)
    ]
