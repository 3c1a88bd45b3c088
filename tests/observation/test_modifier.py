# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Tests for the split/merge request and response modifier."""

from datetime import datetime, timedelta, timezone

from frequenz.sos.config import ServiceProfile
from frequenz.sos.observation import (
    MERGE_OBSERVATIONS_INTO_DATA_ARRAY,
    PHENOMENON_TIME,
    SPLIT_DATA_ARRAY_INTO_OBSERVATIONS,
    ArrayObservationValue,
    DataBlock,
    ElementType,
    EncoderCapabilityRegistry,
    Extensions,
    Field,
    FieldKind,
    GetObservationRequest,
    GetObservationResponse,
    InsertObservationRequest,
    MultiObservationValue,
    Observation,
    ObservationConstellation,
    ObservationType,
    SingleObservationValue,
    SplitMergeModifier,
    SplitOrder,
    TextValue,
    TimeInstant,
)

_T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
_WATERML = "http://www.opengis.net/waterml/2.0"


def _constellation(observation_type: ObservationType) -> ObservationConstellation:
    return ObservationConstellation(
        procedure="urn:sensor:1",
        observed_property="urn:property:note",
        feature_of_interest="urn:site:1",
        observation_type=observation_type.value,
    )


def _array() -> Observation:
    element_type = ElementType(
        (
            Field("time", FieldKind.TIME, definition=PHENOMENON_TIME),
            Field("note", FieldKind.TEXT, definition="urn:property:note"),
        )
    )
    return Observation(
        constellation=_constellation(ObservationType.SWE_ARRAY),
        value=ArrayObservationValue(
            TimeInstant(_T0),
            DataBlock(element_type, [["2024-01-01", "a"], ["2024-01-02", "b"]]),
        ),
    )


def _scalars(count: int) -> list[Observation]:
    constellation = _constellation(ObservationType.TEXT)
    return [
        Observation(
            constellation=constellation,
            value=SingleObservationValue(
                TimeInstant(_T0 + timedelta(hours=n)), TextValue(str(n))
            ),
        )
        for n in range(count)
    ]


def test_insert_without_extension() -> None:
    """Test arrays are only split when the request asks for it."""
    array = _array()
    request = InsertObservationRequest([array])

    modified = SplitMergeModifier(EncoderCapabilityRegistry()).modify_request(request)

    assert modified.observations == [array]


def test_insert_split() -> None:
    """Test arrays are split when the request asks for it."""
    request = InsertObservationRequest(
        [_array()],
        Extensions({SPLIT_DATA_ARRAY_INTO_OBSERVATIONS: "true"}),
    )
    profile = ServiceProfile(split_order=SplitOrder.UNORDERED)

    modified = SplitMergeModifier(EncoderCapabilityRegistry()).modify_request(
        request, profile=profile
    )

    assert sorted(o.value.value.value for o in modified.observations) == ["a", "b"]


def test_response_not_merged() -> None:
    """Test nothing is merged when nobody asks for it."""
    observations = _scalars(3)
    request = GetObservationRequest()
    response = GetObservationResponse(list(observations), response_format=_WATERML)

    modified = SplitMergeModifier(EncoderCapabilityRegistry()).modify_response(
        request, response, profile=ServiceProfile()
    )

    assert modified.observations == observations
    assert not modified.merge_observations
    assert not request.merge_observation_values


def test_response_merged_by_request() -> None:
    """Test the merge extension of the request merges the response."""
    request = GetObservationRequest(
        Extensions({MERGE_OBSERVATIONS_INTO_DATA_ARRAY: True})
    )
    response = GetObservationResponse(_scalars(3))

    modified = SplitMergeModifier(EncoderCapabilityRegistry()).modify_response(
        request, response
    )

    assert len(modified.observations) == 1
    assert isinstance(modified.observations[0].value, MultiObservationValue)
    assert modified.merge_observations
    assert request.merge_observation_values


def test_response_merged_by_profile() -> None:
    """Test a profile merging values merges the response."""
    request = GetObservationRequest()
    response = GetObservationResponse(_scalars(2))

    SplitMergeModifier(EncoderCapabilityRegistry()).modify_response(
        request, response, profile=ServiceProfile(merge_values=True)
    )

    assert len(response.observations) == 1
    assert request.merge_observation_values


def test_response_merged_by_encoder() -> None:
    """Test the encoder can ask for merged observations, even without request."""
    registry = EncoderCapabilityRegistry()
    registry.register_response_format(_WATERML, True)
    request = GetObservationRequest()
    response = GetObservationResponse(_scalars(2), response_format=_WATERML)

    SplitMergeModifier(registry).modify_response(request, response)

    assert len(response.observations) == 1
    assert response.merge_observations
    assert not request.merge_observation_values

    response = GetObservationResponse(_scalars(2), response_format=_WATERML)
    SplitMergeModifier(registry).modify_response(None, response)

    assert len(response.observations) == 1


def test_streaming_response_flagged_only() -> None:
    """Test streamed observations are not merged, but the response is flagged."""
    observations = _scalars(3)
    response = GetObservationResponse(list(observations), streaming=True)

    SplitMergeModifier(EncoderCapabilityRegistry()).modify_response(
        GetObservationRequest(), response, profile=ServiceProfile(merge_values=True)
    )

    assert response.observations == observations
    assert all(isinstance(o.value, SingleObservationValue) for o in observations)
    assert response.merge_observations


def test_streaming_response_without_request() -> None:
    """Test a streamed response without request is neither merged nor flagged."""
    registry = EncoderCapabilityRegistry()
    registry.register_response_format(_WATERML, True)
    observations = _scalars(3)
    response = GetObservationResponse(
        list(observations), response_format=_WATERML, streaming=True
    )

    SplitMergeModifier(registry).modify_response(None, response)

    assert response.observations == observations
    assert not response.merge_observations


def test_boolean_extensions() -> None:
    """Test the spellings of boolean extensions."""
    extensions = Extensions({"a": True, "b": "TRUE", "c": "no", "d": 1})

    assert extensions.is_boolean_extension_set("a")
    assert extensions.is_boolean_extension_set("b")
    assert not extensions.is_boolean_extension_set("c")
    assert not extensions.is_boolean_extension_set("d")
    assert not extensions.is_boolean_extension_set("missing")
