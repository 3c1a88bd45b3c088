# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Script with an example how to split and merge observations."""

import logging
from datetime import datetime, timezone

from frequenz.sos.config import ServiceProfile
from frequenz.sos.observation import (
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
    Observation,
    ObservationConstellation,
    ObservationType,
    SplitMergeModifier,
    TimeInstant,
)

WATERML = "http://www.opengis.net/waterml/2.0"


def main() -> None:
    """Split an array observation on insertion and merge it back on retrieval."""
    logging.basicConfig(
        level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s:%(message)s"
    )

    registry = EncoderCapabilityRegistry()
    registry.register_response_format(WATERML, True)
    modifier = SplitMergeModifier(registry)
    profile = ServiceProfile(identifier="example")

    element_type = ElementType(
        (
            Field("time", FieldKind.TIME, definition=PHENOMENON_TIME),
            Field("level", FieldKind.QUANTITY, definition="urn:level", uom="m"),
        )
    )
    array = Observation(
        constellation=ObservationConstellation(
            procedure="urn:sensor:1",
            observed_property="urn:level",
            feature_of_interest="urn:tank:1",
            observation_type=ObservationType.SWE_ARRAY.value,
        ),
        value=ArrayObservationValue(
            TimeInstant(datetime.now(timezone.utc)),
            DataBlock(
                element_type,
                [
                    ["2024-01-01T00:00:00Z", "1.25"],
                    ["2024-01-01T00:10:00Z", "1.30"],
                    ["2024-01-01T00:20:00Z", "1.42"],
                ],
            ),
        ),
    )

    insert = modifier.modify_request(
        InsertObservationRequest(
            [array], Extensions({SPLIT_DATA_ARRAY_INTO_OBSERVATIONS: True})
        ),
        profile=profile,
    )
    for observation in insert.observations:
        print("inserted:", observation.phenomenon_time, observation.value)

    response = modifier.modify_response(
        GetObservationRequest(),
        GetObservationResponse(insert.observations, response_format=WATERML),
        profile=profile,
    )
    for observation in response.observations:
        print("retrieved:", observation.value)


if __name__ == "__main__":
    main()
