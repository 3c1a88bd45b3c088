# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Splitting and merging of observation streams.

Array observations, packing many measurement rows in a single record, are
split into one scalar observation per row when they are inserted. Scalar
observations sharing a constellation are merged back into one observation per
constellation when they are retrieved.
"""

from ._block import DataBlock, ElementType, Field, FieldKind
from ._codec import decode_value
from ._encoding import (
    DEFAULT_LOOKUPS,
    ContentTypeLookup,
    EncoderCapabilities,
    EncoderCapabilityRegistry,
    MediaType,
    MergeLookup,
    ResponseFormatLookup,
    ResponseFormatMediaTypeLookup,
)
from ._exceptions import (
    CannotDeriveObservationTypeError,
    MalformedTimestampError,
    MalformedValueError,
    NoApplicableColumnError,
    ObservationError,
    UnsupportedObservationTypeError,
)
from ._merger import merge_observations, should_merge
from ._messages import (
    Extensions,
    GetObservationRequest,
    GetObservationResponse,
    InsertObservationRequest,
)
from ._modifier import SplitMergeModifier
from ._roles import ColumnRoles, resolve_roles
from ._splitter import SplitOrder, is_splittable, split_observation, split_observations
from ._time import (
    IndeterminateTime,
    Time,
    TimeInstant,
    TimePeriod,
    parse_datetime,
    parse_time,
)
from ._types import CodeWithAuthority, NamedValue, Observation, ObservationConstellation
from ._values import (
    ArrayObservationValue,
    BooleanValue,
    CategoryValue,
    CountValue,
    MultiObservationValue,
    ObservationValue,
    QuantityValue,
    SingleObservationValue,
    TextValue,
    TimeValuePair,
    Value,
    as_time_value_pairs,
)
from ._vocabulary import (
    MERGE_OBSERVATIONS_INTO_DATA_ARRAY,
    OBSERVATION_TYPE_PREFIX,
    PHENOMENON_TIME,
    SAMPLING_TIME,
    SPLIT_DATA_ARRAY_INTO_OBSERVATIONS,
    TEMPLATE_INDETERMINATE_VALUE,
    ObservationType,
)

__all__ = [
    "ArrayObservationValue",
    "BooleanValue",
    "CannotDeriveObservationTypeError",
    "CategoryValue",
    "CodeWithAuthority",
    "ColumnRoles",
    "ContentTypeLookup",
    "CountValue",
    "DEFAULT_LOOKUPS",
    "DataBlock",
    "ElementType",
    "EncoderCapabilities",
    "EncoderCapabilityRegistry",
    "Extensions",
    "Field",
    "FieldKind",
    "GetObservationRequest",
    "GetObservationResponse",
    "IndeterminateTime",
    "InsertObservationRequest",
    "MERGE_OBSERVATIONS_INTO_DATA_ARRAY",
    "MalformedTimestampError",
    "MalformedValueError",
    "MediaType",
    "MergeLookup",
    "MultiObservationValue",
    "NamedValue",
    "NoApplicableColumnError",
    "OBSERVATION_TYPE_PREFIX",
    "Observation",
    "ObservationConstellation",
    "ObservationError",
    "ObservationType",
    "ObservationValue",
    "PHENOMENON_TIME",
    "QuantityValue",
    "ResponseFormatLookup",
    "ResponseFormatMediaTypeLookup",
    "SAMPLING_TIME",
    "SPLIT_DATA_ARRAY_INTO_OBSERVATIONS",
    "SingleObservationValue",
    "SplitMergeModifier",
    "SplitOrder",
    "TEMPLATE_INDETERMINATE_VALUE",
    "TextValue",
    "Time",
    "TimeInstant",
    "TimePeriod",
    "TimeValuePair",
    "UnsupportedObservationTypeError",
    "Value",
    "as_time_value_pairs",
    "decode_value",
    "is_splittable",
    "merge_observations",
    "parse_datetime",
    "parse_time",
    "resolve_roles",
    "should_merge",
    "split_observation",
    "split_observations",
]
