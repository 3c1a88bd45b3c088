# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""The requests and responses modified by the split/merge engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ._encoding import MediaType
from ._types import Observation
from ._vocabulary import (
    MERGE_OBSERVATIONS_INTO_DATA_ARRAY,
    SPLIT_DATA_ARRAY_INTO_OBSERVATIONS,
)


@dataclass(frozen=True)
class Extensions:
    """Request extensions, by name."""

    values: Mapping[str, Any] = field(default_factory=dict)
    """The value of every extension."""

    def is_boolean_extension_set(self, name: str) -> bool:
        """Check whether a boolean extension is present and enabled.

        Args:
            name: The name of the extension.

        Returns:
            `True` if the extension is `True` or the string `"true"` (in any
                case).
        """
        value = self.values.get(name)
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value is True


@dataclass
class InsertObservationRequest:
    """A request inserting observations."""

    observations: list[Observation] = field(default_factory=list)
    """The observations to insert."""

    extensions: Extensions = field(default_factory=Extensions)
    """The extensions of the request."""

    @property
    def split_data_array_into_observations(self) -> bool:
        """Whether the request asks for array observations to be split.

        Returns:
            Whether the split extension is set.
        """
        return self.extensions.is_boolean_extension_set(
            SPLIT_DATA_ARRAY_INTO_OBSERVATIONS
        )


@dataclass
class GetObservationRequest:
    """A request retrieving observations."""

    extensions: Extensions = field(default_factory=Extensions)
    """The extensions of the request."""

    merge_observation_values: bool = False
    """Whether the values of the response are merged, set while processing."""

    @property
    def merge_observations_into_data_array(self) -> bool:
        """Whether the request asks for observations to be merged.

        Returns:
            Whether the merge extension is set.
        """
        return self.extensions.is_boolean_extension_set(
            MERGE_OBSERVATIONS_INTO_DATA_ARRAY
        )


@dataclass
class GetObservationResponse:
    """The observations answering a `GetObservationRequest`."""

    observations: list[Observation] = field(default_factory=list)
    """The observations of the response."""

    response_format: str | None = None
    """The format the response is going to be encoded in."""

    content_type: MediaType | None = None
    """The media type of the encoded response."""

    streaming: bool = False
    """Whether observations are streamed by the encoder instead of listed."""

    merge_observations: bool = False
    """Whether the observations of the response are merged."""
