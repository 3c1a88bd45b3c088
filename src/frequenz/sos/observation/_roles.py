# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Location of the time and value columns of an array observation."""

from __future__ import annotations

from dataclasses import dataclass

from ._block import ElementType
from ._exceptions import CannotDeriveObservationTypeError, NoApplicableColumnError
from ._vocabulary import PHENOMENON_TIME, SAMPLING_TIME, ObservationType


@dataclass(frozen=True)
class ColumnRoles:
    """Positions of the columns playing a role when splitting rows."""

    result_value_index: int
    """The column holding the observed value."""

    observation_type: ObservationType
    """The observation type derived from the result value column."""

    phenomenon_time_index: int | None = None
    """The column holding the phenomenon time, if any."""

    result_time_index: int | None = None
    """The column holding the result time, if any."""


def resolve_roles(element_type: ElementType, observed_property: str) -> ColumnRoles:
    """Find the role playing columns of an element type.

    Args:
        element_type: The schema of the rows.
        observed_property: The observed property of the observation being
            split, identifying the result value column.

    Returns:
        The positions of the columns and the derived observation type.

    Raises:
        NoApplicableColumnError: If no column is identified by
            `observed_property`.
        CannotDeriveObservationTypeError: If no column defined as
            `observed_property` has a kind that can be observed on its own.
    """
    value_index = element_type.index_of(observed_property)
    if value_index is None:
        raise NoApplicableColumnError(observed_property, element_type.names)

    return ColumnRoles(
        result_value_index=value_index,
        observation_type=_derive_observation_type(element_type, observed_property),
        phenomenon_time_index=element_type.index_of(PHENOMENON_TIME),
        result_time_index=element_type.index_of(SAMPLING_TIME),
    )


def _derive_observation_type(
    element_type: ElementType, observed_property: str
) -> ObservationType:
    wanted = observed_property.lower()
    for field in element_type.fields:
        if field.definition is None or field.definition.lower() != wanted:
            continue
        obs_type = field.kind.observation_type
        if obs_type is not None:
            return obs_type
    raise CannotDeriveObservationTypeError(observed_property, element_type.names)
