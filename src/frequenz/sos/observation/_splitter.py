# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Splitting of array observations into one observation per row."""

from __future__ import annotations

import dataclasses
import enum
import logging
from collections.abc import Iterable, Sequence

from ._codec import decode_value
from ._roles import ColumnRoles, resolve_roles
from ._time import Time, TimeInstant, parse_datetime, parse_time
from ._types import CodeWithAuthority, Observation
from ._values import ArrayObservationValue
from ._vocabulary import ObservationType

_logger = logging.getLogger(__name__)


class SplitOrder(enum.Enum):
    """Ordering guarantee of the observations produced by a split."""

    ROW_ORDER = "row-order"
    """Keep the input order, and the stored row order inside each array."""

    UNORDERED = "unordered"
    """Make no ordering promise, only the produced observations are guaranteed.

    Callers must not rely on the order of the result, only on its contents.
    """


def is_splittable(observation: Observation) -> bool:
    """Check whether an observation is an array observation with rows.

    Args:
        observation: The observation to check.

    Returns:
        Whether the observation is declared as an array observation and
            carries a non-empty data block.
    """
    constellation = observation.constellation
    if constellation.parsed_observation_type is not ObservationType.SWE_ARRAY:
        return False
    value = observation.value
    return isinstance(value, ArrayObservationValue) and len(value.block) > 0


def split_observation(observation: Observation) -> list[Observation]:
    """Split an array observation into one scalar observation per row.

    Observations that are not splittable (see `is_splittable`) are returned
    as they are, as the only element of the list.

    Args:
        observation: The observation to split.

    Returns:
        The observations produced for every row, in stored row order.
    """
    if not is_splittable(observation):
        _logger.debug("Observation %r is not an array, passing through", observation)
        return [observation]

    value = observation.value
    assert isinstance(value, ArrayObservationValue)
    block = value.block
    constellation = observation.constellation

    roles = resolve_roles(block.element_type, constellation.observed_property)
    _logger.debug(
        "Splitting array of %s rows for %s, roles: %s",
        len(block),
        constellation.observed_property,
        roles,
    )

    # All rows share the same snapshot, the caller's constellation is kept
    row_constellation = dataclasses.replace(
        constellation, observation_type=roles.observation_type.value
    )
    value_field = block.element_type[roles.result_value_index]

    split: list[Observation] = []
    for number, row in enumerate(block, start=1):
        phenomenon_time = _phenomenon_time(row, roles, value.phenomenon_time)
        split.append(
            Observation(
                constellation=row_constellation,
                value=decode_value(
                    row_constellation.observation_type,
                    row[roles.result_value_index],
                    phenomenon_time,
                    value_field,
                ),
                result_time=_result_time(row, roles, observation, phenomenon_time),
                identifier=_row_identifier(observation.identifier, number),
                parameters=observation.parameters,
            )
        )
        _logger.debug("Processed row %s: %s", number, row)
    return split


def split_observations(
    observations: Iterable[Observation], *, order: SplitOrder = SplitOrder.ROW_ORDER
) -> list[Observation]:
    """Split all the array observations of a collection.

    Args:
        observations: The observations to split.
        order: The ordering guarantee of the result.

    Returns:
        The split observations, and the observations that didn't need to be
            split.
    """
    observations = list(observations)
    _logger.debug("Splitting %s observations (%s)", len(observations), order.value)

    if order is SplitOrder.UNORDERED:
        collected: set[Observation] = set()
        for observation in observations:
            collected.update(split_observation(observation))
        return list(collected)

    result: list[Observation] = []
    for observation in observations:
        result.extend(split_observation(observation))
    return result


def _phenomenon_time(row: Sequence[str], roles: ColumnRoles, default: Time) -> Time:
    if roles.phenomenon_time_index is None:
        return default
    return parse_time(row[roles.phenomenon_time_index])


def _result_time(
    row: Sequence[str],
    roles: ColumnRoles,
    parent: Observation,
    phenomenon_time: Time,
) -> TimeInstant | None:
    if roles.result_time_index is not None:
        return TimeInstant(parse_datetime(row[roles.result_time_index]))
    if (
        parent.result_time is None or parent.is_template_result_time
    ) and isinstance(phenomenon_time, TimeInstant):
        return phenomenon_time
    return parent.result_time


def _row_identifier(
    parent: CodeWithAuthority | None, number: int
) -> CodeWithAuthority | None:
    if parent is None:
        return None
    return dataclasses.replace(parent, value=f"{parent.value}{number}")
