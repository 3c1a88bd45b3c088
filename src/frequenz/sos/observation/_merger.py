# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Merging of observations sharing a constellation."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ._types import Observation
from ._values import MultiObservationValue, as_time_value_pairs

_logger = logging.getLogger(__name__)


def should_merge(
    *, profile_merge: bool, request_merge: bool, encoder_merge: bool
) -> bool:
    """Decide whether the observations of a response have to be merged.

    Args:
        profile_merge: Whether the active service profile always merges values.
        request_merge: Whether the request asked for merged observations.
        encoder_merge: Whether the encoder of the response wants merged
            observations.

    Returns:
        Whether any of the parties asks for merged observations.
    """
    return profile_merge or request_merge or encoder_merge


def merge_observations(
    observations: Iterable[Observation], *, compare_offering: bool = False
) -> list[Observation]:
    """Fold observations with the same constellation into one per group.

    Observations are walked in input order. Each one is folded into the first
    group whose constellation can merge with its own (see
    `ObservationConstellation.can_merge`) or starts a new group. The first
    observation is given the observation id `"1"`.

    Group leaders are modified in place: their result time is cleared, since a
    merged observation has no single result time, and their value becomes a
    `MultiObservationValue` holding the values of the whole group, in fold
    order. The declared observation type of the group is not changed.

    Args:
        observations: The scalar observations to merge.
        compare_offering: Whether observations in different offerings are kept
            apart.

    Returns:
        One observation per group, in the order the groups were first seen.

    Raises:
        TypeError: If an array observation is found, which must be split first.
    """
    merged: list[Observation] = []
    for candidate in observations:
        if not merged:
            candidate.observation_id = "1"
            merged.append(candidate)
            continue
        for group in merged:
            if group.constellation.can_merge(
                candidate.constellation, compare_offering=compare_offering
            ):
                _fold(group, candidate)
                break
        else:
            merged.append(candidate)

    _logger.debug("Merged observations into %s groups", len(merged))
    return merged


def _fold(group: Observation, candidate: Observation) -> None:
    group.result_time = None
    if not isinstance(group.value, MultiObservationValue):
        group.value = MultiObservationValue(list(as_time_value_pairs(group.value)))
    group.value.entries.extend(as_time_value_pairs(candidate.value))
