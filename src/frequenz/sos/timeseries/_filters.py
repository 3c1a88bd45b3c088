# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Post-processing functions applied to the measures of an attribute."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from numbers import Real

import numpy as np

from ._base_types import Measure

_logger = logging.getLogger(__name__)

_CLAMP_RE = re.compile(
    r"^sos_(?P<name>clamp|averageclamp|avclamp)\(obs,"
    r"\s*(?P<minimum>[^,()]+?)\s*,\s*(?P<maximum>[^,()]+?)\s*\)$"
)


def _is_numeric(measure: Measure) -> bool:
    return isinstance(measure.value, Real) and not isinstance(measure.value, bool)


def _values(measures: Sequence[Measure]) -> np.ndarray:
    return np.asarray([float(m.value) for m in measures], dtype=np.float64)


def _minimum(measures: Sequence[Measure]) -> list[Measure]:
    return [measures[int(np.argmin(_values(measures)))]]


def _maximum(measures: Sequence[Measure]) -> list[Measure]:
    return [measures[int(np.argmax(_values(measures)))]]


def _average(measures: Sequence[Measure]) -> list[Measure]:
    first, last = measures[0].timestamp, measures[-1].timestamp
    return [
        Measure(
            first + (last - first) / 2,
            float(np.mean(_values(measures))),
            synthesized=any(m.synthesized for m in measures),
        )
    ]


def _clamp(
    measures: Sequence[Measure], minimum: float, maximum: float
) -> list[Measure]:
    values = _values(measures)
    inside = (values >= minimum) & (values <= maximum)
    return [m for m, keep in zip(measures, inside) if keep]


def filter_measures(measures: Sequence[Measure], function: str | None) -> list[Measure]:
    """Apply a filter function to a list of measures.

    The supported functions are:

    * `sos_first(obs)`: the first measure.
    * `sos_last(obs)`: the last measure.
    * `sos_minimum(obs)`: the measure with the smallest value.
    * `sos_maximum(obs)`: the measure with the biggest value.
    * `sos_average(obs)`: the mean of all the values, stamped half way between
      the first and last measures.
    * `sos_clamp(obs,min,max)`: the measures with values between `min` and
      `max` (both included).
    * `sos_averageclamp(obs,min,max)` (or `sos_avclamp`): the average of the
      clamped measures.

    All the functions but `sos_first` and `sos_last` only apply to numeric
    values, non numeric measures are returned unchanged.

    Args:
        measures: The measures to filter, in time order.
        function: The filter function, or `None` or an empty string for no
            filtering.

    Returns:
        The filtered measures.

    Raises:
        ValueError: If the function is not known, or its arguments are not
            numbers.
    """
    if not function or not measures:
        return list(measures)

    function = function.strip()
    if function == "sos_first(obs)":
        return [measures[0]]
    if function == "sos_last(obs)":
        return [measures[-1]]

    numeric_functions = {
        "sos_minimum(obs)": _minimum,
        "sos_maximum(obs)": _maximum,
        "sos_average(obs)": _average,
    }
    reduce = numeric_functions.get(function)
    clamp = _CLAMP_RE.match(function)
    if reduce is None and clamp is None:
        raise ValueError(f"Unknown measure filter function: {function!r}")

    if not _is_numeric(measures[0]):
        _logger.debug("Not applying %s to non numeric measures", function)
        return list(measures)

    if reduce is not None:
        return reduce(measures)

    assert clamp is not None
    try:
        minimum = float(clamp.group("minimum"))
        maximum = float(clamp.group("maximum"))
    except ValueError as err:
        raise ValueError(f"Invalid clamp range in {function!r}") from err
    clamped = _clamp(measures, minimum, maximum)
    if clamp.group("name") == "clamp" or not clamped:
        return clamped
    return _average(clamped)
