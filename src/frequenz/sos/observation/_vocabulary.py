# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Well-known identifiers shared by observation producers and consumers."""

from __future__ import annotations

import enum

OBSERVATION_TYPE_PREFIX = "http://www.opengis.net/def/observationType/OGC-OM/2.0/"
"""Common prefix of all the OGC observation type identifiers."""

PHENOMENON_TIME = "http://www.opengis.net/def/property/OGC/0/PhenomenonTime"
"""Identifier of the column carrying the phenomenon time of a row."""

SAMPLING_TIME = "http://www.opengis.net/def/property/OGC/0/SamplingTime"
"""Identifier of the column carrying the result time of a row."""

TEMPLATE_INDETERMINATE_VALUE = "template"
"""Indeterminate value marking a result time as a template to be filled in."""

MERGE_OBSERVATIONS_INTO_DATA_ARRAY = "MergeObservationsIntoDataArray"
"""Request extension asking for same-constellation observations to be merged."""

SPLIT_DATA_ARRAY_INTO_OBSERVATIONS = "SplitDataArrayIntoObservations"
"""Request extension asking for array observations to be split on insertion."""


class ObservationType(enum.Enum):
    """Kinds of observations, identified by their OGC observation type URI."""

    TRUTH = OBSERVATION_TYPE_PREFIX + "OM_TruthObservation"
    """A boolean observation."""

    COUNT = OBSERVATION_TYPE_PREFIX + "OM_CountObservation"
    """An integer count observation."""

    MEASUREMENT = OBSERVATION_TYPE_PREFIX + "OM_Measurement"
    """A floating point quantity with a unit of measure."""

    CATEGORY = OBSERVATION_TYPE_PREFIX + "OM_CategoryObservation"
    """A category code, optionally with a code space."""

    TEXT = OBSERVATION_TYPE_PREFIX + "OM_TextObservation"
    """A free text observation."""

    SWE_ARRAY = OBSERVATION_TYPE_PREFIX + "OM_SWEArrayObservation"
    """An observation whose value is a block of rows."""

    @property
    def is_scalar(self) -> bool:
        """Whether this type carries a single value per observation.

        Returns:
            `False` for the array type, `True` for every other type.
        """
        return self is not ObservationType.SWE_ARRAY

    @classmethod
    def from_string(cls, value: str) -> ObservationType | None:
        """Look up an observation type, ignoring case.

        Besides the full URI, the local name (`OM_Measurement`), the local name
        without the `OM_` prefix (`Measurement`, `CountObservation`) and the
        short kind (`measurement`, `count`) are accepted.

        Args:
            value: The string to look up.

        Returns:
            The matching observation type, or `None` if nothing matches.
        """
        return _ALIASES.get(value.strip().lower())


def _aliases() -> dict[str, ObservationType]:
    aliases: dict[str, ObservationType] = {}
    for obs_type in ObservationType:
        local_name = obs_type.value.rsplit("/", 1)[-1]
        bare_name = local_name.removeprefix("OM_")
        short_name = bare_name.removesuffix("Observation")
        for alias in (obs_type.value, local_name, bare_name, short_name):
            aliases[alias.lower()] = obs_type
    return aliases


_ALIASES = _aliases()
