# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Observations and the constellations grouping them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ._time import Time, TimeInstant
from ._values import ObservationValue
from ._vocabulary import ObservationType


@dataclass(frozen=True)
class CodeWithAuthority:
    """An identifier, optionally scoped by a code space."""

    value: str
    """The identifier."""

    code_space: str | None = None
    """The authority issuing the identifier."""


@dataclass(frozen=True)
class NamedValue:
    """An observation parameter."""

    name: str
    """The name of the parameter, normally a URI."""

    value: Any
    """The value of the parameter."""


@dataclass(frozen=True)
class ObservationConstellation:
    """What was observed, where, by whom: shared by a group of observations."""

    procedure: str
    """The identifier of the procedure (sensor) producing the observations."""

    observed_property: str
    """The identifier of the observed property."""

    feature_of_interest: str
    """The identifier of the observed feature."""

    observation_type: str
    """The observation type URI of the observations."""

    offering: str | None = None
    """The offering the observations are published in."""

    @property
    def parsed_observation_type(self) -> ObservationType | None:
        """Get the observation type as a known type.

        Returns:
            The observation type, or `None` if it is not a known one.
        """
        return ObservationType.from_string(self.observation_type)

    def can_merge(
        self, other: ObservationConstellation, *, compare_offering: bool = False
    ) -> bool:
        """Check whether observations of both constellations can be merged.

        Args:
            other: The constellation to compare to.
            compare_offering: Whether the offerings must be equal too.

        Returns:
            Whether the procedure, observed property and feature of interest
                (and the offering, if requested) are equal.
        """
        if compare_offering and self.offering != other.offering:
            return False
        return (
            self.procedure == other.procedure
            and self.observed_property == other.observed_property
            and self.feature_of_interest == other.feature_of_interest
        )


@dataclass(eq=False)
class Observation:
    """One measurement event.

    Observations are entities: two observations are only equal if they are the
    same object, even if all their attributes are equal.
    """

    constellation: ObservationConstellation
    """The constellation this observation belongs to."""

    value: ObservationValue
    """The observed value, carrying its phenomenon time."""

    result_time: TimeInstant | None = None
    """When the result became available."""

    identifier: CodeWithAuthority | None = None
    """The identifier of the observation, if any."""

    observation_id: str | None = None
    """A service assigned id, used to reference merged observations."""

    parameters: Sequence[NamedValue] | None = None
    """Additional parameters of the observation."""

    @property
    def phenomenon_time(self) -> Time:
        """Get the time the observed value applies to.

        Returns:
            The phenomenon time of the value.
        """
        return self.value.phenomenon_time

    @property
    def is_template_result_time(self) -> bool:
        """Whether the result time is the `template` indeterminate value.

        Returns:
            `True` if the result time is a template.
        """
        return self.result_time is not None and self.result_time.is_template
