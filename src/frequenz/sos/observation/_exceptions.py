# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Observation transformation exceptions."""


class ObservationError(Exception):
    """An observation could not be transformed."""


class UnsupportedObservationTypeError(ObservationError):
    """A cell was requested to be decoded as an unknown observation type."""

    def __init__(self, observation_type: str) -> None:
        """Create an instance.

        Args:
            observation_type: The observation type that is not supported.
        """
        super().__init__(f"Observation type '{observation_type}' not supported.")
        self.observation_type = observation_type
        """The observation type that is not supported."""

    def __repr__(self) -> str:
        """Return the representation of the instance.

        Returns:
            The representation of the instance.
        """
        return f"{self.__class__.__name__}({self.observation_type!r})"


class NoApplicableColumnError(ObservationError):
    """No column of an element type carries the observed property values."""

    def __init__(self, observed_property: str, field_names: list[str]) -> None:
        """Create an instance.

        Args:
            observed_property: The identifier of the observed property.
            field_names: The names of the fields that were searched.
        """
        super().__init__(
            f"No column matches the observed property '{observed_property}', "
            f"available fields: {field_names}"
        )
        self.observed_property = observed_property
        """The identifier of the observed property."""

        self.field_names = field_names
        """The names of the fields that were searched."""

    def __repr__(self) -> str:
        """Return the representation of the instance.

        Returns:
            The representation of the instance.
        """
        return (
            f"{self.__class__.__name__}({self.observed_property!r}, "
            f"{self.field_names!r})"
        )


class CannotDeriveObservationTypeError(ObservationError):
    """No field definition allows deriving the type of the split observations."""

    def __init__(self, observed_property: str, field_names: list[str]) -> None:
        """Create an instance.

        Args:
            observed_property: The identifier of the observed property.
            field_names: The names of the fields that were searched.
        """
        super().__init__(
            "Not able to derive observation type from element type fields "
            f"{field_names} for observable property '{observed_property}'."
        )
        self.observed_property = observed_property
        """The identifier of the observed property."""

        self.field_names = field_names
        """The names of the fields that were searched."""

    def __repr__(self) -> str:
        """Return the representation of the instance.

        Returns:
            The representation of the instance.
        """
        return (
            f"{self.__class__.__name__}({self.observed_property!r}, "
            f"{self.field_names!r})"
        )


class MalformedTimestampError(ObservationError, ValueError):
    """A cell could not be parsed as an ISO 8601 time."""

    def __init__(self, text: str) -> None:
        """Create an instance.

        Args:
            text: The text that failed to parse.
        """
        super().__init__(f"'{text}' is not a valid ISO 8601 time")
        self.text = text
        """The text that failed to parse."""


class MalformedValueError(ObservationError, ValueError):
    """A cell could not be parsed as a value of the requested observation type."""

    def __init__(self, text: str, observation_type: str) -> None:
        """Create an instance.

        Args:
            text: The text that failed to parse.
            observation_type: The observation type the text was decoded as.
        """
        super().__init__(
            f"'{text}' is not a valid value for observation type '{observation_type}'"
        )
        self.text = text
        """The text that failed to parse."""

        self.observation_type = observation_type
        """The observation type the text was decoded as."""
