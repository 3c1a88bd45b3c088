# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Merge capabilities declared by response encoders."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from typing_extensions import override

if TYPE_CHECKING:
    from ._messages import GetObservationResponse

_logger = logging.getLogger(__name__)

_TOKEN = r"[A-Za-z0-9!#$&^_.+-]+"
_MEDIA_TYPE_RE = re.compile(
    rf"^\s*(?P<type>{_TOKEN})/(?P<subtype>{_TOKEN})\s*(?P<parameters>(;[^;]*)*)$"
)


@dataclass(frozen=True)
class MediaType:
    """A parsed media type, like `application/json; charset=utf-8`.

    Type and subtype are normalized to lower case, parameters are kept in the
    order they were given.
    """

    type: str
    """The top level type."""

    subtype: str
    """The subtype."""

    parameters: tuple[tuple[str, str], ...] = ()
    """The `name=value` parameters."""

    @classmethod
    def parse(cls, text: str) -> MediaType:
        """Parse a media type.

        Args:
            text: The media type to parse.

        Returns:
            The parsed media type.

        Raises:
            ValueError: If `text` is not a valid media type.
        """
        match = _MEDIA_TYPE_RE.match(text)
        if match is None:
            raise ValueError(f"Invalid media type: {text!r}")
        parameters: list[tuple[str, str]] = []
        for parameter in match.group("parameters").split(";")[1:]:
            name, sep, value = parameter.partition("=")
            if not sep or not name.strip():
                raise ValueError(
                    f"Invalid media type parameter {parameter!r} in {text!r}"
                )
            parameters.append((name.strip().lower(), value.strip().strip('"')))
        return cls(
            match.group("type").lower(),
            match.group("subtype").lower(),
            tuple(parameters),
        )

    def without_parameters(self) -> MediaType:
        """Get this media type without its parameters.

        Returns:
            A media type with the same type and subtype and no parameters.
        """
        return MediaType(self.type, self.subtype)

    def __str__(self) -> str:
        """Format the media type.

        Returns:
            The media type in its textual form.
        """
        text = f"{self.type}/{self.subtype}"
        for name, value in self.parameters:
            text += f"; {name}={value}"
        return text


@dataclass
class EncoderCapabilities:
    """Capabilities declared by the encoders, by response format and media type."""

    by_response_format: dict[str, bool] = field(default_factory=dict)
    """Whether to merge, keyed by response format."""

    by_media_type: dict[MediaType, bool] = field(default_factory=dict)
    """Whether to merge, keyed by media type without parameters."""

    def for_media_type(self, media_type: MediaType) -> bool | None:
        """Look up the capability of the encoder for a media type.

        Parameters are ignored when no encoder is registered for the exact
        media type.

        Args:
            media_type: The media type to look up.

        Returns:
            Whether to merge, or `None` if no encoder handles the media type.
        """
        found = self.by_media_type.get(media_type)
        if found is None:
            found = self.by_media_type.get(media_type.without_parameters())
        return found


class MergeLookup(ABC):
    """A way of finding the encoder capability for a response."""

    @abstractmethod
    def lookup(
        self, capabilities: EncoderCapabilities, response: GetObservationResponse
    ) -> bool | None:
        """Look up whether the encoder of the response merges observations.

        Args:
            capabilities: The declared encoder capabilities.
            response: The response about to be encoded.

        Returns:
            Whether to merge, or `None` if this lookup found no encoder.
        """


class ResponseFormatLookup(MergeLookup):
    """Look up the encoder by the response format string as it is."""

    @override
    def lookup(
        self, capabilities: EncoderCapabilities, response: GetObservationResponse
    ) -> bool | None:
        if response.response_format is None:
            return None
        return capabilities.by_response_format.get(response.response_format)


class ContentTypeLookup(MergeLookup):
    """Look up the encoder by the content type of the response."""

    @override
    def lookup(
        self, capabilities: EncoderCapabilities, response: GetObservationResponse
    ) -> bool | None:
        if response.content_type is None:
            return None
        return capabilities.for_media_type(response.content_type)


class ResponseFormatMediaTypeLookup(MergeLookup):
    """Look up the encoder by the response format, parsed as a media type."""

    @override
    def lookup(
        self, capabilities: EncoderCapabilities, response: GetObservationResponse
    ) -> bool | None:
        if response.response_format is None:
            return None
        try:
            media_type = MediaType.parse(response.response_format)
        except ValueError as err:
            _logger.debug("Response format is not a media type: %s", err)
            return None
        return capabilities.for_media_type(media_type)


DEFAULT_LOOKUPS: tuple[MergeLookup, ...] = (
    ResponseFormatLookup(),
    ContentTypeLookup(),
    ResponseFormatMediaTypeLookup(),
)
"""The lookups tried by default, in priority order."""


class EncoderCapabilityRegistry:
    """Registry of the merge capability of the response encoders.

    Example:
        ```python
        from frequenz.sos.observation import (
            EncoderCapabilityRegistry,
            GetObservationResponse,
        )

        registry = EncoderCapabilityRegistry()
        registry.register_response_format("http://www.opengis.net/waterml/2.0", True)
        response = GetObservationResponse(
            response_format="http://www.opengis.net/waterml/2.0"
        )
        assert registry.should_merge(response)
        ```
    """

    def __init__(self, lookups: Sequence[MergeLookup] = DEFAULT_LOOKUPS) -> None:
        """Create an empty registry.

        Args:
            lookups: The lookups to try, in priority order. The first one finding
                an encoder decides.
        """
        self._capabilities = EncoderCapabilities()
        self._lookups = tuple(lookups)

    def register_response_format(self, response_format: str, merge: bool) -> None:
        """Declare the capability of the encoder of a response format.

        Args:
            response_format: The response format handled by the encoder.
            merge: Whether the encoder wants observations merged.
        """
        self._capabilities.by_response_format[response_format] = merge

    def register_media_type(self, media_type: MediaType | str, merge: bool) -> None:
        """Declare the capability of the encoder of a media type.

        Args:
            media_type: The media type handled by the encoder.
            merge: Whether the encoder wants observations merged.

        Raises:
            ValueError: If `media_type` is a string that is not a valid media
                type.
        """
        if isinstance(media_type, str):
            media_type = MediaType.parse(media_type)
        self._capabilities.by_media_type[media_type] = merge

    def should_merge(self, response: GetObservationResponse) -> bool:
        """Check whether the encoder of a response wants observations merged.

        No lookup is done when the response has no response format.

        Args:
            response: The response about to be encoded.

        Returns:
            The capability found by the first successful lookup, or `False` if
                no lookup finds an encoder.
        """
        if response.response_format is None:
            return False
        for strategy in self._lookups:
            found = strategy.lookup(self._capabilities, response)
            if found is not None:
                _logger.debug(
                    "Encoder merge capability found by %s: %s",
                    type(strategy).__name__,
                    found,
                )
                return found
        return False
