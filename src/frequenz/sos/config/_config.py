# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Service configuration, read from TOML files."""

from __future__ import annotations

import logging
import tomllib
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..observation import EncoderCapabilityRegistry, MediaType, SplitOrder
from ..timeseries import (
    DEFAULT_MAXIMUM_CYCLE_COUNT,
    DEFAULT_MAXIMUM_CYCLE_COUNT_WARN,
    RetrievalAlignment,
    RetrievalSettings,
)

_logger = logging.getLogger(__name__)


class ServiceProfile(BaseModel):
    """How the service handles observations."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    identifier: str = "default"
    """The name of the profile."""

    merge_values: bool = False
    """Whether the observations of every response are merged."""

    compare_offering: bool = False
    """Whether observations in different offerings are kept apart when merging."""

    split_order: SplitOrder = SplitOrder.ROW_ORDER
    """The ordering guarantee of split observations."""


class EncoderCapability(BaseModel):
    """The merge capability of a response encoder."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    response_format: str | None = None
    """The response format handled by the encoder."""

    content_type: str | None = None
    """The media type handled by the encoder."""

    merge: bool = False
    """Whether the encoder wants observations with the same constellation merged."""

    @model_validator(mode="after")
    def _check_key(self) -> EncoderCapability:
        if self.response_format is None and self.content_type is None:
            raise ValueError("Either response_format or content_type must be set")
        if self.content_type is not None:
            MediaType.parse(self.content_type)
        return self


class RetrievalDefaults(BaseModel):
    """Defaults used when reading measures."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    maximum_cycle_count: int = DEFAULT_MAXIMUM_CYCLE_COUNT
    """The maximum number of measures read for an attribute."""

    alignment: RetrievalAlignment = RetrievalAlignment.END_DATE_ALIGNED
    """How windows with too many measures are shortened."""

    warn_cycle_count: int = Field(default=DEFAULT_MAXIMUM_CYCLE_COUNT_WARN, gt=0)
    """The maximum cycle count above which a warning is logged."""

    def settings(
        self,
        step_time: timedelta,
        time_from: datetime,
        time_to: datetime | None = None,
    ) -> RetrievalSettings:
        """Create retrieval settings using these defaults.

        Args:
            step_time: The nominal distance between measures.
            time_from: The start of the window.
            time_to: The end of the window, or `None` for the current time.

        Returns:
            The retrieval settings.
        """
        return RetrievalSettings(
            step_time=step_time,
            time_from=time_from,
            time_to=time_to,
            maximum_cycle_count=self.maximum_cycle_count,
            alignment=self.alignment,
            warn_cycle_count=self.warn_cycle_count,
        )


class ServiceConfig(BaseModel):
    """The configuration of the service."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    profile: ServiceProfile = Field(default_factory=ServiceProfile)
    """The active service profile."""

    encoders: list[EncoderCapability] = Field(default_factory=list)
    """The merge capabilities of the response encoders."""

    retrieval: RetrievalDefaults = Field(default_factory=RetrievalDefaults)
    """The defaults used when reading measures."""

    def encoder_registry(self) -> EncoderCapabilityRegistry:
        """Create a registry with the configured encoder capabilities.

        Returns:
            The registry.
        """
        registry = EncoderCapabilityRegistry()
        for encoder in self.encoders:
            if encoder.response_format is not None:
                registry.register_response_format(
                    encoder.response_format, encoder.merge
                )
            if encoder.content_type is not None:
                registry.register_media_type(encoder.content_type, encoder.merge)
        return registry


def load_config(path: str | Path) -> ServiceConfig:
    """Read and validate a configuration file.

    Example:
        ```toml
        [profile]
        identifier = "hydrology"
        merge_values = true

        [[encoders]]
        response_format = "http://www.opengis.net/waterml/2.0"
        merge = true

        [retrieval]
        maximum_cycle_count = 288
        alignment = "StartDateAligned"
        ```

    Args:
        path: The path of the TOML file.

    Returns:
        The validated configuration.

    Raises:
        OSError: If the file can't be read.
        ValueError: If the file is not valid TOML or doesn't hold a valid
            configuration (`pydantic.ValidationError` is a `ValueError`).
    """
    path = Path(path)
    try:
        with path.open("rb") as toml_file:
            data: dict[str, Any] = tomllib.load(toml_file)
    except (OSError, ValueError) as err:
        _logger.error("%s: Can't read config file, err: %s", path, err)
        raise

    try:
        config = ServiceConfig.model_validate(data)
    except ValidationError as err:
        _logger.error("%s: Invalid configuration, err: %s", path, err)
        raise

    _logger.info(
        "Loaded configuration from %s (profile %r, %s encoders)",
        path,
        config.profile.identifier,
        len(config.encoders),
    )
    return config
