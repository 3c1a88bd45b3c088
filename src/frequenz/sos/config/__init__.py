# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Read the service configuration."""

from ._config import (
    EncoderCapability,
    RetrievalDefaults,
    ServiceConfig,
    ServiceProfile,
    load_config,
)

__all__ = [
    "EncoderCapability",
    "RetrievalDefaults",
    "ServiceConfig",
    "ServiceProfile",
    "load_config",
]
