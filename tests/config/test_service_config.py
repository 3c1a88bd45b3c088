# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Tests for reading the service configuration."""

import logging
import pathlib
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from frequenz.sos.config import (
    EncoderCapability,
    ServiceConfig,
    ServiceProfile,
    load_config,
)
from frequenz.sos.observation import GetObservationResponse, MediaType, SplitOrder
from frequenz.sos.timeseries import RetrievalAlignment

_CONFIG = """
[profile]
identifier = "hydrology"
merge_values = true
split_order = "unordered"

[[encoders]]
response_format = "http://www.opengis.net/waterml/2.0"
merge = true

[[encoders]]
content_type = "application/json"
merge = false

[retrieval]
maximum_cycle_count = 288
alignment = "StartDateAligned"
"""


@pytest.fixture()
def config_file(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a test config file."""
    file_path = tmp_path / "sos.toml"
    file_path.write_text(_CONFIG)
    return file_path


def test_load_config(
    config_file: pathlib.Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Test a configuration file is read and validated."""
    with caplog.at_level(logging.INFO):
        config = load_config(config_file)

    assert config.profile == ServiceProfile(
        identifier="hydrology", merge_values=True, split_order=SplitOrder.UNORDERED
    )
    assert config.encoders == [
        EncoderCapability(
            response_format="http://www.opengis.net/waterml/2.0", merge=True
        ),
        EncoderCapability(content_type="application/json", merge=False),
    ]
    assert config.retrieval.maximum_cycle_count == 288
    assert config.retrieval.alignment is RetrievalAlignment.START_DATE_ALIGNED
    assert "Loaded configuration" in caplog.text


def test_defaults(tmp_path: pathlib.Path) -> None:
    """Test an empty file gives the default configuration."""
    file_path = tmp_path / "empty.toml"
    file_path.write_text("")

    config = load_config(str(file_path))

    assert config == ServiceConfig()
    assert not config.profile.merge_values
    assert config.profile.split_order is SplitOrder.ROW_ORDER
    assert config.retrieval.maximum_cycle_count == 577
    assert config.retrieval.alignment is RetrievalAlignment.END_DATE_ALIGNED


def test_encoder_registry(config_file: pathlib.Path) -> None:
    """Test the registry holds the configured encoder capabilities."""
    registry = load_config(config_file).encoder_registry()

    assert registry.should_merge(
        GetObservationResponse(response_format="http://www.opengis.net/waterml/2.0")
    )
    assert not registry.should_merge(
        GetObservationResponse(
            response_format="http://www.opengis.net/om/2.0",
            content_type=MediaType.parse("application/json"),
        )
    )


def test_retrieval_settings(config_file: pathlib.Path) -> None:
    """Test retrieval settings are created with the configured defaults."""
    retrieval = load_config(config_file).retrieval
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)

    settings = retrieval.settings(timedelta(minutes=5), start)

    assert settings.maximum_cycle_count == 288
    assert settings.alignment is RetrievalAlignment.START_DATE_ALIGNED
    assert settings.time_to is None


def test_missing_file(
    tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Test a missing file is logged and reported."""
    with pytest.raises(OSError):
        load_config(tmp_path / "missing.toml")

    assert "Can't read config file" in caplog.text


def test_invalid_toml(tmp_path: pathlib.Path) -> None:
    """Test a file that is not TOML is reported."""
    file_path = tmp_path / "broken.toml"
    file_path.write_text("[profile\n")

    with pytest.raises(ValueError):
        load_config(file_path)


@pytest.mark.parametrize(
    "content",
    [
        "[profile]\nunknown = 1\n",
        '[profile]\nsplit_order = "random"\n',
        "[[encoders]]\nmerge = true\n",
        '[[encoders]]\ncontent_type = "not a media type"\n',
        '[retrieval]\nalignment = "Centered"\n',
    ],
)
def test_invalid_config(tmp_path: pathlib.Path, content: str) -> None:
    """Test invalid configurations are rejected."""
    file_path = tmp_path / "invalid.toml"
    file_path.write_text(content)

    with pytest.raises(ValidationError):
        load_config(file_path)
