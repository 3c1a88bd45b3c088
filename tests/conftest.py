# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Setup for all the tests."""
from collections.abc import Iterator
from datetime import datetime, timezone

import pytest
import time_machine

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
"""A fixed reference time for the tests."""


@pytest.fixture
def fake_time() -> Iterator[time_machine.Coordinates]:
    """Replace real time with a time machine that doesn't automatically tick."""
    with time_machine.travel(T0, tick=False) as traveller:
        yield traveller
