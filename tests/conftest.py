import json
from datetime import datetime, timezone
from typing import Any, Dict, List

import pytest

from payload_parser.core import EngineConfig

FIXED_NOW = datetime(2024, 7, 1, 12, 34, 56, tzinfo=timezone.utc)
FIXED_MILLIS = int(FIXED_NOW.timestamp() * 1000)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def config(fixed_clock) -> EngineConfig:
    return EngineConfig(clock=fixed_clock)


@pytest.fixture
def make_envelope():
    """Build the platform payload carrying one Everynet envelope."""
    def _make(body: Any, serie: Any = None, variable: str = "everynet_payload") -> List[Dict[str, Any]]:
        value = body if isinstance(body, str) else json.dumps(body)
        envelope: Dict[str, Any] = {"variable": variable, "value": value}
        if serie is not None:
            envelope["serie"] = serie
        return [envelope]

    return _make


@pytest.fixture
def fixed_millis() -> int:
    return FIXED_MILLIS
