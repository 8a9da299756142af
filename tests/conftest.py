from datetime import datetime

import pytest

from labdesk.core.engine import LabDeskEngine

NOW = datetime(2024, 1, 10, 12, 0)


@pytest.fixture
def engine():
    return LabDeskEngine(clock=lambda: NOW)
