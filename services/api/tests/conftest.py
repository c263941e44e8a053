import sys
from pathlib import Path

import pytest


API_SRC = Path(__file__).resolve().parents[1] / "src"
if str(API_SRC) not in sys.path:
    sys.path.insert(0, str(API_SRC))

from reqecho_api import config, metrics_log  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_state():
    """Start every test with empty counters and uncached configuration."""

    metrics_log.reset()
    config.clear_caches()
    yield
    metrics_log.reset()
    config.clear_caches()
