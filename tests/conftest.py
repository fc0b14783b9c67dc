import matplotlib

# Headless backend for figure tests
matplotlib.use("Agg")

import pytest

from gwo_pid.config import RunConfig


@pytest.fixture
def small_config():
    return RunConfig(pack_size=10, max_iterations=50, setpoint=1.0, upper_bound=5.0)
