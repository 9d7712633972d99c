"""
Pytest configuration and shared fixtures for the srtexporter test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the project.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict
from unittest.mock import Mock, patch

import pytest
import yaml

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from srtexporter.system.ports import PortAllocator, check_port_range  # noqa: E402
from srtexporter.validation import NoPortAvailable  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def mock_net_connections():
    """Mock psutil.net_connections so no real listening sockets are reported."""
    with patch("psutil.net_connections") as mock_connections:
        mock_connections.return_value = []
        yield mock_connections


@pytest.fixture
def fake_allocator():
    """
    PortAllocator double that hands out the lowest port of the range not
    in ``exclude``, without touching the network.

    Set ``fake_allocator.busy_ports`` to mark ports as in use.
    """
    allocator = Mock(spec=PortAllocator)
    allocator.busy_ports = set()

    def allocate(ip, port_min, port_max, exclude=()):
        check_port_range(port_min, port_max)
        for port in range(port_min, port_max + 1):
            if port not in exclude and port not in allocator.busy_ports:
                return port
        raise NoPortAvailable(ip, port_min, port_max)

    allocator.allocate.side_effect = allocate
    return allocator


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data() -> Dict[str, Any]:
    """Sample exporter configuration document."""
    return {
        "ip": "127.0.0.1",
        "portMin": 9300,
        "portMax": 9310,
        "collector": {
            "mode": "collectPeriodically",
            "filterMode": "srtCommon",
            "labels": [
                {"name": "site", "value": "tokyo"},
            ],
        },
        "objects": [
            {
                "name": "camA",
                "port": 9100,
            },
            {
                "name": "camB",
                "ip": "127.0.0.2",
                "collector": {
                    "mode": "receivePassively",
                    "filterMode": "srtSource",
                    "labels": [
                        {"name": "role", "value": "sender"},
                    ],
                },
            },
            {
                "name": "camC",
                "collector": {
                    "variables": ["msRTT", "mbpsBandwidth", "msRTT"],
                },
            },
        ],
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write the sample configuration to a YAML file and return its path."""
    path = temp_dir / "srt_exporter.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(sample_config_data, f, sort_keys=False)
    return path
