" generic fixtures "
import logging
from unittest.mock import Mock

import pytest

from .testtools import FakeNode


def pytest_configure():
    "Runs once before all"
    from ipfscmds.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_logger():
    "A logger for objects requiring one"
    return logging.getLogger("ipfscmds.tests")


@pytest.fixture
def trees():
    "The full and read-only trees, as served by the daemon"
    from ipfscmds.trees import init_trees

    return init_trees()


@pytest.fixture
def node():
    return FakeNode()


@pytest.fixture
def shutdown():
    return Mock(name="shutdown")
