"""
Shared pytest fixtures for numlib tests.
"""

import logging
import math
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Returns the root test_output directory. Created once per test session.
    Files here persist after tests complete for easy access.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Returns a directory for the current test to write output files.
    Directory structure: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_dir = test_output_root / module_name / request.node.name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture
def reference_integrand():
    """5/(e^pi - 2) * e^(2x) * cos(x), whose integral over [0, pi/2] is exactly 1."""
    scale = 5.0 / (math.exp(math.pi) - 2.0)

    def f(x: float) -> float:
        return scale * math.exp(2.0 * x) * math.cos(x)

    return f


@pytest.fixture(autouse=True)
def reset_numlib_logging():
    """Reset the numlib logger before and after each test.

    Leaves only a NullHandler and resets the level to NOTSET so logging
    configuration from one test cannot leak into another.
    """
    logger = logging.getLogger("numlib")

    def reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    reset()
    yield
    reset()
