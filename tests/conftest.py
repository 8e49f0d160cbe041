"""Pytest configuration for the glyphparse test suite.

Hypothesis profiles:
- dev: local runs, random seeds; no per-example deadline, since generated
  grammars over long inputs vary widely in running time
- ci: derandomized so a failing grammar property reproduces on rerun
- verbose: prints every generated input, for debugging a shrunk case

Profile selection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci"
- Otherwise -> "dev"

Stack budget:
The ``shallow_stack`` fixture caps the recursion limit a fixed number of
frames above the test's own depth. Tests that claim constant stack
depth run under it, so the claim does not depend on the interpreter's
default limit or on how deep pytest itself happens to be.

Very large inputs:
Tests marked @pytest.mark.fuzz parse inputs of hundreds of thousands of
atoms. They are skipped unless selected with: pytest -m fuzz
"""

import os
import sys
import traceback
from collections.abc import Iterator

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

settings.register_profile(
    "dev",
    max_examples=200,
    phases=_PHASES,
    deadline=None,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=_PHASES,
    deadline=None,
    derandomize=True,
    print_blob=True,
    suppress_health_check=[HealthCheck.too_slow],
)

settings.register_profile(
    "verbose",
    max_examples=50,
    phases=_PHASES,
    deadline=None,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# STACK BUDGET
# =============================================================================

# Frames available to the code under test inside shallow_stack.
STACK_HEADROOM = 300


@pytest.fixture
def shallow_stack() -> Iterator[int]:
    """Lower the recursion limit to the current depth plus STACK_HEADROOM.

    Yields:
        The recursion limit in effect for the test
    """
    previous = sys.getrecursionlimit()
    limit = len(traceback.extract_stack()) + STACK_HEADROOM
    sys.setrecursionlimit(limit)
    try:
        yield limit
    finally:
        sys.setrecursionlimit(previous)


# =============================================================================
# VERY LARGE INPUTS
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register the 'fuzz' marker."""
    config.addinivalue_line(
        "markers",
        "fuzz: parses inputs of hundreds of thousands of atoms (run with -m fuzz)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless selected with -m fuzz."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip_fuzz = pytest.mark.skip(reason="very large input - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)
