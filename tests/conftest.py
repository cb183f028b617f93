"""Shared test fixtures for the viewmap test suite.

Fixture Naming Convention
=========================

- ``{shape}_viewport``: a ``(width, height)`` tuple, e.g. ``wide_viewport``
- ``{policy}_system``: a ready-made ``CoordinateSystem``
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from viewmap import (
    AspectRatio,
    CoordinateSystem,
    Direction,
    Origin,
    ScaleScope,
    Square,
    Stretch,
    UnitLength,
    Whole,
)

# =============================================================================
# Hypothesis Configuration for Performance
# =============================================================================
# - "ci": Fast profile for CI pipelines (fewer examples, no deadline)
# - "dev": Standard development profile (moderate examples)
# - "thorough": Full property testing (many examples, for pre-release)

settings.register_profile(
    "ci",
    max_examples=10,
    deadline=None,  # Disable deadline in CI (variable performance)
    suppress_health_check=[],
    phases=[Phase.explicit, Phase.reuse, Phase.generate],
    verbosity=Verbosity.quiet,
)

settings.register_profile(
    "dev",
    max_examples=50,
    deadline=5000,  # 5 second deadline
    verbosity=Verbosity.normal,
)

settings.register_profile(
    "thorough",
    max_examples=500,
    deadline=None,
    verbosity=Verbosity.verbose,
)

# Set HYPOTHESIS_PROFILE=ci in CI environments for faster tests
_profile = os.environ.get("HYPOTHESIS_PROFILE", "dev")
settings.load_profile(_profile)

# =============================================================================
# --- Fixtures ---
# =============================================================================
@pytest.fixture
def standard_viewport() -> tuple[float, float]:
    """4:3 viewport."""
    return (800.0, 600.0)


@pytest.fixture
def wide_viewport() -> tuple[float, float]:
    """Viewport wider than 4:3; a 4:3 scope leaves 100 px left and right."""
    return (1000.0, 600.0)


@pytest.fixture
def tall_viewport() -> tuple[float, float]:
    """Viewport taller than 4:3; a 4:3 scope leaves 100 px top and bottom."""
    return (800.0, 800.0)


@pytest.fixture
def pixel_system() -> CoordinateSystem:
    """Normalized centered input onto top-left pixels, full viewport."""
    return CoordinateSystem(
        ScaleScope(Stretch(), Whole()),
        input_origin=Origin.CENTER,
        output_origin=Origin.TOP_LEFT,
    )


@pytest.fixture
def letterbox_system() -> CoordinateSystem:
    """Square min-side units inside a centered 4:3 area, top-left pixels."""
    return CoordinateSystem(
        ScaleScope(Square(UnitLength.MIN_SIDE), AspectRatio(4, 3, Direction.CENTER)),
        input_origin=Origin.CENTER,
        output_origin=Origin.TOP_LEFT,
    )
