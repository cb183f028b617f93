"""Logging helpers for viewmap.

The library never configures handlers; ``viewmap/__init__.py`` attaches a
``NullHandler`` so applications decide where records go. Enable the records
with, e.g.::

    import logging
    logging.getLogger("viewmap").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger("viewmap")


def log_transform_composed(
    *,
    size: tuple[float, float],
    effective_size: tuple[float, float],
    input_origin: str,
    output_origin: str,
    matrix: NDArray[np.float64],
) -> None:
    """Log the composition of an input→output transform at DEBUG level."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(
        "Composed io transform: size=%s effective=%s %s->%s matrix=%s",
        size,
        effective_size,
        input_origin,
        output_origin,
        np.array2string(matrix, precision=6, separator=", ").replace("\n", ""),
    )


def log_singular_transform(*, size: tuple[float, float], det: float) -> None:
    """Log a failed inversion at DEBUG level before the error propagates."""
    logger.debug(
        "Forward transform for size=%s is singular (det=%g); cannot map back",
        size,
        det,
    )
