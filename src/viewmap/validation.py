"""Argument validation and error types for viewmap.

Every error raised by this package carries a code at the start of its
message so it can be looked up quickly:

- ``[E2001]`` :class:`InvalidConfigurationError` - a configuration value
  (aspect ratio, origin, scale, scope, serialized dict) is malformed.
- ``[E2002]`` :class:`InvalidViewportError` - a viewport size or point is
  not a pair of finite numbers, or a size component is not positive.
- ``[E2003]`` :class:`SingularTransformError` - an inverse was requested for
  a matrix that cannot be inverted.

All three are subclasses of :class:`ValueError`, so callers that already
catch ``ValueError`` keep working.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

__all__ = [
    "InvalidConfigurationError",
    "InvalidViewportError",
    "SingularTransformError",
    "validate_aspect_ratio",
    "validate_point",
    "validate_viewport_size",
]


class InvalidConfigurationError(ValueError):
    """Raised when a mapping policy is built from invalid values.

    Detected when the configuration object is constructed (or restored with
    ``from_dict``), never later during a size-dependent computation.

    See Also
    --------
    validate_aspect_ratio : Checks the aspect ratio of an ``AspectRatio`` scope
    """

    pass


class InvalidViewportError(ValueError):
    """Raised when a viewport size or a point cannot be used for mapping.

    See Also
    --------
    validate_viewport_size : Checks a ``(width, height)`` pair
    validate_point : Checks an ``(x, y)`` pair
    """

    pass


class SingularTransformError(np.linalg.LinAlgError):
    """Raised when the inverse of a non-invertible transform is requested.

    Subclasses :class:`numpy.linalg.LinAlgError` (and therefore
    :class:`ValueError`), which is what :func:`numpy.linalg.inv` raises.
    """

    pass


def _as_finite_pair(value: ArrayLike | Sequence[float], name: str) -> NDArray:
    try:
        arr = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as e:
        actual_type = type(value).__name__
        raise InvalidViewportError(
            f"[E2002] {name} must be a pair of numbers. Got {actual_type}: {value!r}"
        ) from e

    if arr.shape != (2,):
        raise InvalidViewportError(
            f"[E2002] {name} must have exactly two components, got shape {arr.shape}."
        )

    if not np.all(np.isfinite(arr)):
        raise InvalidViewportError(
            f"[E2002] {name} contains NaN or infinite values (got {value!r}). "
            f"{name} must be finite numeric values."
        )
    return arr


def validate_viewport_size(size: ArrayLike | Sequence[float]) -> tuple[float, float]:
    """Validate a viewport size and normalize it to a float pair.

    Parameters
    ----------
    size : array-like, shape (2,)
        Viewport size as ``(width, height)``.

    Returns
    -------
    tuple[float, float]
        The validated ``(width, height)``.

    Raises
    ------
    InvalidViewportError
        If `size` is not a pair, or a component is non-finite or not positive.

    Examples
    --------
    >>> validate_viewport_size((800, 600))
    (800.0, 600.0)

    >>> validate_viewport_size((0, 600))  # doctest: +SKIP
    InvalidViewportError: [E2002] Viewport size must be positive...
    """
    arr = _as_finite_pair(size, "Viewport size")

    if np.any(arr <= 0.0):
        raise InvalidViewportError(
            f"[E2002] Viewport size must be positive in both dimensions "
            f"(got width={arr[0]}, height={arr[1]}).\n"
            "A zero or negative viewport has no area to map coordinates onto. "
            "Wait for the viewport to be laid out before mapping."
        )
    return float(arr[0]), float(arr[1])


def validate_point(point: ArrayLike | Sequence[float]) -> tuple[float, float]:
    """Validate a single ``(x, y)`` point and normalize it to a float pair.

    Raises
    ------
    InvalidViewportError
        If `point` is not a pair of finite numbers.
    """
    arr = _as_finite_pair(point, "Point")
    return float(arr[0]), float(arr[1])


def validate_aspect_ratio(aspect_w: float, aspect_h: float) -> tuple[float, float]:
    """Validate the width and height terms of an aspect ratio.

    Parameters
    ----------
    aspect_w, aspect_h : float
        Aspect ratio terms, e.g. ``16`` and ``9``.

    Returns
    -------
    tuple[float, float]
        The validated terms as floats.

    Raises
    ------
    InvalidConfigurationError
        If either term is non-numeric, non-finite, or not positive.

    Examples
    --------
    >>> validate_aspect_ratio(16, 9)
    (16.0, 9.0)
    """
    terms = []
    for name, value in (("aspect_w", aspect_w), ("aspect_h", aspect_h)):
        if isinstance(value, bool):
            raise InvalidConfigurationError(
                f"[E2001] {name} must be a number, got bool: {value!r}"
            )
        try:
            term = float(value)
        except (TypeError, ValueError) as e:
            raise InvalidConfigurationError(
                f"[E2001] {name} must be a number. "
                f"Got {type(value).__name__}: {value!r}"
            ) from e
        if not np.isfinite(term):
            raise InvalidConfigurationError(
                f"[E2001] {name} must be finite (got {value!r})."
            )
        if term <= 0.0:
            raise InvalidConfigurationError(
                f"[E2001] {name} must be positive (got {value!r}).\n"
                "An aspect ratio needs a positive width and height, e.g. 16:9."
            )
        terms.append(term)
    return terms[0], terms[1]
