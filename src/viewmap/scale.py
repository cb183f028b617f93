"""Unit-length normalization policies.

A :class:`Scale` turns the size of the effective rendering area into the
matrix that maps one logical unit onto viewport units:

- :class:`Square` - isotropic. One unit is a single length taken from the
  area (its width, height, longer or shorter side) on both axes.
- :class:`Stretch` - anisotropic. One unit spans the full width on x and the
  full height on y.

Examples
--------
>>> from viewmap.anchors import UnitLength
>>> from viewmap.scale import Square, Stretch
>>> Square(UnitLength.MIN_SIDE).output_matrix((800, 600))
array([[600.,   0.,   0.],
       [  0., 600.,   0.],
       [  0.,   0.,   1.]])
>>> Stretch().output_matrix((800, 600))
array([[800.,   0.,   0.],
       [  0., 600.,   0.],
       [  0.,   0.,   1.]])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from viewmap.anchors import UnitLength
from viewmap.transforms import Affine2D
from viewmap.validation import InvalidConfigurationError, validate_viewport_size

__all__ = [
    "Scale",
    "Square",
    "Stretch",
]


@dataclass(frozen=True, slots=True)
class Scale:
    """Base class of the unit-length policies. Use a concrete subclass."""

    def unit_lengths(self, effective_size: tuple[float, float]) -> tuple[float, float]:
        """Viewport units per logical unit along x and y."""
        raise NotImplementedError

    def output_matrix(self, effective_size: tuple[float, float]) -> NDArray[np.float64]:
        """Scaling matrix for an effective rendering area.

        Parameters
        ----------
        effective_size : tuple[float, float]
            Size of the effective rendering area as ``(width, height)``.

        Returns
        -------
        NDArray[np.float64], shape (3, 3)
            ``diag(sx, sy, 1)`` with ``(sx, sy) = unit_lengths(effective_size)``.

        Raises
        ------
        InvalidViewportError
            If `effective_size` is not a positive, finite pair.
        """
        sx, sy = self.unit_lengths(validate_viewport_size(effective_size))
        return np.diag([sx, sy, 1.0])

    def output_transform(self, effective_size: tuple[float, float]) -> Affine2D:
        """:meth:`output_matrix` as an :class:`Affine2D`."""
        return Affine2D(self.output_matrix(effective_size))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        raise NotImplementedError

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Scale:
        """Restore a scale from :meth:`to_dict` output.

        Raises
        ------
        InvalidConfigurationError
            If ``d["kind"]`` is missing or unknown, or a field is invalid.

        Examples
        --------
        >>> Scale.from_dict({"kind": "square", "unit_length": "width"})
        Square(unit_length=<UnitLength.WIDTH: 'width'>)
        """
        if not isinstance(d, dict):
            raise InvalidConfigurationError(
                f"[E2001] Scale must be restored from a dict, got {type(d).__name__}."
            )
        kind = d.get("kind")
        if kind == "square":
            try:
                unit_length = UnitLength(d.get("unit_length"))
            except ValueError as e:
                valid = [u.value for u in UnitLength]
                raise InvalidConfigurationError(
                    f"[E2001] Unknown unit_length {d.get('unit_length')!r}. "
                    f"Expected one of {valid}."
                ) from e
            return Square(unit_length)
        if kind == "stretch":
            return Stretch()
        raise InvalidConfigurationError(
            f"[E2001] Unknown scale kind {kind!r}. Expected 'square' or 'stretch'."
        )


@dataclass(frozen=True, slots=True)
class Square(Scale):
    """Isotropic scale: the same unit length on both axes.

    Attributes
    ----------
    unit_length : UnitLength
        Which dimension of the effective area is one unit long.
    """

    unit_length: UnitLength

    def __post_init__(self) -> None:
        if not isinstance(self.unit_length, UnitLength):
            raise InvalidConfigurationError(
                f"[E2001] Square scale needs a UnitLength, "
                f"got {type(self.unit_length).__name__}: {self.unit_length!r}"
            )

    def unit_lengths(self, effective_size: tuple[float, float]) -> tuple[float, float]:
        length = self.unit_length.select(*effective_size)
        return (length, length)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "square", "unit_length": self.unit_length.value}


@dataclass(frozen=True, slots=True)
class Stretch(Scale):
    """Anisotropic scale: one unit is the full width on x and full height on y."""

    def unit_lengths(self, effective_size: tuple[float, float]) -> tuple[float, float]:
        width, height = effective_size
        return (float(width), float(height))

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "stretch"}
