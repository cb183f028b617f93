"""Configuration tags: unit lengths, anchor directions and coordinate origins.

Coordinate Conventions
----------------------
**Center convention** (shared intermediate space):

- Zero at the middle of the area
- +x to the right, +y up

**Corner conventions** (``Origin.TOP_LEFT`` etc.):

- Zero at the named corner
- Axes point into the area: a top origin counts y downward, a right origin
  counts x leftward

Examples
--------
>>> from viewmap.anchors import Origin
>>> import numpy as np
>>> m = Origin.TOP_LEFT.to_center_matrix()
>>> m @ np.array([0.0, 0.0, 1.0])
array([-0.5,  0.5,  1. ])
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from numpy.typing import NDArray

from viewmap.transforms import Affine2D, reflect, translate
from viewmap.validation import validate_viewport_size

__all__ = [
    "Direction",
    "Origin",
    "UnitLength",
]


class UnitLength(Enum):
    """Which dimension of the rendering area defines "one unit".

    Attributes
    ----------
    WIDTH : str
        One unit is the area's width.
    HEIGHT : str
        One unit is the area's height.
    MAX_SIDE : str
        One unit is the longer of width and height.
    MIN_SIDE : str
        One unit is the shorter of width and height.

    Examples
    --------
    >>> UnitLength.MIN_SIDE.select(800.0, 600.0)
    600.0
    """

    WIDTH = "width"
    HEIGHT = "height"
    MAX_SIDE = "max_side"
    MIN_SIDE = "min_side"

    def select(self, width: float, height: float) -> float:
        """Return the unit length for an area of ``width`` × ``height``."""
        if self is UnitLength.WIDTH:
            return float(width)
        if self is UnitLength.HEIGHT:
            return float(height)
        if self is UnitLength.MAX_SIDE:
            return float(max(width, height))
        if self is UnitLength.MIN_SIDE:
            return float(min(width, height))
        raise ValueError(f"Unhandled unit length: {self!r}")


class Direction(Enum):
    """Where an aspect-ratio-constrained area sits inside a larger viewport.

    ``CENTER`` splits the unused margin evenly. ``TOP`` and ``BOTTOM`` push
    the area against that edge (all vertical margin ends up on the opposite
    side) and keep it centered horizontally; ``LEFT`` and ``RIGHT`` do the
    same on the horizontal axis.
    """

    CENTER = "center"
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    @property
    def margin_fractions(self) -> tuple[float, float]:
        """Signed share of the unused margin the area's center moves by.

        Returns
        -------
        tuple[float, float]
            ``(fx, fy)`` in the center convention (+y up). The area's center
            is displaced from the viewport's center by
            ``(fx * margin_x, fy * margin_y)``.

        Examples
        --------
        >>> Direction.TOP.margin_fractions
        (0.0, 0.5)
        """
        if self is Direction.CENTER:
            return (0.0, 0.0)
        if self is Direction.TOP:
            return (0.0, 0.5)
        if self is Direction.BOTTOM:
            return (0.0, -0.5)
        if self is Direction.LEFT:
            return (-0.5, 0.0)
        if self is Direction.RIGHT:
            return (0.5, 0.0)
        raise ValueError(f"Unhandled direction: {self!r}")


class Origin(Enum):
    """Where a coordinate system puts its zero point, and which axes it flips.

    Each origin defines a matrix ``M`` taking its own coordinates to the
    center convention, ``M @ [x, y, 1] = [x_c, y_c, 1]``, composed as
    flip_y → flip_x → half-scale → translate:

    ============  ======  ======  ============
    Origin        flip_x  flip_y  translate
    ============  ======  ======  ============
    CENTER        no      no      (0, 0)
    TOP_LEFT      no      yes     (-0.5, +0.5)
    TOP_RIGHT     yes     yes     (+0.5, +0.5)
    BOTTOM_LEFT   no      no      (-0.5, -0.5)
    BOTTOM_RIGHT  yes     no      (+0.5, -0.5)
    ============  ======  ======  ============

    The half-scale applies to every origin except ``CENTER``, so a corner
    convention covers the unit square of the center convention with
    coordinates running from 0 to 2.
    """

    CENTER = "center"
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"

    @property
    def flip_x(self) -> bool:
        """True when x counts leftward (origin on the right edge)."""
        return self in (Origin.TOP_RIGHT, Origin.BOTTOM_RIGHT)

    @property
    def flip_y(self) -> bool:
        """True when y counts downward (origin on the top edge)."""
        return self in (Origin.TOP_LEFT, Origin.TOP_RIGHT)

    @property
    def corner_offset(self) -> tuple[float, float]:
        """Position of this origin in the center convention, as ``(tx, ty)``."""
        if self is Origin.CENTER:
            return (0.0, 0.0)
        if self is Origin.TOP_LEFT:
            return (-0.5, 0.5)
        if self is Origin.TOP_RIGHT:
            return (0.5, 0.5)
        if self is Origin.BOTTOM_LEFT:
            return (-0.5, -0.5)
        if self is Origin.BOTTOM_RIGHT:
            return (0.5, -0.5)
        raise ValueError(f"Unhandled origin: {self!r}")

    @property
    def _axis_scale(self) -> float:
        return 1.0 if self is Origin.CENTER else 0.5

    def to_center_matrix(self) -> NDArray[np.float64]:
        """Matrix taking this origin's coordinates to the center convention.

        Returns
        -------
        NDArray[np.float64], shape (3, 3)
            ``T(corner_offset) @ S(half) @ flip_x @ flip_y``.

        Examples
        --------
        >>> Origin.BOTTOM_LEFT.to_center_matrix()
        array([[ 0.5,  0. , -0.5],
               [ 0. ,  0.5, -0.5],
               [ 0. ,  0. ,  1. ]])
        """
        s = self._axis_scale
        sx = -s if self.flip_x else s
        sy = -s if self.flip_y else s
        tx, ty = self.corner_offset
        return np.array([[sx, 0.0, tx], [0.0, sy, ty], [0.0, 0.0, 1.0]])

    def from_center_matrix(self) -> NDArray[np.float64]:
        """Inverse of :meth:`to_center_matrix`, computed in closed form.

        Returns
        -------
        NDArray[np.float64], shape (3, 3)
            ``flip @ S(1 / half) @ T(-corner_offset)``.
        """
        inv_s = 1.0 / self._axis_scale
        sx = -inv_s if self.flip_x else inv_s
        sy = -inv_s if self.flip_y else inv_s
        tx, ty = self.corner_offset
        return np.array(
            [[sx, 0.0, -sx * tx], [0.0, sy, -sy * ty], [0.0, 0.0, 1.0]]
        )

    def to_center(self) -> Affine2D:
        """:meth:`to_center_matrix` as an :class:`Affine2D`."""
        return Affine2D(self.to_center_matrix())

    def from_center(self) -> Affine2D:
        """:meth:`from_center_matrix` as an :class:`Affine2D`."""
        return Affine2D(self.from_center_matrix())

    def viewport_from_center(self, size: tuple[float, float]) -> Affine2D:
        """Move center-convention viewport coordinates to this origin.

        The output side of a coordinate system is measured in viewport units
        (usually pixels), so the corner relocation is scaled to the viewport
        and the half-scale of :meth:`to_center_matrix` is not applied. The
        result equals ``D @ H @ from_center_matrix() @ inv(D)`` with
        ``D = diag(width, height)`` and ``H`` the origin's half-scale.

        Parameters
        ----------
        size : tuple[float, float]
            Viewport size as ``(width, height)``.

        Returns
        -------
        Affine2D
            Transform from centered viewport coordinates (+y up) to this
            origin's viewport coordinates.

        Raises
        ------
        InvalidViewportError
            If `size` is not a positive, finite pair.

        Examples
        --------
        >>> t = Origin.TOP_LEFT.viewport_from_center((800, 600))
        >>> t.apply_point((-400.0, 100.0))
        (0.0, 200.0)
        """
        width, height = validate_viewport_size(size)
        tx, ty = self.corner_offset
        flip = reflect(flip_x=self.flip_x, flip_y=self.flip_y)
        return flip @ translate(-tx * width, -ty * height)
