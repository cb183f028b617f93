"""2-D affine transforms (transforms.py).
=======================================

A small value type for homogeneous 2-D affine transforms, plus factory
helpers for the handful of primitives the coordinate pipeline is built from.

.. code-block:: python

    from viewmap.transforms import Affine2D, translate, scale_2d

    transform = translate(400, 300) @ scale_2d(800, 600)
    transform([[0.5, 0.5]])  # array([[800., 600.]])

Composition follows matrix convention: ``a @ b`` applies ``b`` first, then
``a``. Every operation returns a new object; an ``Affine2D`` never changes
after construction.
"""

# ruff: noqa: N806  - uppercase matrix names (A) follow mathematical convention
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from viewmap.validation import SingularTransformError, validate_point

__all__ = [
    "Affine2D",
    "SpatialTransform",
    "identity",
    "reflect",
    "scale_2d",
    "translate",
]


@runtime_checkable
class SpatialTransform(Protocol):
    """Callable that maps an (N, 2) array of points → (N, 2) array."""

    def __call__(self, pts: ArrayLike) -> NDArray[np.float64]: ...


@dataclass(frozen=True, slots=True)
class Affine2D(SpatialTransform):
    """2-D affine transform expressed as a 3 × 3 homogeneous matrix *A* such that

        [x', y', 1]^T  =  A @ [x, y, 1]^T

    Attributes
    ----------
    A : NDArray[np.float64], shape (3, 3)
        Homogeneous transformation matrix. Encodes scaling, reflection and
        translation. The bottom row is always [0, 0, 1].

    Examples
    --------
    Create a transform that scales then translates:

    >>> import numpy as np
    >>> from viewmap.transforms import translate, scale_2d
    >>> transform = translate(10, 20) @ scale_2d(2.0)
    >>> points = np.array([[0, 0], [1, 1]])
    >>> transform(points)
    array([[10., 20.],
           [12., 22.]])

    """

    A: NDArray[np.float64]  # shape (3, 3)

    def __post_init__(self) -> None:
        """Validate transformation matrix shape."""
        A = np.array(self.A, dtype=np.float64)
        if A.shape != (3, 3):
            raise ValueError(f"Affine2D matrix must have shape (3, 3), got {A.shape}")
        if not np.allclose(A[2], [0.0, 0.0, 1.0]):
            raise ValueError(
                f"Affine2D matrix must have bottom row [0, 0, 1], got {A[2].tolist()}"
            )
        A.setflags(write=False)
        object.__setattr__(self, "A", A)

    # ---- core --------------------------------------------------------
    def __call__(self, pts: ArrayLike) -> NDArray[np.float64]:
        """Apply transformation to points.

        Parameters
        ----------
        pts : array-like, shape (..., 2)
            2D points to transform.

        Returns
        -------
        NDArray[np.float64], shape (..., 2)
            Transformed points.

        Examples
        --------
        >>> from viewmap.transforms import translate
        >>> transform = translate(10, 20)
        >>> transform(np.array([[0, 0], [1, 1]]))
        array([[10., 20.],
               [11., 21.]])

        """
        pts = np.asanyarray(pts, dtype=float)
        if pts.shape[-1:] != (2,):
            raise ValueError(
                f"Points must have shape (..., 2), got {pts.shape}"
            )
        pts_h = np.c_[pts.reshape(-1, 2), np.ones((pts.size // 2, 1))]
        out = pts_h @ self.A.T
        out = out[:, :2] / out[:, 2:3]
        return np.asarray(out.reshape(pts.shape), dtype=np.float64)

    def apply_point(self, point: ArrayLike | Sequence[float]) -> tuple[float, float]:
        """Apply the transformation to a single ``(x, y)`` point.

        Raises
        ------
        InvalidViewportError
            If `point` is not a pair of finite numbers.

        Examples
        --------
        >>> from viewmap.transforms import scale_2d
        >>> scale_2d(2.0, 3.0).apply_point((1.0, 1.0))
        (2.0, 3.0)
        """
        x, y = validate_point(point)
        out = self.A @ np.array([x, y, 1.0])
        return float(out[0]), float(out[1])

    # ---- helpers -----------------------------------------------------
    def inverse(self) -> Affine2D:
        """Compute the inverse transformation.

        Returns
        -------
        Affine2D
            New Affine2D representing the inverse transformation.

        Raises
        ------
        SingularTransformError
            If the transformation matrix is singular (non-invertible).

        Examples
        --------
        >>> from viewmap.transforms import translate
        >>> inv = translate(10, 20).inverse()
        >>> inv(np.array([[10, 20]]))
        array([[0., 0.]])

        """
        try:
            A_inv = np.linalg.inv(self.A)
        except np.linalg.LinAlgError as e:
            raise SingularTransformError(
                f"[E2003] Transform matrix is singular and cannot be inverted:\n"
                f"{self.A}\n"
                "This happens when a scale factor is zero, usually because the "
                "viewport has no area."
            ) from e
        if not np.all(np.isfinite(A_inv)):
            raise SingularTransformError(
                f"[E2003] Inverting the transform matrix produced non-finite "
                f"values:\n{self.A}"
            )
        return Affine2D(A_inv)

    def compose(self, other: Affine2D) -> Affine2D:
        """Compose this transformation with another.

        Parameters
        ----------
        other : Affine2D
            Transformation to compose with (applied first).

        Returns
        -------
        Affine2D
            New transformation representing ``self ∘ other``.

        Notes
        -----
        The resulting transformation applies `other` first, then `self`.
        Composition order matters: ``a.compose(b)`` ≠ ``b.compose(a)`` in general.

        Examples
        --------
        >>> from viewmap.transforms import translate, scale_2d
        >>> combined = translate(10, 0).compose(scale_2d(2.0))
        >>> combined(np.array([[1, 1]]))
        array([[12.,  2.]])

        """
        return Affine2D(self.A @ other.A)

    # Pythonic shorthand:  t3 = t1 @ t2
    def __matmul__(self, other: Affine2D) -> Affine2D:
        """Compose transformations using @ operator (``other`` applied first)."""
        return self.compose(other)

    def to_affine_matrix(self) -> NDArray[np.float64]:
        """Return the equivalent 2 × 3 affine matrix ``[[a, b, tx], [c, d, ty]]``.

        Examples
        --------
        >>> from viewmap.transforms import translate
        >>> translate(5, 7).to_affine_matrix()
        array([[1., 0., 5.],
               [0., 1., 7.]])
        """
        return np.array(self.A[:2], dtype=np.float64)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Affine2D):
            return NotImplemented
        return bool(np.array_equal(self.A, other.A))

    def __hash__(self) -> int:
        return hash(self.A.tobytes())


def identity() -> Affine2D:
    """Return the identity transform.

    Examples
    --------
    >>> transform = identity()
    >>> transform(np.array([[1, 2], [3, 4]]))
    array([[1., 2.],
           [3., 4.]])

    """
    return Affine2D(np.eye(3))


# Factory helpers for the most common ops ---------------------------------
def scale_2d(sx: float = 1.0, sy: float | None = None) -> Affine2D:
    """Create uniform or anisotropic scaling transformation.

    Parameters
    ----------
    sx : float, default=1.0
        Scale factor for x-axis.
    sy : float or None, default=None
        Scale factor for y-axis. If None, uses `sx` for uniform scaling.

    Returns
    -------
    Affine2D
        Scaling transformation.

    Examples
    --------
    Uniform scaling:

    >>> scale_2d(2.0)(np.array([[1, 2]]))
    array([[2., 4.]])

    Anisotropic scaling:

    >>> scale_2d(sx=2.0, sy=0.5)(np.array([[1, 2]]))
    array([[2., 1.]])

    """
    sy = sx if sy is None else sy
    return Affine2D(np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]]))


def translate(tx: float = 0.0, ty: float = 0.0) -> Affine2D:
    """Create translation transformation.

    Parameters
    ----------
    tx : float, default=0.0
        Translation in x direction.
    ty : float, default=0.0
        Translation in y direction.

    Returns
    -------
    Affine2D
        Translation transformation.

    Examples
    --------
    >>> translate(10, 20)(np.array([[0, 0], [1, 1]]))
    array([[10., 20.],
           [11., 21.]])

    """
    return Affine2D(np.array([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]]))


def reflect(flip_x: bool = False, flip_y: bool = False) -> Affine2D:
    """Mirror the *x* and/or *y* axis about zero.

    Parameters
    ----------
    flip_x : bool, default=False
        Negate x coordinates.
    flip_y : bool, default=False
        Negate y coordinates.

    Returns
    -------
    Affine2D
        Reflection transformation. Its own inverse.

    Examples
    --------
    >>> reflect(flip_y=True)(np.array([[1, 2]]))
    array([[ 1., -2.]])

    """
    return scale_2d(-1.0 if flip_x else 1.0, -1.0 if flip_y else 1.0)
