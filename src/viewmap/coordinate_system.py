"""Input ↔ output coordinate mapping for a runtime viewport size.

A :class:`CoordinateSystem` is a fixed mapping policy. The viewport size is
passed to every call and never stored, so one instance serves any number of
viewports and threads.

Pipeline
--------
The forward (input → output) transform is built from four stages, applied to
an input point in this order:

.. code-block:: text

    input point (input_origin convention, logical units)
        │  input_origin.to_center()
        ▼
    center convention, logical units
        │  scale_scope.output_matrix(size)
        ▼
    center of effective area, viewport units
        │  scope.anchor_offset_matrix(size)
        ▼
    center of viewport, viewport units (+y up)
        │  output_origin.viewport_from_center(size)
        ▼
    output point (output_origin convention, viewport units)

The reverse mapping inverts the composed forward matrix on every call.

Examples
--------
Map normalized centered coordinates onto a 16:9 letterboxed window whose
pixel origin is the top-left corner:

>>> from viewmap import (
...     AspectRatio, CoordinateSystem, Direction, Origin, ScaleScope, Stretch,
... )
>>> cs = CoordinateSystem(
...     ScaleScope(Stretch(), AspectRatio(16, 9, Direction.CENTER)),
...     input_origin=Origin.CENTER,
...     output_origin=Origin.TOP_LEFT,
... )
>>> cs.into_output_coordinates((0.0, 0.0), (1920, 1200))
(960.0, 600.0)
>>> import numpy as np
>>> np.allclose(cs.into_input_coordinates((960.0, 60.0), (1920, 1200)), (0.0, 0.5))
True
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from viewmap._logging import log_singular_transform, log_transform_composed
from viewmap.anchors import Origin
from viewmap.scale import Scale, Stretch
from viewmap.scope import Scope, Whole
from viewmap.transforms import Affine2D
from viewmap.validation import (
    InvalidConfigurationError,
    SingularTransformError,
    validate_point,
    validate_viewport_size,
)

__all__ = [
    "CoordinateSystem",
    "ScaleScope",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScaleScope:
    """A :class:`~viewmap.scale.Scale` applied to a :class:`~viewmap.scope.Scope`.

    The scope carves the effective rendering area out of the viewport; the
    scale then normalizes units against that area.

    Attributes
    ----------
    scale : Scale, default=Stretch()
    scope : Scope, default=Whole()

    Examples
    --------
    >>> from viewmap import AspectRatio, Square, UnitLength
    >>> ss = ScaleScope(Square(UnitLength.WIDTH), AspectRatio(1, 1))
    >>> float(ss.output_matrix((1000, 600))[0, 0])
    600.0
    """

    scale: Scale = field(default_factory=Stretch)
    scope: Scope = field(default_factory=Whole)

    def __post_init__(self) -> None:
        if not isinstance(self.scale, Scale) or type(self.scale) is Scale:
            raise InvalidConfigurationError(
                f"[E2001] scale must be Square(...) or Stretch(), "
                f"got {type(self.scale).__name__}: {self.scale!r}"
            )
        if not isinstance(self.scope, Scope) or type(self.scope) is Scope:
            raise InvalidConfigurationError(
                f"[E2001] scope must be Whole() or AspectRatio(...), "
                f"got {type(self.scope).__name__}: {self.scope!r}"
            )

    def effective_rendering_size(self, size: tuple[float, float]) -> tuple[float, float]:
        """Effective rendering area for a viewport; see :class:`~viewmap.scope.Scope`."""
        return self.scope.effective_rendering_size(size)

    def output_matrix(self, size: tuple[float, float]) -> NDArray[np.float64]:
        """Unit-scaling matrix for a viewport of the given size.

        Parameters
        ----------
        size : tuple[float, float]
            Full viewport size as ``(width, height)``.

        Returns
        -------
        NDArray[np.float64], shape (3, 3)
            ``scale.output_matrix(scope.effective_rendering_size(size))``.
        """
        return self.scale.output_matrix(self.effective_rendering_size(size))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {"scale": self.scale.to_dict(), "scope": self.scope.to_dict()}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ScaleScope:
        """Restore from :meth:`to_dict` output."""
        if not isinstance(d, dict) or "scale" not in d or "scope" not in d:
            raise InvalidConfigurationError(
                f"[E2001] ScaleScope dict needs 'scale' and 'scope' keys, got {d!r}."
            )
        return cls(scale=Scale.from_dict(d["scale"]), scope=Scope.from_dict(d["scope"]))


def _origin_from_value(value: Any, name: str) -> Origin:
    try:
        return Origin(value)
    except ValueError as e:
        valid = [o.value for o in Origin]
        raise InvalidConfigurationError(
            f"[E2001] Unknown {name} {value!r}. Expected one of {valid}."
        ) from e


@dataclass(frozen=True, slots=True)
class CoordinateSystem:
    """Affine mapping between an input convention and viewport coordinates.

    Attributes
    ----------
    scale_scope : ScaleScope
        Unit normalization and effective rendering area.
    input_origin : Origin, default=Origin.CENTER
        Convention of input (logical) coordinates.
    output_origin : Origin, default=Origin.CENTER
        Convention of output (viewport) coordinates.

    Raises
    ------
    InvalidConfigurationError
        If a field has the wrong type.

    Notes
    -----
    Instances are immutable and hold no per-viewport state: every method
    takes the viewport size and recomputes what it needs, so concurrent use
    needs no locking.
    """

    scale_scope: ScaleScope = field(default_factory=ScaleScope)
    input_origin: Origin = Origin.CENTER
    output_origin: Origin = Origin.CENTER

    def __post_init__(self) -> None:
        if not isinstance(self.scale_scope, ScaleScope):
            raise InvalidConfigurationError(
                f"[E2001] scale_scope must be a ScaleScope, "
                f"got {type(self.scale_scope).__name__}: {self.scale_scope!r}"
            )
        for name in ("input_origin", "output_origin"):
            value = getattr(self, name)
            if not isinstance(value, Origin):
                raise InvalidConfigurationError(
                    f"[E2001] {name} must be an Origin, "
                    f"got {type(value).__name__}: {value!r}"
                )

    @classmethod
    def from_parts(
        cls,
        scale: Scale,
        scope: Scope,
        input_origin: Origin = Origin.CENTER,
        output_origin: Origin = Origin.CENTER,
    ) -> CoordinateSystem:
        """Build a coordinate system without constructing the ScaleScope by hand.

        Examples
        --------
        >>> from viewmap import Origin, Stretch, Whole
        >>> cs = CoordinateSystem.from_parts(Stretch(), Whole(), Origin.CENTER)
        >>> cs.scale_scope
        ScaleScope(scale=Stretch(), scope=Whole())
        """
        return cls(ScaleScope(scale, scope), input_origin, output_origin)

    @property
    def scale(self) -> Scale:
        return self.scale_scope.scale

    @property
    def scope(self) -> Scope:
        return self.scale_scope.scope

    # ---- pipeline ----------------------------------------------------
    def transform_stages(self, size: tuple[float, float]) -> list[tuple[str, Affine2D]]:
        """The stages of the forward transform, in the order they are applied.

        Parameters
        ----------
        size : tuple[float, float]
            Viewport size as ``(width, height)``.

        Returns
        -------
        list[tuple[str, Affine2D]]
            ``("input_origin", ...)``, ``("scale", ...)``,
            ``("anchor_offset", ...)``, ``("output_origin", ...)``.

        Raises
        ------
        InvalidViewportError
            If `size` is not a positive, finite pair.
        """
        size = validate_viewport_size(size)
        return [
            ("input_origin", self.input_origin.to_center()),
            ("scale", Affine2D(self.scale_scope.output_matrix(size))),
            ("anchor_offset", self.scope.anchor_offset_matrix(size)),
            ("output_origin", self.output_origin.viewport_from_center(size)),
        ]

    def io_transform(self, size: tuple[float, float]) -> Affine2D:
        """Forward (input → output) transform for a viewport.

        Composes :meth:`transform_stages` so the first stage is applied first.

        Raises
        ------
        InvalidViewportError
            If `size` is not a positive, finite pair.
        """
        size = validate_viewport_size(size)
        stages = self.transform_stages(size)
        composed = stages[0][1]
        for _, stage in stages[1:]:
            composed = stage @ composed
        log_transform_composed(
            size=size,
            effective_size=self.scale_scope.effective_rendering_size(size),
            input_origin=self.input_origin.value,
            output_origin=self.output_origin.value,
            matrix=composed.A,
        )
        return composed

    def io_transform_matrix(self, size: tuple[float, float]) -> NDArray[np.float64]:
        """Forward transform as a 3 × 3 homogeneous matrix.

        Examples
        --------
        >>> cs = CoordinateSystem(output_origin=Origin.BOTTOM_LEFT)
        >>> cs.io_transform_matrix((800, 600))
        array([[800.,   0., 400.],
               [  0., 600., 300.],
               [  0.,   0.,   1.]])
        """
        return np.array(self.io_transform(size).A)

    def io_affine_matrix(self, size: tuple[float, float]) -> NDArray[np.float64]:
        """Forward transform as a 2 × 3 affine matrix."""
        return self.io_transform(size).to_affine_matrix()

    def output_transform(self, size: tuple[float, float]) -> Affine2D:
        """Callable mapping arrays of input points, shape ``(..., 2)``, to output."""
        return self.io_transform(size)

    def input_transform(self, size: tuple[float, float]) -> Affine2D:
        """Callable mapping arrays of output points back to input coordinates.

        Raises
        ------
        SingularTransformError
            If the forward transform cannot be inverted.
        """
        size = validate_viewport_size(size)
        forward = self.io_transform(size)
        try:
            return forward.inverse()
        except SingularTransformError:
            log_singular_transform(size=size, det=float(np.linalg.det(forward.A)))
            raise

    # ---- points ------------------------------------------------------
    def into_output_coordinates(
        self,
        point: ArrayLike | Sequence[float],
        size: tuple[float, float],
    ) -> tuple[float, float]:
        """Map one input point to output (viewport) coordinates.

        Parameters
        ----------
        point : array-like, shape (2,)
            ``(x, y)`` in the input convention.
        size : tuple[float, float]
            Viewport size as ``(width, height)``.

        Returns
        -------
        tuple[float, float]
            ``(x, y)`` in the output convention.

        Raises
        ------
        InvalidViewportError
            If `size` or `point` is invalid.
        """
        point = validate_point(point)
        return self.io_transform(size).apply_point(point)

    def into_input_coordinates(
        self,
        point: ArrayLike | Sequence[float],
        size: tuple[float, float],
    ) -> tuple[float, float]:
        """Map one output (viewport) point back to input coordinates.

        The inverse is derived from the forward matrix on each call, so both
        directions always agree.

        Parameters
        ----------
        point : array-like, shape (2,)
            ``(x, y)`` in the output convention, e.g. a pointer position.
        size : tuple[float, float]
            Viewport size as ``(width, height)``.

        Returns
        -------
        tuple[float, float]
            ``(x, y)`` in the input convention.

        Raises
        ------
        InvalidViewportError
            If `size` or `point` is invalid.
        SingularTransformError
            If the forward transform cannot be inverted.
        """
        point = validate_point(point)
        return self.input_transform(size).apply_point(point)

    # ---- serialization -----------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict.

        Examples
        --------
        >>> CoordinateSystem().to_dict()["output_origin"]
        'center'
        """
        return {
            "scale_scope": self.scale_scope.to_dict(),
            "input_origin": self.input_origin.value,
            "output_origin": self.output_origin.value,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CoordinateSystem:
        """Restore a coordinate system from :meth:`to_dict` output.

        Raises
        ------
        InvalidConfigurationError
            If a key is missing or a value is invalid.
        """
        if not isinstance(d, dict):
            raise InvalidConfigurationError(
                f"[E2001] CoordinateSystem must be restored from a dict, "
                f"got {type(d).__name__}."
            )
        missing = {"scale_scope", "input_origin", "output_origin"} - d.keys()
        if missing:
            raise InvalidConfigurationError(
                f"[E2001] CoordinateSystem dict is missing keys: {sorted(missing)}."
            )
        coordinate_system = cls(
            scale_scope=ScaleScope.from_dict(d["scale_scope"]),
            input_origin=_origin_from_value(d["input_origin"], "input_origin"),
            output_origin=_origin_from_value(d["output_origin"], "output_origin"),
        )
        logger.debug("Restored %r from dict", coordinate_system)
        return coordinate_system
