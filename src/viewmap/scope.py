"""Effective rendering area policies.

A :class:`Scope` decides which part of the viewport content is drawn into:

- :class:`Whole` - the viewport as-is.
- :class:`AspectRatio` - the largest area of a fixed ``w:h`` ratio that fits
  inside the viewport, anchored by a :class:`~viewmap.anchors.Direction`.
  The leftover space forms letterbox (top/bottom) or pillarbox (left/right)
  margins.

Examples
--------
>>> from viewmap.anchors import Direction
>>> from viewmap.scope import AspectRatio
>>> scope = AspectRatio(4, 3, Direction.CENTER)
>>> scope.effective_rendering_size((1000, 600))
(800.0, 600.0)
>>> scope.effective_rendering_rect((1000, 600))
(100.0, 0.0, 800.0, 600.0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from viewmap.anchors import Direction
from viewmap.transforms import Affine2D, translate
from viewmap.validation import (
    InvalidConfigurationError,
    validate_aspect_ratio,
    validate_viewport_size,
)

__all__ = [
    "AspectRatio",
    "Scope",
    "Whole",
    "anchor_offset",
]


def anchor_offset(
    size: tuple[float, float],
    effective_size: tuple[float, float],
    anchor: Direction,
) -> tuple[float, float]:
    """Displacement of an anchored area's center from the viewport center.

    Parameters
    ----------
    size : tuple[float, float]
        Viewport size as ``(width, height)``.
    effective_size : tuple[float, float]
        Size of the area placed inside the viewport.
    anchor : Direction
        How the unused margin is distributed.

    Returns
    -------
    tuple[float, float]
        ``(dx, dy)`` in viewport units, center convention (+y up).

    Examples
    --------
    Pillarbox of 200 px total, pushed against the left edge:

    >>> anchor_offset((1000, 600), (800, 600), Direction.LEFT)
    (-100.0, 0.0)
    """
    fx, fy = anchor.margin_fractions
    margin_x = size[0] - effective_size[0]
    margin_y = size[1] - effective_size[1]
    # 0.0 + avoids returning -0.0 for an empty margin
    return (0.0 + fx * margin_x, 0.0 + fy * margin_y)


@dataclass(frozen=True, slots=True)
class Scope:
    """Base class of the rendering area policies. Use a concrete subclass."""

    def effective_rendering_size(self, size: tuple[float, float]) -> tuple[float, float]:
        """Size of the area content is rendered into.

        Parameters
        ----------
        size : tuple[float, float]
            Viewport size as ``(width, height)``.

        Returns
        -------
        tuple[float, float]
            Effective ``(width, height)``, never larger than `size`.

        Raises
        ------
        InvalidViewportError
            If `size` is not a positive, finite pair.
        """
        raise NotImplementedError

    def anchor_offset(self, size: tuple[float, float]) -> tuple[float, float]:
        """Displacement of the effective area's center from the viewport center.

        See :func:`anchor_offset`.
        """
        raise NotImplementedError

    def anchor_offset_matrix(self, size: tuple[float, float]) -> Affine2D:
        """Translation by :meth:`anchor_offset`."""
        return translate(*self.anchor_offset(size))

    def effective_rendering_rect(
        self, size: tuple[float, float]
    ) -> tuple[float, float, float, float]:
        """The effective area as a rectangle of the viewport.

        Returns
        -------
        tuple[float, float, float, float]
            ``(x, y, width, height)`` with the origin at the viewport's top-left
            corner and y growing downward, as windowing toolkits expect.
        """
        width, height = validate_viewport_size(size)
        eff_w, eff_h = self.effective_rendering_size((width, height))
        dx, dy = self.anchor_offset((width, height))
        x = (width - eff_w) / 2.0 + dx
        y = (height - eff_h) / 2.0 - dy
        return (x, y, eff_w, eff_h)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        raise NotImplementedError

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Scope:
        """Restore a scope from :meth:`to_dict` output.

        Raises
        ------
        InvalidConfigurationError
            If ``d["kind"]`` is missing or unknown, or a field is invalid.

        Examples
        --------
        >>> Scope.from_dict({"kind": "whole"})
        Whole()
        """
        if not isinstance(d, dict):
            raise InvalidConfigurationError(
                f"[E2001] Scope must be restored from a dict, got {type(d).__name__}."
            )
        kind = d.get("kind")
        if kind == "whole":
            return Whole()
        if kind == "aspect_ratio":
            try:
                anchor = Direction(d.get("anchor", Direction.CENTER.value))
            except ValueError as e:
                valid = [a.value for a in Direction]
                raise InvalidConfigurationError(
                    f"[E2001] Unknown anchor {d.get('anchor')!r}. "
                    f"Expected one of {valid}."
                ) from e
            return AspectRatio(d.get("aspect_w"), d.get("aspect_h"), anchor)
        raise InvalidConfigurationError(
            f"[E2001] Unknown scope kind {kind!r}. Expected 'whole' or 'aspect_ratio'."
        )


@dataclass(frozen=True, slots=True)
class Whole(Scope):
    """Use the full viewport."""

    def effective_rendering_size(self, size: tuple[float, float]) -> tuple[float, float]:
        return validate_viewport_size(size)

    def anchor_offset(self, size: tuple[float, float]) -> tuple[float, float]:
        validate_viewport_size(size)
        return (0.0, 0.0)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "whole"}


@dataclass(frozen=True, slots=True)
class AspectRatio(Scope):
    """Largest ``aspect_w:aspect_h`` area that fits in the viewport.

    Attributes
    ----------
    aspect_w : float
        Width term of the ratio. Finite and positive.
    aspect_h : float
        Height term of the ratio. Finite and positive.
    anchor : Direction, default=Direction.CENTER
        Where the area sits when the viewport has a different ratio.

    Raises
    ------
    InvalidConfigurationError
        If a ratio term is not a finite positive number, or `anchor` is not a
        :class:`~viewmap.anchors.Direction`.

    Notes
    -----
    A viewport whose ratio matches exactly is treated as height-limited; the
    result is the same either way up to rounding, and the choice keeps it
    deterministic.
    """

    aspect_w: float
    aspect_h: float
    anchor: Direction = Direction.CENTER

    def __post_init__(self) -> None:
        aspect_w, aspect_h = validate_aspect_ratio(self.aspect_w, self.aspect_h)
        if not isinstance(self.anchor, Direction):
            raise InvalidConfigurationError(
                f"[E2001] anchor must be a Direction, "
                f"got {type(self.anchor).__name__}: {self.anchor!r}"
            )
        object.__setattr__(self, "aspect_w", aspect_w)
        object.__setattr__(self, "aspect_h", aspect_h)

    def is_width_limited(self, size: tuple[float, float]) -> bool:
        """True when the viewport is too narrow for the ratio (letterbox)."""
        width, height = validate_viewport_size(size)
        return width / self.aspect_w < height / self.aspect_h

    def effective_rendering_size(self, size: tuple[float, float]) -> tuple[float, float]:
        width, height = validate_viewport_size(size)
        if self.is_width_limited((width, height)):
            return (width, self.aspect_h * width / self.aspect_w)
        return (self.aspect_w * height / self.aspect_h, height)

    def anchor_offset(self, size: tuple[float, float]) -> tuple[float, float]:
        width, height = validate_viewport_size(size)
        effective_size = self.effective_rendering_size((width, height))
        return anchor_offset((width, height), effective_size, self.anchor)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "aspect_ratio",
            "aspect_w": self.aspect_w,
            "aspect_h": self.aspect_h,
            "anchor": self.anchor.value,
        }
