"""viewmap: affine coordinate mapping between logical space and viewports.

Content authored in one normalized coordinate convention is mapped onto a
pixel viewport of any size and aspect ratio, and pointer/device positions are
mapped back.

Building blocks
---------------
- :class:`UnitLength`, :class:`Direction`, :class:`Origin` - configuration tags
- :class:`Square`, :class:`Stretch` - unit-length policies (:class:`Scale`)
- :class:`Whole`, :class:`AspectRatio` - rendering area policies (:class:`Scope`)
- :class:`ScaleScope` - a scale applied to a scope
- :class:`CoordinateSystem` - the full input ↔ output mapping
- :class:`Affine2D` - 3 × 3 homogeneous transform value type

Examples
--------
Place the bottom-left corner of a square logical field, one unit tall, in a
1280 × 720 window that keeps a 4:3 content area::

    >>> from viewmap import (
    ...     AspectRatio, CoordinateSystem, Origin, Square, UnitLength,
    ... )
    >>> cs = CoordinateSystem.from_parts(
    ...     Square(UnitLength.HEIGHT),
    ...     AspectRatio(4, 3),
    ...     input_origin=Origin.BOTTOM_LEFT,
    ...     output_origin=Origin.TOP_LEFT,
    ... )
    >>> cs.into_output_coordinates((0.0, 0.0), (1280, 720))
    (280.0, 720.0)
"""

import logging

from viewmap.anchors import Direction, Origin, UnitLength
from viewmap.coordinate_system import CoordinateSystem, ScaleScope
from viewmap.scale import Scale, Square, Stretch
from viewmap.scope import AspectRatio, Scope, Whole
from viewmap.transforms import Affine2D
from viewmap.validation import (
    InvalidConfigurationError,
    InvalidViewportError,
    SingularTransformError,
)

# Add NullHandler to prevent "No handler found" warnings if user doesn't configure logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Affine2D",
    "AspectRatio",
    "CoordinateSystem",
    "Direction",
    "InvalidConfigurationError",
    "InvalidViewportError",
    "Origin",
    "Scale",
    "ScaleScope",
    "Scope",
    "SingularTransformError",
    "Square",
    "Stretch",
    "UnitLength",
    "Whole",
]
