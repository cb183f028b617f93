"""Tests for UnitLength, Direction and Origin."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from viewmap.anchors import Direction, Origin, UnitLength
from viewmap.validation import InvalidViewportError


class TestUnitLength:
    """Tests for UnitLength.select()."""

    @pytest.mark.parametrize(
        ("unit_length", "expected"),
        [
            (UnitLength.WIDTH, 800.0),
            (UnitLength.HEIGHT, 600.0),
            (UnitLength.MAX_SIDE, 800.0),
            (UnitLength.MIN_SIDE, 600.0),
        ],
    )
    def test_select_landscape(self, unit_length, expected):
        assert unit_length.select(800.0, 600.0) == expected

    def test_max_and_min_follow_orientation(self):
        """MAX_SIDE / MIN_SIDE pick by length, not by axis."""
        assert UnitLength.MAX_SIDE.select(300.0, 900.0) == 900.0
        assert UnitLength.MIN_SIDE.select(300.0, 900.0) == 300.0

    def test_values_round_trip(self):
        """Enum members restore from their string values."""
        for unit_length in UnitLength:
            assert UnitLength(unit_length.value) is unit_length


class TestDirection:
    """Tests for Direction.margin_fractions."""

    @pytest.mark.parametrize(
        ("direction", "expected"),
        [
            (Direction.CENTER, (0.0, 0.0)),
            (Direction.TOP, (0.0, 0.5)),
            (Direction.BOTTOM, (0.0, -0.5)),
            (Direction.LEFT, (-0.5, 0.0)),
            (Direction.RIGHT, (0.5, 0.0)),
        ],
    )
    def test_margin_fractions(self, direction, expected):
        assert direction.margin_fractions == expected

    def test_five_members(self):
        assert len(Direction) == 5


class TestOriginFlags:
    """Tests for the flip table."""

    @pytest.mark.parametrize(
        ("origin", "flip_x", "flip_y", "offset"),
        [
            (Origin.CENTER, False, False, (0.0, 0.0)),
            (Origin.TOP_LEFT, False, True, (-0.5, 0.5)),
            (Origin.TOP_RIGHT, True, True, (0.5, 0.5)),
            (Origin.BOTTOM_LEFT, False, False, (-0.5, -0.5)),
            (Origin.BOTTOM_RIGHT, True, False, (0.5, -0.5)),
        ],
    )
    def test_table(self, origin, flip_x, flip_y, offset):
        assert origin.flip_x is flip_x
        assert origin.flip_y is flip_y
        assert origin.corner_offset == offset


class TestOriginMatrices:
    """Tests for to_center_matrix / from_center_matrix."""

    def test_center_is_identity(self):
        """Center origin leaves coordinates unchanged."""
        assert_allclose(Origin.CENTER.to_center_matrix(), np.eye(3))
        assert_allclose(Origin.CENTER.from_center_matrix(), np.eye(3))

    def test_top_left_corner_lands_at_minus_half_plus_half(self):
        """TopLeft (0, 0) is the top-left of the center convention."""
        out = Origin.TOP_LEFT.to_center_matrix() @ np.array([0.0, 0.0, 1.0])
        assert_allclose(out, [-0.5, 0.5, 1.0])

    @pytest.mark.parametrize("origin", list(Origin))
    def test_origin_maps_to_corner_offset(self, origin):
        """Every origin's zero point lands at its corner offset."""
        out = origin.to_center_matrix() @ np.array([0.0, 0.0, 1.0])
        assert_allclose(out[:2], origin.corner_offset)

    def test_top_left_matrix_recipe(self):
        """flip_y, then half-scale, then translate."""
        expected = np.array([[0.5, 0.0, -0.5], [0.0, -0.5, 0.5], [0.0, 0.0, 1.0]])
        assert_allclose(Origin.TOP_LEFT.to_center_matrix(), expected)

    def test_bottom_right_matrix_recipe(self):
        """flip_x, then half-scale, then translate."""
        expected = np.array([[-0.5, 0.0, 0.5], [0.0, 0.5, -0.5], [0.0, 0.0, 1.0]])
        assert_allclose(Origin.BOTTOM_RIGHT.to_center_matrix(), expected)

    @pytest.mark.parametrize("origin", list(Origin))
    def test_inverse_law(self, origin):
        """to_center @ from_center is the identity, both ways round."""
        to_c = origin.to_center_matrix()
        from_c = origin.from_center_matrix()
        assert_allclose(to_c @ from_c, np.eye(3), atol=1e-12)
        assert_allclose(from_c @ to_c, np.eye(3), atol=1e-12)

    @pytest.mark.parametrize("origin", list(Origin))
    def test_closed_form_matches_numeric_inverse(self, origin):
        assert_allclose(
            origin.from_center_matrix(), np.linalg.inv(origin.to_center_matrix())
        )

    @pytest.mark.parametrize("origin", list(Origin))
    def test_affine_wrappers(self, origin):
        assert_allclose(origin.to_center().A, origin.to_center_matrix())
        assert_allclose(origin.from_center().A, origin.from_center_matrix())

    def test_top_right_axes_point_inward(self):
        """From the top-right corner, +x goes left and +y goes down."""
        m = Origin.TOP_RIGHT.to_center_matrix()
        origin_pt = m @ np.array([0.0, 0.0, 1.0])
        step = m @ np.array([1.0, 1.0, 1.0])
        assert step[0] < origin_pt[0]
        assert step[1] < origin_pt[1]


class TestViewportFromCenter:
    """Tests for Origin.viewport_from_center()."""

    SIZE = (800.0, 600.0)

    @pytest.mark.parametrize(
        ("origin", "expected"),
        [
            (Origin.CENTER, (-400.0, 300.0)),
            (Origin.TOP_LEFT, (0.0, 0.0)),
            (Origin.TOP_RIGHT, (800.0, 0.0)),
            (Origin.BOTTOM_LEFT, (0.0, 600.0)),
            (Origin.BOTTOM_RIGHT, (800.0, 600.0)),
        ],
    )
    def test_top_left_corner_of_viewport(self, origin, expected):
        """The viewport's top-left corner in each output convention."""
        out = origin.viewport_from_center(self.SIZE).apply_point((-400.0, 300.0))
        assert_allclose(out, expected, atol=1e-12)

    @pytest.mark.parametrize("origin", list(Origin))
    def test_corner_origin_is_zero(self, origin):
        """Each origin's own corner maps to (0, 0)."""
        tx, ty = origin.corner_offset
        corner = (tx * self.SIZE[0], ty * self.SIZE[1])
        out = origin.viewport_from_center(self.SIZE).apply_point(corner)
        assert_allclose(out, (0.0, 0.0), atol=1e-12)

    @pytest.mark.parametrize("origin", list(Origin))
    def test_matches_scaled_from_center(self, origin):
        """Equals D @ H @ from_center_matrix @ inv(D)."""
        D = np.diag([self.SIZE[0], self.SIZE[1], 1.0])
        half = 1.0 if origin is Origin.CENTER else 0.5
        H = np.diag([half, half, 1.0])
        expected = D @ H @ origin.from_center_matrix() @ np.linalg.inv(D)
        assert_allclose(origin.viewport_from_center(self.SIZE).A, expected)

    def test_rejects_invalid_size(self):
        with pytest.raises(InvalidViewportError, match=r"\[E2002\]"):
            Origin.TOP_LEFT.viewport_from_center((0.0, 600.0))
