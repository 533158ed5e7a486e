# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Tests for physics module."""

import math

from gridiron.engine.config import FieldConfig
from gridiron.engine.physics import EntityState, Field, Vector2D


class TestVector2D:
    """Unit tests for the Vector2D helper."""

    def test_vector_arithmetic(self) -> None:
        """Add, subtract and scale vectors component-wise."""
        v1 = Vector2D(1.0, 2.0)
        v2 = Vector2D(3.0, 4.0)
        assert v1 + v2 == Vector2D(4.0, 6.0)
        assert v2 - v1 == Vector2D(2.0, 2.0)
        assert v1 * 3 == Vector2D(3.0, 6.0)

    def test_magnitude(self) -> None:
        """Compute the magnitude of a non-zero vector."""
        assert abs(Vector2D(3.0, 4.0).magnitude() - 5.0) < 1e-9

    def test_normalize(self) -> None:
        """Normalise a vector and confirm unit length and direction."""
        n = Vector2D(3.0, 4.0).normalize()
        assert abs(n.magnitude() - 1.0) < 1e-9
        assert abs(n.x - 0.6) < 1e-9 and abs(n.y - 0.8) < 1e-9

    def test_normalize_zero_vector(self) -> None:
        """Ensure normalising a zero vector yields zero components."""
        n = Vector2D(0.0, 0.0).normalize()
        assert n.x == 0.0 and n.y == 0.0

    def test_normalize_non_finite_vector(self) -> None:
        """A vector with an infinite component normalises to zero instead of NaN."""
        n = Vector2D(math.inf, 1.0).normalize()
        assert n == Vector2D(0, 0)

    def test_distance_to(self) -> None:
        """Measure distance between two distinct vectors."""
        assert abs(Vector2D(0.0, 0.0).distance_to(Vector2D(3.0, 4.0)) - 5.0) < 1e-9
        assert Vector2D(1.0, 1.0).distance_to(Vector2D(1.0, 1.0)) == 0.0

    def test_clamp_components(self) -> None:
        """Each axis is clamped on its own so diagonal speed may exceed the limit."""
        clamped = Vector2D(1.0, -0.5).clamp_components(0.35)
        assert clamped == Vector2D(0.35, -0.35)
        assert Vector2D(0.1, -0.2).clamp_components(0.35) == Vector2D(0.1, -0.2)


class TestEntityState:
    """Tests for the per-entity state container."""

    def test_is_offense(self) -> None:
        """Humans are offense, robots are not."""
        human = EntityState("H1", "offense", Vector2D(50, 50), Vector2D(0, 0))
        robot = EntityState("R1", "defense", Vector2D(50, 50), Vector2D(0, 0))
        assert human.is_offense
        assert not robot.is_offense


class TestField:
    """Tests for field bounds and bounce handling."""

    def test_is_in_bounds(self) -> None:
        """The playable rectangle is 10..90 on both axes, edges included."""
        field = Field()
        assert field.is_in_bounds(Vector2D(10, 90))
        assert field.is_in_bounds(Vector2D(50, 50))
        assert not field.is_in_bounds(Vector2D(9.9, 50))
        assert not field.is_in_bounds(Vector2D(50, 90.1))

    def test_bounce_reflects_escaping_axis_only(self) -> None:
        """Leaving the rectangle on x clamps x and negates vx, keeping vy."""
        field = Field()
        position, velocity = field.constrain_with_bounce(Vector2D(92.0, 40.0), Vector2D(0.3, -0.1))
        assert position == Vector2D(90.0, 40.0)
        assert velocity == Vector2D(-0.3, -0.1)

    def test_bounce_on_both_axes(self) -> None:
        """A corner escape reflects both components."""
        field = Field()
        position, velocity = field.constrain_with_bounce(Vector2D(5.0, 95.0), Vector2D(-0.2, 0.2))
        assert position == Vector2D(10.0, 90.0)
        assert velocity == Vector2D(0.2, -0.2)

    def test_inside_position_untouched(self) -> None:
        """Positions already inside keep their velocity."""
        field = Field()
        inside, moving = Vector2D(30.0, 70.0), Vector2D(0.1, 0.1)
        position, velocity = field.constrain_with_bounce(inside, moving)
        assert position is inside
        assert velocity is moving

    def test_constrain_to_space_allows_end_zones(self) -> None:
        """Relocation clamps to 0..100 rather than the playable rectangle."""
        field = Field()
        assert field.constrain_to_space(Vector2D(5.0, 50.0)) == Vector2D(5.0, 50.0)
        assert field.constrain_to_space(Vector2D(-3.0, 130.0)) == Vector2D(0.0, 100.0)

    def test_custom_geometry(self) -> None:
        """A field built from a custom configuration uses its limits."""
        field = Field(FieldConfig(play_min=20.0, play_max=80.0))
        position, _ = field.constrain_with_bounce(Vector2D(15.0, 85.0), Vector2D(0, 0))
        assert position == Vector2D(20.0, 80.0)
