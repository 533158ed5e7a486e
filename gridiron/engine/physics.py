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
"""Low-level physics primitives used by the match engine.

The physics layer provides a small vector maths helper, the per-entity state
container, and a field representation that knows the playable rectangle. All
coordinates are normalised to ``0..100`` on both axes so the simulation is
independent of the on-screen size of the field.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from gridiron.engine.config import ENGINE_CONFIG, FieldConfig
from gridiron.models.player import PlayerProfile
from gridiron.models.team import Side


@dataclass
class Vector2D:
    """Two-dimensional vector with convenience operations.

    Parameters
    ----------
    x : float
        Horizontal component in normalised field units.
    y : float
        Vertical component in normalised field units.
    """

    x: float
    y: float

    def __add__(self, other: "Vector2D") -> "Vector2D":
        """Return the vector sum of ``self`` and ``other``.

        Parameters
        ----------
        other : Vector2D
            Vector added component-wise.

        Returns
        -------
        Vector2D
            Component-wise sum.
        """
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        """Return the vector difference ``self - other``.

        Parameters
        ----------
        other : Vector2D
            Vector subtracted component-wise.

        Returns
        -------
        Vector2D
            Component-wise difference.
        """
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2D":
        """Scale the vector by ``scalar`` while preserving direction.

        Parameters
        ----------
        scalar : float
            Factor applied to both components.

        Returns
        -------
        Vector2D
            Scaled vector.
        """
        return Vector2D(self.x * scalar, self.y * scalar)

    def magnitude(self) -> float:
        """Return the Euclidean length of the vector.

        Returns
        -------
        float
            Scalar magnitude in field units.
        """
        return math.hypot(self.x, self.y)

    def normalize(self) -> "Vector2D":
        """Return a unit vector pointing in the same direction as ``self``.

        Returns
        -------
        Vector2D
            Normalised vector; zero vector when ``self`` has no magnitude.
        """
        mag = self.magnitude()
        if mag == 0 or not math.isfinite(mag):
            return Vector2D(0, 0)
        return Vector2D(self.x / mag, self.y / mag)

    def distance_to(self, other: "Vector2D") -> float:
        """Return the straight-line distance between ``self`` and ``other``.

        Parameters
        ----------
        other : Vector2D
            Vector whose separation from ``self`` should be measured.

        Returns
        -------
        float
            Euclidean distance between the two points.
        """
        return (other - self).magnitude()

    def clamp_components(self, limit: float) -> "Vector2D":
        """Clamp each component independently to ``[-limit, limit]``.

        Parameters
        ----------
        limit : float
            Largest absolute value allowed on either axis.

        Returns
        -------
        Vector2D
            Vector whose components lie within the limit.
        """
        return Vector2D(max(-limit, min(limit, self.x)), max(-limit, min(limit, self.y)))


@dataclass
class EntityState:
    """Mutable state for a single player on the field.

    Parameters
    ----------
    entity_id : str
        Stable identifier (``"H1"`` for humans, ``"R1"`` for robots).
    team : Side
        ``"offense"`` for humans, ``"defense"`` for robots.
    position : Vector2D
        Current position in normalised field coordinates.
    velocity : Vector2D
        Per-tick displacement.
    profile : PlayerProfile | None, optional
        Display identity for humans; robots have none.
    """

    entity_id: str
    team: Side
    position: Vector2D
    velocity: Vector2D
    profile: Optional[PlayerProfile] = None

    @property
    def is_offense(self) -> bool:
        """Return ``True`` for human entities."""
        return self.team == "offense"


class Field:
    """Normalised playing surface with end zones at both ends.

    The playable rectangle excludes the two end zones, each ``play_min`` wide.
    Entities are kept inside it by :meth:`constrain_with_bounce`; user
    relocation only has to stay within the full coordinate space.

    Parameters
    ----------
    config : FieldConfig | None, optional
        Geometry override; defaults to the engine configuration.
    """

    def __init__(self, config: Optional[FieldConfig] = None) -> None:
        """Capture the geometry used for clamping.

        Parameters
        ----------
        config : FieldConfig | None, optional
            Geometry override; defaults to the engine configuration.
        """
        cfg = config or ENGINE_CONFIG.geometry
        self.size = cfg.size
        self.play_min = cfg.play_min
        self.play_max = cfg.play_max

    def is_in_bounds(self, position: Vector2D) -> bool:
        """Check if position lies within the playable rectangle.

        Parameters
        ----------
        position : Vector2D
            Location to check.

        Returns
        -------
        bool
            ``True`` when both coordinates lie within ``play_min..play_max``.
        """
        return self.play_min <= position.x <= self.play_max and self.play_min <= position.y <= self.play_max

    def constrain_with_bounce(self, position: Vector2D, velocity: Vector2D) -> Tuple[Vector2D, Vector2D]:
        """Clamp a position to the playable rectangle and reflect off the walls.

        Parameters
        ----------
        position : Vector2D
            Position after integration, possibly outside the rectangle.
        velocity : Vector2D
            Velocity that produced ``position``.

        Returns
        -------
        Tuple[Vector2D, Vector2D]
            Clamped position and the velocity with escaping axes negated.
        """
        if self.is_in_bounds(position):
            return position, velocity

        vx, vy = velocity.x, velocity.y
        if position.x < self.play_min or position.x > self.play_max:
            vx = -vx
        if position.y < self.play_min or position.y > self.play_max:
            vy = -vy
        clamped = Vector2D(
            max(self.play_min, min(self.play_max, position.x)),
            max(self.play_min, min(self.play_max, position.y)),
        )
        return clamped, Vector2D(vx, vy)

    def constrain_to_space(self, position: Vector2D) -> Vector2D:
        """Clamp a position to the full ``0..size`` coordinate space.

        Parameters
        ----------
        position : Vector2D
            Requested location, for example from a mouse click.

        Returns
        -------
        Vector2D
            Location guaranteed to lie on the field, end zones included.
        """
        return Vector2D(
            max(0.0, min(self.size, position.x)),
            max(0.0, min(self.size, position.y)),
        )
