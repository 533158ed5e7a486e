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
"""Kickoff formations and orientation-dependent attacking directions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from gridiron.engine.config import ENGINE_CONFIG, FormationConfig
from gridiron.engine.physics import Vector2D
from gridiron.models.team import Side

Orientation = Literal["landscape", "portrait"]
ORIENTATIONS: Tuple[Orientation, ...] = ("landscape", "portrait")


@dataclass(frozen=True)
class FormationAnchors:
    """Starting slots for both teams in one orientation.

    Parameters
    ----------
    offense : Tuple[Vector2D, ...]
        Human slots in entity id order.
    defense : Tuple[Vector2D, ...]
        Robot slots in entity id order.
    """

    offense: Tuple[Vector2D, ...]
    defense: Tuple[Vector2D, ...]

    def for_side(self, side: Side) -> Tuple[Vector2D, ...]:
        """Return the anchors belonging to ``side``.

        Parameters
        ----------
        side : Side
            Team whose slots are requested.

        Returns
        -------
        Tuple[Vector2D, ...]
            Anchor points in entity id order.
        """
        return self.offense if side == "offense" else self.defense


def get_formation(orientation: Orientation, config: Optional[FormationConfig] = None) -> FormationAnchors:
    """Look up the kickoff anchors for an orientation.

    Parameters
    ----------
    orientation : Orientation
        ``"landscape"`` or ``"portrait"``.
    config : FormationConfig | None, optional
        Anchor table override; defaults to the engine configuration.

    Returns
    -------
    FormationAnchors
        Fresh vectors for both teams; callers may mutate them freely.

    Raises
    ------
    ValueError
        If ``orientation`` is not recognised.
    """
    cfg = config or ENGINE_CONFIG.formation
    if orientation == "landscape":
        offense, defense = cfg.landscape_offense, cfg.landscape_defense
    elif orientation == "portrait":
        offense, defense = cfg.portrait_offense, cfg.portrait_defense
    else:
        known = ", ".join(ORIENTATIONS)
        raise ValueError(f"Unknown orientation '{orientation}'. Known orientations: {known}")

    return FormationAnchors(
        offense=tuple(Vector2D(x, y) for x, y in offense),
        defense=tuple(Vector2D(x, y) for x, y in defense),
    )


def attacking_axis(orientation: Orientation) -> str:
    """Return the coordinate name along which the teams attack.

    Parameters
    ----------
    orientation : Orientation
        Current field orientation.

    Returns
    -------
    str
        ``"x"`` in landscape, ``"y"`` in portrait.
    """
    return "y" if orientation == "portrait" else "x"


def attacking_direction(side: Side, orientation: Orientation) -> Vector2D:
    """Return the unit vector pointing at ``side``'s scoring end zone.

    Parameters
    ----------
    side : Side
        Team whose direction is requested.
    orientation : Orientation
        Current field orientation.

    Returns
    -------
    Vector2D
        Offense heads toward lower coordinates, defense toward higher ones.
    """
    sign = -1.0 if side == "offense" else 1.0
    if attacking_axis(orientation) == "x":
        return Vector2D(sign, 0.0)
    return Vector2D(0.0, sign)
