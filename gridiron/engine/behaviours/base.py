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
"""Shared scaffolding for the per-entity steering behaviours."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from gridiron.engine.config import FieldConfig, MovementConfig
from gridiron.engine.physics import EntityState, Vector2D

if TYPE_CHECKING:
    from gridiron.engine.formation import Orientation


@dataclass
class SteeringCommand:
    """Velocity update produced for one entity on one tick.

    Parameters
    ----------
    velocity : Vector2D
        Capped velocity the entity should carry into the next tick.
    drift : Vector2D
        Extra displacement added to the position this tick only.
    """

    velocity: Vector2D
    drift: Vector2D


@dataclass
class SteeringContext:
    """Snapshot of the state every behaviour reads during one tick.

    The snapshot is taken before any entity moves so every behaviour sees the
    same holder and the same positions regardless of iteration order.

    Parameters
    ----------
    holder : EntityState | None
        Entity carrying the ball at the start of the tick.
    orientation : Orientation
        Field orientation used to resolve attacking directions.
    rng : random.Random
        Random source for wander jitter.
    movement : MovementConfig
        Speed tuning.
    geometry : FieldConfig
        Field geometry (used for the carry target).
    """

    holder: Optional[EntityState]
    orientation: "Orientation"
    rng: random.Random
    movement: MovementConfig
    geometry: FieldConfig


class SteeringBehaviour:
    """Base class for the mutually exclusive per-tick behaviours.

    Parameters
    ----------
    name : str
        Short label written to debug traces.
    """

    def __init__(self, name: str) -> None:
        """Store the behaviour label.

        Parameters
        ----------
        name : str
            Short label written to debug traces.
        """
        self.name = name

    def desired_velocity(self, entity: EntityState, context: SteeringContext) -> Vector2D:
        """Return the velocity this behaviour wants before separation and capping.

        Parameters
        ----------
        entity : EntityState
            Entity being steered.
        context : SteeringContext
            Tick snapshot.

        Returns
        -------
        Vector2D
            Uncapped velocity; the base behaviour keeps the current one.
        """
        return Vector2D(entity.velocity.x, entity.velocity.y)

    def drift(self, entity: EntityState, context: SteeringContext) -> Vector2D:
        """Return the per-tick positional drift for ``entity``.

        Parameters
        ----------
        entity : EntityState
            Entity being steered.
        context : SteeringContext
            Tick snapshot.

        Returns
        -------
        Vector2D
            Zero unless a subclass overrides it.
        """
        return Vector2D(0.0, 0.0)

    # ==================== HELPER METHODS ====================

    def _heading(self, origin: Vector2D, target: Vector2D, speed: float) -> Vector2D:
        """Return a velocity of magnitude ``speed`` from ``origin`` toward ``target``.

        Parameters
        ----------
        origin : Vector2D
            Start point.
        target : Vector2D
            Point to head toward.
        speed : float
            Desired magnitude.

        Returns
        -------
        Vector2D
            Scaled unit vector; zero when the points coincide.
        """
        return (target - origin).normalize() * speed

    def _goal_target(self, entity: EntityState, context: SteeringContext) -> Vector2D:
        """Return the robots' carry target as seen from ``entity``.

        Parameters
        ----------
        entity : EntityState
            Entity whose cross-axis coordinate is kept.
        context : SteeringContext
            Tick snapshot providing orientation and geometry.

        Returns
        -------
        Vector2D
            Point on the carry line level with the entity.
        """
        target = context.geometry.carry_target
        if context.orientation == "portrait":
            return Vector2D(entity.position.x, target)
        return Vector2D(target, entity.position.y)
