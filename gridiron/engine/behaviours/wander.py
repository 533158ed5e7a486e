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
"""Idle wandering for entities without a ball-related job."""
from __future__ import annotations

from gridiron.engine.behaviours.base import SteeringBehaviour, SteeringContext
from gridiron.engine.formation import attacking_direction
from gridiron.engine.physics import EntityState, Vector2D


class IdleWanderBehaviour(SteeringBehaviour):
    """Random walk whose velocity accumulates small jitter every tick.

    Parameters
    ----------
    name : str, optional
        Label written to debug traces.
    """

    def __init__(self, name: str = "wander") -> None:
        """Label the behaviour for debug traces.

        Parameters
        ----------
        name : str, optional
            Label written to debug traces.
        """
        super().__init__(name)

    def desired_velocity(self, entity: EntityState, context: SteeringContext) -> Vector2D:
        """Add uniform jitter to the current velocity on both axes.

        Parameters
        ----------
        entity : EntityState
            Entity being steered.
        context : SteeringContext
            Tick snapshot providing the random source and jitter width.

        Returns
        -------
        Vector2D
            Current velocity nudged by at most half the jitter width per axis.
        """
        half = context.movement.wander_jitter / 2
        return Vector2D(
            entity.velocity.x + context.rng.uniform(-half, half),
            entity.velocity.y + context.rng.uniform(-half, half),
        )


class AdvancingWanderBehaviour(IdleWanderBehaviour):
    """Wander plus a constant drift toward the end zone.

    Humans are never steered toward the ball; their forward progress comes
    from this drift together with passes and click-to-move.
    """

    def __init__(self) -> None:
        """Label the behaviour for debug traces."""
        super().__init__("advance")

    def drift(self, entity: EntityState, context: SteeringContext) -> Vector2D:
        """Return the constant drift toward the entity's scoring end zone.

        Parameters
        ----------
        entity : EntityState
            Entity being steered.
        context : SteeringContext
            Tick snapshot providing orientation and drift speed.

        Returns
        -------
        Vector2D
            Drift of ``movement.drift`` along the attacking axis.
        """
        return attacking_direction(entity.team, context.orientation) * context.movement.drift
