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
"""Ball-driven robot behaviours: carrying, supporting and chasing."""
from __future__ import annotations

from gridiron.engine.behaviours.base import SteeringBehaviour, SteeringContext
from gridiron.engine.physics import EntityState, Vector2D


class CarryToGoalBehaviour(SteeringBehaviour):
    """Robot carrier running straight for the humans' end of the field."""

    def __init__(self) -> None:
        """Label the behaviour for debug traces."""
        super().__init__("carry")

    def desired_velocity(self, entity: EntityState, context: SteeringContext) -> Vector2D:
        """Head for the carry line at carry speed.

        Parameters
        ----------
        entity : EntityState
            The robot holding the ball.
        context : SteeringContext
            Tick snapshot.

        Returns
        -------
        Vector2D
            Velocity of magnitude ``carry_speed`` toward the carry target.
        """
        return self._heading(entity.position, self._goal_target(entity, context), context.movement.carry_speed)


class SupportCarrierBehaviour(SteeringBehaviour):
    """Robot teammate running alongside a robot carrier."""

    def __init__(self) -> None:
        """Label the behaviour for debug traces."""
        super().__init__("support")

    def desired_velocity(self, entity: EntityState, context: SteeringContext) -> Vector2D:
        """Head for the carry line at the slightly slower support speed.

        Parameters
        ----------
        entity : EntityState
            A robot not holding the ball while a teammate does.
        context : SteeringContext
            Tick snapshot.

        Returns
        -------
        Vector2D
            Velocity of magnitude ``support_speed`` toward the carry target.
        """
        return self._heading(entity.position, self._goal_target(entity, context), context.movement.support_speed)


class ChaseCarrierBehaviour(SteeringBehaviour):
    """Robot hunting down the human carrier."""

    def __init__(self) -> None:
        """Label the behaviour for debug traces."""
        super().__init__("chase")

    def desired_velocity(self, entity: EntityState, context: SteeringContext) -> Vector2D:
        """Head straight for the carrier at carry speed.

        Chase speed equals carry speed so neither side outruns the other.

        Parameters
        ----------
        entity : EntityState
            A robot while a human holds the ball.
        context : SteeringContext
            Tick snapshot; ``holder`` must be set.

        Returns
        -------
        Vector2D
            Velocity toward the carrier, or zero without a carrier.
        """
        if context.holder is None:
            return Vector2D(0.0, 0.0)
        return self._heading(entity.position, context.holder.position, context.movement.carry_speed)
