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
"""Per-tick steering: behaviour selection, separation and speed capping.

Every command for a tick is computed from the same start-of-tick snapshot and
only then handed to the :class:`~gridiron.engine.entity_store.EntityStore`, so
the result does not depend on the order entities are visited in.
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional

from gridiron.engine.behaviours import (
    BEHAVIOUR_CLASSES,
    SteeringBehaviour,
    SteeringCommand,
    SteeringContext,
    behaviour_name_for,
    create_behaviour,
)
from gridiron.engine.config import ENGINE_CONFIG, EngineConfig
from gridiron.engine.entity_store import EntityStore
from gridiron.engine.formation import Orientation
from gridiron.engine.physics import EntityState, Vector2D


class SteeringEngine:
    """Computes the next velocity of every entity.

    Parameters
    ----------
    config : EngineConfig | None, optional
        Tuning override; defaults to the global engine configuration.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        """Instantiate one behaviour object per registered behaviour.

        Parameters
        ----------
        config : EngineConfig | None, optional
            Tuning override; defaults to the global engine configuration.
        """
        self.config = config or ENGINE_CONFIG
        self.behaviours: Dict[str, SteeringBehaviour] = {name: create_behaviour(name) for name in BEHAVIOUR_CLASSES}
        self.last_behaviours: Dict[str, str] = {}

    def compute_commands(
        self,
        store: EntityStore,
        holder: Optional[EntityState],
        orientation: Orientation,
        rng: random.Random,
    ) -> Dict[str, SteeringCommand]:
        """Work out the velocity update for every entity without moving anyone.

        Parameters
        ----------
        store : EntityStore
            Live entities (read only here).
        holder : EntityState | None
            Ball carrier at the start of the tick.
        orientation : Orientation
            Current field orientation.
        rng : random.Random
            Random source for wander jitter.

        Returns
        -------
        Dict[str, SteeringCommand]
            Command per entity id.
        """
        context = SteeringContext(
            holder=holder,
            orientation=orientation,
            rng=rng,
            movement=self.config.movement,
            geometry=self.config.geometry,
        )
        cap = self.config.movement.idle_max
        commands: Dict[str, SteeringCommand] = {}
        self.last_behaviours = {}

        for entity in store.all_entities():
            name = behaviour_name_for(entity, holder)
            behaviour = self.behaviours[name]
            self.last_behaviours[entity.entity_id] = name

            velocity = behaviour.desired_velocity(entity, context)
            velocity = velocity + self.separation(entity, store.members(entity.team))
            commands[entity.entity_id] = SteeringCommand(
                velocity=velocity.clamp_components(cap),
                drift=behaviour.drift(entity, context),
            )

        return commands

    def separation(self, entity: EntityState, teammates: List[EntityState]) -> Vector2D:
        """Sum the repulsion from teammates closer than the separation radius.

        Each neighbour pushes along the line joining the two entities with a
        strength that falls linearly from ``strength`` at contact to zero at
        ``radius``. Teammates sharing the exact same spot exert no force.

        Parameters
        ----------
        entity : EntityState
            Entity being pushed.
        teammates : List[EntityState]
            Members of the entity's team (the entity itself is skipped).

        Returns
        -------
        Vector2D
            Total repulsion to add to the velocity.
        """
        cfg = self.config.separation
        push = Vector2D(0.0, 0.0)
        for other in teammates:
            if other.entity_id == entity.entity_id:
                continue
            offset = entity.position - other.position
            distance = offset.magnitude()
            if 0 < distance < cfg.radius:
                force = cfg.strength * (cfg.radius - distance) / cfg.radius
                push = push + offset.normalize() * force
        return push

    def step(
        self,
        store: EntityStore,
        holder: Optional[EntityState],
        orientation: Orientation,
        rng: random.Random,
    ) -> Dict[str, SteeringCommand]:
        """Compute every command and apply them to the store.

        Parameters
        ----------
        store : EntityStore
            Live entities; moved in place.
        holder : EntityState | None
            Ball carrier at the start of the tick.
        orientation : Orientation
            Current field orientation.
        rng : random.Random
            Random source for wander jitter.

        Returns
        -------
        Dict[str, SteeringCommand]
            The commands that were applied.
        """
        commands = self.compute_commands(store, holder, orientation, rng)
        store.advance_tick(commands)
        return commands
