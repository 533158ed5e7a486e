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
"""Authoritative collection of the players on the field."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from gridiron.engine.behaviours.base import SteeringCommand
from gridiron.engine.config import ENGINE_CONFIG, MovementConfig
from gridiron.engine.formation import FormationAnchors
from gridiron.engine.physics import EntityState, Field, Vector2D
from gridiron.models.team import Side, Team

if TYPE_CHECKING:
    from gridiron.engine.possession import PossessionTracker


class EntityStore:
    """Mutable offense and defense rosters.

    Ids are derived from the teams once and never change; each kickoff
    replaces every :class:`EntityState` with a fresh one at its formation slot.

    Parameters
    ----------
    humans : Team
        Offense squad providing ids and display profiles.
    robots : Team
        Defense squad providing ids.
    field : Field | None, optional
        Bounds used for clamping; defaults to the configured field.
    movement : MovementConfig | None, optional
        Speed tuning override; defaults to the engine configuration.
    """

    def __init__(
        self,
        humans: Team,
        robots: Team,
        field: Optional[Field] = None,
        movement: Optional[MovementConfig] = None,
    ) -> None:
        """Create an empty store bound to two teams.

        Parameters
        ----------
        humans : Team
            Offense squad providing ids and display profiles.
        robots : Team
            Defense squad providing ids.
        field : Field | None, optional
            Bounds used for clamping; defaults to the configured field.
        movement : MovementConfig | None, optional
            Speed tuning override; defaults to the engine configuration.
        """
        self.humans = humans
        self.robots = robots
        self.field = field or Field()
        self.movement = movement or ENGINE_CONFIG.movement
        self.offense: List[EntityState] = []
        self.defense: List[EntityState] = []

    # --- lifecycle ---------------------------------------------------------------
    def place_formation(self, anchors: FormationAnchors, rng: random.Random) -> None:
        """Rebuild both rosters at their formation slots with small random velocities.

        Parameters
        ----------
        anchors : FormationAnchors
            Slots for the current orientation.
        rng : random.Random
            Random source for the initial velocities.
        """
        self.offense = self._build_side(self.humans, anchors.for_side(self.humans.side), rng)
        self.defense = self._build_side(self.robots, anchors.for_side(self.robots.side), rng)

    def reset_kickoff(
        self,
        anchors: FormationAnchors,
        possession: "PossessionTracker",
        rng: random.Random,
    ) -> Optional[str]:
        """Place both teams in formation and hand the ball to a random entity.

        Parameters
        ----------
        anchors : FormationAnchors
            Slots for the current orientation.
        possession : PossessionTracker
            Tracker that receives the new holder.
        rng : random.Random
            Random source for velocities and the holder draw.

        Returns
        -------
        Optional[str]
            Id of the new holder.
        """
        self.place_formation(anchors, rng)
        return possession.assign_kickoff(self, rng)

    def _build_side(self, team: Team, slots: Tuple[Vector2D, ...], rng: random.Random) -> List[EntityState]:
        """Create fresh entity states for one team.

        Parameters
        ----------
        team : Team
            Squad supplying ids and profiles.
        slots : Tuple[Vector2D, ...]
            Formation slots in id order.
        rng : random.Random
            Random source for the initial velocities.

        Returns
        -------
        List[EntityState]
            One entity per slot.
        """
        spread = self.movement.initial_velocity
        entities: List[EntityState] = []
        for index, (entity_id, slot) in enumerate(zip(team.entity_ids(), slots)):
            velocity = Vector2D(rng.uniform(-spread, spread), rng.uniform(-spread, spread))
            entities.append(
                EntityState(
                    entity_id=entity_id,
                    team=team.side,
                    position=Vector2D(slot.x, slot.y),
                    velocity=velocity,
                    profile=team.profile_for(index),
                )
            )
        return entities

    # --- movement ----------------------------------------------------------------
    def advance_tick(self, commands: Dict[str, SteeringCommand]) -> None:
        """Apply one tick of steering output and keep everyone on the field.

        Entities without a command keep their velocity and move by it.

        Parameters
        ----------
        commands : Dict[str, SteeringCommand]
            Velocity and drift per entity id.
        """
        for entity in self.all_entities():
            command = commands.get(entity.entity_id)
            if command is None:
                velocity = entity.velocity
                drift = Vector2D(0.0, 0.0)
            else:
                velocity = command.velocity
                drift = command.drift
            moved = entity.position + velocity + drift
            entity.position, entity.velocity = self.field.constrain_with_bounce(moved, velocity)

    def relocate(self, entity_id: str, x: float, y: float) -> bool:
        """Teleport an entity, clamped to the coordinate space.

        No collision check is made against other entities.

        Parameters
        ----------
        entity_id : str
            Entity to move.
        x : float
            Requested horizontal coordinate.
        y : float
            Requested vertical coordinate.

        Returns
        -------
        bool
            ``False`` when the id is unknown.
        """
        entity = self.get(entity_id)
        if entity is None:
            return False
        entity.position = self.field.constrain_to_space(Vector2D(x, y))
        return True

    # --- lookups -----------------------------------------------------------------
    def all_entities(self) -> List[EntityState]:
        """Return offense followed by defense.

        Returns
        -------
        List[EntityState]
            Combined roster in a stable order.
        """
        return [*self.offense, *self.defense]

    def ids(self) -> List[str]:
        """Return every live entity id.

        Returns
        -------
        List[str]
            Ids in roster order.
        """
        return [entity.entity_id for entity in self.all_entities()]

    def get(self, entity_id: Optional[str]) -> Optional[EntityState]:
        """Look up an entity by id.

        Parameters
        ----------
        entity_id : str | None
            Id to resolve.

        Returns
        -------
        Optional[EntityState]
            Matching entity, or ``None``.
        """
        if entity_id is None:
            return None
        return next((e for e in self.all_entities() if e.entity_id == entity_id), None)

    def team_of(self, entity_id: str) -> Optional[Side]:
        """Return which side an entity plays for.

        Parameters
        ----------
        entity_id : str
            Id to resolve.

        Returns
        -------
        Optional[Side]
            ``"offense"`` or ``"defense"``, or ``None`` for unknown ids.
        """
        entity = self.get(entity_id)
        return entity.team if entity is not None else None

    def members(self, side: Side) -> List[EntityState]:
        """Return the live entities of one team.

        Parameters
        ----------
        side : Side
            Team to list.

        Returns
        -------
        List[EntityState]
            The team's entities in id order.
        """
        return self.offense if side == "offense" else self.defense
