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
from __future__ import annotations

from typing import Dict, Optional, Type

from gridiron.engine.physics import EntityState

from .base import SteeringBehaviour, SteeringCommand, SteeringContext
from .pursuit import CarryToGoalBehaviour, ChaseCarrierBehaviour, SupportCarrierBehaviour
from .wander import AdvancingWanderBehaviour, IdleWanderBehaviour

BEHAVIOUR_CLASSES: Dict[str, Type[SteeringBehaviour]] = {
    "wander": IdleWanderBehaviour,
    "advance": AdvancingWanderBehaviour,
    "carry": CarryToGoalBehaviour,
    "support": SupportCarrierBehaviour,
    "chase": ChaseCarrierBehaviour,
}


def create_behaviour(name: str) -> SteeringBehaviour:
    """Instantiate a behaviour by its registry name.

    Parameters
    ----------
    name : str
        Key in :data:`BEHAVIOUR_CLASSES`.

    Returns
    -------
    SteeringBehaviour
        Fresh behaviour instance.

    Raises
    ------
    ValueError
        If ``name`` is not registered.
    """
    try:
        behaviour_cls = BEHAVIOUR_CLASSES[name]
    except KeyError as exc:
        known = ", ".join(sorted(BEHAVIOUR_CLASSES))
        raise ValueError(f"Unknown behaviour '{name}'. Known behaviours: {known}") from exc
    return behaviour_cls()


def behaviour_name_for(entity: EntityState, holder: Optional[EntityState]) -> str:
    """Pick the single behaviour that applies to ``entity`` this tick.

    Humans always advance; their carrier is steered by the user. Robots carry,
    support or chase depending on who holds the ball, and wander otherwise.

    Parameters
    ----------
    entity : EntityState
        Entity being steered.
    holder : EntityState | None
        Ball carrier from the start-of-tick snapshot.

    Returns
    -------
    str
        Registry name of the behaviour to run.
    """
    if entity.is_offense:
        return "advance"
    if holder is None:
        return "wander"
    if holder.is_offense:
        return "chase"
    if holder.entity_id == entity.entity_id:
        return "carry"
    return "support"


__all__ = [
    "SteeringBehaviour",
    "SteeringCommand",
    "SteeringContext",
    "IdleWanderBehaviour",
    "AdvancingWanderBehaviour",
    "CarryToGoalBehaviour",
    "SupportCarrierBehaviour",
    "ChaseCarrierBehaviour",
    "BEHAVIOUR_CLASSES",
    "create_behaviour",
    "behaviour_name_for",
]
