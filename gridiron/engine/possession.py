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
"""Ball ownership: kickoff draws, manual passes and proximity tags."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Optional

from gridiron.engine.config import ENGINE_CONFIG, PossessionConfig
from gridiron.engine.physics import EntityState

if TYPE_CHECKING:
    from gridiron.engine.entity_store import EntityStore


class PossessionTracker:
    """Single nullable reference to the ball carrier.

    The tracker also remembers which human is *selected* for click-to-move
    control. Only ids are stored so a kickoff that rebuilds every entity never
    leaves a stale reference behind.

    Parameters
    ----------
    config : PossessionConfig | None, optional
        Tag radius override; defaults to the engine configuration.
    """

    def __init__(self, config: Optional[PossessionConfig] = None) -> None:
        """Start with nobody holding the ball.

        Parameters
        ----------
        config : PossessionConfig | None, optional
            Tag radius override; defaults to the engine configuration.
        """
        self.config = config or ENGINE_CONFIG.possession
        self.holder_id: Optional[str] = None
        self.selected_id: Optional[str] = None

    def holder(self, store: "EntityStore") -> Optional[EntityState]:
        """Resolve the holder id against the live roster.

        Parameters
        ----------
        store : EntityStore
            Live entities.

        Returns
        -------
        Optional[EntityState]
            The carrier, or ``None`` when nobody holds the ball.
        """
        return store.get(self.holder_id)

    def clear(self) -> None:
        """Drop both the holder and the selection."""
        self.holder_id = None
        self.selected_id = None

    def assign_kickoff(self, store: "EntityStore", rng: random.Random) -> Optional[str]:
        """Give the ball to an entity drawn uniformly from both teams.

        A human receiving the ball also becomes the selected player.

        Parameters
        ----------
        store : EntityStore
            Live entities to draw from.
        rng : random.Random
            Random source for the draw.

        Returns
        -------
        Optional[str]
            New holder id; ``None`` only when the roster is empty, in which case
            the selection is dropped too.
        """
        candidates = store.ids()
        if not candidates:
            self.clear()
            return None

        self.holder_id = rng.choice(candidates)
        holder = store.get(self.holder_id)
        if holder is not None and holder.is_offense:
            self.selected_id = holder.entity_id
        return self.holder_id

    def request_pass(self, target_id: str, store: "EntityStore") -> bool:
        """Hand the ball from the human carrier to another human.

        Parameters
        ----------
        target_id : str
            Human who should receive the ball.
        store : EntityStore
            Live entities used to validate both ends of the pass.

        Returns
        -------
        bool
            ``True`` when possession moved; ``False`` when the request was
            ignored because a robot or nobody holds the ball, or the target
            is not a live human.
        """
        holder = self.holder(store)
        if holder is None or not holder.is_offense:
            return False

        target = store.get(target_id)
        if target is None or not target.is_offense:
            return False

        self.holder_id = target.entity_id
        self.selected_id = target.entity_id
        return True

    def check_tags(self, store: "EntityStore") -> Optional[str]:
        """Transfer the ball to any opponent standing within the tag radius.

        Every opponent of the carrier is tested in roster order and each hit
        overwrites the previous one, so with several opponents in range the
        last one wins.

        Parameters
        ----------
        store : EntityStore
            Live entities, already moved for this tick.

        Returns
        -------
        Optional[str]
            Id of the new holder when a tag happened, otherwise ``None``.
        """
        holder = self.holder(store)
        if holder is None:
            return None

        opposing_side = "defense" if holder.is_offense else "offense"
        tagger: Optional[EntityState] = None
        for opponent in store.members(opposing_side):
            if opponent.position.distance_to(holder.position) < self.config.tag_radius:
                tagger = opponent

        if tagger is None:
            return None
        self.holder_id = tagger.entity_id
        return tagger.entity_id
