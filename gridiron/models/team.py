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
"""Team domain models."""
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple

from gridiron.models.player import PlayerProfile

Side = Literal["offense", "defense"]

TEAM_SIZE = 4

DEFAULT_HUMANS: List[PlayerProfile] = [
    PlayerProfile(name="Tommy", role="CIO", initials="T", jersey=12),
    PlayerProfile(name="Glenn", role="IT Support & Training Manager", initials="G", jersey=21),
    PlayerProfile(name="Ruslan", role="IT Manager", initials="R", jersey=42),
    PlayerProfile(name="Tyler", role="IT Assistant", initials="Ty", jersey=7),
]


@dataclass
class Team:
    """One of the two fixed squads taking part in a match.

    Parameters
    ----------
    name : str
        Display name for the squad.
    side : Side
        ``"offense"`` for the humans, ``"defense"`` for the robots.
    id_prefix : str
        Prefix used to build entity ids (``"H"`` gives ``H1..H4``).
    profiles : List[PlayerProfile]
        Display identities in formation order; empty for the robots.
    """

    name: str
    side: Side
    id_prefix: str
    profiles: List[PlayerProfile] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the roster size."""
        if self.profiles and len(self.profiles) != TEAM_SIZE:
            raise ValueError(f"Team must have exactly {TEAM_SIZE} profiles")

    def entity_ids(self) -> List[str]:
        """Return the stable entity ids in formation order.

        Returns
        -------
        List[str]
            ``TEAM_SIZE`` ids built from the team prefix.
        """
        return [f"{self.id_prefix}{index + 1}" for index in range(TEAM_SIZE)]

    def profile_for(self, index: int) -> Optional[PlayerProfile]:
        """Return the display identity for a formation slot.

        Parameters
        ----------
        index : int
            Zero-based formation slot.

        Returns
        -------
        Optional[PlayerProfile]
            The slot's profile, or ``None`` for teams without profiles.
        """
        if index < len(self.profiles):
            return self.profiles[index]
        return None


def default_teams(profiles: Optional[List[PlayerProfile]] = None) -> Tuple[Team, Team]:
    """Build the humans and robots squads.

    Parameters
    ----------
    profiles : List[PlayerProfile] | None, optional
        Human display identities; defaults to :data:`DEFAULT_HUMANS`.

    Returns
    -------
    Tuple[Team, Team]
        ``(humans, robots)``.
    """
    humans = Team(name="Titans", side="offense", id_prefix="H", profiles=list(profiles or DEFAULT_HUMANS))
    robots = Team(name="Bots", side="defense", id_prefix="R")
    return humans, robots
