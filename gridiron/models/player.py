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
"""Display identity for the human players."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PlayerProfile:
    """Name and jersey shown on a human player.

    Profiles only affect drawing; the simulation never reads them.

    Parameters
    ----------
    name : str
        Human-readable player name.
    role : str
        Job title shown in the roster panel.
    initials : str
        Short label drawn when no headshot image is available.
    jersey : int
        Shirt number between 0 and 99.
    image_path : str | None, optional
        Path to a headshot image, if one is configured.
    """

    name: str
    role: str
    initials: str
    jersey: int
    image_path: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the profile fields."""
        if not self.name.strip():
            raise ValueError("name must not be empty")
        if not self.initials.strip():
            raise ValueError("initials must not be empty")
        if not 0 <= self.jersey <= 99:
            raise ValueError("jersey must be between 0 and 99")

    @property
    def label(self) -> str:
        """Return the compact label drawn on the player's token."""
        return f"{self.initials} #{self.jersey}"
