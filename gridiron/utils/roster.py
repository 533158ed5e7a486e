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
"""Utilities for building the human roster from serialized data.

A roster file is a JSON document with a ``humans`` list of four profile
objects in formation order::

    {"humans": [{"name": "Tommy", "role": "CIO", "initials": "T", "jersey": 12}, ...]}

Only ``name`` is required per entry; initials default to the first letter of
the name and the jersey to the slot number.
"""
import json
from pathlib import Path
from typing import List

from gridiron.models.player import PlayerProfile
from gridiron.models.team import TEAM_SIZE


def profile_from_dict(d: dict, slot: int = 0) -> PlayerProfile:
    """Build a ``PlayerProfile`` from a plain dictionary payload.

    Parameters
    ----------
    d
        Mapping with ``name`` and optional ``role``, ``initials``, ``jersey``
        and ``image`` keys.
    slot
        Zero-based formation slot, used for the default jersey number.

    Returns
    -------
    PlayerProfile
        A validated profile.

    Raises
    ------
    KeyError
        Raised when ``name`` is missing.
    ValueError
        Raised when the values fail profile validation.
    """
    name = d["name"]
    return PlayerProfile(
        name=name,
        role=d.get("role", ""),
        initials=d.get("initials") or name[:1].upper(),
        jersey=int(d.get("jersey", slot + 1)),
        image_path=d.get("image"),
    )


def load_profiles_from_json(path: str) -> List[PlayerProfile]:
    """Load the human profiles from a roster file.

    Parameters
    ----------
    path
        The filesystem path to the JSON document.

    Returns
    -------
    List[PlayerProfile]
        Exactly four profiles in formation order.

    Raises
    ------
    FileNotFoundError
        Raised when ``path`` does not exist.
    KeyError
        Raised when the payload has no ``humans`` section or an entry has no name.
    ValueError
        Raised when the roster does not hold exactly four valid profiles.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Roster JSON not found: {path}")

    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)

    entries = data["humans"]
    if len(entries) != TEAM_SIZE:
        raise ValueError(f"Roster must list exactly {TEAM_SIZE} humans, got {len(entries)}")
    return [profile_from_dict(entry, slot) for slot, entry in enumerate(entries)]
