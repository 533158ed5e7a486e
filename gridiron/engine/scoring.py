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
"""End-zone judge deciding when the ball carrier has scored."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Optional

from gridiron.engine.config import ENGINE_CONFIG, FieldConfig, ScoringConfig
from gridiron.engine.formation import attacking_axis

if TYPE_CHECKING:
    from gridiron.engine.formation import Orientation
    from gridiron.engine.physics import EntityState
    from gridiron.models.team import Side


@dataclass(slots=True)
class ScoringDecision:
    """Structured ruling describing the judge's view of the carrier's position.

    Parameters
    ----------
    event : Literal["touchdown", "none"]
        Canonical label for what occurred.
    side : Side | None, optional
        Team credited with the score.
    points : int, optional
        Points to add to ``side``.
    scorer_id : str | None, optional
        Entity that carried the ball into the end zone.
    """

    event: Literal["touchdown", "none"]
    side: Optional["Side"] = None
    points: int = 0
    scorer_id: Optional[str] = None

    @property
    def is_score(self) -> bool:
        """Return ``True`` when the decision awards points."""
        return self.event == "touchdown"


class ScoringJudge:
    """Checks the carrier against the goal line of its attacking end zone.

    Humans score on reaching ``play_min`` along the attacking axis, robots on
    reaching ``play_max``. Because movement clamps to exactly those values,
    touching the goal line counts.

    Parameters
    ----------
    geometry : FieldConfig | None, optional
        Goal-line positions; defaults to the engine configuration.
    scoring : ScoringConfig | None, optional
        Points per touchdown; defaults to the engine configuration.
    """

    def __init__(self, geometry: Optional[FieldConfig] = None, scoring: Optional[ScoringConfig] = None) -> None:
        """Capture goal lines and touchdown value.

        Parameters
        ----------
        geometry : FieldConfig | None, optional
            Goal-line positions; defaults to the engine configuration.
        scoring : ScoringConfig | None, optional
            Points per touchdown; defaults to the engine configuration.
        """
        self.geometry = geometry or ENGINE_CONFIG.geometry
        self.scoring = scoring or ENGINE_CONFIG.scoring

    def evaluate(self, holder: Optional["EntityState"], orientation: "Orientation") -> ScoringDecision:
        """Rule on the carrier's current position.

        Parameters
        ----------
        holder : EntityState | None
            Ball carrier, or ``None`` when the ball is loose.
        orientation : Orientation
            Field orientation selecting the attacking axis.

        Returns
        -------
        ScoringDecision
            A touchdown for the carrier's team, or ``"none"``.
        """
        if holder is None:
            return ScoringDecision("none")

        axis = attacking_axis(orientation)
        coordinate = holder.position.x if axis == "x" else holder.position.y

        if holder.is_offense:
            scored = coordinate <= self.geometry.play_min
        else:
            scored = coordinate >= self.geometry.play_max

        if not scored:
            return ScoringDecision("none")
        return ScoringDecision(
            "touchdown",
            side=holder.team,
            points=self.scoring.touchdown_points,
            scorer_id=holder.entity_id,
        )
