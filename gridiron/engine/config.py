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
"""Central configuration for engine tuning parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

Anchor = Tuple[float, float]


@dataclass(slots=True)
class FieldConfig:
    """Normalised field geometry shared by movement and scoring.

    Parameters
    ----------
    size : float, default=100.0
        Extent of the normalised coordinate space on both axes.
    play_min : float, default=10.0
        Lower bound of the playable rectangle (goal line of the offense's end zone).
    play_max : float, default=90.0
        Upper bound of the playable rectangle (goal line of the defense's end zone).
    carry_target : float, default=95.0
        Attacking-axis coordinate robots run toward when carrying or supporting.
    ball_offset : float, default=-6.0
        Vertical offset used when drawing the ball next to its holder.
    """

    size: float = 100.0
    play_min: float = 10.0
    play_max: float = 90.0
    carry_target: float = 95.0
    ball_offset: float = -6.0


@dataclass(slots=True)
class SimulationConfig:
    """Timing controls for the simulation and the match clock.

    Parameters
    ----------
    tick_interval : float, default=0.04
        Seconds between steering ticks (25 Hz).
    clock_interval : float, default=1.0
        Seconds between match clock decrements.
    period_seconds : int, default=20
        Length of each period in clock seconds.
    total_periods : int, default=4
        Number of periods in a match.
    frame_sleep : float, default=0.016
        Delay between frames when running the headless real-time loop.
    default_speed : float, default=1.0
        Default playback speed multiplier.
    trace_entities : bool, default=True
        Whether every tick writes per-entity state lines to the debug log.
    """

    tick_interval: float = 0.04
    clock_interval: float = 1.0
    period_seconds: int = 20
    total_periods: int = 4
    frame_sleep: float = 0.016  # 60fps target
    default_speed: float = 1.0
    trace_entities: bool = True


@dataclass(slots=True)
class MovementConfig:
    """Speeds used by the steering behaviours.

    Parameters
    ----------
    drift : float, default=0.04
        Constant per-tick drift applied to the offense toward its end zone.
    wander_jitter : float, default=0.08
        Width of the uniform random acceleration added per axis while wandering.
    idle_max : float, default=0.35
        Per-axis velocity cap applied after every behaviour.
    carry_speed : float, default=0.35
        Speed used when carrying toward the end zone or chasing the carrier.
    support_speed : float, default=0.3
        Speed used by robots supporting a robot carrier.
    initial_velocity : float, default=0.2
        Half-width of the uniform range used for kickoff velocities.
    """

    drift: float = 0.04
    wander_jitter: float = 0.08
    idle_max: float = 0.35
    carry_speed: float = 0.35
    support_speed: float = 0.3
    initial_velocity: float = 0.2


@dataclass(slots=True)
class SeparationConfig:
    """Repulsion between teammates that keeps them from stacking.

    Parameters
    ----------
    radius : float, default=6.0
        Distance under which two teammates push each other apart.
    strength : float, default=0.06
        Repulsion applied at zero distance; falls off linearly to the radius.
    """

    radius: float = 6.0
    strength: float = 0.06


@dataclass(slots=True)
class PossessionConfig:
    """Thresholds that determine possession changes.

    Parameters
    ----------
    tag_radius : float, default=5.0
        Distance under which an opponent steals the ball from its holder.
    """

    tag_radius: float = 5.0


@dataclass(slots=True)
class ScoringConfig:
    """Points and pacing for touchdowns.

    Parameters
    ----------
    touchdown_points : int, default=7
        Points awarded per score.
    pause_seconds : float, default=1.2
        Length of the non-interactive pause before the next kickoff.
    """

    touchdown_points: int = 7
    pause_seconds: float = 1.2


@dataclass(slots=True)
class FormationConfig:
    """Kickoff anchors for both teams in each orientation.

    The offense attacks toward lower ``x`` in landscape and toward lower ``y``
    in portrait; the defense lines up in the opposite half.

    Parameters
    ----------
    landscape_offense : Tuple[Anchor, ...]
        Human anchors when the field is wider than it is tall.
    landscape_defense : Tuple[Anchor, ...]
        Robot anchors when the field is wider than it is tall.
    portrait_offense : Tuple[Anchor, ...]
        Human anchors when the field is taller than it is wide.
    portrait_defense : Tuple[Anchor, ...]
        Robot anchors when the field is taller than it is wide.
    """

    landscape_offense: Tuple[Anchor, ...] = ((82.0, 60.0), (74.0, 50.0), (74.0, 70.0), (66.0, 60.0))
    landscape_defense: Tuple[Anchor, ...] = ((22.0, 40.0), (18.0, 60.0), (30.0, 48.0), (30.0, 72.0))
    portrait_offense: Tuple[Anchor, ...] = ((50.0, 82.0), (40.0, 74.0), (60.0, 74.0), (50.0, 66.0))
    portrait_defense: Tuple[Anchor, ...] = ((22.0, 34.0), (50.0, 30.0), (78.0, 34.0), (50.0, 22.0))


@dataclass(slots=True)
class EngineConfig:
    """Top-level container for all engine tuning structures.

    Parameters
    ----------
    geometry : FieldConfig, default=FieldConfig()
        Field geometry.
    simulation : SimulationConfig, default=SimulationConfig()
        Tick and clock timing.
    movement : MovementConfig, default=MovementConfig()
        Steering speeds.
    separation : SeparationConfig, default=SeparationConfig()
        Teammate repulsion tuning.
    possession : PossessionConfig, default=PossessionConfig()
        Tagging thresholds.
    scoring : ScoringConfig, default=ScoringConfig()
        Touchdown value and pause.
    formation : FormationConfig, default=FormationConfig()
        Kickoff anchors.
    """

    geometry: FieldConfig = field(default_factory=FieldConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    movement: MovementConfig = field(default_factory=MovementConfig)
    separation: SeparationConfig = field(default_factory=SeparationConfig)
    possession: PossessionConfig = field(default_factory=PossessionConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    formation: FormationConfig = field(default_factory=FormationConfig)


ENGINE_CONFIG = EngineConfig()
"""Singleton-style access to the engine configuration."""
