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
import random
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from gridiron.engine.clock import MatchClock, MatchPhase
from gridiron.engine.config import ENGINE_CONFIG, EngineConfig
from gridiron.engine.entity_store import EntityStore
from gridiron.engine.events import EventType, MatchEvent
from gridiron.engine.formation import Orientation, get_formation
from gridiron.engine.physics import EntityState, Field
from gridiron.engine.possession import PossessionTracker
from gridiron.engine.scheduler import Scheduler, TimerHandle
from gridiron.engine.scoring import ScoringDecision, ScoringJudge
from gridiron.engine.steering import SteeringEngine
from gridiron.models.player import PlayerProfile
from gridiron.models.team import Side, Team, default_teams
from gridiron.utils.debug import MatchDebugger

EventListener = Callable[[MatchEvent], None]


@dataclass
class MatchState:
    """Everything that changes during one match.

    Parameters
    ----------
    store : EntityStore
        Live players of both teams.
    possession : PossessionTracker
        Ball holder and selected human.
    clock : MatchClock
        Period, countdown and phase.
    orientation : Orientation
        Current field orientation.
    offense_score : int
        Points scored by the humans.
    defense_score : int
        Points scored by the robots.
    events : List[MatchEvent]
        History of emitted events.
    match_time : float
        Virtual seconds since the session was created.
    """

    store: EntityStore
    possession: PossessionTracker = field(default_factory=lambda: PossessionTracker())
    clock: MatchClock = field(default_factory=lambda: MatchClock())
    orientation: Orientation = "landscape"
    offense_score: int = 0
    defense_score: int = 0
    events: List[MatchEvent] = field(default_factory=list)
    match_time: float = 0.0

    def holder(self) -> Optional[EntityState]:
        """Return the current ball carrier.

        Returns
        -------
        Optional[EntityState]
            The carrier, or ``None`` when nobody holds the ball.
        """
        return self.possession.holder(self.store)

    def add_points(self, side: Side, points: int) -> None:
        """Credit points to one side.

        Parameters
        ----------
        side : Side
            Team that scored.
        points : int
            Non-negative number of points.
        """
        if side == "offense":
            self.offense_score += points
        else:
            self.defense_score += points


@dataclass(frozen=True)
class EntitySnapshot:
    """Read-only copy of one player for renderers.

    Parameters
    ----------
    entity_id : str
        Stable id such as ``"H1"``.
    team : Side
        Side the player is on.
    position : Tuple[float, float]
        Field coordinates in percent.
    velocity : Tuple[float, float]
        Velocity in percent per tick.
    profile : PlayerProfile | None
        Display identity for humans.
    has_ball : bool
        Whether the player carries the ball.
    selected : bool
        Whether the player is the click-to-move selection.
    """

    entity_id: str
    team: Side
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    profile: Optional[PlayerProfile]
    has_ball: bool
    selected: bool


@dataclass(frozen=True)
class MatchSnapshot:
    """Read-only view of the whole match at one instant.

    Parameters
    ----------
    entities : Tuple[EntitySnapshot, ...]
        Offense followed by defense.
    holder_id : str | None
        Ball carrier id.
    selected_id : str | None
        Human under click-to-move control.
    ball : Tuple[float, float] | None
        Where to draw the ball, ``None`` without a holder.
    offense_score : int
        Points scored by the humans.
    defense_score : int
        Points scored by the robots.
    period : int
        Current period number.
    seconds_remaining : int
        Countdown value.
    phase : MatchPhase
        Current match phase.
    orientation : Orientation
        Current field orientation.
    """

    entities: Tuple[EntitySnapshot, ...]
    holder_id: Optional[str]
    selected_id: Optional[str]
    ball: Optional[Tuple[float, float]]
    offense_score: int
    defense_score: int
    period: int
    seconds_remaining: int
    phase: MatchPhase
    orientation: Orientation

    @property
    def score(self) -> Tuple[int, int]:
        """Return ``(offense, defense)`` points."""
        return self.offense_score, self.defense_score

    @property
    def clock(self) -> Tuple[int, int, MatchPhase]:
        """Return ``(period, seconds_remaining, phase)``."""
        return self.period, self.seconds_remaining, self.phase

    def entity(self, entity_id: str) -> Optional[EntitySnapshot]:
        """Look up one player in the snapshot.

        Parameters
        ----------
        entity_id : str
            Id to find.

        Returns
        -------
        Optional[EntitySnapshot]
            Matching entry, or ``None``.
        """
        return next((e for e in self.entities if e.entity_id == entity_id), None)


@dataclass(slots=True)
class TickResult:
    """What happened during one simulation tick.

    Parameters
    ----------
    ran : bool
        ``False`` when the clock did not allow the tick.
    tagger_id : str | None, optional
        Opponent that took the ball this tick.
    decision : ScoringDecision, optional
        Scoring ruling on the carrier after movement and tags.
    """

    ran: bool
    tagger_id: Optional[str] = None
    decision: ScoringDecision = field(default_factory=lambda: ScoringDecision("none"))


def simulate_tick(
    state: MatchState,
    rng: random.Random,
    steering: Optional[SteeringEngine] = None,
    judge: Optional[ScoringJudge] = None,
) -> TickResult:
    """Advance the entities by one tick: move, then tag, then judge.

    Points are not awarded here; the caller applies the returned decision.

    Parameters
    ----------
    state : MatchState
        Match to advance in place.
    rng : random.Random
        Random source for wander jitter.
    steering : SteeringEngine | None, optional
        Steering engine to use; a default one is built when omitted.
    judge : ScoringJudge | None, optional
        Scoring judge to use; a default one is built when omitted.

    Returns
    -------
    TickResult
        Tag and scoring outcome of the tick.
    """
    if not state.clock.is_playing:
        return TickResult(ran=False)

    steering = steering or SteeringEngine()
    judge = judge or ScoringJudge()

    steering.step(state.store, state.holder(), state.orientation, rng)
    tagger_id = state.possession.check_tags(state.store)
    decision = judge.evaluate(state.holder(), state.orientation)
    return TickResult(ran=True, tagger_id=tagger_id, decision=decision)


class MatchSession:
    """Owns one match and drives it from scheduler timers.

    Parameters
    ----------
    humans : Team | None, optional
        Offense squad; defaults to the built-in roster.
    robots : Team | None, optional
        Defense squad; defaults to the built-in robots.
    rng : random.Random | None, optional
        Random source for velocities, jitter and kickoff draws.
    scheduler : Scheduler | None, optional
        Timer queue; a private one is created when omitted.
    debugger : MatchDebugger | None, optional
        Telemetry sink; defaults to a file logger under ``debug_logs``.
    config : EngineConfig | None, optional
        Tuning override; defaults to the global engine configuration.
    orientation : Orientation, optional
        Initial field orientation.
    """

    def __init__(
        self,
        humans: Optional[Team] = None,
        robots: Optional[Team] = None,
        rng: Optional[random.Random] = None,
        scheduler: Optional[Scheduler] = None,
        debugger: Optional[MatchDebugger] = None,
        config: Optional[EngineConfig] = None,
        orientation: Orientation = "landscape",
    ) -> None:
        """Build the match state and line both teams up in formation.

        Parameters
        ----------
        humans : Team | None, optional
            Offense squad; defaults to the built-in roster.
        robots : Team | None, optional
            Defense squad; defaults to the built-in robots.
        rng : random.Random | None, optional
            Random source for velocities, jitter and kickoff draws.
        scheduler : Scheduler | None, optional
            Timer queue; a private one is created when omitted.
        debugger : MatchDebugger | None, optional
            Telemetry sink; defaults to a file logger under ``debug_logs``.
        config : EngineConfig | None, optional
            Tuning override; defaults to the global engine configuration.
        orientation : Orientation, optional
            Initial field orientation.
        """
        if humans is None or robots is None:
            default_humans, default_robots = default_teams()
            humans = humans or default_humans
            robots = robots or default_robots

        self.config = config or ENGINE_CONFIG
        self.rng = rng or random.Random()
        self.scheduler = scheduler or Scheduler()
        self.debugger = debugger or MatchDebugger()
        self.simulation_speed = self.config.simulation.default_speed
        self.is_running = False

        anchors = get_formation(orientation, self.config.formation)
        store = EntityStore(humans, robots, Field(self.config.geometry), self.config.movement)
        self.state = MatchState(
            store=store,
            possession=PossessionTracker(self.config.possession),
            clock=MatchClock(self.config.simulation),
            orientation=orientation,
        )
        self.steering = SteeringEngine(self.config)
        self.judge = ScoringJudge(self.config.geometry, self.config.scoring)

        self._listeners: List[EventListener] = []
        self._tick_timer: Optional[TimerHandle] = None
        self._clock_timer: Optional[TimerHandle] = None
        self._kickoff_timer: Optional[TimerHandle] = None

        store.place_formation(anchors, self.rng)

    # --- actions -----------------------------------------------------------------
    def start_match(self) -> bool:
        """Begin a fresh match from ``idle`` or ``ended``.

        Returns
        -------
        bool
            ``False`` when a match is already live.
        """
        clock = self.state.clock
        if clock.phase not in ("idle", "ended"):
            return False

        self._sync_time()
        self.state.offense_score = 0
        self.state.defense_score = 0
        clock.start()
        self._emit("match_start", None, f"{self.state.store.humans.name} vs {self.state.store.robots.name}")
        self._log_clock()
        self._reset_kickoff()
        self._start_timers()
        self._check_score()
        return True

    def request_pass(self, target_id: str) -> bool:
        """Pass from the human carrier to another human.

        Parameters
        ----------
        target_id : str
            Human who should receive the ball.

        Returns
        -------
        bool
            ``True`` when the ball moved.
        """
        if not self.state.clock.is_playing:
            return False
        if not self.state.possession.request_pass(target_id, self.state.store):
            return False

        self._sync_time()
        self._emit("possession", "offense", f"Pass to {self._describe(target_id)}")
        self._check_score()
        return True

    def move_selected_entity(self, x: float, y: float) -> bool:
        """Teleport the selected human to a field position in percent.

        Parameters
        ----------
        x : float
            Horizontal coordinate; clamped to the field.
        y : float
            Vertical coordinate; clamped to the field.

        Returns
        -------
        bool
            ``False`` when nothing is selected or play is not live.
        """
        selected = self.state.possession.selected_id
        if selected is None or not self.state.clock.is_playing:
            return False
        if not self.state.store.relocate(selected, x, y):
            return False

        self._sync_time()
        self._check_score()
        return True

    def resume_after_period_break(self) -> bool:
        """Start the second period after the mandatory break.

        Returns
        -------
        bool
            ``False`` outside ``period_break``.
        """
        if not self.state.clock.resume_after_break():
            return False

        self._sync_time()
        self._emit("period_start", None, f"Period {self.state.clock.period} kickoff")
        self._log_clock()
        self._reset_kickoff()
        self._start_timers()
        self._check_score()
        return True

    def set_orientation(self, orientation: Orientation) -> bool:
        """Switch the field orientation and re-form both teams.

        The ball stays with its current holder.

        Parameters
        ----------
        orientation : Orientation
            ``"landscape"`` or ``"portrait"``.

        Returns
        -------
        bool
            ``False`` when the orientation did not change.

        Raises
        ------
        ValueError
            If ``orientation`` is not recognised.
        """
        anchors = get_formation(orientation, self.config.formation)
        if orientation == self.state.orientation:
            return False

        self._sync_time()
        self.state.orientation = orientation
        self.state.store.place_formation(anchors, self.rng)
        if self._tick_timer is not None:
            self._start_tick_timer()
        self.debugger.log_match_event(self.state.match_time, "orientation", f"Field switched to {orientation}")
        self._check_score()
        return True

    def stop_match(self) -> None:
        """Tear down timers and close the debug log."""
        self.is_running = False
        self._cancel_timers()
        self.debugger.close()

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register a callback for every future :class:`MatchEvent`.

        Parameters
        ----------
        listener : EventListener
            Function receiving each event after it is recorded.

        Returns
        -------
        Callable[[], None]
            Function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- simulation --------------------------------------------------------------
    def step(self) -> TickResult:
        """Run one simulation tick and apply its outcome.

        Returns
        -------
        TickResult
            What the tick did; ``ran`` is ``False`` outside ``playing``.
        """
        self._sync_time()
        result = simulate_tick(self.state, self.rng, self.steering, self.judge)
        if not result.ran:
            return result

        if result.tagger_id is not None:
            side = self.state.store.team_of(result.tagger_id)
            self._emit("possession", side, f"{self._describe(result.tagger_id)} tags the carrier")

        if self.config.simulation.trace_entities:
            self._trace_entities()

        self._apply_score(result.decision)
        return result

    def run_realtime(self, speed: Optional[float] = None, max_seconds: Optional[float] = None) -> None:
        """Drive the scheduler from the wall clock until the match ends.

        The break after the first period is resumed automatically since
        nobody is around to press the button.

        Parameters
        ----------
        speed : float | None, optional
            Playback multiplier; defaults to the configured speed.
        max_seconds : float | None, optional
            Stop after this many virtual seconds.
        """
        if speed is not None:
            self.simulation_speed = speed
        if self.state.clock.phase in ("idle", "ended"):
            self.start_match()

        self.is_running = True
        last_update = time.time()

        while self.is_running and self.state.clock.phase != "ended":
            if max_seconds is not None and self.scheduler.now >= max_seconds:
                break

            current_time = time.time()
            dt = (current_time - last_update) * self.simulation_speed
            self.scheduler.advance(dt)
            last_update = current_time

            if self.state.clock.phase == "period_break":
                self.resume_after_period_break()

            time.sleep(self.config.simulation.frame_sleep)

        self.is_running = False

    # --- read side ---------------------------------------------------------------
    def ball_position(self) -> Optional[Tuple[float, float]]:
        """Return where the ball is drawn relative to its holder.

        Returns
        -------
        Optional[Tuple[float, float]]
            Holder position offset vertically, or ``None`` without a holder.
        """
        holder = self.state.holder()
        if holder is None:
            return None
        return holder.position.x, holder.position.y + self.config.geometry.ball_offset

    def snapshot(self) -> MatchSnapshot:
        """Copy the current match into an immutable view.

        Returns
        -------
        MatchSnapshot
            Entities, possession, score, clock and orientation.
        """
        state = self.state
        holder_id = state.possession.holder_id
        selected_id = state.possession.selected_id
        entities = tuple(
            EntitySnapshot(
                entity_id=e.entity_id,
                team=e.team,
                position=(e.position.x, e.position.y),
                velocity=(e.velocity.x, e.velocity.y),
                profile=e.profile,
                has_ball=e.entity_id == holder_id,
                selected=e.entity_id == selected_id,
            )
            for e in state.store.all_entities()
        )
        return MatchSnapshot(
            entities=entities,
            holder_id=holder_id,
            selected_id=selected_id,
            ball=self.ball_position(),
            offense_score=state.offense_score,
            defense_score=state.defense_score,
            period=state.clock.period,
            seconds_remaining=state.clock.seconds_remaining,
            phase=state.clock.phase,
            orientation=state.orientation,
        )

    # --- internals ---------------------------------------------------------------
    def _on_clock_tick(self) -> None:
        """Count the clock down and react to period expiry."""
        self._sync_time()
        transition = self.state.clock.tick_second()
        if transition == "none":
            return
        self._log_clock()

        clock = self.state.clock
        if transition == "period_break":
            self._cancel_timers()
            self._emit("period_break", None, f"End of period {clock.period}")
        elif transition == "next_period":
            self._emit("period_start", None, f"Period {clock.period} kickoff")
            self._reset_kickoff()
            self._start_tick_timer()
            self._check_score()
        elif transition == "ended":
            self._cancel_timers()
            self._emit(
                "game_end",
                None,
                f"Final score {self.state.offense_score}-{self.state.defense_score}",
            )

    def _check_score(self) -> bool:
        """Judge the carrier's current position and apply any score.

        Returns
        -------
        bool
            ``True`` when points were awarded.
        """
        return self._apply_score(self.judge.evaluate(self.state.holder(), self.state.orientation))

    def _apply_score(self, decision: ScoringDecision) -> bool:
        """Award a touchdown and freeze play and clock before the next kickoff.

        Parameters
        ----------
        decision : ScoringDecision
            Ruling from the scoring judge.

        Returns
        -------
        bool
            ``True`` when points were awarded.
        """
        if not decision.is_score or decision.side is None:
            return False
        if not self.state.clock.enter_scored_pause():
            return False

        self.state.add_points(decision.side, decision.points)
        self._cancel_timers()
        self._kickoff_timer = self.scheduler.call_later(self.config.scoring.pause_seconds, self._finish_score_pause)

        team = self.state.store.humans if decision.side == "offense" else self.state.store.robots
        self._emit(
            "score",
            decision.side,
            f"TOUCHDOWN {team.name} by {self._describe(decision.scorer_id)}! "
            f"Score: {self.state.offense_score}-{self.state.defense_score}",
        )
        return True

    def _finish_score_pause(self) -> None:
        """Kick off again once the post-touchdown pause has elapsed."""
        self._kickoff_timer = None
        self._sync_time()
        if not self.state.clock.leave_scored_pause():
            return
        self._reset_kickoff()
        self._start_timers()
        self._check_score()

    def _reset_kickoff(self) -> None:
        """Line both teams up and draw a new ball holder."""
        anchors = get_formation(self.state.orientation, self.config.formation)
        holder_id = self.state.store.reset_kickoff(anchors, self.state.possession, self.rng)
        if holder_id is None:
            self.debugger.log_error("kickoff", "No entities available to receive the ball")
            return
        side = self.state.store.team_of(holder_id)
        self._emit("possession", side, f"Kickoff: {self._describe(holder_id)} takes the ball")

    def _start_timers(self) -> None:
        """(Re)create the simulation and clock timers."""
        self._start_tick_timer()
        if self._clock_timer is not None:
            self._clock_timer.cancel()
        self._clock_timer = self.scheduler.call_every(self.config.simulation.clock_interval, self._on_clock_tick)

    def _start_tick_timer(self) -> None:
        """(Re)create the 25 Hz simulation timer."""
        self._cancel_tick_timer()
        self._tick_timer = self.scheduler.call_every(self.config.simulation.tick_interval, self.step)

    def _cancel_tick_timer(self) -> None:
        """Stop the simulation timer."""
        if self._tick_timer is not None:
            self._tick_timer.cancel()
            self._tick_timer = None

    def _cancel_kickoff_timer(self) -> None:
        """Drop a pending post-touchdown kickoff."""
        if self._kickoff_timer is not None:
            self._kickoff_timer.cancel()
            self._kickoff_timer = None

    def _cancel_timers(self) -> None:
        """Stop every timer the session owns."""
        self._cancel_tick_timer()
        self._cancel_kickoff_timer()
        if self._clock_timer is not None:
            self._clock_timer.cancel()
            self._clock_timer = None

    def _emit(self, event_type: EventType, team: Optional[Side], description: str) -> None:
        """Record an event, log it and notify listeners.

        Parameters
        ----------
        event_type : EventType
            Category of the event.
        team : Side | None
            Side the event concerns, if any.
        description : str
            Human-readable summary.
        """
        event = MatchEvent(self.state.match_time, event_type, team, description)
        self.state.events.append(event)
        self.debugger.log_match_event(event.timestamp, event_type, description)
        for listener in list(self._listeners):
            listener(event)

    def _trace_entities(self) -> None:
        """Write one state line per entity to the debug log."""
        holder_id = self.state.possession.holder_id
        for entity in self.state.store.all_entities():
            self.debugger.log_entity_state(
                self.state.match_time,
                entity.entity_id,
                entity.team,
                (entity.position.x, entity.position.y),
                (entity.velocity.x, entity.velocity.y),
                entity.entity_id == holder_id,
                behaviour=self.steering.last_behaviours.get(entity.entity_id),
            )

    def _log_clock(self) -> None:
        """Write the current clock state to the debug log."""
        clock = self.state.clock
        self.debugger.log_clock(self.state.match_time, clock.period, clock.seconds_remaining, clock.phase)

    def _sync_time(self) -> None:
        """Copy the scheduler's virtual time into the match state."""
        self.state.match_time = self.scheduler.now

    def _describe(self, entity_id: Optional[str]) -> str:
        """Format an entity for log and event text.

        Parameters
        ----------
        entity_id : str | None
            Entity to describe.

        Returns
        -------
        str
            Profile name with id for humans, the bare id otherwise.
        """
        entity = self.state.store.get(entity_id)
        if entity is None:
            return str(entity_id)
        if entity.profile is not None:
            return f"{entity.profile.name} ({entity.entity_id})"
        return entity.entity_id
