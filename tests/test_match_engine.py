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
"""Session-level tests driving the match through its scheduler."""

from __future__ import annotations

import random
from typing import Callable, List

import pytest
from conftest import ScriptedRandom

from gridiron.engine.config import EngineConfig, SimulationConfig
from gridiron.engine.events import MatchEvent
from gridiron.engine.match_engine import MatchSession, MatchState, simulate_tick
from gridiron.engine.physics import Vector2D
from gridiron.engine.scheduler import Scheduler
from gridiron.utils.debug import MatchDebugger

SessionFactory = Callable[..., MatchSession]


def _place(session: MatchSession, entity_id: str, x: float, y: float) -> None:
    entity = session.state.store.get(entity_id)
    assert entity is not None
    entity.position = Vector2D(x, y)


def _event_types(session: MatchSession) -> List[str]:
    return [event.event_type for event in session.state.events]


def _advance_until(session: MatchSession, phase: str, limit: float = 300.0) -> None:
    """Feed ticks to the scheduler until the clock reaches ``phase``.

    Touchdowns freeze the countdown, so a period can take longer than its
    nominal length in scheduler time.
    """
    while session.state.clock.phase != phase:
        assert session.scheduler.now < limit, f"never reached {phase}"
        session.scheduler.advance(0.04)


def _play_to_end(session: MatchSession) -> None:
    """Run all four periods, pressing resume at the break."""
    session.start_match()
    _advance_until(session, "period_break")
    assert session.resume_after_period_break()
    _advance_until(session, "ended")


class TestSessionSetup:
    """State before the first kickoff."""

    def test_idle_session(self, make_session: SessionFactory) -> None:
        """A new session is lined up in formation with no holder and a full clock."""
        session = make_session()
        snap = session.snapshot()
        assert snap.clock == (1, 20, "idle")
        assert snap.score == (0, 0)
        assert snap.holder_id is None
        assert snap.ball is None
        assert [e.entity_id for e in snap.entities] == ["H1", "H2", "H3", "H4", "R1", "R2", "R3", "R4"]
        assert snap.entity("H1").position == (82.0, 60.0)  # type: ignore[union-attr]
        assert session.scheduler.pending() == 0

    def test_idle_session_ignores_input(self, make_session: SessionFactory) -> None:
        """Passing, moving and stepping do nothing before the match starts."""
        session = make_session()
        assert not session.request_pass("H2")
        assert not session.move_selected_entity(5, 5)
        assert not session.step().ran

    def test_profiles_attached_to_humans_only(self, make_session: SessionFactory) -> None:
        """Humans carry their display identity; robots have none."""
        snap = make_session().snapshot()
        assert snap.entity("H2").profile.name == "Glenn"  # type: ignore[union-attr]
        assert snap.entity("R2").profile is None  # type: ignore[union-attr]


class TestStartMatch:
    """Kickoff from idle and ended."""

    def test_start_assigns_holder_and_timers(self, make_session: SessionFactory) -> None:
        """Starting kicks off to the drawn entity and schedules tick and clock timers."""
        session = make_session(choices=("H2",))
        assert session.start_match()
        snap = session.snapshot()
        assert snap.clock == (1, 20, "playing")
        assert snap.holder_id == "H2"
        assert snap.selected_id == "H2"
        assert session.scheduler.pending() == 2
        assert _event_types(session)[:2] == ["match_start", "possession"]

    def test_start_while_live_is_noop(self, make_session: SessionFactory) -> None:
        """A second start during play changes nothing."""
        session = make_session()
        session.start_match()
        session.scheduler.advance(3.0)
        before = session.snapshot()
        assert not session.start_match()
        assert session.snapshot().clock == before.clock

    def test_ball_drawn_above_holder(self, make_session: SessionFactory) -> None:
        """The ball sits six units above its carrier."""
        session = make_session()
        session.start_match()
        assert session.ball_position() == (82.0, 54.0)
        assert session.snapshot().entity("H1").has_ball  # type: ignore[union-attr]


class TestScoring:
    """Touchdowns, the scored pause and the following kickoff."""

    def test_move_into_end_zone_scores(self, make_session: SessionFactory) -> None:
        """Moving the human carrier to x <= 10 scores seven and pauses play."""
        session = make_session()
        session.start_match()
        assert session.move_selected_entity(8.0, 50.0)

        snap = session.snapshot()
        assert snap.score == (7, 0)
        assert snap.phase == "scored"
        assert session.state.events[-1].event_type == "score"
        assert session.state.events[-1].team == "offense"
        assert "TOUCHDOWN" in session.state.events[-1].description

    def test_scored_pause_blocks_input_and_ticks(self, make_session: SessionFactory) -> None:
        """During the pause nothing moves and user actions are ignored."""
        session = make_session()
        session.start_match()
        session.move_selected_entity(8.0, 50.0)
        positions = [e.position for e in session.snapshot().entities]

        assert not session.request_pass("H2")
        assert not session.move_selected_entity(50.0, 50.0)
        session.scheduler.advance(1.0)
        assert [e.position for e in session.snapshot().entities] == positions

    def test_kickoff_after_pause(self, make_session: SessionFactory) -> None:
        """After 1.2 seconds play resumes with a fresh formation and holder."""
        session = make_session()
        session.start_match()
        session.move_selected_entity(8.0, 50.0)
        session.scheduler.advance(1.21)

        snap = session.snapshot()
        assert snap.phase == "playing"
        assert snap.holder_id == "H1"
        assert snap.entity("H1").position == (82.0, 60.0)  # type: ignore[union-attr]
        assert snap.score == (7, 0)
        assert snap.seconds_remaining == 20

    def test_clock_frozen_during_pause(self, make_session: SessionFactory) -> None:
        """The countdown stops for the pause and restarts a full second after the kickoff."""
        session = make_session()
        session.start_match()
        session.move_selected_entity(5.0, 50.0)

        session.scheduler.advance(1.0)
        assert session.snapshot().clock == (1, 20, "scored")
        session.scheduler.advance(0.21)
        assert session.snapshot().clock == (1, 20, "playing")
        session.scheduler.advance(1.0)
        assert session.snapshot().seconds_remaining == 19

    def test_move_is_clamped_and_can_score(self, make_session: SessionFactory) -> None:
        """Out-of-range targets are clamped into the coordinate space."""
        session = make_session()
        session.start_match()
        session.move_selected_entity(-5.0, 120.0)
        assert session.snapshot().entity("H1").position == (0.0, 100.0)  # type: ignore[union-attr]
        assert session.snapshot().score == (7, 0)

    def test_robot_carrier_scores_for_defense(self, make_session: SessionFactory) -> None:
        """A robot holding the ball past x >= 90 scores for the defense on the next tick."""
        session = make_session(choices=("R1",))
        session.start_match()
        _place(session, "R1", 89.9, 40.0)
        result = session.step()
        assert result.decision.side == "defense"
        assert session.snapshot().score == (0, 7)

    def test_pass_into_end_zone_scores(self, make_session: SessionFactory) -> None:
        """Passing to a human already standing in the end zone scores immediately."""
        session = make_session()
        session.start_match()
        _place(session, "H3", 5.0, 50.0)
        assert session.request_pass("H3")
        assert session.snapshot().score == (7, 0)


class TestPossession:
    """Passes and tags inside a running session."""

    def test_pass_between_humans(self, make_session: SessionFactory) -> None:
        """A pass moves the ball and the selection and records an event."""
        session = make_session()
        session.start_match()
        assert session.request_pass("H3")
        snap = session.snapshot()
        assert snap.holder_id == "H3"
        assert snap.selected_id == "H3"
        assert session.state.events[-1].description == "Pass to Ruslan (H3)"

    def test_move_selected_entity(self, make_session: SessionFactory) -> None:
        """Click-to-move teleports the selected human."""
        session = make_session()
        session.start_match()
        assert session.move_selected_entity(40.0, 30.0)
        assert session.snapshot().entity("H1").position == (40.0, 30.0)  # type: ignore[union-attr]

    def test_robot_tags_carrier(self, make_session: SessionFactory) -> None:
        """A robot closing within the tag radius takes the ball on that tick."""
        session = make_session()
        session.start_match()
        _place(session, "H1", 50.0, 50.0)
        _place(session, "R1", 52.0, 50.0)

        result = session.step()
        assert result.tagger_id == "R1"
        assert session.snapshot().holder_id == "R1"
        assert session.state.events[-1].event_type == "possession"
        assert session.state.events[-1].team == "defense"

    def test_robot_holder_ignores_pass(self, make_session: SessionFactory) -> None:
        """Pass requests are ignored while a robot holds the ball."""
        session = make_session(choices=("R2",))
        session.start_match()
        assert not session.request_pass("H1")
        assert session.snapshot().holder_id == "R2"


class TestPeriods:
    """Clock-driven transitions through a full match."""

    def test_first_period_break(self, make_session: SessionFactory) -> None:
        """When the first period runs out play stops in the break without advancing the period."""
        session = make_session()
        session.start_match()
        _advance_until(session, "period_break")

        snap = session.snapshot()
        assert snap.clock == (1, 0, "period_break")
        assert "period_break" in _event_types(session)
        assert session.scheduler.pending() == 0
        assert not session.request_pass("H2")

    def test_resume_after_break(self, make_session: SessionFactory) -> None:
        """Resuming starts period 2 with a new kickoff; resuming twice is rejected."""
        session = make_session()
        session.start_match()
        assert not session.resume_after_period_break()
        _advance_until(session, "period_break")

        assert session.resume_after_period_break()
        snap = session.snapshot()
        assert snap.clock == (2, 20, "playing")
        assert snap.holder_id == "H1"
        assert not session.resume_after_period_break()

    def test_score_late_in_period_delays_break(self, debugger: MatchDebugger) -> None:
        """A score with one second left holds the clock until play resumes."""
        config = EngineConfig(simulation=SimulationConfig(period_seconds=2))
        session = MatchSession(rng=ScriptedRandom(["H1"]), scheduler=Scheduler(), debugger=debugger, config=config)
        session.start_match()
        session.scheduler.advance(1.5)
        session.move_selected_entity(5.0, 50.0)
        assert session.snapshot().clock == (1, 1, "scored")

        session.scheduler.advance(1.21)
        assert session.snapshot().clock == (1, 1, "playing")
        session.scheduler.advance(1.0)
        assert session.snapshot().clock == (1, 0, "period_break")
        assert session.snapshot().score == (7, 0)

    def test_full_match_ends(self, make_session: SessionFactory) -> None:
        """Periods 2 to 4 run back to back and the match then ends for good."""
        session = make_session()
        _play_to_end(session)

        snap = session.snapshot()
        assert snap.clock == (4, 0, "ended")
        assert session.state.events[-1].event_type == "game_end"
        assert _event_types(session).count("period_start") == 3
        assert session.scheduler.pending() == 0

    def test_nothing_moves_after_end(self, make_session: SessionFactory) -> None:
        """Ticks and input are inert once the match has ended."""
        session = make_session()
        _play_to_end(session)
        before = session.snapshot()

        assert not session.step().ran
        assert not session.move_selected_entity(5.0, 5.0)
        session.scheduler.advance(5.0)
        assert session.snapshot() == before

    def test_restart_after_end(self, make_session: SessionFactory) -> None:
        """Starting again from ``ended`` resets scores and the clock."""
        session = make_session()
        _play_to_end(session)
        session.state.offense_score = 14

        assert session.start_match()
        snap = session.snapshot()
        assert snap.clock == (1, 20, "playing")
        assert snap.score == (0, 0)


class TestOrientation:
    """Switching between landscape and portrait."""

    def test_switch_reforms_and_keeps_holder(self, make_session: SessionFactory) -> None:
        """The teams move to the portrait slots and the ball stays put."""
        session = make_session(choices=("H2",))
        session.start_match()
        assert session.set_orientation("portrait")

        snap = session.snapshot()
        assert snap.orientation == "portrait"
        assert snap.holder_id == "H2"
        assert snap.entity("H1").position == (50.0, 82.0)  # type: ignore[union-attr]
        assert snap.entity("R4").position == (50.0, 22.0)  # type: ignore[union-attr]

    def test_same_orientation_is_noop(self, make_session: SessionFactory) -> None:
        """Asking for the current orientation changes nothing."""
        session = make_session()
        assert not session.set_orientation("landscape")

    def test_unknown_orientation(self, make_session: SessionFactory) -> None:
        """Unknown orientations are rejected."""
        with pytest.raises(ValueError):
            make_session().set_orientation("diagonal")  # type: ignore[arg-type]

    def test_portrait_scoring_axis(self, make_session: SessionFactory) -> None:
        """In portrait the offense scores by reaching y <= 10."""
        session = make_session(orientation="portrait")
        session.start_match()
        session.move_selected_entity(5.0, 50.0)
        assert session.snapshot().score == (0, 0)
        session.move_selected_entity(50.0, 9.0)
        assert session.snapshot().score == (7, 0)


class TestEvents:
    """Listener registration."""

    def test_subscribe_and_unsubscribe(self, make_session: SessionFactory) -> None:
        """Listeners see every event until they unsubscribe."""
        session = make_session()
        received: List[MatchEvent] = []
        unsubscribe = session.subscribe(received.append)

        session.start_match()
        assert [e.event_type for e in received] == ["match_start", "possession"]

        unsubscribe()
        session.request_pass("H2")
        assert len(received) == 2
        assert session.state.events[-1].event_type == "possession"

    def test_events_are_logged(self, make_session: SessionFactory, debugger: MatchDebugger) -> None:
        """Events reach the debug log with their virtual timestamp."""
        session = make_session()
        session.start_match()
        lines = debugger.get_recent_events(50)
        assert any("Event: match_start" in line for line in lines)
        assert any("CLOCK: Time: 0.00s | Period: 1" in line for line in lines)


class TestSimulateTick:
    """The pure tick function and long-running invariants."""

    def test_tick_skipped_unless_playing(self, store) -> None:  # type: ignore[no-untyped-def]
        """An idle clock produces no movement."""
        state = MatchState(store=store)
        assert not simulate_tick(state, ScriptedRandom()).ran

    def test_invariants_hold_over_random_play(self, make_session: SessionFactory) -> None:
        """Long random play keeps every match invariant intact."""
        session = make_session(rng=random.Random(7))
        session.start_match()
        previous = session.snapshot()

        for _ in range(1500):
            session.scheduler.advance(0.04)
            snap = session.snapshot()
            if snap.phase == "period_break":
                session.resume_after_period_break()
                continue

            for entity in snap.entities:
                assert 0.0 <= entity.position[0] <= 100.0
                assert 0.0 <= entity.position[1] <= 100.0
                assert abs(entity.velocity[0]) <= 0.35 + 1e-9
                assert abs(entity.velocity[1]) <= 0.35 + 1e-9
            if snap.phase == "playing":
                assert sum(e.has_ball for e in snap.entities) == 1
            assert 0 <= snap.seconds_remaining <= 20
            assert snap.offense_score % 7 == 0
            assert snap.defense_score % 7 == 0
            if previous.phase == "scored" and snap.phase == "scored":
                assert snap.seconds_remaining == previous.seconds_remaining
            previous = snap
