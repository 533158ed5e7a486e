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
"""Tests for kickoff draws, manual passes and proximity tags."""

from __future__ import annotations

from conftest import ScriptedRandom

from gridiron.engine.entity_store import EntityStore
from gridiron.engine.physics import Vector2D
from gridiron.engine.possession import PossessionTracker
from gridiron.models.team import default_teams


def _place(store: EntityStore, entity_id: str, x: float, y: float) -> None:
    entity = store.get(entity_id)
    assert entity is not None
    entity.position = Vector2D(x, y)


class TestKickoff:
    """Random holder assignment."""

    def test_human_holder_becomes_selected(self, store: EntityStore) -> None:
        """A human receiving the kickoff is also selected."""
        tracker = PossessionTracker()
        assert tracker.assign_kickoff(store, ScriptedRandom(["H3"])) == "H3"
        assert tracker.selected_id == "H3"

    def test_robot_holder_keeps_previous_selection(self, store: EntityStore) -> None:
        """A robot receiving the kickoff leaves the selection alone."""
        tracker = PossessionTracker()
        tracker.selected_id = "H2"
        assert tracker.assign_kickoff(store, ScriptedRandom(["R1"])) == "R1"
        assert tracker.selected_id == "H2"

    def test_draw_covers_whole_roster(self, store: EntityStore) -> None:
        """The draw is taken over both teams."""
        seen = []

        class Recorder(ScriptedRandom):
            def choice(self, seq):  # type: ignore[no-untyped-def]
                seen.extend(seq)
                return super().choice(seq)

        PossessionTracker().assign_kickoff(store, Recorder())
        assert seen == store.ids()

    def test_empty_roster_clears_possession(self) -> None:
        """With nobody on the field the kickoff drops both holder and selection."""
        store = EntityStore(*default_teams())
        tracker = PossessionTracker()
        tracker.holder_id = tracker.selected_id = "H1"
        assert tracker.assign_kickoff(store, ScriptedRandom()) is None
        assert tracker.holder_id is None
        assert tracker.selected_id is None


class TestManualPass:
    """Pass requests from the user."""

    def test_pass_round_trip(self, store: EntityStore) -> None:
        """A pass between humans moves the ball to exactly the named target."""
        tracker = PossessionTracker()
        tracker.holder_id = "H1"
        for target in ("H2", "H4", "H1"):
            assert tracker.request_pass(target, store)
            assert tracker.holder_id == target
            assert tracker.selected_id == target

    def test_pass_ignored_while_robot_holds(self, store: EntityStore) -> None:
        """Robots never give the ball away through a pass request."""
        tracker = PossessionTracker()
        tracker.holder_id = "R2"
        assert not tracker.request_pass("H1", store)
        assert tracker.holder_id == "R2"

    def test_pass_to_robot_or_unknown_rejected(self, store: EntityStore) -> None:
        """Only live humans can receive a pass."""
        tracker = PossessionTracker()
        tracker.holder_id = "H1"
        assert not tracker.request_pass("R1", store)
        assert not tracker.request_pass("H7", store)
        assert tracker.holder_id == "H1"

    def test_pass_without_holder(self, store: EntityStore) -> None:
        """Nothing happens while the ball is loose."""
        tracker = PossessionTracker()
        assert not tracker.request_pass("H2", store)
        assert tracker.holder_id is None


class TestTags:
    """Proximity steals."""

    def test_robot_tags_human_carrier(self, store: EntityStore) -> None:
        """A robot closer than 5 takes the ball."""
        tracker = PossessionTracker()
        tracker.holder_id = "H1"
        _place(store, "H1", 50, 50)
        _place(store, "R2", 53, 53)
        assert tracker.check_tags(store) == "R2"
        assert tracker.holder_id == "R2"

    def test_exactly_at_radius_is_not_a_tag(self, store: EntityStore) -> None:
        """The tag test is strict: distance 5 keeps possession."""
        tracker = PossessionTracker()
        tracker.holder_id = "H1"
        _place(store, "H1", 50, 50)
        _place(store, "R1", 55, 50)
        assert tracker.check_tags(store) is None
        assert tracker.holder_id == "H1"

    def test_teammates_never_tag(self, store: EntityStore) -> None:
        """Only opponents can take the ball."""
        tracker = PossessionTracker()
        tracker.holder_id = "H1"
        _place(store, "H1", 50, 50)
        _place(store, "H2", 51, 50)
        assert tracker.check_tags(store) is None

    def test_human_tags_robot_carrier(self, store: EntityStore) -> None:
        """Tagging works in both directions."""
        tracker = PossessionTracker()
        tracker.holder_id = "R4"
        _place(store, "R4", 60, 60)
        _place(store, "H3", 62, 61)
        assert tracker.check_tags(store) == "H3"

    def test_last_opponent_in_roster_order_wins(self, store: EntityStore) -> None:
        """With several opponents in range the last one in roster order takes the ball."""
        tracker = PossessionTracker()
        tracker.holder_id = "H1"
        _place(store, "H1", 50, 50)
        _place(store, "R1", 50.5, 50)
        _place(store, "R3", 54, 50)
        assert tracker.check_tags(store) == "R3"

    def test_no_opponent_nearby_keeps_possession_across_ticks(self, store: EntityStore) -> None:
        """Two checks in a row without anyone in range leave the holder unchanged."""
        tracker = PossessionTracker()
        tracker.holder_id = "H4"
        for _ in range(2):
            assert tracker.check_tags(store) is None
            assert tracker.holder_id == "H4"

    def test_loose_ball(self, store: EntityStore) -> None:
        """Nothing to tag without a holder."""
        assert PossessionTracker().check_tags(store) is None
