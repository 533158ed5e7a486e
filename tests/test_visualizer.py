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
"""Tests for the coordinate helpers behind mouse input."""

from typing import Callable

import pytest

pygame = pytest.importorskip("pygame")

from gridiron.engine.match_engine import MatchSession  # noqa: E402
from gridiron.visualizer.visualizer import (  # noqa: E402
    SCOREBOARD_HEIGHT,
    _button_label,
    entity_at,
    field_rect,
    field_to_screen,
    screen_to_field,
)


class TestCoordinates:
    """Pixel and field conversions."""

    def test_field_below_scoreboard(self) -> None:
        """The field starts under the scoreboard with a margin."""
        rect = field_rect((1050, 680))
        assert rect.top == SCOREBOARD_HEIGHT + 8
        assert rect.width == 1034

    def test_corners(self) -> None:
        """Field corners map to the rectangle corners and back."""
        rect = pygame.Rect(0, 0, 200, 100)
        assert field_to_screen((0.0, 0.0), rect) == (0, 0)
        assert field_to_screen((100.0, 100.0), rect) == (200, 100)
        assert screen_to_field((100, 50), rect) == (50.0, 50.0)


class TestHitTesting:
    """Clicking on players."""

    def test_click_on_human(self, make_session: Callable[..., MatchSession]) -> None:
        """A click at a player's centre finds that player."""
        snapshot = make_session().snapshot()
        rect = pygame.Rect(0, 0, 1000, 1000)
        hit = entity_at(snapshot, (820, 600), rect)
        assert hit is not None and hit.entity_id == "H1"

    def test_click_on_grass(self, make_session: Callable[..., MatchSession]) -> None:
        """Empty grass returns nothing."""
        snapshot = make_session().snapshot()
        assert entity_at(snapshot, (500, 950), pygame.Rect(0, 0, 1000, 1000)) is None


@pytest.mark.parametrize(
    "phase, label",
    [
        ("idle", "Start Match"),
        ("ended", "Start Match"),
        ("period_break", "Start Period 2"),
        ("playing", None),
        ("scored", None),
    ],
)
def test_button_label(phase: str, label: str) -> None:
    """The action button only shows when the match is waiting for the user."""
    assert _button_label(phase) == label
