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
import time
from typing import Optional, Tuple

import pygame

from gridiron.engine.match_engine import EntitySnapshot, MatchSession, MatchSnapshot

SCOREBOARD_HEIGHT = 56
ENTITY_RADIUS = 14
BALL_RADIUS = 6

# Colors
GRASS = (46, 139, 87)
GRASS_DARK = (40, 124, 77)
LINE = (245, 245, 245)
END_ZONE_HUMANS = (30, 64, 175)
END_ZONE_ROBOTS = (185, 28, 28)
HUMAN = (37, 99, 235)
ROBOT = (107, 114, 128)
BALL = (139, 69, 19)
HOLDER_RING = (255, 215, 0)
SELECTED_RING = (255, 255, 255)
BOARD = (17, 24, 39)
TEXT = (245, 245, 245)
BUTTON = (70, 160, 70)
BUTTON_HOVER = (90, 190, 90)


def field_rect(screen_size: Tuple[int, int]) -> pygame.Rect:
    """Return the area below the scoreboard used for the field.

    Parameters
    ----------
    screen_size : Tuple[int, int]
        Window width and height in pixels.

    Returns
    -------
    pygame.Rect
        Field rectangle with a small margin on every side.
    """
    margin = 8
    width, height = screen_size
    return pygame.Rect(margin, SCOREBOARD_HEIGHT + margin, width - 2 * margin, height - SCOREBOARD_HEIGHT - 2 * margin)


def field_to_screen(position: Tuple[float, float], rect: pygame.Rect) -> Tuple[int, int]:
    """Map percent field coordinates to pixels.

    Parameters
    ----------
    position : Tuple[float, float]
        Field coordinates in ``0..100``.
    rect : pygame.Rect
        On-screen field rectangle.

    Returns
    -------
    Tuple[int, int]
        Pixel position inside ``rect``.
    """
    x, y = position
    return int(rect.left + x / 100.0 * rect.width), int(rect.top + y / 100.0 * rect.height)


def screen_to_field(pixel: Tuple[int, int], rect: pygame.Rect) -> Tuple[float, float]:
    """Map a pixel position to percent field coordinates.

    Parameters
    ----------
    pixel : Tuple[int, int]
        Mouse position.
    rect : pygame.Rect
        On-screen field rectangle.

    Returns
    -------
    Tuple[float, float]
        Field coordinates; values outside ``0..100`` mean the click missed.
    """
    px, py = pixel
    return (px - rect.left) / rect.width * 100.0, (py - rect.top) / rect.height * 100.0


def entity_at(snapshot: MatchSnapshot, pixel: Tuple[int, int], rect: pygame.Rect) -> Optional[EntitySnapshot]:
    """Find the player drawn under the mouse.

    Parameters
    ----------
    snapshot : MatchSnapshot
        Current match view.
    pixel : Tuple[int, int]
        Mouse position.
    rect : pygame.Rect
        On-screen field rectangle.

    Returns
    -------
    Optional[EntitySnapshot]
        Topmost player under the cursor, or ``None``.
    """
    hit: Optional[EntitySnapshot] = None
    for entity in snapshot.entities:
        sx, sy = field_to_screen(entity.position, rect)
        if (sx - pixel[0]) ** 2 + (sy - pixel[1]) ** 2 <= ENTITY_RADIUS**2:
            hit = entity
    return hit


def _draw_field(screen: pygame.Surface, rect: pygame.Rect, orientation: str, font: pygame.font.Font) -> None:
    """Draw grass stripes, end zones and yard lines.

    Parameters
    ----------
    screen : pygame.Surface
        Target surface.
    rect : pygame.Rect
        On-screen field rectangle.
    orientation : str
        ``"landscape"`` or ``"portrait"``.
    font : pygame.font.Font
        Font for yard numbers.
    """
    pygame.draw.rect(screen, GRASS, rect)
    landscape = orientation == "landscape"

    for index, start in enumerate(range(10, 90, 10)):
        if index % 2:
            continue
        if landscape:
            x0, y0 = field_to_screen((start, 0), rect)
            x1, y1 = field_to_screen((start + 10, 100), rect)
        else:
            x0, y0 = field_to_screen((0, start), rect)
            x1, y1 = field_to_screen((100, start + 10), rect)
        pygame.draw.rect(screen, GRASS_DARK, pygame.Rect(x0, y0, x1 - x0, y1 - y0))

    # Humans score in the low end zone, robots in the high one.
    zones = ((0, END_ZONE_HUMANS, "TITANS"), (90, END_ZONE_ROBOTS, "BOTS"))
    for start, color, label in zones:
        if landscape:
            x0, y0 = field_to_screen((start, 0), rect)
            x1, y1 = field_to_screen((start + 10, 100), rect)
        else:
            x0, y0 = field_to_screen((0, start), rect)
            x1, y1 = field_to_screen((100, start + 10), rect)
        zone = pygame.Rect(x0, y0, x1 - x0, y1 - y0)
        pygame.draw.rect(screen, color, zone)
        text = font.render(label, True, TEXT)
        screen.blit(text, (zone.centerx - text.get_width() // 2, zone.centery - text.get_height() // 2))

    for yard in range(10, 100, 10):
        if landscape:
            start_px = field_to_screen((yard, 0), rect)
            end_px = field_to_screen((yard, 100), rect)
        else:
            start_px = field_to_screen((0, yard), rect)
            end_px = field_to_screen((100, yard), rect)
        pygame.draw.line(screen, LINE, start_px, end_px, 3 if yard in (10, 90) else 1)

        if 10 < yard < 90:
            number = font.render(str(50 - abs(50 - yard)), True, LINE)
            anchor = (yard, 8) if landscape else (8, yard)
            nx, ny = field_to_screen(anchor, rect)
            screen.blit(number, (nx - number.get_width() // 2, ny - number.get_height() // 2))

    pygame.draw.rect(screen, LINE, rect, 3)


def _draw_entities(screen: pygame.Surface, rect: pygame.Rect, snapshot: MatchSnapshot, font: pygame.font.Font) -> None:
    """Draw every player and the ball.

    Parameters
    ----------
    screen : pygame.Surface
        Target surface.
    rect : pygame.Rect
        On-screen field rectangle.
    snapshot : MatchSnapshot
        Current match view.
    font : pygame.font.Font
        Font for initials and jersey numbers.
    """
    for entity in snapshot.entities:
        center = field_to_screen(entity.position, rect)
        if entity.has_ball:
            pygame.draw.circle(screen, HOLDER_RING, center, ENTITY_RADIUS + 4)
        elif entity.selected:
            pygame.draw.circle(screen, SELECTED_RING, center, ENTITY_RADIUS + 3, 2)

        if entity.team == "offense":
            pygame.draw.circle(screen, HUMAN, center, ENTITY_RADIUS)
            label = entity.profile.initials if entity.profile else entity.entity_id
            jersey = f"#{entity.profile.jersey}" if entity.profile else ""
            text = font.render(label, True, TEXT)
            screen.blit(text, (center[0] - text.get_width() // 2, center[1] - text.get_height() // 2))
            if jersey:
                tag = font.render(jersey, True, TEXT)
                screen.blit(tag, (center[0] - tag.get_width() // 2, center[1] + ENTITY_RADIUS + 2))
        else:
            body = pygame.Rect(0, 0, ENTITY_RADIUS * 2, ENTITY_RADIUS * 2)
            body.center = center
            pygame.draw.rect(screen, ROBOT, body, border_radius=4)
            text = font.render(entity.entity_id, True, TEXT)
            screen.blit(text, (center[0] - text.get_width() // 2, center[1] - text.get_height() // 2))

    if snapshot.ball is not None:
        ball = pygame.Rect(0, 0, BALL_RADIUS * 2 + 2, BALL_RADIUS + 3)
        ball.center = field_to_screen(snapshot.ball, rect)
        pygame.draw.ellipse(screen, BALL, ball)


def _draw_scoreboard(
    screen: pygame.Surface,
    snapshot: MatchSnapshot,
    session: MatchSession,
    font: pygame.font.Font,
) -> None:
    """Draw team names, scores, the period and the countdown.

    Parameters
    ----------
    screen : pygame.Surface
        Target surface.
    snapshot : MatchSnapshot
        Current match view.
    session : MatchSession
        Session providing team names and the clock formatter.
    font : pygame.font.Font
        Scoreboard font.
    """
    width = screen.get_width()
    pygame.draw.rect(screen, BOARD, pygame.Rect(0, 0, width, SCOREBOARD_HEIGHT))
    store = session.state.store
    home = font.render(f"{store.humans.name}  {snapshot.offense_score}", True, TEXT)
    guest = font.render(f"{snapshot.defense_score}  {store.robots.name}", True, TEXT)
    clock = font.render(f"Q{snapshot.period}  {session.state.clock.display()}", True, HOLDER_RING)
    screen.blit(home, (12, (SCOREBOARD_HEIGHT - home.get_height()) // 2))
    screen.blit(clock, ((width - clock.get_width()) // 2, (SCOREBOARD_HEIGHT - clock.get_height()) // 2))
    screen.blit(guest, (width - guest.get_width() - 160, (SCOREBOARD_HEIGHT - guest.get_height()) // 2))


def _draw_overlay(screen: pygame.Surface, message: str, font: pygame.font.Font) -> None:
    """Dim the field and show a centred message.

    Parameters
    ----------
    screen : pygame.Surface
        Target surface.
    message : str
        Text to display.
    font : pygame.font.Font
        Overlay font.
    """
    overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 120))
    screen.blit(overlay, (0, 0))
    text = font.render(message, True, TEXT)
    screen.blit(text, ((screen.get_width() - text.get_width()) // 2, (screen.get_height() - text.get_height()) // 2))


def _button_label(phase: str) -> Optional[str]:
    """Return the caption of the action button for a phase.

    Parameters
    ----------
    phase : str
        Current match phase.

    Returns
    -------
    Optional[str]
        ``"Start Match"``, ``"Start Period 2"`` or ``None`` when no button shows.
    """
    if phase in ("idle", "ended"):
        return "Start Match"
    if phase == "period_break":
        return "Start Period 2"
    return None


def start_visualizer(
    session: MatchSession,
    screen_size: Tuple[int, int] = (1050, 680),
    fps: int = 30,
) -> None:
    """Open a pygame window and run the match from its frame loop.

    The loop advances the session's scheduler by the measured frame time, so
    the simulation and drawing share one thread.

    Parameters
    ----------
    session : MatchSession
        Match to display and control.
    screen_size : Tuple[int, int]
        Initial window size in pixels.
    fps : int
        Target frame rate.
    """
    pygame.init()
    screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
    pygame.display.set_caption("Gridiron: Humans vs Robots")
    clock = pygame.time.Clock()

    font = pygame.font.SysFont(None, 20)
    board_font = pygame.font.SysFont(None, 34)

    button_w, button_h = 140, 36
    running = True
    last_update = time.time()

    while running:
        mouse_pos = pygame.mouse.get_pos()
        button_rect = pygame.Rect(screen_size[0] - button_w - 10, (SCOREBOARD_HEIGHT - button_h) // 2, button_w, button_h)
        rect = field_rect(screen_size)
        snapshot = session.snapshot()
        label = _button_label(snapshot.phase)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    running = False
                elif event.key == pygame.K_o:
                    flipped = "portrait" if snapshot.orientation == "landscape" else "landscape"
                    session.set_orientation(flipped)
            elif event.type == pygame.VIDEORESIZE:
                screen_size = (event.w, event.h)
                screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if label and button_rect.collidepoint(event.pos):
                    if snapshot.phase == "period_break":
                        session.resume_after_period_break()
                    else:
                        session.start_match()
                    continue

                clicked = entity_at(snapshot, event.pos, rect)
                if clicked is not None and clicked.team == "offense":
                    session.request_pass(clicked.entity_id)
                elif rect.collidepoint(event.pos):
                    session.move_selected_entity(*screen_to_field(event.pos, rect))

        current_time = time.time()
        session.scheduler.advance((current_time - last_update) * session.simulation_speed)
        last_update = current_time
        snapshot = session.snapshot()

        screen.fill((0, 0, 0))
        _draw_field(screen, rect, snapshot.orientation, font)
        _draw_entities(screen, rect, snapshot, font)
        _draw_scoreboard(screen, snapshot, session, board_font)

        if snapshot.phase == "period_break":
            _draw_overlay(screen, "End of period 1", board_font)
        elif snapshot.phase == "ended":
            _draw_overlay(
                screen,
                f"Final: {snapshot.offense_score} - {snapshot.defense_score}",
                board_font,
            )
        elif snapshot.phase == "scored":
            _draw_overlay(screen, "TOUCHDOWN!", board_font)

        label = _button_label(snapshot.phase)
        if label:
            hover = button_rect.collidepoint(mouse_pos)
            pygame.draw.rect(screen, BUTTON_HOVER if hover else BUTTON, button_rect, border_radius=6)
            text = font.render(label, True, TEXT)
            screen.blit(
                text,
                (
                    button_rect.x + (button_rect.w - text.get_width()) // 2,
                    button_rect.y + (button_rect.h - text.get_height()) // 2,
                ),
            )

        pygame.display.flip()
        clock.tick(fps)

    session.stop_match()
    pygame.quit()
