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
"""pygame rendering of the formation board."""
from typing import Callable, Optional, Tuple

try:
    import pygame
except Exception:
    pygame = None

from squadboard.engine.config import BOARD_CONFIG
from squadboard.engine.presentation import board_view, formation_summary
from squadboard.engine.state import FormationState


def _board_to_screen(
    coordinate: Tuple[float, float],
    rect: Tuple[int, int, int, int],
    extent: Tuple[float, float] = BOARD_CONFIG.visualizer.board_extent,
) -> Tuple[int, int]:
    """Map a template coordinate into a pixel position inside ``rect``.

    Parameters
    ----------
    coordinate : Tuple[float, float]
        Slot coordinate in template units; ``x`` runs from the goalkeeper's
        touchline towards the opposition, ``y`` across the pitch.
    rect : Tuple[int, int, int, int]
        Pitch rectangle as ``(left, top, width, height)`` in pixels.
    extent : Tuple[float, float]
        Size of the template coordinate space along ``x`` and ``y``.

    Returns
    -------
    Tuple[int, int]
        Pixel position, clamped to the rectangle.
    """
    left, top, width, height = rect
    x, y = coordinate
    fx = min(max(x / extent[0], 0.0), 1.0)
    fy = min(max(y / extent[1], 0.0), 1.0)
    return int(left + fx * width), int(top + fy * height)


def start_visualizer(
    state: FormationState,
    screen_size: Tuple[int, int] = BOARD_CONFIG.visualizer.screen_size,
    fps: int = BOARD_CONFIG.visualizer.fps,
    on_select_formation: Optional[Callable[[str], None]] = None,
) -> None:
    """Start a pygame window that draws the board of ``state``.

    Number keys select formations in catalog order, ``G`` cycles through the
    goalkeeper candidates, and ``Q`` closes the window. If ``pygame`` is not
    installed the function returns immediately.

    Parameters
    ----------
    state : FormationState
        Board state to draw; re-read every frame.
    screen_size : Tuple[int, int]
        Initial window size in pixels.
    fps : int
        Redraw rate.
    on_select_formation : Optional[Callable[[str], None]]
        Called with the formation name when a number key is pressed; defaults
        to selecting the formation on ``state`` directly.
    """
    if pygame is None:
        return

    cfg = BOARD_CONFIG.visualizer
    select = on_select_formation or state.select_formation

    pygame.init()
    screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
    pygame.display.set_caption("Squad Board")
    clock = pygame.time.Clock()

    GREEN = (38, 160, 72)
    LINE = (245, 245, 245)
    TEXT = (20, 20, 20)
    VACANT = (150, 150, 150)

    font = pygame.font.SysFont(None, 18)
    title_font = pygame.font.SysFont(None, 26)

    running = True
    while running:
        names = formation_summary(state.catalog, state.template)["formations"]
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen_size = (event.w, event.h)
                screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    running = False
                elif event.key == pygame.K_g:
                    others = state.available_goalkeepers()
                    if others:
                        state.select_goalkeeper(others[0])
                elif pygame.K_1 <= event.key <= pygame.K_9:
                    index = event.key - pygame.K_1
                    if index < len(names):
                        select(names[index])

        view = board_view(state.current)

        screen.fill((0, 0, 0))
        margin = cfg.margin
        header = 40
        pitch_rect = pygame.Rect(margin, margin + header, screen_size[0] - 2 * margin, screen_size[1] - 2 * margin - header)
        pygame.draw.rect(screen, GREEN, pitch_rect)
        pygame.draw.rect(screen, LINE, pitch_rect, 4)
        pygame.draw.line(screen, LINE, (pitch_rect.centerx, pitch_rect.top), (pitch_rect.centerx, pitch_rect.bottom), 2)
        pygame.draw.circle(screen, LINE, pitch_rect.center, pitch_rect.height // 8, 2)

        rect = (pitch_rect.left, pitch_rect.top, pitch_rect.width, pitch_rect.height)
        for slot in view.slots:
            sx, sy = _board_to_screen(slot.coordinate, rect)
            colour = VACANT if slot.vacant else cfg.role_colours.get(slot.role, LINE)
            pygame.draw.circle(screen, colour, (sx, sy), cfg.marker_radius)
            initials = font.render(slot.initials, True, LINE)
            screen.blit(initials, (sx - initials.get_width() // 2, sy - initials.get_height() // 2))
            caption = font.render(slot.text, True, LINE)
            screen.blit(caption, (sx - caption.get_width() // 2, sy + cfg.marker_radius + 2))

        title = f"{view.formation_name} ({view.shape})"
        if view.goalkeeper_rating:
            title += f"  GK rating: {view.goalkeeper_rating}"
        screen.blit(title_font.render(title, True, LINE), (margin, margin // 2))
        if view.message:
            msg = title_font.render(view.message, True, TEXT)
            box = pygame.Rect(0, 0, msg.get_width() + 20, msg.get_height() + 12)
            box.center = pitch_rect.center
            pygame.draw.rect(screen, LINE, box, border_radius=6)
            screen.blit(msg, (box.x + 10, box.y + 6))

        keys = "  ".join(f"[{i + 1}] {name}" for i, name in enumerate(names)) + "  [G] next keeper  [Q] quit"
        screen.blit(font.render(keys, True, LINE), (margin, screen_size[1] - margin + 4))

        pygame.display.flip()
        clock.tick(fps)

    pygame.quit()
