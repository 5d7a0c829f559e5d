"""Pygame 2D visualization for the plasmodium simulation.

Renders the grid's organism, food and obstacle cells in a window, with
an optional overlay of the chemical field.  The simulation steps at a
configurable rate while the display refreshes at the Pygame frame rate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np
import pygame

if TYPE_CHECKING:
    from plasmodium.simulation.engine import SimulationEngine

from plasmodium.grid.cell import OccupancyState

# Colour palette
_BG = (255, 255, 255)
_PANEL_TEXT = (40, 40, 40)

_STATE_COLOURS: dict[OccupancyState, tuple[int, int, int]] = {
    OccupancyState.FOOD: (0x7D, 0x3E, 0x3E),
    OccupancyState.CONNECTED_FOOD: (0x7D, 0x3E, 0x3E),
    OccupancyState.ORGANISM: (0x81, 0xB2, 0x81),
    OccupancyState.OBSTACLE: (0xC0, 0xC0, 0xC0),
}

# Field overlay: attractant in amber, repellent in blue
_ATTRACT_COLOUR = np.array([255, 170, 0], dtype=np.float64)
_REPEL_COLOUR = np.array([40, 90, 255], dtype=np.float64)


class PygameRenderer:
    """Renders a SimulationEngine state into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    # Speed presets: steps per second
    _SPEED_STEPS: ClassVar[list[float]] = [
        0.5,
        1.0,
        3.0,
        6.0,
        10.0,
        20.0,
        30.0,
        60.0,
    ]

    def __init__(
        self,
        engine: SimulationEngine,
        cell_size: int = 8,
        ticks_per_second: float = 6.0,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The simulation engine to render.
            cell_size: Pixel width/height per grid cell.
            ticks_per_second: Simulation steps per real-time second.
        """
        self.engine = engine
        self.cell_size = cell_size
        self.ticks_per_second = ticks_per_second
        self._speed_index = self._nearest_speed(ticks_per_second)
        self._tick_accumulator = 0.0

        w = engine.grid.width * cell_size
        h = engine.grid.height * cell_size
        self._panel_width = 220
        self._win_w = w + self._panel_width
        self._win_h = max(h, 260)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Plasmodium")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = False
        self.show_field = False

    def _nearest_speed(self, tps: float) -> int:
        """Return the index of the closest speed preset."""
        diffs = [abs(s - tps) for s in self._SPEED_STEPS]
        return diffs.index(min(diffs))

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, step sim, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0  # seconds elapsed
            self._handle_events()
            if not self.paused and not self.engine.is_stalled:
                self._tick_accumulator += self.ticks_per_second * dt
                steps = int(self._tick_accumulator)
                self._tick_accumulator -= steps
                for _ in range(steps):
                    self.engine.step()
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key == pygame.K_f:
                    self.show_field = not self.show_field
                elif event.key == pygame.K_r:
                    self.engine.reset()
                    self._tick_accumulator = 0.0
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._speed_index = min(
                        len(self._SPEED_STEPS) - 1,
                        self._speed_index + 1,
                    )
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
                elif event.key == pygame.K_MINUS:
                    self._speed_index = max(0, self._speed_index - 1)
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        if self.show_field:
            self._draw_field_overlay()
        self._draw_cells()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_cells(self) -> None:
        """Draw every non-empty cell as a filled square."""
        cs = self.cell_size
        grid = self.engine.grid
        for y in range(grid.height):
            for x in range(grid.width):
                colour = _STATE_COLOURS.get(grid.get_cell_by_coord(x, y).state)
                if colour is not None:
                    pygame.draw.rect(self.screen, colour, (x * cs, y * cs, cs, cs))

    def _draw_field_overlay(self) -> None:
        """Tint cells by the sign and strength of the chemical field."""
        cs = self.cell_size
        field = self.engine.grid.chemical_field
        peak = float(np.abs(field).max())
        if peak <= 0:
            return

        overlay = pygame.Surface(
            (self.engine.grid.width * cs, self.engine.grid.height * cs),
            pygame.SRCALPHA,
        )

        for y in range(field.shape[0]):
            for x in range(field.shape[1]):
                val = field[y, x]
                if abs(val) < 0.01:
                    continue
                base = _ATTRACT_COLOUR if val > 0 else _REPEL_COLOUR
                alpha = int(min(abs(val) / peak, 1.0) * 140)
                pygame.draw.rect(
                    overlay,
                    (*base.astype(int).tolist(), alpha),
                    (x * cs, y * cs, cs, cs),
                )

        self.screen.blit(overlay, (0, 0))

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = self.engine.grid.width * self.cell_size + 10
        y = 10
        stats = self.engine.stats()

        if self.engine.is_stalled:
            status = "STALLED"
        elif self.paused:
            status = "PAUSED"
        else:
            status = "RUNNING"

        lines = [
            f"Tick: {stats.tick}",
            f"Speed: {self.ticks_per_second:.1f} t/s",
            status,
            "",
            "--- Organism ---",
            f"Volume: {stats.volume}",
            f"Food reached: {stats.connected_food_sources}",
            f"Active cells: {stats.active_cells}",
            f"Stale left: {stats.stale_remaining}",
            "",
            "--- Controls ---",
            "SPACE: pause",
            "+/-: speed",
            "F: chemical field",
            "R: reset",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, _PANEL_TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18
