# app.py
"""
The interactive Voronoi balls frame loop.

VoronoiBallsApp ties a Simulation to a Renderer through a FrameScheduler.
Each frame it clears the surface, draws the balls and cells in the current
order, advances the balls and schedules itself again. Keyboard and resize
listeners are registered once on start and removed on stop.
"""
import logging
import pygame
from typing import Callable, Optional
from simulation import Simulation
from scheduler import FrameScheduler
from events import EventRouter
from visualization import Renderer

# --- Data Contracts ---
#
# class VoronoiBallsApp:
#   - start(self) -> None:
#     - Side Effects: idle -> running. Registers the KEYDOWN and VIDEORESIZE
#       listeners and schedules the first frame. Calling it while running
#       does nothing.
#   - stop(self) -> None:
#     - Side Effects: running -> idle. Cancels the pending frame and removes
#       every listener registered by start().
#   - Keys: 'o'/'O' toggles the draw order, 'p'/'P' regenerates the palette.
#   - Resize: the renderer adopts the new size and all balls are recreated.

IDLE = 'idle'
RUNNING = 'running'


class VoronoiBallsApp:
    """
    Drives the animation frame by frame.
    """
    def __init__(self, simulation: Simulation, renderer: Renderer, scheduler: FrameScheduler,
                 events: EventRouter, present: Optional[Callable[[], None]] = None):
        self.simulation = simulation
        self.renderer = renderer
        self.scheduler = scheduler
        self.events = events
        self.present = present
        self.state = IDLE
        self.frames_drawn = 0
        self._listeners = [
            (pygame.KEYDOWN, self._on_key_down),
            (pygame.VIDEORESIZE, self._on_resize),
        ]

    @property
    def running(self) -> bool:
        return self.state == RUNNING

    def start(self) -> None:
        if self.state == RUNNING:
            return
        for event_type, handler in self._listeners:
            self.events.add_listener(event_type, handler)
        self.state = RUNNING
        self.scheduler.schedule(self._tick)
        logging.info("Frame loop started.")

    def stop(self) -> None:
        if self.state == IDLE:
            return
        self.scheduler.cancel()
        for event_type, handler in self._listeners:
            self.events.remove_listener(event_type, handler)
        self.state = IDLE
        logging.info(f"Frame loop stopped after {self.frames_drawn} frames.")

    def draw(self) -> None:
        """Renders the current state without advancing it."""
        simulation = self.simulation
        diagram = simulation.tessellate()
        self.renderer.clear()
        if simulation.balls_on_top:
            self.renderer.draw_cells(diagram, simulation.color_palette)
            self.renderer.draw_balls(simulation.particles)
        else:
            self.renderer.draw_balls(simulation.particles)
            self.renderer.draw_cells(diagram, simulation.color_palette)

    def _tick(self) -> None:
        if self.state != RUNNING:
            return
        self.draw()
        self.simulation.step()
        self.frames_drawn += 1
        if self.present is not None:
            self.present()
        self.scheduler.schedule(self._tick)

    def _on_key_down(self, event: pygame.event.Event) -> None:
        if event.key == pygame.K_o:
            self.simulation.toggle_draw_order()
        elif event.key == pygame.K_p:
            self.simulation.regenerate_palette()

    def _on_resize(self, event: pygame.event.Event) -> None:
        width, height = event.w, event.h
        self.renderer.resize(width, height)
        self.simulation.resize(width, height)
