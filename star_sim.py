#!/usr/bin/env python3
"""
Star Graph sandbox viewer.

What this module does
- Opens a Pygame window and drives a SimulationController once per displayed
  frame through a FrameLoop (one pending tick at a time, cancelable).
- Draws orbits, links, bodies and the last computed route.
- Handles dragging bodies, camera pan/zoom, mode and speed keys, and two-click
  route queries.

Controls
- Left-drag a body: move it (the simulation pauses while dragging)
- Right-click two bodies: find the cheapest route between them
- Shift+right-click two bodies: add the link between them, or remove it if present
- Right/Middle-drag empty space: pan | Wheel: zoom
- 1 / 2 / 3: orbit / leapfrog physics / Euler mode
- + / -: speed | A: add star | R: reset | F: toggle forbid-through-sun | Esc: quit
- [ / ]: lighter / heavier last clicked star | Delete: remove it

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python star_sim.py`
"""

import argparse
import logging
from typing import List, Optional, Tuple

import pygame
from pygame import gfxdraw

from stargraph.camera import Camera2D
from stargraph.constants import (
    BACKGROUND_COLOR,
    LINK_COLOR,
    ORBIT_COLOR,
    ROUTE_COLOR,
    SAFE_COORD_LIMIT,
    SELECTION_COLOR,
    TARGET_FPS,
    TEXT_COLOR,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from stargraph.simulation import MODE_NAMES, SimulationController
from stargraph.timekeeping import FrameLoop, FrameTimer
from stargraph.vector_utils import distance

logger = logging.getLogger("star_sim")

MODE_KEYS = {pygame.K_1: "orbit", pygame.K_2: "physics", pygame.K_3: "euler"}


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def body_pixel_radius(mass: float) -> int:
    return int(min(30, max(3, mass / 10)))


class PygameViewer:
    """
    Pygame loop: draws the system and routes input to the controller.
    """

    def __init__(self, sim: SimulationController):
        self.sim = sim
        self.camera = Camera2D(center=(0.0, 0.0))
        self.frames = FrameLoop()
        self.timer = FrameTimer()
        self.surface = None
        self.clock = None
        self.font = None
        self.running = True
        self.dragging_background = False
        self.drag_start_screen = (0, 0)
        self.route_picks: List[str] = []
        self.link_picks: List[str] = []
        self.selected: Optional[str] = None
        self.last_query: Optional[Tuple[str, str]] = None

    def body_at(self, screen_pos) -> Optional[str]:
        world = self.camera.screen_to_world(screen_pos)
        best, best_d = None, float("inf")
        for b in self.sim.bodies:
            d = distance(b.position, world)
            pick = max(body_pixel_radius(b.mass), 10) * self.camera.upp
            if d < pick and d < best_d:
                best, best_d = b.id, d
        return best

    def schedule_tick(self):
        self.frames.request(self.on_frame)

    def on_frame(self, dt: float):
        self.sim.tick(dt)
        self.schedule_tick()

    def switch_mode(self, name: str):
        # drop the tick queued under the old mode before re-arming
        self.frames.cancel()
        self.sim.set_mode(name)
        self.schedule_tick()

    def run(self):
        pygame.init()
        pygame.display.set_caption("Star Graph")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.camera.fit(b.position for b in self.sim.bodies)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 20)

        self.timer.tick()
        self.schedule_tick()
        try:
            while self.running:
                real_dt = self.timer.tick()
                self.handle_events()
                self.frames.run_pending(real_dt)
                self.draw()
                self.clock.tick(TARGET_FPS)
        finally:
            self.frames.cancel()
            pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.camera.zoom(factor, pygame.mouse.get_pos())

            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                mouse = pygame.mouse.get_pos()
                picked = self.body_at(mouse)
                if event.button == 1 and picked is not None:
                    self.selected = picked
                    self.sim.begin_drag(picked)
                elif event.button == 3 and picked is not None:
                    if pygame.key.get_mods() & pygame.KMOD_SHIFT:
                        self.pick_link_end(picked)
                    else:
                        self.pick_route_end(picked)
                elif event.button in (1, 2, 3):
                    self.dragging_background = True
                    self.drag_start_screen = mouse

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1 and self.sim.dragging:
                    self.sim.end_drag()
                self.dragging_background = False

            elif event.type == pygame.MOUSEMOTION:
                mouse = pygame.mouse.get_pos()
                if self.sim.dragging:
                    self.sim.drag_to(self.camera.screen_to_world(mouse))
                elif self.dragging_background:
                    dx = mouse[0] - self.drag_start_screen[0]
                    dy = mouse[1] - self.drag_start_screen[1]
                    self.camera.pan_pixels(dx, dy)
                    self.drag_start_screen = mouse

    def handle_key(self, key):
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in MODE_KEYS:
            self.switch_mode(MODE_KEYS[key])
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.sim.set_speed(self.sim.speed * 2 if self.sim.speed > 0 else 0.25)
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.sim.set_speed(self.sim.speed / 2 if self.sim.speed > 0.25 else 0.0)
        elif key == pygame.K_a:
            self.sim.add_star()
        elif key == pygame.K_r:
            self.route_picks = []
            self.link_picks = []
            self.selected = None
            self.last_query = None
            self.sim.reset()
            self.camera.fit(b.position for b in self.sim.bodies)
        elif key in (pygame.K_LEFTBRACKET, pygame.K_RIGHTBRACKET) and self.selected is not None:
            star = self.sim.graph.get_star(self.selected)
            if star is not None:
                factor = 1.25 if key == pygame.K_RIGHTBRACKET else 0.8
                self.sim.set_mass(star.id, star.mass * factor)
        elif key == pygame.K_DELETE and self.selected is not None:
            self.sim.remove_star(self.selected)
            self.selected = None
        elif key == pygame.K_f:
            self.sim.forbid_through_anchor = not self.sim.forbid_through_anchor
            if self.last_query is not None:
                self.sim.find_route(*self.last_query)

    def pick_route_end(self, star_id: str):
        self.route_picks.append(star_id)
        if len(self.route_picks) == 2:
            self.last_query = (self.route_picks[0], self.route_picks[1])
            self.sim.find_route(*self.last_query)
            self.route_picks = []

    def pick_link_end(self, star_id: str):
        self.link_picks.append(star_id)
        if len(self.link_picks) == 2:
            a, b = self.link_picks
            self.link_picks = []
            if not self.sim.remove_link(a, b):
                self.sim.add_link(a, b)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)
        bodies = {b.id: b for b in self.sim.bodies}
        anchor = self.sim.anchor()
        cam = self.camera

        if anchor is not None:
            center = _safe_point(cam.world_to_screen(anchor.position))
            for b in bodies.values():
                if b.id == anchor.id or center is None:
                    continue
                r_px = int(max(8, distance(b.position, anchor.position)) / cam.upp)
                if 0 < r_px < SAFE_COORD_LIMIT:
                    gfxdraw.aacircle(surf, center[0], center[1], r_px, ORBIT_COLOR)
            zone_px = int(self.sim.exclusion_radius / cam.upp)
            if center is not None and 0 < zone_px < SAFE_COORD_LIMIT:
                gfxdraw.aacircle(surf, center[0], center[1], zone_px, (120, 60, 40))

        for link in self.sim.graph.links:
            a, b = bodies.get(link.source), bodies.get(link.target)
            if a is None or b is None:
                continue
            pa = _safe_point(cam.world_to_screen(a.position))
            pb = _safe_point(cam.world_to_screen(b.position))
            if pa and pb:
                pygame.draw.aaline(surf, LINK_COLOR, pa, pb)

        route = self.sim.route
        if route is not None and len(route.path) > 1:
            pts = [_safe_point(cam.world_to_screen(bodies[i].position)) for i in route.path if i in bodies]
            pts = [p for p in pts if p]
            if len(pts) > 1:
                pygame.draw.lines(surf, ROUTE_COLOR, False, pts, 3)

        for b in bodies.values():
            p = _safe_point(cam.world_to_screen(b.position))
            if p is None:
                continue
            r = body_pixel_radius(b.mass)
            gfxdraw.filled_circle(surf, p[0], p[1], r, b.color)
            gfxdraw.aacircle(surf, p[0], p[1], r, (0, 0, 0))
            if b.id in self.route_picks or b.id in self.link_picks or b.id == self.sim.drag_id:
                gfxdraw.aacircle(surf, p[0], p[1], r + 4, SELECTION_COLOR)
            self.draw_text(b.name, p[0] + r + 4, p[1] - r - 4)

        self.draw_hud()
        pygame.display.flip()

    def draw_hud(self):
        sim = self.sim
        self.draw_text("Left-drag: move star | Right-click two stars: route | Shift+right-click two: link | "
                       "Wheel: zoom", 10, 10)
        self.draw_text("[/]: mass | Del: remove | 1/2/3: mode | +/-: speed | A: add | R: reset | F: forbid sun",
                       10, 30)
        self.draw_text(f"Mode: {sim.mode_name}  Speed: {sim.speed:g}x  Stars: {len(sim.bodies)}  "
                       f"Links: {len(sim.graph.links)}  Forbid sun: {'on' if sim.forbid_through_anchor else 'off'}",
                       10, 50)
        if sim.route is not None:
            self.draw_text(sim.route_summary(), 10, 70)

    def draw_text(self, text, x, y, color=TEXT_COLOR):
        img = self.font.render(text, True, color)
        self.surface.blit(img, (x, y))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Star Graph orbital sandbox")
    parser.add_argument("--mode", choices=MODE_NAMES, default="orbit")
    parser.add_argument("--speed", type=float, default=1.0)
    parser.add_argument("-v", "--verbose", action="store_true", help="log engine details")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s - %(levelname)s - %(module)s - %(message)s")

    sim = SimulationController()
    sim.set_speed(args.speed)
    if args.mode != sim.mode_name:
        sim.set_mode(args.mode)
    logger.info("Starting in %s mode at %gx", sim.mode_name, sim.speed)
    PygameViewer(sim).run()


if __name__ == "__main__":
    main()
