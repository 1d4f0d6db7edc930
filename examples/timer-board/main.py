"""Timer Board — live progress bars for a handful of timers.

Exercises tick-timer: count-up and count-down timers, reset and stop
policies, variance, start delays and trigger events.

Controls:
  Space   Publish "rearm" (restarts every stopped timer)
  Esc     Quit
"""
from __future__ import annotations

import sys

import pygame

from tick_timer import (
    DISPLAY_UPDATE,
    TIMER_COMPLETED,
    CountType,
    DelayScheduler,
    Engine,
    Event,
    EventBus,
    EventFilter,
    Timer,
    TimerDef,
    TimerPolicy,
    make_bus_system,
    make_delay_system,
    make_logic_system,
)

FPS = 60
TPS = 20
SCREEN_W = 640
ROW_H = 60
PAD = 16
BAR_X = 180
BAR_W = SCREEN_W - BAR_X - PAD

BG_COLOR = (20, 20, 30)
BAR_BG = (40, 40, 60)
TEXT_COLOR = (200, 200, 210)
FLASH_COLOR = (255, 255, 255)

REARM = EventFilter(names={"rearm"})

# (owner, definition, bar color)
BOARD: list[tuple[str, TimerDef, tuple[int, int, int]]] = [
    ("fuse", TimerDef(duration=3.0, trigger=REARM), (0, 220, 220)),
    (
        "blinker",
        TimerDef(duration=1.0, variance=0.4, policy=TimerPolicy.RESET),
        (255, 160, 40),
    ),
    (
        "countdown",
        TimerDef(count_type=CountType.COUNT_DOWN, duration=5.0, trigger=REARM),
        (60, 220, 80),
    ),
    (
        "delayed",
        TimerDef(duration=2.0, start_delay=1.5, trigger=REARM),
        (220, 80, 220),
    ),
]


class BoardState:
    """Holds the engine, the timers and what the display has been told."""

    def __init__(self) -> None:
        self.engine = Engine(tps=TPS, seed=42)
        self.bus = EventBus()
        self.delays = DelayScheduler()
        self.timers: list[Timer] = []
        self.readings: dict[str, tuple[float, float]] = {}
        self.flash: dict[str, int] = {}
        self.completions: dict[str, int] = {}

        for owner, definition, _ in BOARD:
            self.timers.append(
                Timer(definition, self.bus, self.delays, self.engine.rng, owner=owner)
            )
            self.readings[owner] = (0.0, definition.duration)
            self.completions[owner] = 0

        self.bus.subscribe(DISPLAY_UPDATE, self._on_display)
        self.bus.subscribe(TIMER_COMPLETED, self._on_completed)

        self.engine.on_start(lambda ctx: [t.initialize() for t in self.timers])
        self.engine.add_system(make_delay_system(self.delays))
        self.engine.add_system(make_logic_system(self.timers))
        self.engine.add_system(make_bus_system(self.bus))

    def _on_display(self, event: Event) -> None:
        self.readings[event.sender] = (event.data["current"], event.data["target"])

    def _on_completed(self, event: Event) -> None:
        self.completions[event.sender] += 1
        self.flash[event.sender] = FPS // 4

    def rearm(self) -> None:
        self.bus.publish("rearm", sender="keyboard")


def draw_board(
    surface: pygame.Surface, state: BoardState, font: pygame.font.Font
) -> None:
    for row, (owner, definition, color) in enumerate(BOARD):
        y = PAD + row * ROW_H
        current, target = state.readings[owner]
        frac = 0.0 if target <= 0 else max(0.0, min(current / target, 1.0))

        label = font.render(
            f"{owner} x{state.completions[owner]}", True, TEXT_COLOR
        )
        surface.blit(label, (PAD, y + 8))

        pygame.draw.rect(surface, BAR_BG, (BAR_X, y, BAR_W, ROW_H - PAD))
        fill = FLASH_COLOR if state.flash.get(owner, 0) > 0 else color
        pygame.draw.rect(surface, fill, (BAR_X, y, int(BAR_W * frac), ROW_H - PAD))

        value = font.render(f"{current:5.2f}s", True, TEXT_COLOR)
        surface.blit(value, (BAR_X + 6, y + 8))

    for owner in list(state.flash):
        state.flash[owner] -= 1


def main() -> None:
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, PAD * 2 + ROW_H * len(BOARD)))
    pygame.display.set_caption("Timer Board — tick-timer demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)

    state = BoardState()

    tick_interval = 1.0 / TPS
    accumulator = 0.0
    running = True

    while running:
        dt = clock.tick(FPS) / 1000.0
        accumulator += dt

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    state.rearm()

        while accumulator >= tick_interval:
            state.engine.step()
            accumulator -= tick_interval

        screen.fill(BG_COLOR)
        draw_board(screen, state, font)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
