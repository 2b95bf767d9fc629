from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Sequence

import pygame

from falling_blocks.game import Action, AutoDropper, Game, GameConfig, GameSession
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.DOWN,
}


def build_parser() -> argparse.ArgumentParser:
    defaults = GameConfig()
    p = argparse.ArgumentParser(description="Play Falling Blocks with the keyboard")
    p.add_argument("--height", type=int, default=defaults.height)
    p.add_argument("--width", type=int, default=defaults.width)
    p.add_argument("--seed", type=int, default=defaults.random_seed)
    p.add_argument("--drop-ms", type=int, default=defaults.drop_interval_ms,
                   help="Automatic descent interval in milliseconds")
    p.add_argument("--verbose", action="store_true", help="Log engine events")
    return p


def run(config: Optional[GameConfig] = None, cell_size: int = 28) -> None:
    config = config or GameConfig()
    pygame.init()
    dropper: Optional[AutoDropper] = None
    try:
        clock = pygame.time.Clock()
        session = GameSession(Game.from_config(config))
        renderer = Renderer(cell_size=cell_size)

        margin = renderer.margin
        screen = pygame.display.set_mode(
            (config.width * cell_size + margin * 2, config.height * cell_size + margin * 2)
        )
        pygame.display.set_caption("Falling Blocks")

        def begin() -> AutoDropper:
            session.start()
            d = AutoDropper(session, config.drop_interval_ms / 1000.0)
            d.start()
            return d

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif not session.game.game_started():
                        # Any key starts the game
                        dropper = begin()
                    elif session.is_over():
                        if event.key == pygame.K_r:
                            if dropper is not None:
                                dropper.stop()
                            session.reset()
                            dropper = begin()
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            session.update(action)

            if not session.game.game_started():
                message = "Press any key to start"
            elif session.is_over():
                message = "Game Over - Press R to restart, ESC to quit"
            else:
                message = None
            state, full_lines = session.view()
            renderer.draw(screen, state, full_lines, message)

            clock.tick(60)
    finally:
        if dropper is not None:
            dropper.stop()
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    run(GameConfig(height=args.height, width=args.width, random_seed=args.seed,
                   drop_interval_ms=args.drop_ms))


if __name__ == "__main__":  # pragma: no cover
    main()
