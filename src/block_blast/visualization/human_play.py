from __future__ import annotations

import argparse
from typing import Optional

import pygame

from block_blast.game import BlockBlastGame, FrameTimer, GameConfig, PointerEvent
from block_blast.utils import configure_logging, get_logger
from .renderer import Renderer


LOGGER = get_logger(__name__)

CANVAS_WIDTH = 1080
CANVAS_HEIGHT = 1920


def _pointer(pos, ratio: float, is_touch: bool = False) -> PointerEvent:
    # undo the window scaling so the engine sees canvas coordinates
    return PointerEvent(pos[0] / ratio, pos[1] / ratio, is_touch)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Block Blast with the mouse")
    p.add_argument("--size", type=int, default=8)
    p.add_argument("--target", type=int, default=500)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--height", type=int, default=960, help="window height in pixels")
    p.add_argument("--debug", action="store_true")
    return p


def run(argv: Optional[list] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging()
    config = GameConfig(board_size=args.size, target_score=args.target,
                        random_seed=args.seed, debugging=args.debug)
    messages = {"text": ""}

    def won() -> None:
        messages["text"] = "You won! Press N for a new game"

    def lost() -> None:
        messages["text"] = "No moves left. Press N for a new game"

    game = BlockBlastGame(config, on_game_won=won, on_game_lost=lost)
    renderer = Renderer(game.layout, config.sweep_threshold)

    ratio = args.height / CANVAS_HEIGHT
    window_size = (int(CANVAS_WIDTH * ratio), int(CANVAS_HEIGHT * ratio))

    pygame.init()
    try:
        screen = pygame.display.set_mode(window_size)
        pygame.display.set_caption("Block Blast")
        canvas = pygame.Surface((CANVAS_WIDTH, CANVAS_HEIGHT))
        font = pygame.font.SysFont(None, 64)
        clock = pygame.time.Clock()
        timer = FrameTimer()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        game.reset()
                        messages["text"] = ""
                elif game.is_over:
                    # the session is finished; stop feeding input
                    continue
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    game.pointer_down(_pointer(event.pos, ratio, bool(getattr(event, "touch", False))))
                elif event.type == pygame.MOUSEMOTION:
                    game.pointer_move(_pointer(event.pos, ratio, bool(getattr(event, "touch", False))))
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    game.pointer_up(_pointer(event.pos, ratio, bool(getattr(event, "touch", False))))

            game.advance_animation(timer.tick())

            renderer.draw(canvas, game.get_state())
            score = font.render(f"{game.score} / {game.target_score}", True, (255, 255, 255))
            canvas.blit(score, (int(game.layout.origin_x), 20))
            if messages["text"]:
                over = font.render(messages["text"], True, (255, 220, 120))
                canvas.blit(over, (int(game.layout.origin_x), CANVAS_HEIGHT - 80))
            pygame.transform.smoothscale(canvas, window_size, screen)
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()
    LOGGER.info("Session over: %s", game.get_game_stats())


if __name__ == "__main__":  # pragma: no cover
    run()
