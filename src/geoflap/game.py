# src/geoflap/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_RETURN
from .config import (
    WIDTH, HEIGHT, FPS, FLASH_FRAMES, COLOR_BG,
    HARD_MODE_SCORE, LONG_OBSTACLE_CHANCE, MAX_SCROLL_SPEED
)
from .progression import Tuning
from .run import NoticeType, start_run, step, hold_start, hold_end, clear_expired_banner
from .scores import BestScoreStore
from .render import draw_scene, draw_hud, draw_banner, draw_flash, draw_overlay

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Geometry Flap")
    p.add_argument("--seed", type=int, default=None,
                   help="Seed every run with this value. Omit for a random run each time.")
    p.add_argument("--scores-file", type=str, default=None,
                   help="JSON file holding the best score (default ~/.geoflap/scores.json)")
    p.add_argument("--hard-mode-score", type=int, default=HARD_MODE_SCORE,
                   help="Score at which hard mode latches on")
    p.add_argument("--long-chance", type=float, default=LONG_OBSTACLE_CHANCE,
                   help="Probability of a long obstacle when one is allowed")
    p.add_argument("--max-speed", type=float, default=MAX_SCROLL_SPEED,
                   help="Scroll speed cap (px/frame)")
    p.add_argument("--debug", action="store_true", help="Verbose logging")
    args = p.parse_args(argv)
    try:
        args.tuning = Tuning(
            hard_mode_score=args.hard_mode_score,
            long_chance=args.long_chance,
            max_speed=args.max_speed,
        )
    except ValueError as e:
        p.error(str(e))
    return args


def run(argv=None):
    args = parse_args(argv)
    setup_logging(args.debug)

    store = BestScoreStore(args.scores_file)
    best = store.load()
    logger.info("Best score %d (%s)", best, store.path)

    pygame.init()
    pygame.display.set_caption("Geometry Flap")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 18)
    big_font = pygame.font.SysFont("jetbrainsmono", 42, bold=True)

    state = None
    flash_left = 0

    def new_run():
        return start_run(args.tuning, seed=args.seed, width=WIDTH, height=HEIGHT)

    while True:
        clock.tick(FPS)
        alive = state is not None and state.active

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    if alive:
                        hold_start(state)
                    else:
                        state, flash_left, alive = new_run(), 0, True
                if event.key == K_RETURN and not alive:
                    state, flash_left, alive = new_run(), 0, True
            if event.type == pygame.KEYUP and event.key == K_SPACE and state is not None:
                hold_end(state)
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if alive:
                    hold_start(state)
                else:
                    state, flash_left, alive = new_run(), 0, True
            if event.type == pygame.MOUSEBUTTONUP and event.button == 1 and state is not None:
                hold_end(state)

        if alive:
            for notice in step(state):
                if notice.type == NoticeType.HARD_MODE:
                    flash_left = FLASH_FRAMES
                elif notice.type == NoticeType.GAME_OVER:
                    flash_left = 0
                    if store.submit(notice.data["score"]):
                        best = notice.data["score"]

        # --- Render ---
        if state is None:
            screen.fill(COLOR_BG)
            draw_overlay(screen, font, big_font, None, best)
        else:
            draw_scene(screen, state)
            draw_hud(screen, font, state, best)
            if state.active:
                draw_banner(screen, big_font, clear_expired_banner(state))
            draw_flash(screen, flash_left)
            flash_left = max(0, flash_left - 1)
            if not state.active:
                draw_overlay(screen, font, big_font, state, best)

        pygame.display.flip()


if __name__ == "__main__":
    run()
