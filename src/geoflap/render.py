# src/geoflap/render.py
from __future__ import annotations
from typing import Optional
import pygame
from .config import (
    FLASH_FRAMES, COLOR_BG, COLOR_FG, COLOR_FLAP, COLOR_WAVE, COLOR_DANGER
)
from .run import Banner, RunState


def draw_scene(surf: pygame.Surface, state: RunState):
    """Background, obstacles and ship. Reads the run state, never mutates it."""
    surf.fill(COLOR_BG)
    state.stars.draw(surf)
    state.stream.draw(surf)
    state.ship.draw(surf, state.progress.wave_mode)


def draw_hud(surf: pygame.Surface, font: pygame.font.Font, state: RunState, best: int):
    p = state.progress
    mode_color = COLOR_WAVE if p.wave_mode else COLOR_FLAP
    surf.blit(font.render(f"{p.score:02d}", True, COLOR_FG), (12, 10))
    surf.blit(font.render(p.mode_name, True, mode_color), (12, 32))
    best_txt = font.render(f"BEST {best}", True, COLOR_FG)
    surf.blit(best_txt, (surf.get_width() - best_txt.get_width() - 12, 10))


def draw_banner(surf: pygame.Surface, font: pygame.font.Font, banner: Optional[Banner]):
    if banner is None:
        return
    txt = font.render(banner.text, True, banner.color)
    surf.blit(txt, ((surf.get_width() - txt.get_width()) // 2, surf.get_height() // 4))


def draw_flash(surf: pygame.Surface, frames_left: int):
    """Red pulse fading out over FLASH_FRAMES after hard mode kicks in."""
    if frames_left <= 0:
        return
    alpha = int(140 * frames_left / FLASH_FRAMES)
    panel = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
    panel.fill((*COLOR_DANGER, alpha))
    surf.blit(panel, (0, 0))


def draw_overlay(surf: pygame.Surface, font: pygame.font.Font, big_font: pygame.font.Font,
                 state: Optional[RunState], best: int):
    """Start screen when no run exists yet, crash screen after a death."""
    w, h = surf.get_size()
    panel = pygame.Surface((w, h), pygame.SRCALPHA)
    panel.fill((0, 0, 0, 170))
    surf.blit(panel, (0, 0))

    if state is None:
        lines = [(big_font, "GEOMETRY FLAP", COLOR_FLAP)]
    else:
        lines = [
            (big_font, "SYSTEM CRASH", COLOR_FG),
            (font, state.taunt or "", COLOR_DANGER),
            (font, f"SCORE: {state.progress.score}", COLOR_FG),
        ]
    lines.append((font, f"HIGH SCORE: {best}", COLOR_FG))
    lines.append((font, "SPACE / CLICK / ENTER to start   ESC quit", (160, 180, 210)))

    y = h // 3
    for f, msg, color in lines:
        txt = f.render(msg, True, color)
        surf.blit(txt, ((w - txt.get_width()) // 2, y))
        y += txt.get_height() + 10
