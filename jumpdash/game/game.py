# jumpdash/game/game.py
import sys, argparse, random
import pygame
from pygame import K_SPACE, K_UP, K_ESCAPE, K_p, K_r, K_m, K_h, K_RETURN
from .config import (
    WIDTH, HEIGHT, FPS, GROUND_LEVEL, PARTICLE_SIZE, SAVE_FILE_DEFAULT, Settings,
    COLOR_BG, COLOR_FG, COLOR_GROUND, COLOR_CHARACTER, COLOR_OBSTACLE, COLOR_PARTICLE, COLOR_DANGER
)
from .clock import SystemClock
from .events import EventBus, GameEvent, attach_event_log
from .session import GameSession, GameState
from .storage import JsonFileStore


def parse_args():
    p = argparse.ArgumentParser(description="Jump Dash: endless jump-over-obstacles runner.")
    p.add_argument("--seed", type=int, default=None,
                   help="Seed for obstacle spacing and particles. Omit for random.")
    p.add_argument("--save-file", type=str, default=str(SAVE_FILE_DEFAULT),
                   help="JSON file holding the high score and leaderboard.")
    p.add_argument("--fps", type=int, default=FPS, help="Frame rate cap.")
    p.add_argument("--log-events", action="store_true",
                   help="Print a line for every jump, landing, collision and level-up.")
    return p.parse_args()


def build_session(seed=None, save_file=None, log_events=False) -> GameSession:
    bus = EventBus()
    session = GameSession(
        store=JsonFileStore(save_file or SAVE_FILE_DEFAULT),
        settings=Settings(),
        clock=SystemClock(),
        rng=random.Random(seed),
        bus=bus,
    )
    if log_events:
        attach_event_log(bus)
        bus.subscribe(GameEvent.LEVEL_UP,
                      lambda: print(f"Level Up! Now at Level {session.level}"))
    return session


def _draw_centered(screen, font, text, y, color=COLOR_FG):
    surf = font.render(text, True, color)
    screen.blit(surf, (WIDTH // 2 - surf.get_width() // 2, y))


def draw(screen, session: GameSession, font, big_font):
    screen.fill(COLOR_BG)
    ground_y = HEIGHT - GROUND_LEVEL
    pygame.draw.rect(screen, COLOR_GROUND, pygame.Rect(0, ground_y, WIDTH, GROUND_LEVEL))

    if session.state is GameState.HOME:
        _draw_centered(screen, big_font, "JUMP DASH", HEIGHT // 3)
        _draw_centered(screen, font, "ENTER / SPACE to start", HEIGHT // 3 + 50)
        _draw_centered(screen, font, f"High score: {session.high_score}", HEIGHT // 3 + 76)
        return

    for obs in session.obstacles.active:
        pygame.draw.rect(screen, COLOR_OBSTACLE, obs.rect)

    for p in session.particles.live:
        size = max(1, int(PARTICLE_SIZE * p.alpha))
        pygame.draw.rect(screen, COLOR_PARTICLE, pygame.Rect(int(p.x), int(p.y), size, size))

    alive = session.state is not GameState.GAMEOVER
    pygame.draw.rect(screen, COLOR_CHARACTER if alive else COLOR_DANGER, session.character.rect)

    s = session.settings
    hud = (f"Score: {session.score}   High: {session.high_score}   Level: {session.level}   "
           f"Audio: {'on' if s.audio else 'off'}   Haptics: {'on' if s.haptics else 'off'}")
    screen.blit(font.render(hud, True, COLOR_FG), (12, 10))
    screen.blit(font.render("SPACE jump | P pause | M audio | H haptics | ESC quit", True, (110, 110, 130)),
                (12, 32))

    if session.state is GameState.PAUSED:
        _draw_centered(screen, big_font, "PAUSED", HEIGHT // 3)
        _draw_centered(screen, font, "P to resume", HEIGHT // 3 + 50)
    elif session.state is GameState.GAMEOVER:
        _draw_centered(screen, big_font, f"GAME OVER  {session.score}", 60)
        for i, score in enumerate(session.leaderboard):
            _draw_centered(screen, font, f"{i + 1}. {score}", 110 + i * 22)
        _draw_centered(screen, font, "R to restart", 110 + 5 * 22 + 8)


def handle_key(session: GameSession, key) -> bool:
    """Route one key press. Returns False when the player asked to quit."""
    if key == K_ESCAPE:
        return False
    if key in (K_SPACE, K_UP):
        if session.state is GameState.HOME:
            session.start()
        else:
            session.jump()
    elif key == K_RETURN and session.state is GameState.HOME:
        session.start()
    elif key == K_p:
        session.toggle_pause()
    elif key == K_r and session.state is GameState.GAMEOVER:
        session.restart()
    elif key == K_m:
        session.settings.toggle_audio()
    elif key == K_h:
        session.settings.toggle_haptics()
    return True


def run():
    args = parse_args()
    session = build_session(seed=args.seed, save_file=args.save_file, log_events=args.log_events)

    pygame.init()
    pygame.display.set_caption("Jump Dash")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 16)
    big_font = pygame.font.SysFont("jetbrainsmono", 36, bold=True)

    while True:
        clock.tick(args.fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN and not handle_key(session, event.key):
                pygame.quit(); sys.exit()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if session.state is GameState.HOME:
                    session.start()
                else:
                    session.jump()

        session.tick()

        draw(screen, session, font, big_font)
        pygame.display.flip()


if __name__ == "__main__":
    run()
