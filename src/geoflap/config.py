# --- Display ---
WIDTH = 960
HEIGHT = 540
FPS = 60

# --- Scroll / progression ---
INITIAL_SCROLL_SPEED = 6.0      # px per frame at run start
SCROLL_ACCEL = 0.0006           # px per frame, added every frame
MAX_SCROLL_SPEED = 11.0         # hard cap
HARD_MODE_SPEED_BOOST = 1.5     # one-shot bump when hard mode latches
MODE_PERIOD = 10                # score points per flap/wave block
HARD_MODE_SCORE = 20

# --- Player ---
PLAYER_X = 200                  # ship's fixed x (world scrolls left)
HITBOX_HALF_W = 15              # collision span is x +/- this
GRAVITY = 0.5                   # flap mode, px/frame^2
FLAP_IMPULSE = -9.0             # vy overwrite on a flap
WAVE_SPEED = 7.0                # wave mode |vy|
FLAP_TILT_PER_VY = 0.05
FLAP_MAX_TILT = 0.5235987755982988   # pi / 6
WAVE_TILT = 0.6283185307179586       # pi / 5

# --- Obstacles ---
GAP_H = 165
OBSTACLE_W = 70
LONG_OBSTACLE_W = 450
WALL_MARGIN = 75                # min height of each wall segment
SPAWN_DISTANCE = 540            # scrolled px between spawns
LONG_OBSTACLE_CHANCE = 0.4
PRUNE_X = -500                  # obstacles left of this are dropped

# --- Background stars ---
STAR_COUNT = 80
DISTANT_STAR_COUNT = 50
DISTANT_STAR_SIZE = 1.5
NEAR_STAR_SIZE = 3.0
DISTANT_STAR_SPEED = 0.4
NEAR_STAR_SPEED = 1.2

# --- Presentation ---
BANNER_FRAMES = 90              # ~1.5 s at 60 FPS
FLASH_FRAMES = 45

# --- Colors (RGB) ---
COLOR_BG = (2, 2, 5)
COLOR_FG = (230, 230, 240)
COLOR_SHIP = (255, 255, 255)
COLOR_FLAP = (0, 255, 255)
COLOR_WAVE = (255, 204, 0)
COLOR_OBSTACLE = (255, 0, 255)
COLOR_LONG = (255, 0, 0)
COLOR_DISTANT_STAR = (68, 68, 68)
COLOR_NEAR_STAR = (136, 136, 136)
COLOR_DANGER = (255, 0, 68)

# --- Persistence ---
SCORES_KEY = "best_gf"
SCORES_FILE_DEFAULT = "~/.geoflap/scores.json"
SCORES_FILE_ENV = "GEOFLAP_SCORES"

TAUNTS = (
    "GEOMETRY IS HARD, ISN'T IT?",
    "FLAP ERROR: 404 SKILL NOT FOUND.",
    "THE STARS ARE LAUGHING AT YOU.",
    "VOID CONSUMES THE WEAK.",
    "MAYBE STICK TO COLORING BOOKS?",
    "WAS THAT YOUR BEST? TRAGIC.",
)
