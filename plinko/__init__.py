# ── Central defaults (tune here, not scattered across files) ──

# Board
REFERENCE_WIDTH = 400.0
BOARD_WIDTH = 400.0
BOARD_HEIGHT = 700.0

# Peg field
PEG_RADIUS = 5.0
PEG_ROWS = (11, 12, 11, 12, 11, 12, 11)
PEG_PITCH_X = 35.0
PEG_PITCH_Y = 38.0

# Bins
BIN_LABELS = ("100", "250", "50", "500", "50", "250", "100")
SLOT_Y_RATIO = 0.8
SLOT_HEIGHT_RATIO = 0.18
BINS_WIDTH_RATIO = 0.8

# Guide walls
WALL_TOP_OFFSET = 20.0
DIAGONAL_TOP_RATIO = 0.18
DIAGONAL_BOTTOM_RATIO = 0.10
ZIGZAG_SEGMENTS = 6
ZIGZAG_MARGIN_RATIO = 0.06
ZIGZAG_INSET_RATIO = 0.05

# Ball physics (per tick, reference scale)
BALL_RADIUS = 7.0
GRAVITY = 0.12
FRICTION = 0.992
BOUNDARY_BOUNCE = 0.4
PEG_BOUNCE = 1.0
WALL_BOUNCE = 1.2
DIVIDER_BOUNCE = 0.55
DIVIDER_CLEARANCE = 1.15
SETTLE_MARGIN = 10.0

# Spawning
SPAWN_Y = 50.0
SPAWN_SPEED = 0.4

# Simulation
MAX_STEPS = 5000
N_DROPS = 1000
SEED = 42

# Rendering
FPS = 60
VIEWPORT_ASPECT = 0.57
VIEWPORT_FILL = 0.95
BG_COLOR = (0, 0, 0)
PEG_COLOR = (210, 210, 220)
WALL_COLOR = (102, 170, 255)
DIVIDER_COLOR = (170, 170, 255)
TEXT_COLOR = (220, 220, 230)
BALL_COLOR = (255, 180, 80)
BALL_RIM_COLOR = (255, 235, 196)
