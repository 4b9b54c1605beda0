"""
Hard-coded colours, timing, layout & fonts so every module can import them
without circular dependencies.
"""
from pathlib import Path
import pygame

# -------- colours --------
GREEN, GRAY, RED, MAGENTA = (0, 255, 0), (102, 102, 102), (255, 0, 0), (255, 0, 255)
BLACK, WHITE, GRID = (0, 0, 0), (255, 255, 255), (34, 34, 34)
DIM, FAINT, PANEL = (51, 51, 51), (85, 85, 85), (17, 17, 17)
DETECT = (255, 50, 50)                  # detection marker, alpha = life
SELECTED = (34, 34, 34)                 # highlighted mode button

# -------- timing --------
POLL_INTERVAL_MS = 100                  # status poll cadence
DECAY_STEP       = 0.02                 # life lost per render pass
DEFAULT_RANGE    = 50                   # cm, when /status omits r

# -------- radar canvas --------
CANVAS_MAX_W = 500
CANVAS_H     = 260
ORIGIN_LIFT  = 5                        # sweep origin above bottom edge
RADIUS_PAD   = 15                       # radius = height - pad
GRID_RINGS   = 4
REF_ANGLES   = range(30, 151, 30)
GLOW_LEAD    = 0.1                      # radians, glow before the sweep line
GLOW_TRAIL   = 0.02                     # radians, glow after the sweep line
GLOW_ALPHA   = 0x20
MARKER_BASE  = 4                        # px at life 1.0, grows to 2× at 0

# -------- layout --------
HEADER_H  = 48
MODEBAR_H = 56
FOOTER_H  = 32
PAD       = 12

pygame.font.init()
FONT       = pygame.font.SysFont("monospace", 14, bold=True)
SMALL_FONT = pygame.font.SysFont("monospace", 11)
BADGE_FONT = pygame.font.SysFont("monospace", 10, bold=True)
ALERT_FONT = pygame.font.SysFont("monospace", 16, bold=True)

# -------- dirs --------
ROOT      = Path(__file__).resolve().parent.parent
LOG_DIR   = ROOT / "log"
CFG_PATH  = ROOT / "radar_config.json"
