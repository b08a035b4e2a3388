"""Card geometry and palette, in logical pixels.

The bitmap is ``CARD_WIDTH x CARD_HEIGHT`` multiplied by ``SCALE``.
Text positions are baselines.
"""

CARD_WIDTH = 1200
CARD_HEIGHT = 750
SCALE = 2

# ── Palette ──────────────────────────────────────────────────────────
BACKGROUND = "#FFF9E6"
STAR_COLOR = "#2A2A2A"
STAR_ACCENT = "#D64545"
FRAME_FILL = "#FFFFFF"
FRAME_BORDER = "#E0D9C8"
INNER_BORDER = "#D0C9B8"
TITLE_COLOR = "#8B7355"
LABEL_COLOR = "#4A4A4A"
LEADER_COLOR = "#9A9A9A"
VALUE_COLOR = "#2A2A2A"
CONTACT_COLOR = "#5A5A5A"
MESSAGE_COLOR = "#7A7A7A"
RULE_COLOR = "#C0B8A8"
STAMP_COLOR = (204, 136, 136)
MARK_COLOR = "#2A2A2A"

# ── Star border ──────────────────────────────────────────────────────
STAR_SPACING = 70
STAR_MARGIN = 35
STAR_OUTER_R = 9.0
STAR_INNER_R = 3.6

# ── Photo frame ──────────────────────────────────────────────────────
PHOTO_X, PHOTO_Y, PHOTO_W, PHOTO_H = 80, 100, 340, 450
PHOTO_INSET = 15
SHADOW_OFFSET = 5
SHADOW_BLUR = 15
SHADOW_ALPHA = 26

# ── Title & fields ───────────────────────────────────────────────────
CONTENT_X = 480
TITLE_LINE1 = (480, 150)
TITLE_LINE2 = (520, 210)
FIELD_ROWS = (("Name", 280), ("Year joined", 350), ("Status", 420))
LEADER_START_X = 660
LEADER_END_X = 1100
LEADER_STEP = 12
VALUE_X = 670

# ── Contact lines under the photo ────────────────────────────────────
CONTACT_X = 80
CONTACT_BASELINES = (590, 618, 646)
CONTACT_MAX_WIDTH = PHOTO_W

# ── Footer ───────────────────────────────────────────────────────────
MESSAGE_BASELINES = (610, 638)
MESSAGE_TAIL = "might revoke your bragging rights."
STAMP_CENTER = (1020, 630)
STAMP_RINGS = (55, 45)
STAMP_TICKS = 12
STAMP_TICK_RADII = (48, 52)
STAMP_OPACITY = 0.35
RULE_Y = 680
RULE_X = (480, 1120)
RULE_DASH = (3, 5)

# ── Member mark ──────────────────────────────────────────────────────
MARK_ORIGIN = (1034, 92)
MARK_CELL = 6
MARK_PADDING = 4
MARK_ID_BASELINE = 176

# Rectangles (left, top, right, bottom) holding everything that is drawn
# only on an unlocked card.
VALUE_REGIONS: tuple[tuple[int, int, int, int], ...] = (
    (665, 250, 1105, 290),
    (665, 320, 1105, 360),
    (665, 390, 1105, 430),
    (75, 566, 425, 654),
)
