"""
Global parameters for the drafting engine.

All lengths are in millimetres. Tolerances expressed in pixels are converted
to world units by the caller's viewport scale (mm per px = 1 / scale).
"""

# Default room
DEFAULT_ROOM_ID = "room-1"
DEFAULT_ROOM_WIDTH_MM = 2560.0
DEFAULT_ROOM_DEPTH_MM = 2070.0
DEFAULT_WALL_THICKNESS_MM = 90.0
DEFAULT_WALL_HEIGHT_MM = 2400.0
DEFAULT_WALL_STROKE_MM = 5.0

# Geometric tolerances
EPSILON = 1e-3  # collinearity / wall-line matching
DIRECTION_EPSILON = 1e-9  # degenerate direction or parallel lines
MIN_SEGMENT_LENGTH_SQ = 1.0  # segments shorter than 1mm are skipped by snapping
RETURN_TOLERANCE_MM = 0.5  # returns this close to the face ends are ignored
MIN_SECTION_MM = 0.5  # thinner elevation face sections are dropped

# Dimensions
DIM_OFFSET_MM = 200.0
DIM_SIDE = "in"
DIM_TEXT_SIZE_MM = 90.0
DIM_ARROW_SIZE_MM = 40.0
OPENING_DIM_OFFSET_MM = 120.0
OPENING_DIM_TEXT_SIZE_MM = 40.0
OPENING_DIM_ARROW_SIZE_MM = 30.0
MIN_DIM_DISPLAY_MM = 1.0  # edge distances at or below this are not dimensioned
WALL_HEIGHT_DIM_SEG = -1

# Openings
DOOR_WIDTH_MM = 820.0
DOOR_HEIGHT_MM = 2040.0
WINDOW_WIDTH_MM = 1200.0
WINDOW_HEIGHT_MM = 1200.0
WINDOW_SILL_MM = 900.0
MIN_OPENING_HEIGHT_MM = 100.0
MIN_WALL_HEIGHT_MM = 100.0
SILL_ROUNDING_MM = 10.0

WINDOW_DIM_LEFT_SEG = -2000
WINDOW_DIM_RIGHT_SEG = -2001
WINDOW_DIM_ELEV_SILL_SEG = -2002
WINDOW_DIM_ELEV_HEIGHT_SEG = -2003
DOOR_DIM_LEFT_SEG = -3000
DOOR_DIM_RIGHT_SEG = -3001
DOOR_DIM_ELEV_HEIGHT_SEG = -3002

# Interaction tolerances (screen pixels)
HIT_TOLERANCE_PX = 10.0
SNAP_TOLERANCE_FACTOR = 30.0

# World bounds margins
PLAN_MARGIN_MM = 400.0
ELEVATION_MARGIN_MM = 500.0

# Drawing
ARC_SEGMENTS = 32
OUTLINE_COLOR = "rgba(0,0,0,0.9)"
DIM_COLOR = "rgba(0,0,0,0.8)"
RETURN_LINE_COLOR = "rgba(0,0,0,0.35)"
PREVIEW_MAX_OPACITY = 0.5
