# rigcurve/constants.py
# Rig export format and curve-analysis constants (not user settings).

# -------------------------
# Ingest
# -------------------------
METADATA_MARKER = "Axial Counts"      # instrument metadata lines start with this
HEADER_LINES = 5                      # fixed-format header after metadata removal
FIELDS_PER_ROW = 5                    # values kept after the leading index field

# -------------------------
# Normalization
# -------------------------
SLACK_THRESHOLD = 0.005               # first X above this is shifted to 0
FAILURE_DROP = 1.0                    # Y drop after peak that marks failure

# -------------------------
# Elastic slope
# -------------------------
WINDOW_LOW = 0.01
WINDOW_HIGH = 0.1
# four 0.0225-wide sub-ranges, bounds inclusive
SEGMENTS = (
    (0.01, 0.0325),
    (0.0325, 0.055),
    (0.055, 0.0775),
    (0.0775, 0.1),
)
INLIER_TOLERANCE = 0.05
LINE_EXTENSION = 0.5                  # fraction of inlier span added on each side
OFFSET_CHUNK = 256                    # candidate offsets scored per block

# -------------------------
# Area / export
# -------------------------
AREA_DECIMALS = 10
EXPORT_FILE_NAME = "mechanical property.csv"
