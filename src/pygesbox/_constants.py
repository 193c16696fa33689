"""Internal constants shared across the library."""

ENDPOINT_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbwFgBY3Xwc19JqN3kcGyTXjkO3-LeSnG50b5eTXAUidLPTarRuqGM0JRs2QuwNffU-tkA/exec"
)
USER_AGENT = "pygesbox"

# Identifiers the data source uses for the two boxes.
SOURCE_A_ID = "GesBox1"
SOURCE_B_ID = "GesBox2"

DEFAULT_TOLERANCE_SECONDS = 10
DEFAULT_ALERT_THRESHOLD_PERCENT = 8.0
DEFAULT_POLL_INTERVAL = 30.0
DEFAULT_FETCH_TIMEOUT = 15.0

# Threshold to distinguish seconds from milliseconds.
MS_THRESHOLD = 1e11

# Last epoch second that datetime can represent (9999-12-31T23:59:59Z).
MAX_TIMESTAMP_SECONDS = 253_402_300_799
